"""
Emoji checks for circle creation.

A circle's emoji becomes part of its role name, its channel name and the join
button, so it must be a single Unicode pictograph. Discord custom emoji
(``<:name:id>``) are rejected. The pattern accepts one grapheme built from:

* an Extended_Pictographic code point, with optional variation selector,
  skin-tone modifier, keycap or tag sequence, chained by ZWJ,
* a regional-indicator pair (flags),
* a keycap sequence such as ``1️⃣``.
"""

from __future__ import annotations

import logging
import re

from .errors import ValidationFailure

logger = logging.getLogger(__name__)

_PICTO = (
    r"[\u00a9\u00ae\u203c\u2049\u2122\u2139\u2194-\u2199\u21a9\u21aa\u231a\u231b"
    r"\u2328\u2388\u23cf\u23e9-\u23f3\u23f8-\u23fa\u24c2\u25aa\u25ab\u25b6\u25c0"
    r"\u25fb-\u25fe\u2600-\u27bf\u2934\u2935\u2b05-\u2b07\u2b1b\u2b1c\u2b50\u2b55"
    r"\u3030\u303d\u3297\u3299\U0001F000-\U0001F1E5\U0001F200-\U0001FAFF"
    r"\U0001FC00-\U0001FFFD]"
)
# Variation selector, keycap, skin tones, tag characters.
_MOD = r"[\ufe0f\u20e3\U0001F3FB-\U0001F3FF\U000E0020-\U000E007F]"

_EMOJI_RE = re.compile(
    rf"{_PICTO}{_MOD}*(?:\u200d{_PICTO}{_MOD}*)*"
    r"|[\U0001F1E6-\U0001F1FF]{2}"
    r"|[0-9#*]\ufe0f?\u20e3"
)


def is_emoji(value: str) -> bool:
    """Return ``True`` if ``value`` is exactly one pictographic emoji."""

    return _EMOJI_RE.fullmatch((value or "").strip()) is not None


def validate_emoji(value: str) -> str:
    """
    Return the stripped emoji or raise.

    :raises ValidationFailure: if ``value`` is not a single pictographic emoji.
    """
    logger.info("Testing emoji: %s", value)
    if not is_emoji(value):
        raise ValidationFailure("Invalid emoji")
    return value.strip()
