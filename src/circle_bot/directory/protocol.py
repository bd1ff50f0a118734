"""
Identifier protocol for circle buttons.

Discord round-trips a button's ``custom_id`` back to the bot verbatim, so it
is the only state an interaction carries. Circle buttons use::

    circle/<action>/<circle_id>

Both segments are non-empty and slash-free, and the whole id is ASCII and at
most :data:`MAX_CUSTOM_ID_BYTES` long (Discord's limit).

The module also builds the card payload: a JSON blob percent-encoded into a
zero-width link at the start of a card description, which external tooling
scrapes to map reactions back to circles. Field names and encoding must stay
byte-compatible with those consumers.
"""

from __future__ import annotations

import enum
import json
import re
from typing import NamedTuple
from urllib.parse import quote

from .errors import InvalidFormat
from .models import Circle, parse_snowflake

PREFIX = "circle"
MAX_CUSTOM_ID_BYTES = 100

_CUSTOM_ID_RE = re.compile(r"circle/(?P<action>[^/]+)/(?P<circle_id>[^/]+)")

_PAYLOAD_URL = "http://fake.fake?data={}"
_ZERO_WIDTH_SPACE = "\u200b"


class Action(enum.Enum):
    """Button actions. Unknown strings map to :attr:`UNRECOGNIZED`."""

    JOIN = "join"
    ABOUT = "about"
    UNRECOGNIZED = "unrecognized"

    @classmethod
    def parse(cls, raw: str) -> "Action":
        for action in (cls.JOIN, cls.ABOUT):
            if action.value == raw:
                return action
        return cls.UNRECOGNIZED


class ButtonId(NamedTuple):
    """Decoded ``custom_id``; ``action`` keeps the raw string."""

    action: str
    circle_id: str

    @property
    def kind(self) -> Action:
        return Action.parse(self.action)


def _check_segment(value: str, what: str) -> None:
    if not value:
        raise InvalidFormat(f"Empty {what} in circle custom id")
    if "/" in value:
        raise InvalidFormat(f"{what} must not contain '/': {value!r}")


def encode(action: Action | str, circle_id: str) -> str:
    """
    Build the ``custom_id`` for ``action`` on ``circle_id``.

    :raises InvalidFormat: if a segment is empty or contains ``/``, or the
        result is not ASCII or exceeds Discord's length limit.
    """
    action_str = action.value if isinstance(action, Action) else str(action)
    circle_id = str(circle_id)
    _check_segment(action_str, "action")
    _check_segment(circle_id, "circle id")

    raw = f"{PREFIX}/{action_str}/{circle_id}"
    if not raw.isascii():
        raise InvalidFormat(f"Circle custom id must be ASCII: {raw!r}")
    if len(raw) > MAX_CUSTOM_ID_BYTES:
        raise InvalidFormat(
            f"Circle custom id is {len(raw)} bytes; limit is {MAX_CUSTOM_ID_BYTES}"
        )
    return raw


def decode(raw: str) -> ButtonId:
    """
    Split a ``custom_id`` into ``(action, circle_id)``.

    Does not check that the circle exists.

    :raises InvalidFormat: if ``raw`` does not match the grammar.
    """
    match = _CUSTOM_ID_RE.fullmatch(raw or "")
    if match is None:
        raise InvalidFormat(f"Unrecognized circle custom id: {raw!r}")
    return ButtonId(match.group("action"), match.group("circle_id"))


def is_circle_id(raw: str | None) -> bool:
    """Cheap prefix check used to route interactions before decoding."""

    return bool(raw) and raw.startswith(f"{PREFIX}/")


def encode_card_payload(circle: Circle) -> str:
    """
    Return the zero-width markdown link embedding ``circle``'s payload.

    :raises InvalidFormat: if the circle's channel id is not numeric.
    """
    payload = {
        "name": circle.name,
        "circle": circle.id,
        "reactions": {circle.emoji: circle.id},
        # Snowflakes travel as strings, matching what existing consumers parse.
        "channel": str(parse_snowflake(circle.channel, "channel")),
    }
    data = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    return f"[{_ZERO_WIDTH_SPACE}]({_PAYLOAD_URL.format(quote(data, safe=''))})"


__all__ = [
    "Action",
    "ButtonId",
    "MAX_CUSTOM_ID_BYTES",
    "decode",
    "encode",
    "encode_card_payload",
    "is_circle_id",
]
