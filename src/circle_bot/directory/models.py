"""Circle record shared by the cache, the store and card rendering."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from typing import Any

from .errors import InvalidFormat

# Fields an administrative update may change. ``id`` and ``created_on`` are fixed at
# creation; ``sub_channels`` only ever grows and is never overwritten by an update.
MUTABLE_FIELDS = frozenset({"name", "description", "emoji", "image_url", "channel", "owner"})


@dataclass(frozen=True)
class Circle:
    """A community interest group backed by one role and one text channel."""

    id: str
    name: str
    description: str
    emoji: str
    image_url: str
    channel: str
    owner: str
    created_on: datetime.datetime
    sub_channels: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any iterable from callers but store an immutable tuple.
        if not isinstance(self.sub_channels, tuple):
            object.__setattr__(self, "sub_channels", tuple(self.sub_channels))


def parse_snowflake(value: Any, what: str) -> int:
    """
    Convert a Discord id stored as text into an int.

    :raises InvalidFormat: when ``value`` is not a base-10 integer.
    """
    text = str(value).strip()
    if not (text.isascii() and text.isdigit()):
        raise InvalidFormat(f"Invalid {what}: {value!r}")
    return int(text)


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)
