"""
Error taxonomy for the circle directory.

Every failure raised by the directory core derives from :class:`CircleError`
so interaction handlers can turn any of them into an ephemeral reply with a
single ``except`` clause. The concrete classes also inherit the closest
builtin (``KeyError``, ``ValueError``, ``RuntimeError``) so callers written
against builtins keep working.
"""

from __future__ import annotations


class CircleError(Exception):
    """Base class for every directory failure surfaced to callers."""

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message; keep user-facing text plain.
        return str(self.args[0]) if self.args else self.__class__.__name__


class NotFound(CircleError, KeyError):
    """A circle id is not present in the directory cache."""


class InvalidFormat(CircleError, ValueError):
    """Malformed custom id, or a non-numeric id/colour field."""


class ValidationFailure(CircleError, ValueError):
    """Input rejected by a domain check (emoji, immutable fields)."""


class UpstreamFailure(CircleError, RuntimeError):
    """The persistence store or the Discord API failed the request."""


__all__ = [
    "CircleError",
    "NotFound",
    "InvalidFormat",
    "ValidationFailure",
    "UpstreamFailure",
]
