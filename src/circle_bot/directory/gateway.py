"""
Persistence contract for circle records.

The directory never talks to a database directly; it goes through a
:class:`PersistenceGateway`. Implementations must raise
:class:`~circle_bot.directory.errors.UpstreamFailure` for transport errors and
for unknown ids on ``update``/``delete``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping, Sequence

from .models import Circle


class PersistenceGateway(ABC):
    """Async CRUD over the circle collection."""

    @abstractmethod
    async def list_all(self) -> Sequence[Circle]:
        """Return every persisted circle, or raise without a partial result."""

    @abstractmethod
    async def insert(self, circle: Circle) -> Circle:
        """Persist a new circle and return the stored record."""

    @abstractmethod
    async def update(self, circle_id: str, fields: Mapping[str, Any]) -> Circle:
        """Apply ``fields`` to an existing circle and return the stored record."""

    @abstractmethod
    async def delete(self, circle_id: str) -> None:
        """Delete the circle with ``circle_id``."""
