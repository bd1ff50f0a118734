"""
Directory service: the only writer of the circle cache.

Every mutation goes to the persistence gateway first and is mirrored into the
cache only after the gateway accepts it. The store is the source of truth;
the cache is a best-effort accelerator that may briefly hold stale entries
(see :meth:`DirectoryService.recache`).
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from .cache import DirectoryCache
from .errors import CircleError, NotFound, UpstreamFailure, ValidationFailure
from .gateway import PersistenceGateway
from .models import MUTABLE_FIELDS, Circle

logger = logging.getLogger(__name__)


class DirectoryService:
    """Coordinates a :class:`PersistenceGateway` with a :class:`DirectoryCache`."""

    def __init__(
        self, gateway: PersistenceGateway, cache: DirectoryCache | None = None
    ) -> None:
        self.gateway = gateway
        self.cache = cache if cache is not None else DirectoryCache()

    # ------------------------------------------------------------------ #
    # Sync
    # ------------------------------------------------------------------ #

    async def recache(self) -> int:
        """
        Pull every circle from the store and merge it into the cache.

        Not exclusive: concurrent calls each fetch and merge, and since merges
        are per-key overwrites from the same upstream state the result is the
        same. Entries missing upstream are kept.

        :returns: Number of records merged.
        :raises UpstreamFailure: if the fetch fails; the cache is untouched.
        """
        try:
            records = await self.gateway.list_all()
        except CircleError:
            raise
        except Exception as exc:
            raise UpstreamFailure(f"Unable to get circles from database: {exc}") from exc

        merged = await self.cache.merge_snapshot(records)
        logger.info("Recached %d circle(s)", merged)
        return merged

    # ------------------------------------------------------------------ #
    # Lookup
    # ------------------------------------------------------------------ #

    async def lookup(self, circle_id: str) -> Circle | None:
        return await self.cache.get(circle_id)

    async def resolve(self, circle_id: str) -> Circle:
        """
        Return the cached circle for ``circle_id``.

        :raises NotFound: if the id is not cached.
        """
        circle = await self.cache.get(circle_id)
        if circle is None:
            raise NotFound(f"Unable to find circle {circle_id}")
        return circle

    async def list(self) -> list[Circle]:
        return await self.cache.list()

    # ------------------------------------------------------------------ #
    # Mutation (store first, then cache)
    # ------------------------------------------------------------------ #

    async def create(self, circle: Circle) -> Circle:
        stored = await self.gateway.insert(circle)
        await self.cache.upsert(stored)
        logger.info("Added circle %s (%s) to directory", stored.id, stored.name)
        return stored

    async def update(self, circle_id: str, changes: Mapping[str, Any]) -> Circle:
        """
        Persist only ``changes`` for ``circle_id`` and cache the stored record.

        Fields not named in ``changes`` keep whatever the store holds, so a
        stale cached copy never overwrites newer upstream values.

        :raises ValidationFailure: if ``changes`` names a field that cannot be
            updated (``id``, ``created_on``, ``sub_channels``).
        :raises UpstreamFailure: if the store rejects the update.
        """
        unknown = set(changes) - MUTABLE_FIELDS
        if unknown:
            raise ValidationFailure(
                f"Cannot update circle field(s): {', '.join(sorted(unknown))}"
            )

        stored = await self.gateway.update(circle_id, dict(changes))
        await self.cache.upsert(stored)
        logger.info("Updated circle %s (%s)", stored.id, stored.name)
        return stored

    async def delete(self, circle_id: str) -> None:
        await self.gateway.delete(circle_id)
        await self.cache.remove(circle_id)
        logger.info("Removed circle %s from directory", circle_id)
