"""Schedule periodic directory recaches."""

from __future__ import annotations

import asyncio
import logging

from .service import DirectoryService

logger = logging.getLogger(__name__)

_task: asyncio.Task | None = None


async def startup(directory: DirectoryService, interval: float) -> asyncio.Task:
    """
    Schedule ``directory.recache()`` every ``interval`` seconds.

    The first cycle runs after one interval. A failing cycle is logged and
    does not stop the loop.
    """

    async def _periodic() -> None:
        await asyncio.sleep(interval)   # delay initial loop
        while True:
            try:
                await directory.recache()
            except Exception as exc:
                logger.error("Recache cycle failed: %s", exc)
            await asyncio.sleep(interval)

    return asyncio.create_task(_periodic())


async def shutdown(task: asyncio.Task | None) -> None:
    """Cancel a task started with :func:`startup` and wait for it to finish."""

    if not task:
        return

    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass


async def start(directory: DirectoryService, interval: float) -> asyncio.Task | None:
    """Start the module-level recache loop unless disabled or already running."""
    global _task

    if interval <= 0:
        logger.info("Recache interval is %s; background recache disabled", interval)
        return None

    if not _task or _task.done():
        logger.info("Starting background recache (interval=%ss)", interval)
        _task = await startup(directory, interval)
    return _task


async def stop() -> None:
    """Cancel the background recache loop if running."""
    global _task

    if _task:
        await shutdown(_task)
        _task = None
