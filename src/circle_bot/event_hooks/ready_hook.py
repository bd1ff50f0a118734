import logging

import discord

from circle_bot.config import circles, core
from circle_bot.directory import scheduler
from circle_bot.directory.errors import UpstreamFailure

logger = logging.getLogger(__name__)


async def handle(client: discord.Client):
    """Directory hydration on client ready event."""
    logger.info(f"Logged in as {client.user.name} (ID: {client.user.id})")

    await client.change_presence(
        activity=discord.Activity(type=discord.ActivityType.watching, name=core.ACTIVITY)
    )

    # Initial recache; the directory stays empty (and buttons answer "not found") if the store is down.
    try:
        count = await client.directory.recache()
        logger.info("Initial recache loaded %d circle(s)", count)
    except UpstreamFailure as e:
        logger.error("Initial recache failed: %s", e)

    await scheduler.start(client.directory, circles.RECACHE_INTERVAL)
