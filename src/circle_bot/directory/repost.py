"""
Repost the circle directory into the join channel.

A repost wipes the channel's recent history, sends the header image and
blurb, then posts one card per cached circle (oldest first).
"""

from __future__ import annotations

import asyncio
import logging

import discord

from circle_bot.config import circles as circles_cfg

from .cards import build_card
from .errors import UpstreamFailure
from .models import Circle, parse_snowflake
from .service import DirectoryService

logger = logging.getLogger(__name__)


def header_text(apply_url: str) -> str:
    return (
        "> :yellow_circle: Circles are interest groups made by the community!\n"
        "> :door: Join one by reacting to the emoji attached to each.\n"
        f"> :crown: You can apply to make your own Circle by filling out this application: <{apply_url}>\n"
    )


async def _join_channel(client: discord.Client) -> discord.abc.Messageable:
    cid = circles_cfg.JOIN_CHANNEL_ID
    channel = client.get_channel(cid)
    if channel is not None:
        return channel
    try:
        return await client.fetch_channel(cid)
    except discord.HTTPException as exc:
        raise UpstreamFailure(f"Unable to get join channel {cid}: {exc}") from exc


async def delete_history(channel, limit: int) -> int:
    """
    Delete up to ``limit`` recent messages in ``channel``.

    Every delete is attempted before the first failure is raised.
    """
    messages = [msg async for msg in channel.history(limit=limit)]
    results = await asyncio.gather(
        *(msg.delete() for msg in messages), return_exceptions=True
    )
    failures = [r for r in results if isinstance(r, Exception)]
    if failures:
        raise UpstreamFailure(
            f"Unable to delete {len(failures)} of {len(messages)} old message(s): {failures[0]}"
        ) from failures[0]
    return len(messages)


async def _owner_name(client: discord.Client, circle: Circle) -> str:
    uid = parse_snowflake(circle.owner, "owner id")
    user = client.get_user(uid)
    if user is not None:
        return user.name
    try:
        return (await client.fetch_user(uid)).name
    except discord.HTTPException:
        logger.warning("Owner %s of circle %s could not be fetched", circle.owner, circle.id)
        return "Unknown"


async def repost(
    client: discord.Client, guild: discord.Guild, directory: DirectoryService
) -> int:
    """
    Replace the join channel's contents with fresh circle cards.

    :returns: Number of cards posted.
    :raises UpstreamFailure: if Discord rejects a delete or a send.
    """
    logger.debug("Reposting circles")
    channel = await _join_channel(client)
    deleted = await delete_history(channel, circles_cfg.REPOST_HISTORY_LIMIT)
    logger.debug("Deleted %d old message(s)", deleted)

    try:
        await channel.send(circles_cfg.HEADER_IMAGE_URL)
        await channel.send(header_text(circles_cfg.APPLY_URL))
    except discord.HTTPException as exc:
        raise UpstreamFailure(f"Unable to send circle header: {exc}") from exc
    logger.debug("Sent header")

    circles = sorted(await directory.list(), key=lambda c: c.created_on)
    posted = 0
    for circle in circles:
        logger.debug("Posting circle: %s", circle.name)
        embed, view = build_card(circle, guild, await _owner_name(client, circle))
        try:
            await channel.send(embed=embed, view=view)
        except discord.HTTPException as exc:
            raise UpstreamFailure(f"Unable to post card for {circle.name}: {exc}") from exc
        finally:
            # Buttons are routed by custom id in the interaction hook, not by this view.
            view.stop()
        posted += 1

    logger.info("Reposted %d circle card(s)", posted)
    return posted
