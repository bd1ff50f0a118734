"""
Circle creation workflow.

Creating a circle touches Discord three times before the record is stored:

1. create a mentionable role named ``"<emoji> <name>"`` in the circle colour
2. give that role to the owner
3. create a text channel with the same name under the circles category,
   visible to the role and hidden from ``@everyone``

Only then is the :class:`Circle` (keyed by the role id) persisted through
:meth:`DirectoryService.create`, which also caches it. Input is validated
before any Discord call so a bad emoji or colour leaves nothing behind.
"""

from __future__ import annotations

import logging

import discord

from circle_bot.config import circles as circles_cfg

from .emoji import validate_emoji
from .errors import InvalidFormat, UpstreamFailure
from .models import Circle, utcnow
from .service import DirectoryService

logger = logging.getLogger(__name__)


def parse_colour(raw: str) -> int:
    """
    Parse a colour given as a decimal integer or ``#rrggbb``/``0xrrggbb`` hex.

    :raises InvalidFormat: for anything else.
    """
    text = (raw or "").strip()
    try:
        if text.startswith("#"):
            return int(text[1:], 16)
        if text.lower().startswith("0x"):
            return int(text, 16)
        return int(text)
    except ValueError as exc:
        raise InvalidFormat(f"Invalid color: {raw}") from exc


async def create_circle(
    guild: discord.Guild,
    directory: DirectoryService,
    *,
    name: str,
    description: str,
    color: str,
    emoji: str,
    graphic: str,
    owner: discord.abc.Snowflake,
) -> Circle:
    """
    Create the role and channel for a new circle and store it.

    :raises ValidationFailure: if ``emoji`` is not a single pictograph.
    :raises InvalidFormat: if ``color`` is not an integer.
    :raises UpstreamFailure: if Discord or the store fails.
    """
    emoji = validate_emoji(emoji)
    colour = parse_colour(color)
    label = f"{emoji} {name}"

    try:
        role = await guild.create_role(
            name=label, colour=discord.Colour(colour), mentionable=True
        )
        member = await guild.fetch_member(owner.id)
        await member.add_roles(role, reason="Circle owner")

        overwrites = {
            role: discord.PermissionOverwrite(view_channel=True),
            guild.default_role: discord.PermissionOverwrite(view_channel=False),
        }
        category = guild.get_channel(circles_cfg.PARENT_CATEGORY_ID)
        channel = await guild.create_text_channel(
            label,
            category=category if isinstance(category, discord.CategoryChannel) else None,
            topic=description,
            overwrites=overwrites,
        )
    except discord.HTTPException as exc:
        raise UpstreamFailure(f"Unable to set up circle {name}: {exc}") from exc

    circle = Circle(
        id=str(role.id),
        name=name,
        description=description,
        emoji=emoji,
        image_url=graphic,
        channel=str(channel.id),
        owner=str(owner.id),
        created_on=utcnow(),
        sub_channels=(),
    )
    stored = await directory.create(circle)
    logger.info("Created circle %s with role %s and channel %s", name, role.id, channel.id)
    return stored
