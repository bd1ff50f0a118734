"""
Circle cards for the join channel.

A card is an embed describing one circle plus a button row. The join button's
``custom_id`` comes from :func:`~circle_bot.directory.protocol.encode`, and the
description starts with the zero-width payload link from
:func:`~circle_bot.directory.protocol.encode_card_payload`.
"""

from __future__ import annotations

import logging

import discord

from . import protocol
from .models import Circle, parse_snowflake

logger = logging.getLogger(__name__)


def is_url(value: str) -> bool:
    return value.startswith("http://") or value.startswith("https://")


def member_count_label(role: discord.Role | None) -> str:
    count = len(role.members) if role is not None else 0
    return "N/A" if count == 0 else str(count)


def footer_text(circle: Circle, owner_name: str) -> str:
    return f"Created on {circle.created_on.strftime('%B %d, %Y')}﹒👑 Owner: {owner_name}"


def build_embed(circle: Circle, role: discord.Role | None, owner_name: str) -> discord.Embed:
    """Render ``circle`` as an embed coloured like its backing role."""

    colour = role.colour if role is not None else discord.Colour.default()
    embed = discord.Embed(
        title=f"{circle.emoji} {circle.name} {circle.emoji} ",
        description=f"{protocol.encode_card_payload(circle)} {circle.description}",
        colour=colour,
    )
    embed.add_field(name="**Role**", value=f"<@&{circle.id}>", inline=True)
    embed.add_field(name="**Members**", value=member_count_label(role), inline=True)
    embed.set_footer(text=footer_text(circle, owner_name))
    if is_url(circle.image_url):
        embed.set_thumbnail(url=circle.image_url)
    return embed


def build_view(circle: Circle) -> discord.ui.View:
    """Return the join/leave + "Learn More" button row for ``circle``."""

    view = discord.ui.View(timeout=None)
    view.add_item(
        discord.ui.Button(
            style=discord.ButtonStyle.primary,
            label=f"Join/Leave {circle.name}",
            custom_id=protocol.encode(protocol.Action.JOIN, circle.id),
            emoji=circle.emoji,
        )
    )
    view.add_item(
        discord.ui.Button(
            style=discord.ButtonStyle.secondary,
            label="Learn More",
            custom_id=protocol.encode(protocol.Action.ABOUT, circle.id),
            disabled=True,
        )
    )
    return view


def build_card(
    circle: Circle, guild: discord.Guild, owner_name: str
) -> tuple[discord.Embed, discord.ui.View]:
    """
    Build the embed and button row for ``circle``.

    :raises InvalidFormat: if the circle's role or channel id is not numeric.
    """
    role = guild.get_role(parse_snowflake(circle.id, "role id"))
    if role is None:
        logger.warning("Role for circle %s (%s) not found in guild", circle.id, circle.name)
    return build_embed(circle, role, owner_name), build_view(circle)
