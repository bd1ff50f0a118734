"""
Route circle button presses to the membership toggle.

Only button components whose ``custom_id`` starts with ``circle/`` are
handled here; slash commands are dispatched by the command tree and other
components are ignored. Every outcome, including failures, is answered with an
ephemeral message so a bad press never leaves the user without feedback.
"""

from __future__ import annotations

import logging

import discord

from circle_bot.config import core
from circle_bot.directory import protocol
from circle_bot.directory.errors import CircleError

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Something went wrong handling that button. Please try again later."


def _button_custom_id(interaction: discord.Interaction) -> str | None:
    if interaction.type is not discord.InteractionType.component:
        return None
    data = interaction.data or {}
    if data.get("component_type") != discord.ComponentType.button.value:
        return None
    custom_id = data.get("custom_id")
    return custom_id if protocol.is_circle_id(custom_id) else None


async def handle(client: discord.Client, interaction: discord.Interaction) -> None:
    """Toggle membership for a circle button press and reply ephemerally."""

    custom_id = _button_custom_id(interaction)
    if custom_id is None:
        return

    guild = interaction.guild or client.get_guild(core.GUILD_ID)
    if guild is None:
        logger.warning("Ignoring circle button %s without guild context", custom_id)
        return

    # Role lookups and the welcome post can outlast Discord's 3s response window.
    await interaction.response.defer(ephemeral=True, thinking=True)

    try:
        toggle = client.membership_toggle(guild)
        content = await toggle.handle_button(
            interaction.user.id, custom_id, client.directory
        )
    except CircleError as exc:
        logger.warning("Cannot respond to circle button %s: %s", custom_id, exc)
        content = str(exc)
    except Exception:
        logger.exception("Unexpected error handling circle button %s", custom_id)
        content = GENERIC_FAILURE

    try:
        await interaction.followup.send(content, ephemeral=True)
    except discord.HTTPException as exc:
        logger.warning("Cannot respond to circle button %s: %s", custom_id, exc)
