from __future__ import annotations

import logging
from typing import Optional

import discord
from discord import app_commands
from discord.ext import commands

from .. import register_cog, reply, reply_error
from circle_bot.directory.creation import create_circle
from circle_bot.directory.emoji import validate_emoji
from circle_bot.directory.errors import CircleError
from circle_bot.directory.repost import repost as repost_circles

logger = logging.getLogger(__name__)


@register_cog
class CircleAdmin(commands.Cog):
    """
    Slash commands for circle administration.

    ``/circle add|edit|remove|repost`` manage individual circles and the join
    channel; ``/recache`` refreshes the directory from the store. All replies
    are ephemeral and every :class:`CircleError` is shown to the caller.
    """

    circle = app_commands.Group(
        name="circle",
        description="Manage circles",
        default_permissions=discord.Permissions(manage_roles=True),
        guild_only=True,
    )

    def __init__(self, bot: commands.Bot):
        self.bot = bot

    @circle.command(name="add", description="Add a new circle")
    @app_commands.describe(
        name="The name of the circle",
        description="The description of the circle",
        color="The color of the circle",
        emoji="The emoji of the circle",
        graphic="The graphic of the circle",
        owner="The owner of the circle",
    )
    async def add(
        self,
        interaction: discord.Interaction,
        name: str,
        description: str,
        color: str,
        emoji: str,
        graphic: str,
        owner: discord.Member,
    ) -> None:
        logger.info("Running circle add for %s", name)
        await interaction.response.defer(ephemeral=True, thinking=True)
        try:
            await create_circle(
                interaction.guild,
                self.bot.directory,
                name=name,
                description=description,
                color=color,
                emoji=emoji,
                graphic=graphic,
                owner=owner,
            )
        except CircleError as exc:
            await reply_error(interaction, exc)
            return
        await reply(interaction, "Circle added")

    @circle.command(name="edit", description="Edit a circle's display details")
    @app_commands.describe(
        circle_id="The circle's role id",
        name="New name",
        description="New description",
        emoji="New emoji",
        graphic="New graphic URL",
    )
    async def edit(
        self,
        interaction: discord.Interaction,
        circle_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
        emoji: Optional[str] = None,
        graphic: Optional[str] = None,
    ) -> None:
        changes: dict[str, str] = {}
        if name is not None:
            changes["name"] = name
        if description is not None:
            changes["description"] = description
        if graphic is not None:
            changes["image_url"] = graphic

        try:
            if emoji is not None:
                changes["emoji"] = validate_emoji(emoji)
            await self.bot.directory.resolve(circle_id)
            if not changes:
                await reply(interaction, "Nothing to update")
                return
            await self.bot.directory.update(circle_id, changes)
        except CircleError as exc:
            await reply_error(interaction, exc)
            return
        await reply(interaction, "Circle updated")

    @circle.command(name="remove", description="Remove a circle from the directory")
    @app_commands.describe(circle_id="The circle's role id")
    async def remove(self, interaction: discord.Interaction, circle_id: str) -> None:
        try:
            await self.bot.directory.delete(circle_id)
        except CircleError as exc:
            await reply_error(interaction, exc)
            return
        await reply(interaction, "Circle removed")

    @circle.command(name="repost", description="Repost the circle embeds")
    async def repost(self, interaction: discord.Interaction) -> None:
        await interaction.response.defer(ephemeral=True, thinking=True)
        try:
            await repost_circles(self.bot, interaction.guild, self.bot.directory)
        except CircleError as exc:
            await reply_error(interaction, exc)
            return
        await reply(interaction, "Done!")

    @app_commands.command(name="recache", description="Recache the bot")
    @app_commands.default_permissions(manage_roles=True)
    async def recache(self, interaction: discord.Interaction) -> None:
        await interaction.response.defer(ephemeral=True, thinking=True)
        try:
            count = await self.bot.directory.recache()
        except CircleError as exc:
            await reply_error(interaction, exc)
            return
        await reply(interaction, f"Recached {count} circle(s)")
