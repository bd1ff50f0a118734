from __future__ import annotations

import discord
from discord import app_commands
from discord.ext import commands

from .. import register_cog


@register_cog
class Ping(commands.Cog):
    """Liveness check."""

    def __init__(self, bot: commands.Bot):
        self.bot = bot

    @app_commands.command(name="beep", description="Beep boop I'm a bot")
    async def beep(self, interaction: discord.Interaction) -> None:
        await interaction.response.send_message("🤖 boop! 🤖", ephemeral=True)
