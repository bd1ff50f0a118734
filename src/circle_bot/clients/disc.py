"""Discord bot bootstrap utilities."""

from __future__ import annotations

import logging

import discord
from discord.ext import commands as discord_commands

from circle_bot import commands as cb_commands
from circle_bot.config import core, store
from circle_bot.directory import DirectoryService, MembershipToggle, scheduler
from circle_bot.directory.roles import DiscordChannelNotifier, DiscordRoleGateway
from circle_bot.directory.sqlite_store import SqliteCircleStore
from circle_bot.event_hooks import interaction_hook, ready_hook

logger = logging.getLogger(__name__)

# --- Intents --------------------------------------------------------------- #
intents = discord.Intents.default()
intents.members = True  # role.members drives the card member counts


class CircleBot(discord_commands.Bot):
    """Circles bot: owns the circle store and the shared directory."""

    def __init__(self) -> None:
        super().__init__(command_prefix=discord_commands.when_mentioned, intents=intents)
        self.store = SqliteCircleStore.open(store.DB_PATH)
        self.directory = DirectoryService(self.store)

    def membership_toggle(self, guild: discord.Guild) -> MembershipToggle:
        return MembershipToggle(DiscordRoleGateway(guild), DiscordChannelNotifier(self))

    async def setup_hook(self) -> None:
        """Register slash commands and synchronise them to the circles guild."""

        await cb_commands.setup(self)

        guild = discord.Object(id=core.GUILD_ID)
        self.tree.copy_global_to(guild=guild)
        try:
            synced = await self.tree.sync(guild=guild)
            logger.info("Synced %d application command(s)", len(synced))
        except Exception:
            logger.exception("Failed to sync application commands")

    async def close(self) -> None:
        await scheduler.stop()
        await super().close()
        self.store.close()


bot = CircleBot()


@bot.event
async def on_ready() -> None:
    await ready_hook.handle(bot)


@bot.event
async def on_interaction(interaction: discord.Interaction) -> None:
    await interaction_hook.handle(bot, interaction)


def run() -> None:
    """Start the Discord bot using configuration from the environment."""

    if not core.DISCORD_API_TOKEN:
        logger.error("No DISCORD_API_TOKEN configured. Cannot run client.")
        return

    try:
        bot.run(core.DISCORD_API_TOKEN, log_handler=None)
    except discord.LoginFailure as exc:
        logger.error("Login failed: %s", exc)
    except Exception as exc:  # pragma: no cover - defensive guard
        logger.exception("Unexpected error while running client: %s", exc)
