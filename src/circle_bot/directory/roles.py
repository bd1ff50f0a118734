"""
discord.py adapters for the membership toggle.

:class:`DiscordRoleGateway` answers "does this member hold that role" and
grants/revokes roles for one guild; :class:`DiscordChannelNotifier` posts
plain messages to a channel by id. Discord errors become ``UpstreamFailure``
and malformed ids become ``InvalidFormat``.
"""

from __future__ import annotations

import logging

import discord

from .errors import UpstreamFailure
from .models import parse_snowflake

logger = logging.getLogger(__name__)

_REASON = "Circle join/leave button"


class DiscordRoleGateway:
    """Role-assignment gateway bound to a single guild."""

    def __init__(self, guild: discord.Guild) -> None:
        self.guild = guild

    async def _member(self, user_id: int) -> discord.Member:
        try:
            return await self.guild.fetch_member(user_id)
        except discord.HTTPException as exc:
            raise UpstreamFailure(f"Unable to get member {user_id}: {exc}") from exc

    async def has_role(self, user_id: int, role_id: str) -> bool:
        rid = parse_snowflake(role_id, "role id")
        member = await self._member(user_id)
        return any(role.id == rid for role in member.roles)

    async def grant_role(self, user_id: int, role_id: str) -> None:
        rid = parse_snowflake(role_id, "role id")
        member = await self._member(user_id)
        try:
            await member.add_roles(discord.Object(id=rid), reason=_REASON)
        except discord.HTTPException as exc:
            raise UpstreamFailure(f"Unable to add role {role_id}: {exc}") from exc

    async def revoke_role(self, user_id: int, role_id: str) -> None:
        rid = parse_snowflake(role_id, "role id")
        member = await self._member(user_id)
        try:
            await member.remove_roles(discord.Object(id=rid), reason=_REASON)
        except discord.HTTPException as exc:
            raise UpstreamFailure(f"Unable to remove role {role_id}: {exc}") from exc


class DiscordChannelNotifier:
    """Send plain-text messages to channels looked up by id."""

    def __init__(self, client: discord.Client) -> None:
        self.client = client

    async def send(self, channel_id: str, content: str) -> None:
        cid = parse_snowflake(channel_id, "channel")
        channel = self.client.get_channel(cid)
        try:
            if channel is None:
                channel = await self.client.fetch_channel(cid)
            await channel.send(content)
        except discord.HTTPException as exc:
            raise UpstreamFailure(f"Unable to send to channel {channel_id}: {exc}") from exc
