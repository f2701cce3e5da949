"""
Resolver Module.
Turns server and entity IDs into live discord.py objects, or typed failures.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

import discord

from .errors import InvalidArgument, MissingScope, NotFound, TypeMismatch, translate_errors


class EntityKind(str, Enum):
    """Kinds of remote object a tool can refer to."""

    SERVER = "Discord server"
    MEMBER = "Member"
    USER = "User"
    ROLE = "Role"
    CHANNEL = "Channel"
    CATEGORY = "Category"
    EVENT = "Scheduled event"
    INVITE = "Invite"
    MESSAGE = "Message"
    WEBHOOK = "Webhook"


def _require(value: Any, param: str) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidArgument(f"{param} cannot be null")
    return value


class ScopeResolver:
    """Picks the server a call targets: the explicit ID, else the configured default.

    The default is read once at construction and never changes afterwards.
    """

    def __init__(self, default_scope: str | int | None = None) -> None:
        self.default_scope = str(default_scope).strip() if default_scope else ""

    @property
    def has_default(self) -> bool:
        return bool(self.default_scope)

    def resolve(self, explicit: str | int | None = None) -> int:
        """Return the server ID for a call.

        Raises:
            MissingScope: No explicit ID and no configured default
            InvalidArgument: The chosen ID is not numeric
        """
        if explicit is not None and str(explicit).strip():
            candidate, source = str(explicit).strip(), "guildId"
        elif self.default_scope:
            candidate, source = self.default_scope, "DISCORD_GUILD_ID"
        else:
            raise MissingScope()

        if not candidate.isdigit():
            raise InvalidArgument(f"{source} must be a numeric Discord ID")
        return int(candidate)


class EntityResolver:
    """Looks up entities in the client's cache, or over the API where the cache may miss.

    Members, users, messages, invites and webhooks are fetched remotely when
    needed; everything else comes from cached guild state.
    """

    def __init__(self, client: discord.Client) -> None:
        self.client = client

    # ==================== Guild-scoped, cached ====================

    def guild(self, scope: int) -> discord.Guild:
        guild = self.client.get_guild(scope)
        if guild is None:
            raise NotFound(f"{EntityKind.SERVER.value} not found by guildId")
        return guild

    def role(self, guild: discord.Guild, role_id: int | None, param: str = "roleId") -> discord.Role:
        role = guild.get_role(_require(role_id, param))
        if role is None:
            raise NotFound(f"{EntityKind.ROLE.value} not found by {param}")
        return role

    def channel(
        self,
        guild: discord.Guild,
        channel_id: int | None,
        kinds: type | tuple[type, ...] | None = None,
        label: str = "channel",
        param: str = "channelId",
    ) -> Any:
        """Find a channel (or thread) in ``guild`` and check it is one of ``kinds``."""
        channel = guild.get_channel_or_thread(_require(channel_id, param))
        if channel is None:
            raise NotFound(f"{EntityKind.CHANNEL.value} not found by {param}")
        if kinds is not None and not isinstance(channel, kinds):
            raise TypeMismatch(f"Channel given as {param} is not a {label}")
        return channel

    def category(
        self, guild: discord.Guild, category_id: int | None, param: str = "categoryId"
    ) -> discord.CategoryChannel:
        channel = guild.get_channel(_require(category_id, param))
        if channel is None:
            raise NotFound(f"{EntityKind.CATEGORY.value} not found by {param}")
        if not isinstance(channel, discord.CategoryChannel):
            raise TypeMismatch(f"Channel given as {param} is not a category")
        return channel

    def event(
        self, guild: discord.Guild, event_id: int | None, param: str = "eventId"
    ) -> discord.ScheduledEvent:
        event = guild.get_scheduled_event(_require(event_id, param))
        if event is None:
            raise NotFound(f"{EntityKind.EVENT.value} not found by {param}")
        return event

    # ==================== Client-wide ====================

    def any_channel(
        self,
        channel_id: int | None,
        kinds: type | tuple[type, ...] | None = None,
        label: str = "channel",
        param: str = "channelId",
    ) -> Any:
        """Find a channel in any server the bot can see."""
        channel = self.client.get_channel(_require(channel_id, param))
        if channel is None:
            raise NotFound(f"{EntityKind.CHANNEL.value} not found by {param}")
        if kinds is not None and not isinstance(channel, kinds):
            raise TypeMismatch(f"Channel given as {param} is not a {label}")
        return channel

    # ==================== Remote lookups ====================

    async def member(
        self, guild: discord.Guild, user_id: int | None, param: str = "userId"
    ) -> discord.Member:
        """Resolve a member, fetching it when the member list is not cached."""
        user_id = _require(user_id, param)
        member = guild.get_member(user_id)
        if member is not None:
            return member

        logging.debug("Member %s not cached in guild %s, fetching", user_id, guild.id)
        with translate_errors(
            "look up members", not_found=f"User not found in this server by {param}"
        ):
            return await guild.fetch_member(user_id)

    async def user(self, user_id: int | None, param: str = "userId") -> discord.User:
        user_id = _require(user_id, param)
        user = self.client.get_user(user_id)
        if user is not None:
            return user
        with translate_errors("look up users", not_found=f"{EntityKind.USER.value} not found by {param}"):
            return await self.client.fetch_user(user_id)

    async def message(
        self, channel: discord.abc.Messageable, message_id: int | None, param: str = "messageId"
    ) -> discord.Message:
        message_id = _require(message_id, param)
        with translate_errors(
            "read message history in this channel",
            not_found=f"{EntityKind.MESSAGE.value} not found by {param}",
        ):
            return await channel.fetch_message(message_id)

    async def invite(self, code: str, with_counts: bool = True) -> discord.Invite:
        code = _require(code, "inviteCode")
        with translate_errors("view invites", not_found=f"Invite not found or expired: {code}"):
            return await self.client.fetch_invite(code, with_counts=with_counts)

    async def webhook(self, webhook_id: int | None, param: str = "webhookId") -> discord.Webhook:
        webhook_id = _require(webhook_id, param)
        with translate_errors(
            "manage webhooks", not_found=f"{EntityKind.WEBHOOK.value} not found by {param}"
        ):
            return await self.client.fetch_webhook(webhook_id)


__all__ = ["EntityKind", "EntityResolver", "ScopeResolver"]
