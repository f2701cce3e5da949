"""
Moderation Commands Module.
Kick, ban, timeout and nickname actions on server members.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING

import discord

from ..checks import ensure_member_below_bot
from ..errors import translate_errors
from ..formatting import limited_listing, reason_suffix
from ..params import Param
from ..results import OperationResult
from ..tool_definitions import GUILD_ID, REASON, USER_ID, tool

if TYPE_CHECKING:
    from ..tool_executor import ToolContext

MAX_DELETE_MESSAGE_SECONDS = 604800  # 7 days
MAX_TIMEOUT_SECONDS = 2419200  # 28 days
DEFAULT_BAN_LIMIT = 50


@tool(
    "kick_member",
    "Kicks a member from the server",
    GUILD_ID,
    USER_ID,
    REASON,
)
async def kick_member(ctx: ToolContext, guild_id, user_id, reason) -> OperationResult:
    guild = ctx.guild(guild_id)
    member = await ctx.entities.member(guild, user_id)
    ensure_member_below_bot(guild, member, "kick")

    with translate_errors("kick members"):
        await guild.kick(member, reason=reason)
    logging.info("👢 Kicked %s (%s) from %s", member.name, member.id, guild.name)
    return OperationResult.success(
        f"Successfully kicked {member.name} (ID: {member.id}) from the server.{reason_suffix(reason)}",
        member.id,
    )


@tool(
    "ban_member",
    "Bans a user from the server, optionally deleting their recent messages",
    GUILD_ID,
    USER_ID,
    Param(
        "deleteMessageSeconds",
        "Seconds of message history to delete (0-604800)",
        kind="int",
        default=0,
        minimum=0,
        maximum=MAX_DELETE_MESSAGE_SECONDS,
        bound_hint="7 days",
    ),
    REASON,
)
async def ban_member(
    ctx: ToolContext, guild_id, user_id, delete_message_seconds, reason
) -> OperationResult:
    """Ban by ID; the user does not have to be a member of the server."""
    guild = ctx.guild(guild_id)
    member = guild.get_member(user_id)
    if member is None:
        with translate_errors("look up members"):
            try:
                member = await guild.fetch_member(user_id)
            except discord.NotFound:
                member = None  # not in the server, banned by ID alone
    if member is not None:
        ensure_member_below_bot(guild, member, "ban")

    with translate_errors("ban members", not_found="User not found by userId"):
        await guild.ban(
            discord.Object(id=user_id),
            delete_message_seconds=delete_message_seconds,
            reason=reason,
        )
    logging.info("🔨 Banned %s from %s", user_id, guild.name)
    return OperationResult.success(
        f"Successfully banned user (ID: {user_id}) from the server."
        f" Deleted {delete_message_seconds} seconds of message history.{reason_suffix(reason)}",
        user_id,
    )


@tool(
    "unban_member",
    "Removes a ban so the user can rejoin the server",
    GUILD_ID,
    USER_ID,
    REASON,
)
async def unban_member(ctx: ToolContext, guild_id, user_id, reason) -> OperationResult:
    guild = ctx.guild(guild_id)
    with translate_errors("unban members", not_found="No ban found for userId in this server"):
        await guild.unban(discord.Object(id=user_id), reason=reason)
    logging.info("🕊️ Unbanned %s in %s", user_id, guild.name)
    return OperationResult.success(
        f"Successfully unbanned user (ID: {user_id}).{reason_suffix(reason)}", user_id
    )


@tool(
    "timeout_member",
    "Temporarily prevents a member from chatting, reacting or joining voice",
    GUILD_ID,
    USER_ID,
    Param(
        "durationSeconds",
        "Timeout length in seconds (1-2419200)",
        kind="int",
        required=True,
        minimum=1,
        maximum=MAX_TIMEOUT_SECONDS,
        bound_hint="28 days",
    ),
    REASON,
)
async def timeout_member(
    ctx: ToolContext, guild_id, user_id, duration_seconds, reason
) -> OperationResult:
    guild = ctx.guild(guild_id)
    member = await ctx.entities.member(guild, user_id)
    ensure_member_below_bot(guild, member, "timeout")

    with translate_errors("timeout members"):
        await member.timeout(timedelta(seconds=duration_seconds), reason=reason)
    logging.info("⏳ Timed out %s for %ss in %s", member.name, duration_seconds, guild.name)
    return OperationResult.success(
        f"Successfully timed out {member.name} (ID: {member.id}) for {duration_seconds} seconds."
        f"{reason_suffix(reason)}",
        member.id,
    )


@tool(
    "remove_timeout",
    "Lifts an active timeout from a member",
    GUILD_ID,
    USER_ID,
    REASON,
)
async def remove_timeout(ctx: ToolContext, guild_id, user_id, reason) -> OperationResult:
    guild = ctx.guild(guild_id)
    member = await ctx.entities.member(guild, user_id)
    ensure_member_below_bot(guild, member, "remove the timeout of")

    with translate_errors("timeout members"):
        await member.timeout(None, reason=reason)
    logging.info("⌛ Removed timeout from %s in %s", member.name, guild.name)
    return OperationResult.success(
        f"Successfully removed timeout from {member.name} (ID: {member.id}).{reason_suffix(reason)}",
        member.id,
    )


@tool(
    "set_nickname",
    "Changes a member's server nickname; omit nickname to reset it",
    GUILD_ID,
    USER_ID,
    Param("nickname", "New nickname (empty to reset)", max_length=32),
    REASON,
)
async def set_nickname(ctx: ToolContext, guild_id, user_id, nickname, reason) -> OperationResult:
    guild = ctx.guild(guild_id)
    member = await ctx.entities.member(guild, user_id)
    # The bot may always rename itself
    if guild.me is None or member.id != guild.me.id:
        ensure_member_below_bot(guild, member, "change the nickname of")

    with translate_errors("manage nicknames"):
        await member.edit(nick=nickname, reason=reason)
    logging.info("🏷️ Set nickname of %s to %r in %s", member.name, nickname, guild.name)
    if nickname:
        text = f"Successfully set nickname of {member.name} (ID: {member.id}) to '{nickname}'."
    else:
        text = f"Successfully reset nickname of {member.name} (ID: {member.id})."
    return OperationResult.success(text + reason_suffix(reason), member.id)


@tool(
    "get_bans",
    "Lists banned users with their ban reasons",
    GUILD_ID,
    Param(
        "limit",
        "Maximum number of bans to return (default 50)",
        kind="int",
        default=DEFAULT_BAN_LIMIT,
        minimum=1,
    ),
    mutating=False,
)
async def get_bans(ctx: ToolContext, guild_id, limit) -> OperationResult:
    guild = ctx.guild(guild_id)
    with translate_errors("view bans"):
        entries = [entry async for entry in guild.bans(limit=None)]

    if not entries:
        return OperationResult.success("No bans found on this server.")

    text, _ = limited_listing(
        entries,
        limit,
        "bans",
        lambda entry: (
            f"- **{entry.user.name}** (ID: {entry.user.id})"
            f" Reason: {entry.reason or 'No reason provided'}"
        ),
    )
    return OperationResult.success(text)
