"""
User Commands Module.
User lookup and direct messages.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord

from ..errors import NotFound, translate_errors
from ..params import Param
from ..results import OperationResult
from ..tool_definitions import GUILD_ID, MESSAGE_ID, MESSAGE_TEXT, USER_ID, tool
from .messages import COUNT, NEW_MESSAGE, history_listing

if TYPE_CHECKING:
    from ..tool_executor import ToolContext


def _member_names(member: discord.Member) -> set[str]:
    names = {member.name, member.display_name}
    if member.global_name:
        names.add(member.global_name)
    if member.discriminator and member.discriminator != "0":
        names.add(f"{member.name}#{member.discriminator}")
    return {n.lower() for n in names}


async def _dm_channel(user: discord.User) -> discord.DMChannel:
    if user.dm_channel is not None:
        return user.dm_channel
    with translate_errors("open a direct message with this user"):
        return await user.create_dm()


@tool(
    "get_user_id_by_name",
    "Finds a member's ID by username, display name or name#discriminator",
    GUILD_ID,
    Param("username", "Username, display name or name#discriminator", required=True),
    mutating=False,
)
async def get_user_id_by_name(ctx: ToolContext, guild_id, username) -> OperationResult:
    """Match case-insensitively against every cached member of the server."""
    guild = ctx.guild(guild_id)
    wanted = username.strip().lower().removeprefix("@")
    matches = [m for m in guild.members if wanted in _member_names(m)]
    if not matches:
        raise NotFound("User not found by username")

    if len(matches) == 1:
        member = matches[0]
        return OperationResult.success(f"User ID of {member.name}: {member.id}", member.id)
    body = "\n".join(f"- {m.name} ({m.display_name}) ID: {m.id}" for m in matches)
    return OperationResult.success(
        f"Retrieved {len(matches)} users matching '{username}':\n{body}",
        *(m.id for m in matches),
    )


@tool(
    "send_private_message",
    "Sends a direct message to a user",
    USER_ID,
    MESSAGE_TEXT,
)
async def send_private_message(ctx: ToolContext, user_id, message) -> OperationResult:
    user = await ctx.entities.user(user_id)
    with translate_errors("send direct messages to this user"):
        sent = await user.send(message)
    logging.info("📨 Sent private message %s to %s", sent.id, user.name)
    return OperationResult.success(
        f"Message sent successfully. Message link: {sent.jump_url}", sent.id
    )


@tool(
    "edit_private_message",
    "Edits a direct message previously sent by the bot",
    USER_ID,
    MESSAGE_ID,
    NEW_MESSAGE,
)
async def edit_private_message(ctx: ToolContext, user_id, message_id, new_message) -> OperationResult:
    user = await ctx.entities.user(user_id)
    channel = await _dm_channel(user)
    target = await ctx.entities.message(channel, message_id)
    with translate_errors("edit this message"):
        edited = await target.edit(content=new_message)
    logging.info("✏️ Edited private message %s to %s", message_id, user.name)
    return OperationResult.success(
        f"Message edited successfully. Message link: {edited.jump_url}", message_id
    )


@tool(
    "delete_private_message",
    "Deletes a direct message previously sent by the bot",
    USER_ID,
    MESSAGE_ID,
)
async def delete_private_message(ctx: ToolContext, user_id, message_id) -> OperationResult:
    user = await ctx.entities.user(user_id)
    channel = await _dm_channel(user)
    target = await ctx.entities.message(channel, message_id)
    with translate_errors("delete this message"):
        await target.delete()
    logging.info("🗑️ Deleted private message %s to %s", message_id, user.name)
    return OperationResult.success("Message deleted successfully", message_id)


@tool(
    "read_private_messages",
    "Reads recent direct messages exchanged with a user",
    USER_ID,
    COUNT,
    mutating=False,
)
async def read_private_messages(ctx: ToolContext, user_id, count) -> OperationResult:
    user = await ctx.entities.user(user_id)
    channel = await _dm_channel(user)
    with translate_errors("read direct messages with this user"):
        messages = [m async for m in channel.history(limit=count)]
    return OperationResult.success(history_listing(messages, f"direct messages with {user.name}"))
