"""
Messaging Commands Module.
Sending, editing, reading and reacting to messages in server channels.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord

from ..errors import translate_errors
from ..formatting import message_line
from ..params import Param
from ..results import OperationResult
from ..tool_definitions import CHANNEL_ID, MESSAGE_ID, MESSAGE_TEXT, tool

if TYPE_CHECKING:
    from ..tool_executor import ToolContext

MESSAGEABLE = discord.abc.Messageable
MESSAGEABLE_LABEL = "channel that can hold messages"

NEW_MESSAGE = Param("newMessage", "New message content", required=True, max_length=2000)
EMOJI = Param("emoji", "Emoji (Unicode or <:name:id>)", required=True)
COUNT = Param(
    "count",
    "Number of recent messages to read (default 100)",
    kind="int",
    default=100,
    minimum=1,
    maximum=100,
)


def _channel(ctx: ToolContext, channel_id):
    return ctx.entities.any_channel(channel_id, MESSAGEABLE, MESSAGEABLE_LABEL)


def history_listing(messages: list[discord.Message], where: str) -> str:
    if not messages:
        return f"No messages found in {where}."
    body = "\n".join(message_line(m) for m in messages)
    return f"Retrieved {len(messages)} messages from {where}:\n{body}"


@tool(
    "send_message",
    "Sends a message to a channel",
    CHANNEL_ID,
    MESSAGE_TEXT,
)
async def send_message(ctx: ToolContext, channel_id, message) -> OperationResult:
    channel = _channel(ctx, channel_id)
    with translate_errors("send messages in this channel"):
        sent = await channel.send(message)
    logging.info("💬 Sent message %s to channel %s", sent.id, channel_id)
    return OperationResult.success(
        f"Message sent successfully. Message link: {sent.jump_url}", sent.id
    )


@tool(
    "edit_message",
    "Edits a message previously sent by the bot",
    CHANNEL_ID,
    MESSAGE_ID,
    NEW_MESSAGE,
)
async def edit_message(ctx: ToolContext, channel_id, message_id, new_message) -> OperationResult:
    channel = _channel(ctx, channel_id)
    target = await ctx.entities.message(channel, message_id)
    with translate_errors("edit this message"):
        edited = await target.edit(content=new_message)
    logging.info("✏️ Edited message %s in channel %s", message_id, channel_id)
    return OperationResult.success(
        f"Message edited successfully. Message link: {edited.jump_url}", message_id
    )


@tool(
    "delete_message",
    "Deletes a message",
    CHANNEL_ID,
    MESSAGE_ID,
)
async def delete_message(ctx: ToolContext, channel_id, message_id) -> OperationResult:
    channel = _channel(ctx, channel_id)
    target = await ctx.entities.message(channel, message_id)
    with translate_errors("manage messages in this channel"):
        await target.delete()
    logging.info("🗑️ Deleted message %s in channel %s", message_id, channel_id)
    return OperationResult.success("Message deleted successfully", message_id)


@tool(
    "read_messages",
    "Reads the most recent messages of a channel",
    CHANNEL_ID,
    COUNT,
    mutating=False,
)
async def read_messages(ctx: ToolContext, channel_id, count) -> OperationResult:
    channel = _channel(ctx, channel_id)
    with translate_errors("read message history in this channel"):
        messages = [m async for m in channel.history(limit=count)]
    return OperationResult.success(history_listing(messages, f"channel {getattr(channel, 'name', channel_id)}"))


@tool(
    "add_reaction",
    "Adds a reaction to a message",
    CHANNEL_ID,
    MESSAGE_ID,
    EMOJI,
)
async def add_reaction(ctx: ToolContext, channel_id, message_id, emoji) -> OperationResult:
    channel = _channel(ctx, channel_id)
    target = await ctx.entities.message(channel, message_id)
    with translate_errors("add reactions in this channel"):
        await target.add_reaction(emoji)
    return OperationResult.success(f"Added reaction {emoji} to message {message_id}", message_id)


@tool(
    "remove_reaction",
    "Removes the bot's own reaction from a message",
    CHANNEL_ID,
    MESSAGE_ID,
    EMOJI,
)
async def remove_reaction(ctx: ToolContext, channel_id, message_id, emoji) -> OperationResult:
    channel = _channel(ctx, channel_id)
    target = await ctx.entities.message(channel, message_id)
    with translate_errors("remove reactions in this channel"):
        await target.remove_reaction(emoji, ctx.client.user)
    return OperationResult.success(f"Removed reaction {emoji} from message {message_id}", message_id)
