"""
Channel Commands Module.
Text channels and categories.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord

from ..errors import NotFound, translate_errors
from ..formatting import channel_line, limited_listing
from ..params import Param
from ..results import OperationResult
from ..sanitization import normalize_name
from ..tool_definitions import CATEGORY_ID, CHANNEL_ID, GUILD_ID, tool

if TYPE_CHECKING:
    from ..tool_executor import ToolContext

DEFAULT_CHANNEL_LIMIT = 100

CHANNEL_NAME = Param("name", "Channel name", required=True, max_length=100)


@tool(
    "create_text_channel",
    "Creates a new text channel, optionally inside a category",
    GUILD_ID,
    CHANNEL_NAME,
    CATEGORY_ID,
    Param("topic", "Channel topic", max_length=1024),
)
async def create_text_channel(ctx: ToolContext, guild_id, name, category_id, topic) -> OperationResult:
    guild = ctx.guild(guild_id)
    options = {}
    if category_id is not None:
        options["category"] = ctx.entities.category(guild, category_id)
    if topic is not None:
        options["topic"] = topic

    with translate_errors("manage channels"):
        channel = await guild.create_text_channel(name, **options)
    logging.info("🛠️ Created text channel %s (%s) in %s", channel.name, channel.id, guild.name)
    return OperationResult.success(
        f"Created new text channel: {channel.name} (ID: {channel.id})", channel.id
    )


@tool(
    "delete_channel",
    "Deletes a channel or thread",
    GUILD_ID,
    CHANNEL_ID,
)
async def delete_channel(ctx: ToolContext, guild_id, channel_id) -> OperationResult:
    guild = ctx.guild(guild_id)
    channel = ctx.entities.channel(guild, channel_id)
    channel_name = channel.name

    with translate_errors("manage channels"):
        await channel.delete()
    logging.info("🗑️ Deleted channel %s (%s)", channel_name, channel_id)
    return OperationResult.success(f"Deleted channel: {channel_name} (ID: {channel_id})", channel_id)


@tool(
    "find_channel",
    "Finds channels by exact name (case-insensitive, leading '#' ignored)",
    GUILD_ID,
    Param("channelName", "Channel name to look for", required=True),
    mutating=False,
)
async def find_channel(ctx: ToolContext, guild_id, channel_name) -> OperationResult:
    guild = ctx.guild(guild_id)
    wanted = normalize_name(channel_name)
    matches = [c for c in guild.channels if normalize_name(c.name) == wanted]
    if not matches:
        raise NotFound("Channel not found by channelName")

    if len(matches) == 1:
        channel = matches[0]
        return OperationResult.success(
            f"Retrieved channel: {channel.name} (ID: {channel.id}) [{channel.type}]", channel.id
        )
    body = "\n".join(channel_line(c) for c in matches)
    return OperationResult.success(
        f"Retrieved {len(matches)} channels named '{channel_name}':\n{body}",
        *(c.id for c in matches),
    )


@tool(
    "list_channels",
    "Lists channels in the server",
    GUILD_ID,
    Param(
        "limit",
        "Maximum number of channels to return (default 100)",
        kind="int",
        default=DEFAULT_CHANNEL_LIMIT,
        minimum=1,
    ),
    mutating=False,
)
async def list_channels(ctx: ToolContext, guild_id, limit) -> OperationResult:
    guild = ctx.guild(guild_id)
    channels = list(guild.channels)
    if not channels:
        return OperationResult.success("No channels found on this server.")
    text, _ = limited_listing(channels, limit, "channels", channel_line)
    return OperationResult.success(text)


@tool(
    "create_category",
    "Creates a new channel category",
    GUILD_ID,
    Param("name", "Category name", required=True, max_length=100),
)
async def create_category(ctx: ToolContext, guild_id, name) -> OperationResult:
    guild = ctx.guild(guild_id)
    with translate_errors("manage channels"):
        category = await guild.create_category(name)
    logging.info("🛠️ Created category %s (%s) in %s", category.name, category.id, guild.name)
    return OperationResult.success(
        f"Created new category: {category.name} (ID: {category.id})", category.id
    )


@tool(
    "delete_category",
    "Deletes a category; channels inside it are kept",
    GUILD_ID,
    CATEGORY_ID.required_copy(),
)
async def delete_category(ctx: ToolContext, guild_id, category_id) -> OperationResult:
    guild = ctx.guild(guild_id)
    category = ctx.entities.category(guild, category_id)
    category_name = category.name

    with translate_errors("manage channels"):
        await category.delete()
    logging.info("🗑️ Deleted category %s (%s)", category_name, category_id)
    return OperationResult.success(
        f"Deleted category: {category_name} (ID: {category_id})", category_id
    )


@tool(
    "find_category",
    "Finds a category by exact name (case-insensitive)",
    GUILD_ID,
    Param("categoryName", "Category name to look for", required=True),
    mutating=False,
)
async def find_category(ctx: ToolContext, guild_id, category_name) -> OperationResult:
    guild = ctx.guild(guild_id)
    wanted = normalize_name(category_name)
    matches = [c for c in guild.categories if normalize_name(c.name) == wanted]
    if not matches:
        raise NotFound("Category not found by categoryName")

    body = "\n".join(f"- {c.name} (ID: {c.id})" for c in matches)
    return OperationResult.success(
        f"Retrieved {len(matches)} categories named '{category_name}':\n{body}",
        *(c.id for c in matches),
    )


@tool(
    "list_channels_in_category",
    "Lists the channels inside a category",
    GUILD_ID,
    CATEGORY_ID.required_copy(),
    mutating=False,
)
async def list_channels_in_category(ctx: ToolContext, guild_id, category_id) -> OperationResult:
    guild = ctx.guild(guild_id)
    category: discord.CategoryChannel = ctx.entities.category(guild, category_id)
    channels = list(category.channels)
    if not channels:
        return OperationResult.success(f"Category {category.name} has no channels.")
    body = "\n".join(channel_line(c) for c in channels)
    return OperationResult.success(
        f"Retrieved {len(channels)} channels in category {category.name}:\n{body}"
    )
