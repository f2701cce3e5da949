"""
Voice Commands Module.
Voice and stage channels, and the voice state of connected members.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord

from ..checks import ensure_in_voice
from ..errors import translate_errors
from ..params import AnyOf, Param
from ..results import OperationResult
from ..tool_definitions import CATEGORY_ID, CHANNEL_ID, GUILD_ID, USER_ID, tool

if TYPE_CHECKING:
    from ..tool_executor import ToolContext

VOCAL_CHANNELS = (discord.VoiceChannel, discord.StageChannel)
VOCAL_LABEL = "voice or stage channel"

# Values that reset rtcRegion to automatic selection
AUTO_REGION = frozenset({"auto", "automatic"})


def _bitrate(default=None) -> Param:
    return Param(
        "bitrate",
        "Bitrate in bits per second (8000-384000)",
        kind="int",
        default=default,
        minimum=8000,
        maximum=384000,
    )


def _user_limit(default=None) -> Param:
    return Param(
        "userLimit",
        "Maximum connected users, 0 for unlimited (0-99)",
        kind="int",
        default=default,
        minimum=0,
        maximum=99,
    )


def _channel_options(ctx: ToolContext, guild: discord.Guild, category_id, **values) -> dict:
    options = {key: value for key, value in values.items() if value is not None}
    if category_id is not None:
        options["category"] = ctx.entities.category(guild, category_id)
    return options


@tool(
    "create_voice_channel",
    "Creates a new voice channel",
    GUILD_ID,
    Param("name", "Channel name", required=True, max_length=100),
    CATEGORY_ID,
    _user_limit(),
    _bitrate(),
)
async def create_voice_channel(
    ctx: ToolContext, guild_id, name, category_id, user_limit, bitrate
) -> OperationResult:
    guild = ctx.guild(guild_id)
    options = _channel_options(ctx, guild, category_id, user_limit=user_limit, bitrate=bitrate)

    with translate_errors("manage channels"):
        channel = await guild.create_voice_channel(name, **options)
    logging.info("🛠️ Created voice channel %s (%s) in %s", channel.name, channel.id, guild.name)
    return OperationResult.success(
        f"Created new voice channel: {channel.name} (ID: {channel.id})", channel.id
    )


@tool(
    "create_stage_channel",
    "Creates a new stage channel for audio events",
    GUILD_ID,
    Param("name", "Channel name", required=True, max_length=100),
    CATEGORY_ID,
    _bitrate(),
)
async def create_stage_channel(ctx: ToolContext, guild_id, name, category_id, bitrate) -> OperationResult:
    guild = ctx.guild(guild_id)
    options = _channel_options(ctx, guild, category_id, bitrate=bitrate)

    with translate_errors("manage channels"):
        channel = await guild.create_stage_channel(name, **options)
    logging.info("🛠️ Created stage channel %s (%s) in %s", channel.name, channel.id, guild.name)
    return OperationResult.success(
        f"Created new stage channel: {channel.name} (ID: {channel.id})", channel.id
    )


@tool(
    "edit_voice_channel",
    "Modifies a voice or stage channel's name, bitrate, user limit or region",
    GUILD_ID,
    CHANNEL_ID,
    Param("name", "New channel name", max_length=100),
    _bitrate(),
    _user_limit(),
    Param("rtcRegion", "Voice region ID, or 'auto' for automatic selection"),
)
async def edit_voice_channel(
    ctx: ToolContext, guild_id, channel_id, name, bitrate, user_limit, rtc_region
) -> OperationResult:
    guild = ctx.guild(guild_id)
    channel = ctx.entities.channel(guild, channel_id, VOCAL_CHANNELS, VOCAL_LABEL)

    changes = {}
    if name is not None:
        changes["name"] = name
    if bitrate is not None:
        changes["bitrate"] = bitrate
    if user_limit is not None:
        if isinstance(channel, discord.StageChannel):
            logging.debug("Ignoring userLimit for stage channel %s", channel.id)
        else:
            changes["user_limit"] = user_limit
    if rtc_region is not None:
        region = rtc_region.strip()
        changes["rtc_region"] = None if region.lower() in AUTO_REGION else region
    if not changes:
        return OperationResult.success(f"No changes requested for channel {channel.name} (ID: {channel.id}).")

    with translate_errors("manage channels"):
        await channel.edit(**changes)
    logging.info("✏️ Edited voice channel %s (%s): %s", channel.name, channel.id, ", ".join(changes))
    return OperationResult.success(
        f"Successfully updated channel: {changes.get('name', channel.name)} (ID: {channel.id})",
        channel.id,
    )


@tool(
    "move_member",
    "Moves a member who is connected to voice into another voice or stage channel",
    GUILD_ID,
    USER_ID,
    CHANNEL_ID,
)
async def move_member(ctx: ToolContext, guild_id, user_id, channel_id) -> OperationResult:
    guild = ctx.guild(guild_id)
    member = await ctx.entities.member(guild, user_id)
    ensure_in_voice(member)
    target = ctx.entities.channel(guild, channel_id, VOCAL_CHANNELS, VOCAL_LABEL)

    with translate_errors("move members"):
        await member.move_to(target)
    logging.info("🔀 Moved %s to %s in %s", member.name, target.name, guild.name)
    return OperationResult.success(
        f"Successfully moved {member.name} to {target.name}", member.id, target.id
    )


@tool(
    "disconnect_member",
    "Disconnects a member from voice",
    GUILD_ID,
    USER_ID,
)
async def disconnect_member(ctx: ToolContext, guild_id, user_id) -> OperationResult:
    guild = ctx.guild(guild_id)
    member = await ctx.entities.member(guild, user_id)
    previous = ensure_in_voice(member).channel

    with translate_errors("move members"):
        await member.move_to(None)
    logging.info("🔇 Disconnected %s from %s", member.name, previous.name)
    return OperationResult.success(
        f"Successfully disconnected {member.name} from {previous.name}", member.id
    )


@tool(
    "modify_voice_state",
    "Server mutes or deafens a member who is connected to voice",
    GUILD_ID,
    USER_ID,
    Param("mute", "Server mute the member (true/false)", kind="bool"),
    Param("deafen", "Server deafen the member (true/false)", kind="bool"),
    rules=(AnyOf(("mute", "deafen")),),
)
async def modify_voice_state(ctx: ToolContext, guild_id, user_id, mute, deafen) -> OperationResult:
    guild = ctx.guild(guild_id)
    member = await ctx.entities.member(guild, user_id)
    ensure_in_voice(member)

    changes = {}
    if mute is not None:
        changes["mute"] = mute
    if deafen is not None:
        changes["deafen"] = deafen

    with translate_errors("mute or deafen members"):
        await member.edit(**changes)
    logging.info("🎙️ Updated voice state of %s: %s", member.name, changes)
    states = ", ".join(f"{key}={str(value).lower()}" for key, value in changes.items())
    return OperationResult.success(
        f"Successfully updated voice state for {member.name}: {states}", member.id
    )
