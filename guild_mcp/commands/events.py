"""
Scheduled Event Commands Module.

Event types are addressed by numeric code (1 Stage, 2 Voice, 3 External) and
status changes by code (1 Scheduled, 2 Active, 3 Completed, 4 Canceled). Which
status transitions are legal is decided by Discord, not here.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord

from ..errors import TypeMismatch, ValidationFailure, translate_errors
from ..formatting import event_block, limited_listing
from ..params import Param, Requires
from ..results import OperationResult
from ..tool_definitions import GUILD_ID, tool

if TYPE_CHECKING:
    from ..tool_executor import ToolContext

STAGE, VOICE, EXTERNAL = 1, 2, 3

ENTITY_TYPES = {
    STAGE: (discord.EntityType.stage_instance, discord.StageChannel, "stage channel"),
    VOICE: (discord.EntityType.voice, discord.VoiceChannel, "voice channel"),
    EXTERNAL: (discord.EntityType.external, None, None),
}

EVENT_STATUSES = {
    1: discord.EventStatus.scheduled,
    2: discord.EventStatus.active,
    3: discord.EventStatus.completed,
    4: discord.EventStatus.cancelled,
}

DEFAULT_USER_LIMIT = 100

EVENT_ID = Param("eventId", "ID of the scheduled event", kind="snowflake", required=True)


@tool(
    "create_guild_scheduled_event",
    "Schedules a new event on a stage channel, a voice channel or an external location",
    GUILD_ID,
    Param("name", "Event name", required=True, max_length=100),
    Param("description", "Event description", max_length=1000),
    Param("scheduledStartTime", "ISO8601 start time, e.g. 2025-01-31T18:00:00Z", kind="timestamp", required=True),
    Param("scheduledEndTime", "ISO8601 end time (required for External events)", kind="timestamp"),
    Param(
        "entityType",
        "Type of event: 1=Stage Instance, 2=Voice, 3=External",
        kind="enum",
        required=True,
        choices={STAGE: "Stage", VOICE: "Voice", EXTERNAL: "External"},
    ),
    Param("channelId", "Channel ID (required for types 1 and 2)", kind="snowflake"),
    Param("location", "Location or link (required for type 3)", max_length=100),
    rules=(
        Requires("channelId", "entityType", frozenset({STAGE, VOICE}), "Stage and Voice events"),
        Requires("location", "entityType", frozenset({EXTERNAL}), "External events"),
        Requires("scheduledEndTime", "entityType", frozenset({EXTERNAL}), "External events"),
    ),
)
async def create_guild_scheduled_event(
    ctx: ToolContext,
    guild_id,
    name,
    description,
    scheduled_start_time,
    scheduled_end_time,
    entity_type,
    channel_id,
    location,
) -> OperationResult:
    guild = ctx.guild(guild_id)
    event_type, channel_kind, channel_label = ENTITY_TYPES[entity_type]

    options = {"name": name, "start_time": scheduled_start_time, "entity_type": event_type}
    if entity_type == EXTERNAL:
        options["location"] = location
    else:
        channel = ctx.entities.channel(guild, channel_id)
        if not isinstance(channel, channel_kind):
            raise TypeMismatch(
                f"Channel given as channelId is not a {channel_label}"
                f" (required for entityType={entity_type})"
            )
        options["channel"] = channel
    if scheduled_end_time is not None:
        options["end_time"] = scheduled_end_time
    if description is not None:
        options["description"] = description

    with translate_errors("manage events"):
        event = await guild.create_scheduled_event(
            privacy_level=discord.PrivacyLevel.guild_only, **options
        )
    logging.info("📅 Created scheduled event %s (%s) in %s", event.name, event.id, guild.name)
    return OperationResult.success(f"Created scheduled event:\n{event_block(event)}", event.id)


@tool(
    "edit_guild_scheduled_event",
    "Modifies an event's details or changes its status (start, complete, cancel)",
    GUILD_ID,
    EVENT_ID,
    Param(
        "status",
        "New status: 1=Scheduled, 2=Active (start), 3=Completed, 4=Canceled",
        kind="enum",
        choices={1: "Scheduled", 2: "Active", 3: "Completed", 4: "Canceled"},
    ),
    Param("name", "New name", max_length=100),
    Param("description", "New description", max_length=1000),
    Param("scheduledStartTime", "New ISO8601 start time", kind="timestamp"),
    Param("location", "New location (External events only)", max_length=100),
)
async def edit_guild_scheduled_event(
    ctx: ToolContext, guild_id, event_id, status, name, description, scheduled_start_time, location
) -> OperationResult:
    guild = ctx.guild(guild_id)
    event = ctx.entities.event(guild, event_id)

    if location is not None and event.entity_type is not discord.EntityType.external:
        raise ValidationFailure("location can only be set on External events (entityType=3)")

    changes = {}
    if name is not None:
        changes["name"] = name
    if description is not None:
        changes["description"] = description
    if scheduled_start_time is not None:
        changes["start_time"] = scheduled_start_time
    if location is not None:
        changes["location"] = location
    if status is not None:
        changes["status"] = EVENT_STATUSES[status]
    if not changes:
        return OperationResult.success(f"No changes requested for scheduled event {event.name} (ID: {event.id}).")

    with translate_errors("manage events"):
        updated = await event.edit(**changes) or event
    logging.info("✏️ Edited scheduled event %s (%s): %s", updated.name, event_id, ", ".join(changes))
    return OperationResult.success(
        f"Successfully updated scheduled event: {updated.name} (ID: {event_id})", event_id
    )


@tool(
    "delete_guild_scheduled_event",
    "Permanently deletes a scheduled event",
    GUILD_ID,
    EVENT_ID,
)
async def delete_guild_scheduled_event(ctx: ToolContext, guild_id, event_id) -> OperationResult:
    guild = ctx.guild(guild_id)
    event = ctx.entities.event(guild, event_id)
    event_name = event.name

    with translate_errors("manage events"):
        await event.delete()
    logging.info("🗑️ Deleted scheduled event %s (%s)", event_name, event_id)
    return OperationResult.success(
        f"Successfully deleted scheduled event: {event_name} (ID: {event_id})", event_id
    )


@tool(
    "list_guild_scheduled_events",
    "Lists active and upcoming events on the server",
    GUILD_ID,
    Param(
        "withUserCount",
        "Include the interested user count (default true)",
        kind="bool",
        default=True,
    ),
    mutating=False,
)
async def list_guild_scheduled_events(ctx: ToolContext, guild_id, with_user_count) -> OperationResult:
    guild = ctx.guild(guild_id)
    events = list(guild.scheduled_events)
    if not events:
        return OperationResult.success("No scheduled events found on this server.")

    body = "\n".join(f"- {event_block(e, with_user_count)}" for e in events)
    return OperationResult.success(f"Retrieved {len(events)} scheduled events:\n{body}")


def _interested_line(user: discord.abc.User, with_member: bool) -> str:
    line = f"- **{user.name}** (ID: {user.id})"
    if with_member and isinstance(user, discord.Member):
        roles = ", ".join(f"{r.name} ({r.id})" for r in user.roles if not r.is_default())
        if roles:
            line += f"\n  • Roles: {roles}"
        if user.nick:
            line += f"\n  • Nickname: {user.nick}"
    return line


@tool(
    "get_guild_scheduled_event_users",
    "Lists users interested in a scheduled event",
    GUILD_ID,
    EVENT_ID,
    Param(
        "limit",
        "Maximum number of users to return (default 100)",
        kind="int",
        default=DEFAULT_USER_LIMIT,
        minimum=1,
    ),
    Param(
        "withMember",
        "Include roles and nickname of each member (default true)",
        kind="bool",
        default=True,
    ),
    mutating=False,
)
async def get_guild_scheduled_event_users(
    ctx: ToolContext, guild_id, event_id, limit, with_member
) -> OperationResult:
    guild = ctx.guild(guild_id)
    event = ctx.entities.event(guild, event_id)

    with translate_errors("view event subscribers"):
        users = [user async for user in event.users(limit=None)]
    if not users:
        return OperationResult.success(f"No interested users found for event: {event.name}")

    text, shown = limited_listing(
        users,
        limit,
        "interested users",
        lambda user: _interested_line(user, with_member),
        header_suffix=f" for event **{event.name}**",
    )
    return OperationResult.success(text, *(u.id for u in shown))
