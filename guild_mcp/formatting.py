"""
Response Formatting Module.
Renders discord.py objects into the text returned to the agent.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Any, TypeVar

import discord

T = TypeVar("T")

EVENT_TYPE_LABELS = {
    discord.EntityType.stage_instance: "STAGE_INSTANCE",
    discord.EntityType.voice: "VOICE",
    discord.EntityType.external: "EXTERNAL",
}

EVENT_STATUS_LABELS = {
    discord.EventStatus.scheduled: "SCHEDULED",
    discord.EventStatus.active: "ACTIVE",
    discord.EventStatus.completed: "COMPLETED",
    discord.EventStatus.cancelled: "CANCELED",
}


def reason_suffix(reason: str | None) -> str:
    return f" Reason: {reason}" if reason else ""


def timestamp(value: datetime | None) -> str:
    return value.isoformat() if value else "unknown"


def limited_listing(
    items: Sequence[T],
    limit: int,
    noun: str,
    render: Callable[[T], str],
    header_suffix: str = "",
) -> tuple[str, list[T]]:
    """Render at most ``limit`` of ``items`` under a "Retrieved N of T" header.

    The total is counted before the limit is applied.

    Returns:
        The text block and the items that were included
    """
    total = len(items)
    shown = list(items[: max(limit, 0)])
    header = f"Retrieved {len(shown)} of {total} {noun}{header_suffix}:"
    return "\n".join([header, *(render(item) for item in shown)]), shown


def color_hex(colour: discord.Colour) -> str:
    return f"#{colour.value:06X}" if colour.value else "None"


def role_block(role: discord.Role, prefix: str = "- ") -> str:
    return (
        f"{prefix}**{role.name}** (ID: {role.id})\n"
        f"  • Color: {color_hex(role.colour)} (RGB: {role.colour.value})\n"
        f"  • Position: {role.position}\n"
        f"  • Hoisted: {str(role.hoist).lower()}\n"
        f"  • Mentionable: {str(role.mentionable).lower()}\n"
        f"  • Permissions: {role.permissions.value}"
    )


def role_summary(role: discord.Role) -> str:
    return (
        f"**{role.name}** (ID: {role.id})\n"
        f"• Color: {role.colour.value}\n"
        f"• Hoisted: {str(role.hoist).lower()}\n"
        f"• Mentionable: {str(role.mentionable).lower()}\n"
        f"• Permissions: {role.permissions.value}"
    )


def channel_line(channel: Any) -> str:
    kind = str(getattr(channel, "type", "channel"))
    return f"- {channel.name} (ID: {channel.id}) [{kind}]"


def event_block(event: discord.ScheduledEvent, with_user_count: bool = True) -> str:
    lines = [
        f"**{event.name}** (ID: {event.id})",
        f"  • Type: {EVENT_TYPE_LABELS.get(event.entity_type, str(event.entity_type))}",
        f"  • Status: {EVENT_STATUS_LABELS.get(event.status, str(event.status))}",
        f"  • Start: {timestamp(event.start_time)}",
    ]
    if event.end_time:
        lines.append(f"  • End: {timestamp(event.end_time)}")
    if event.channel:
        lines.append(f"  • Channel: {event.channel.name} (ID: {event.channel.id})")
    if event.location:
        lines.append(f"  • Location: {event.location}")
    if event.description:
        lines.append(f"  • Description: {event.description}")
    if with_user_count:
        lines.append(f"  • Interested: {event.user_count or 0} users")
    return "\n".join(lines)


def invite_url(code: str) -> str:
    return f"https://discord.gg/{code}"


def invite_block(invite: discord.Invite) -> str:
    lines = [f"- **{invite.code}** ({invite_url(invite.code)})"]
    if invite.channel is not None:
        lines.append(f"  • Channel: {invite.channel.name} (ID: {invite.channel.id})")
    if invite.inviter is not None:
        lines.append(f"  • Created by: {invite.inviter.name} (ID: {invite.inviter.id})")
    max_uses = "Unlimited" if not invite.max_uses else invite.max_uses
    max_age = "Never" if not invite.max_age else f"{invite.max_age}s"
    lines.append(
        f"  • Uses: {invite.uses or 0} | Max Uses: {max_uses} | Max Age: {max_age}"
        f" | Temporary: {str(bool(invite.temporary)).lower()}"
    )
    return "\n".join(lines)


def message_line(message: discord.Message) -> str:
    content = message.content or "[Embed/Attachment]"
    return (
        f"- [{message.created_at.strftime('%Y-%m-%d %H:%M')}] "
        f"**{message.author.name}** (message ID: {message.id}): {content}"
    )


__all__ = [
    "EVENT_STATUS_LABELS",
    "EVENT_TYPE_LABELS",
    "channel_line",
    "color_hex",
    "event_block",
    "invite_block",
    "invite_url",
    "limited_listing",
    "message_line",
    "reason_suffix",
    "role_block",
    "role_summary",
    "timestamp",
]
