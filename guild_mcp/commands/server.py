"""
Server Commands Module.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..errors import translate_errors
from ..formatting import timestamp
from ..results import OperationResult
from ..tool_definitions import GUILD_ID, tool

if TYPE_CHECKING:
    from ..tool_executor import ToolContext


@tool(
    "get_server_info",
    "Shows general information about the server",
    GUILD_ID,
    mutating=False,
)
async def get_server_info(ctx: ToolContext, guild_id) -> OperationResult:
    guild = ctx.guild(guild_id)
    owner = guild.owner
    lines = [
        f"Server: **{guild.name}** (ID: {guild.id})",
        f"  • Owner: {owner.name if owner else 'unknown'} (ID: {guild.owner_id})",
        f"  • Created: {timestamp(guild.created_at)}",
        f"  • Members: {guild.member_count or 0}",
        f"  • Channels: {len(guild.text_channels)} text, {len(guild.voice_channels)} voice,"
        f" {len(guild.categories)} categories",
        f"  • Roles: {len(guild.roles)}",
        f"  • Boost Tier: {guild.premium_tier} ({guild.premium_subscription_count or 0} boosts)",
        f"  • Verification Level: {guild.verification_level}",
    ]
    if guild.description:
        lines.append(f"  • Description: {guild.description}")
    return OperationResult.success("\n".join(lines), guild.id)


@tool(
    "list_active_threads",
    "Lists active threads in the server",
    GUILD_ID,
    mutating=False,
)
async def list_active_threads(ctx: ToolContext, guild_id) -> OperationResult:
    guild = ctx.guild(guild_id)
    with translate_errors("view threads"):
        threads = await guild.active_threads()
    if not threads:
        return OperationResult.success("No active threads found on this server.")

    body = "\n".join(
        f"- **{t.name}** (ID: {t.id}) in {t.parent.name if t.parent else 'unknown channel'}"
        f" | Messages: {t.message_count}"
        for t in threads
    )
    return OperationResult.success(f"Retrieved {len(threads)} active threads:\n{body}")
