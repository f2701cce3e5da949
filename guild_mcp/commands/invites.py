"""
Invite Commands Module.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord

from ..errors import translate_errors
from ..formatting import invite_block, invite_url
from ..params import Param
from ..results import OperationResult
from ..sanitization import extract_invite_code
from ..tool_definitions import CHANNEL_ID, GUILD_ID, tool

if TYPE_CHECKING:
    from ..tool_executor import ToolContext

INVITE_CHANNELS = (
    discord.TextChannel,
    discord.VoiceChannel,
    discord.StageChannel,
    discord.ForumChannel,
)

INVITE_CODE = Param(
    "inviteCode",
    "Invite code or full URL (e.g. 'ABCde' or 'https://discord.gg/ABCde')",
    required=True,
)


@tool(
    "create_invite",
    "Creates a new invite link for a channel",
    GUILD_ID,
    CHANNEL_ID,
    Param(
        "maxAge",
        "Seconds before the invite expires, 0 for never (default 86400)",
        kind="int",
        default=86400,
        minimum=0,
        maximum=604800,
        bound_hint="7 days",
    ),
    Param(
        "maxUses",
        "Maximum number of uses, 0 for unlimited (default 0)",
        kind="int",
        default=0,
        minimum=0,
        maximum=100,
    ),
    Param("temporary", "Grant temporary membership (default false)", kind="bool", default=False),
    Param("unique", "Always create a new invite code (default false)", kind="bool", default=False),
)
async def create_invite(
    ctx: ToolContext, guild_id, channel_id, max_age, max_uses, temporary, unique
) -> OperationResult:
    guild = ctx.guild(guild_id)
    channel = ctx.entities.channel(
        guild, channel_id, INVITE_CHANNELS, "channel type that supports invites"
    )

    with translate_errors("create invites in this channel"):
        invite = await channel.create_invite(
            max_age=max_age, max_uses=max_uses, temporary=temporary, unique=unique
        )
    logging.info("🔗 Created invite %s for %s in %s", invite.code, channel.name, guild.name)
    return OperationResult.success(
        f"Created invite: {invite_url(invite.code)}\n"
        f"  • Channel: {channel.name} (ID: {channel.id})\n"
        f"  • Max Age: {f'{invite.max_age}s' if invite.max_age else 'Never expires'}\n"
        f"  • Max Uses: {invite.max_uses or 'Unlimited'}\n"
        f"  • Temporary: {str(bool(invite.temporary)).lower()}",
        invite.code,
    )


@tool(
    "list_invites",
    "Lists active invites on the server with their usage statistics",
    GUILD_ID,
    mutating=False,
)
async def list_invites(ctx: ToolContext, guild_id) -> OperationResult:
    guild = ctx.guild(guild_id)
    with translate_errors("manage the server's invites"):
        invites = await guild.invites()

    if not invites:
        return OperationResult.success("No active invites found on this server.")
    body = "\n".join(invite_block(invite) for invite in invites)
    return OperationResult.success(f"Retrieved {len(invites)} active invites:\n{body}")


@tool(
    "delete_invite",
    "Revokes an invite so the link stops working",
    INVITE_CODE,
)
async def delete_invite(ctx: ToolContext, invite_code) -> OperationResult:
    code = extract_invite_code(invite_code)
    invite = await ctx.entities.invite(code, with_counts=False)

    with translate_errors("manage invites", not_found=f"Invite not found or expired: {code}"):
        await invite.delete()
    logging.info("🗑️ Deleted invite %s", code)
    return OperationResult.success(f"Successfully deleted invite: {code}", code)


@tool(
    "get_invite_details",
    "Shows details of an invite, including invites to other servers",
    INVITE_CODE,
    Param(
        "withCounts",
        "Include approximate member counts (default true)",
        kind="bool",
        default=True,
    ),
    mutating=False,
)
async def get_invite_details(ctx: ToolContext, invite_code, with_counts) -> OperationResult:
    code = extract_invite_code(invite_code)
    invite = await ctx.entities.invite(code, with_counts=with_counts)

    lines = [f"Invite: **{invite.code}** ({invite_url(invite.code)})"]
    if invite.guild is not None:
        lines.append(f"  • Server: {invite.guild.name} (ID: {invite.guild.id})")
    if invite.channel is not None:
        lines.append(f"  • Channel: {invite.channel.name} (ID: {invite.channel.id})")
    if invite.inviter is not None:
        lines.append(f"  • Created by: {invite.inviter.name} (ID: {invite.inviter.id})")
    if invite.expires_at is not None:
        lines.append(f"  • Expires: {invite.expires_at.isoformat()}")
    if with_counts:
        online = invite.approximate_presence_count
        total = invite.approximate_member_count
        lines.append(
            f"  • Members Online: {'N/A' if online is None else online}"
            f" | Total Members: {'N/A' if total is None else total}"
        )
    return OperationResult.success("\n".join(lines), invite.code)
