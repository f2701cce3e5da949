"""
Role Commands Module.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord

from ..checks import ensure_not_public_role, ensure_role_below_bot
from ..errors import translate_errors
from ..formatting import role_block, role_summary
from ..params import Param
from ..results import OperationResult
from ..tool_definitions import GUILD_ID, ROLE_ID, USER_ID, tool

if TYPE_CHECKING:
    from ..tool_executor import ToolContext

MAX_COLOR = 0xFFFFFF


def _color(default=None) -> Param:
    return Param(
        "color",
        "RGB color as a decimal integer (0-16777215)",
        kind="int",
        default=default,
        minimum=0,
        maximum=MAX_COLOR,
    )


def _permissions(default=None) -> Param:
    return Param(
        "permissions",
        "Permission bitfield as a decimal integer",
        kind="int",
        default=default,
        minimum=0,
    )


@tool(
    "list_roles",
    "Lists every role in the server with color, position and permissions",
    GUILD_ID,
    mutating=False,
)
async def list_roles(ctx: ToolContext, guild_id) -> OperationResult:
    guild = ctx.guild(guild_id)
    roles = sorted(guild.roles, key=lambda r: r.position, reverse=True)
    if not roles:
        return OperationResult.success("No roles found on this server.")
    body = "\n".join(role_block(role) for role in roles)
    return OperationResult.success(f"Retrieved {len(roles)} roles:\n{body}")


@tool(
    "create_role",
    "Creates a new role",
    GUILD_ID,
    Param("name", "Role name", required=True, max_length=100),
    _color(default=0),
    Param("hoist", "Display members separately (default false)", kind="bool", default=False),
    Param("mentionable", "Allow anyone to mention the role (default false)", kind="bool", default=False),
    _permissions(default=0),
)
async def create_role(
    ctx: ToolContext, guild_id, name, color, hoist, mentionable, permissions
) -> OperationResult:
    guild = ctx.guild(guild_id)
    with translate_errors("manage roles"):
        role = await guild.create_role(
            name=name,
            colour=discord.Colour(color),
            hoist=hoist,
            mentionable=mentionable,
            permissions=discord.Permissions(permissions),
        )
    logging.info("🛠️ Created role %s (%s) in %s", role.name, role.id, guild.name)
    return OperationResult.success(f"Successfully created role:\n{role_summary(role)}", role.id)


@tool(
    "edit_role",
    "Modifies an existing role's settings",
    GUILD_ID,
    ROLE_ID,
    Param("name", "New role name", max_length=100),
    _color(),
    Param("hoist", "Display members separately", kind="bool"),
    Param("mentionable", "Allow anyone to mention the role", kind="bool"),
    _permissions(),
)
async def edit_role(
    ctx: ToolContext, guild_id, role_id, name, color, hoist, mentionable, permissions
) -> OperationResult:
    guild = ctx.guild(guild_id)
    role = ctx.entities.role(guild, role_id)
    ensure_not_public_role(role, "edit")
    ensure_role_below_bot(guild, role, "edit")

    changes = {}
    if name is not None:
        changes["name"] = name
    if color is not None:
        changes["colour"] = discord.Colour(color)
    if hoist is not None:
        changes["hoist"] = hoist
    if mentionable is not None:
        changes["mentionable"] = mentionable
    if permissions is not None:
        changes["permissions"] = discord.Permissions(permissions)
    if not changes:
        return OperationResult.success(f"No changes requested for role {role.name} (ID: {role.id}).")

    with translate_errors("manage roles"):
        role = await role.edit(**changes) or role
    logging.info("✏️ Edited role %s (%s): %s", role.name, role.id, ", ".join(changes))
    return OperationResult.success(f"Successfully edited role:\n{role_summary(role)}", role.id)


@tool(
    "delete_role",
    "Permanently deletes a role",
    GUILD_ID,
    ROLE_ID,
)
async def delete_role(ctx: ToolContext, guild_id, role_id) -> OperationResult:
    guild = ctx.guild(guild_id)
    role = ctx.entities.role(guild, role_id)
    ensure_not_public_role(role, "delete")
    ensure_role_below_bot(guild, role, "delete")

    role_name = role.name
    with translate_errors("manage roles"):
        await role.delete()
    logging.info("🗑️ Deleted role %s (%s)", role_name, role_id)
    return OperationResult.success(
        f"Successfully deleted role: {role_name} (ID: {role_id})", role_id
    )


@tool(
    "assign_role",
    "Gives a role to a member",
    GUILD_ID,
    USER_ID,
    ROLE_ID,
)
async def assign_role(ctx: ToolContext, guild_id, user_id, role_id) -> OperationResult:
    guild = ctx.guild(guild_id)
    role = ctx.entities.role(guild, role_id)
    member = await ctx.entities.member(guild, user_id)
    ensure_not_public_role(role, "assign")
    ensure_role_below_bot(guild, role, "assign")

    with translate_errors("manage roles"):
        await member.add_roles(role)
    logging.info("➕ Added role %s to %s", role.name, member.name)
    return OperationResult.success(
        f"Successfully assigned role {role.name} to {member.name} (ID: {member.id})",
        member.id,
        role.id,
    )


@tool(
    "remove_role",
    "Takes a role away from a member",
    GUILD_ID,
    USER_ID,
    ROLE_ID,
)
async def remove_role(ctx: ToolContext, guild_id, user_id, role_id) -> OperationResult:
    guild = ctx.guild(guild_id)
    role = ctx.entities.role(guild, role_id)
    member = await ctx.entities.member(guild, user_id)
    ensure_not_public_role(role, "remove")
    ensure_role_below_bot(guild, role, "remove")

    with translate_errors("manage roles"):
        await member.remove_roles(role)
    logging.info("➖ Removed role %s from %s", role.name, member.name)
    return OperationResult.success(
        f"Successfully removed role {role.name} from {member.name} (ID: {member.id})",
        member.id,
        role.id,
    )
