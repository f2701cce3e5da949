"""
Tool Executor Module.
Dispatches agent tool calls to their executors and reports one result per call.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import discord

from utils.monitoring.audit_log import log_admin_action

from .errors import InvalidArgument, ToolError, normalize_error
from .resolvers import EntityResolver, ScopeResolver
from .results import OperationResult
from .tool_definitions import get_tool


@dataclass
class ToolContext:
    """Everything an executor needs: the client and the two resolvers."""

    client: discord.Client
    scopes: ScopeResolver
    entities: EntityResolver

    @classmethod
    def create(cls, client: discord.Client, default_guild_id: str | None = None) -> ToolContext:
        return cls(
            client=client,
            scopes=ScopeResolver(default_guild_id),
            entities=EntityResolver(client),
        )

    def guild(self, guild_id: int | None) -> discord.Guild:
        """Resolve the call's scope and return the live guild."""
        return self.entities.guild(self.scopes.resolve(guild_id))


async def execute_tool_call(
    ctx: ToolContext, name: str, arguments: Mapping[str, Any] | None
) -> OperationResult:
    """Execute one tool call from the agent.

    Args:
        ctx: Client and resolvers shared by all calls
        name: Registered tool name
        arguments: Raw arguments, as sent by the agent

    Returns:
        The call's OperationResult; failures are reported, not raised
    """
    spec = get_tool(name)
    if spec is None:
        logging.warning("Unknown tool requested: %s", name)
        return OperationResult.failure(InvalidArgument(f"Unknown tool: {name}"))

    try:
        kwargs = spec.schema.parse(arguments)
        result = await spec.handler(ctx, **kwargs)
    except ToolError as err:
        logging.warning("⚠️ Tool %s failed [%s]: %s", name, err.kind.value, err.message)
        return OperationResult.failure(err)
    except discord.DiscordException as err:
        error = normalize_error(err, f"run {name}")
        logging.error("❌ Tool %s failed with an unexpected Discord error: %s", name, err, exc_info=True)
        return OperationResult.failure(error)
    except (TypeError, ValueError) as err:
        error = normalize_error(err, f"run {name}")
        logging.error("❌ Tool %s was rejected by a local argument check: %s", name, err, exc_info=True)
        return OperationResult.failure(error)

    if spec.mutating:
        actor = ctx.client.user
        await log_admin_action(
            user_id=actor.id if actor else 0,
            action=name,
            guild_id=kwargs.get("guild_id") or ctx.scopes.default_scope or None,
            target_type="tool",
            target_ids=result.affected_ids,
        )
    logging.info("🛠️ Tool %s succeeded", name)
    return result


__all__ = ["ToolContext", "execute_tool_call"]
