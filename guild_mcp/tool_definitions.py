"""
Tool Definitions Module.
Registry of tools exposed to the agent, with their parameter schemas.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import Any

from .params import AnyOf, Param, ParamSchema, Requires

ToolHandler = Callable[..., Awaitable[Any]]


@dataclass(frozen=True)
class ToolSpec:
    """A named tool: its description, parameters and executor."""

    name: str
    description: str
    schema: ParamSchema
    handler: ToolHandler
    mutating: bool = True

    @property
    def params(self) -> tuple[Param, ...]:
        return self.schema.params

    def input_schema(self) -> dict[str, Any]:
        """JSON Schema for the tool's arguments; every value travels as a string."""
        return {
            "type": "object",
            "properties": {
                p.name: {"type": "string", "description": p.description} for p in self.params
            },
            "required": [p.name for p in self.params if p.required],
        }


TOOL_REGISTRY: dict[str, ToolSpec] = {}


def tool(
    name: str,
    description: str,
    *params: Param,
    rules: Iterable[Requires | AnyOf] = (),
    mutating: bool = True,
) -> Callable[[ToolHandler], ToolHandler]:
    """Register an executor under ``name``.

    The executor is called as ``handler(ctx, **parsed_arguments)`` with one
    keyword per parameter (snake_case of the wire name).
    """

    def decorator(func: ToolHandler) -> ToolHandler:
        if name in TOOL_REGISTRY:
            raise ValueError(f"Tool '{name}' is already registered")
        TOOL_REGISTRY[name] = ToolSpec(
            name=name,
            description=description,
            schema=ParamSchema(tuple(params), tuple(rules)),
            handler=func,
            mutating=mutating,
        )
        return func

    return decorator


def get_tool(name: str) -> ToolSpec | None:
    return TOOL_REGISTRY.get(name)


def get_tool_definitions() -> list[dict[str, Any]]:
    """Return tool definitions for the agent.

    Returns:
        One dictionary per tool with ``name``, ``description`` and ``inputSchema``
    """
    return [
        {"name": spec.name, "description": spec.description, "inputSchema": spec.input_schema()}
        for spec in TOOL_REGISTRY.values()
    ]


# ==================== Shared parameters ====================

GUILD_ID = Param("guildId", "Discord server ID", kind="snowflake")
USER_ID = Param("userId", "Discord user ID", kind="snowflake", required=True)
ROLE_ID = Param("roleId", "Discord role ID", kind="snowflake", required=True)
CHANNEL_ID = Param("channelId", "Discord channel ID", kind="snowflake", required=True)
CATEGORY_ID = Param("categoryId", "Category ID", kind="snowflake")
MESSAGE_ID = Param("messageId", "Specific message ID", kind="snowflake", required=True)
REASON = Param("reason", "Reason for the action (visible in audit log)", max_length=512)
MESSAGE_TEXT = Param("message", "Message content", required=True, max_length=2000)


__all__ = [
    "CATEGORY_ID",
    "CHANNEL_ID",
    "GUILD_ID",
    "MESSAGE_ID",
    "MESSAGE_TEXT",
    "REASON",
    "ROLE_ID",
    "TOOL_REGISTRY",
    "ToolSpec",
    "USER_ID",
    "get_tool",
    "get_tool_definitions",
    "tool",
]
