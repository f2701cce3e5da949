"""
Guild MCP Package.
Discord server administration tools for a tool-calling agent.
"""

from __future__ import annotations

from .errors import ErrorKind, ToolError, normalize_error
from .results import OperationResult
from .tool_definitions import TOOL_REGISTRY, get_tool, get_tool_definitions

from . import commands  # registers every tool

from .tool_executor import ToolContext, execute_tool_call

__all__ = [
    "TOOL_REGISTRY",
    "ErrorKind",
    "OperationResult",
    "ToolContext",
    "ToolError",
    "commands",
    "execute_tool_call",
    "get_tool",
    "get_tool_definitions",
    "normalize_error",
]
