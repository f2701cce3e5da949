"""
Operation Result Module.
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import ErrorKind, ToolError


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a single tool call: a text block on success, an error kind on failure."""

    ok: bool
    text: str
    kind: ErrorKind | None = None
    affected_ids: tuple[str, ...] = ()

    @classmethod
    def success(cls, text: str, *affected_ids: int | str) -> OperationResult:
        return cls(ok=True, text=text, affected_ids=tuple(str(i) for i in affected_ids))

    @classmethod
    def failure(cls, error: ToolError) -> OperationResult:
        return cls(ok=False, text=error.message, kind=error.kind)


__all__ = ["OperationResult"]
