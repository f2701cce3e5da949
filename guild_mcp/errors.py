"""
Error Taxonomy Module.
Maps discord.py failures onto the small set of error kinds reported to the agent.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum

import discord


class ErrorKind(str, Enum):
    """Error kinds, listed in order of precedence."""

    INVALID_ARGUMENT = "invalid_argument"
    VALIDATION_FAILURE = "validation_failure"
    MISSING_SCOPE = "missing_scope"
    NOT_FOUND = "not_found"
    TYPE_MISMATCH = "type_mismatch"
    FORBIDDEN_PERMISSION = "forbidden_permission"
    FORBIDDEN_HIERARCHY = "forbidden_hierarchy"
    FORBIDDEN_POLICY = "forbidden_policy"
    UPSTREAM = "upstream"


class ToolError(Exception):
    """Base class for failures surfaced to the calling agent."""

    kind: ErrorKind = ErrorKind.UPSTREAM

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class InvalidArgument(ToolError):
    """A required input is missing, or a value fails basic parsing."""

    kind = ErrorKind.INVALID_ARGUMENT


class ValidationFailure(ToolError):
    """A well-formed input violates a domain rule."""

    kind = ErrorKind.VALIDATION_FAILURE


class PreconditionFailed(ValidationFailure):
    """The target entity is not in the state the operation requires."""


class MissingScope(ToolError):
    """No explicit server ID was given and no default is configured."""

    kind = ErrorKind.MISSING_SCOPE

    def __init__(self, message: str = "guildId cannot be null: no server ID was given and "
                 "no default server is configured") -> None:
        super().__init__(message)


class NotFound(ToolError):
    """The server, or an entity within it, does not exist."""

    kind = ErrorKind.NOT_FOUND


class TypeMismatch(ToolError):
    """The entity exists but is not of the required kind."""

    kind = ErrorKind.TYPE_MISMATCH


class Forbidden(ToolError):
    """The action is not allowed.

    ``reason`` is one of ``permission`` (the bot lacks a Discord permission),
    ``hierarchy`` (the target ranks at or above the bot) or ``policy`` (a local
    rule blocks the action whatever Discord would allow).
    """

    _KINDS = {
        "permission": ErrorKind.FORBIDDEN_PERMISSION,
        "hierarchy": ErrorKind.FORBIDDEN_HIERARCHY,
        "policy": ErrorKind.FORBIDDEN_POLICY,
    }

    def __init__(self, message: str, reason: str = "permission") -> None:
        if reason not in self._KINDS:
            raise ValueError(f"Unknown Forbidden reason: {reason}")
        super().__init__(message)
        self.reason = reason
        self.kind = self._KINDS[reason]


class UpstreamError(ToolError):
    """Discord failed in a way none of the other kinds describe."""

    kind = ErrorKind.UPSTREAM


def normalize_error(
    exc: BaseException, action: str, not_found: str | None = None
) -> ToolError:
    """Translate an exception raised by discord.py into a ToolError.

    Args:
        exc: The exception raised by the remote call
        action: What the bot was trying to do, phrased to follow "Bot lacks
            permission to" (e.g. "kick members")
        not_found: Message to use when Discord reports an unknown entity

    Returns:
        The matching ToolError (``exc`` itself if it already is one)
    """
    if isinstance(exc, ToolError):
        return exc
    if isinstance(exc, discord.Forbidden):
        return Forbidden(f"Bot lacks permission to {action}", reason="permission")
    if isinstance(exc, discord.NotFound):
        return NotFound(not_found or f"Could not {action}: the target no longer exists")
    if isinstance(exc, discord.HTTPException):
        detail = exc.text or str(exc)
        if exc.status == 400:
            return ValidationFailure(f"Discord rejected the request to {action}: {detail}")
        return UpstreamError(f"Discord failed to {action} (HTTP {exc.status}): {detail}")
    if isinstance(exc, discord.DiscordException):
        return UpstreamError(f"Discord failed to {action}: {exc}")
    if isinstance(exc, (TypeError, ValueError)):
        # discord.py checks argument combinations locally before any request
        return ValidationFailure(f"Invalid request to {action}: {exc}")
    raise TypeError(f"Cannot normalize exception {exc!r}")


@contextmanager
def translate_errors(action: str, not_found: str | None = None) -> Iterator[None]:
    """Run a remote call, re-raising discord.py failures as ToolErrors.

    TypeError and ValueError raised by discord.py's local argument checks
    become ValidationFailure.

    Usage:
        with translate_errors("kick members"):
            await guild.kick(member, reason=reason)
    """
    try:
        yield
    except (discord.DiscordException, TypeError, ValueError) as exc:
        error = normalize_error(exc, action, not_found)
        logging.debug("Remote call to %s failed: %r -> %r", action, exc, error)
        raise error from exc


__all__ = [
    "ErrorKind",
    "Forbidden",
    "InvalidArgument",
    "MissingScope",
    "NotFound",
    "PreconditionFailed",
    "ToolError",
    "TypeMismatch",
    "UpstreamError",
    "ValidationFailure",
    "normalize_error",
    "translate_errors",
]
