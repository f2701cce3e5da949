"""
Audit Logging Module
Tracks administrative actions for security and accountability.

Entries are written to the ``audit`` logger only; nothing is stored locally.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any

audit_logger = logging.getLogger("audit")


class AuditLogger:
    """Async-compatible logger for tracking administrative actions."""

    def __init__(self, logger: logging.Logger = audit_logger) -> None:
        self.logger = logger

    async def log_action(
        self,
        user_id: int,
        action: str,
        guild_id: int | str | None = None,
        target_type: str | None = None,
        target_ids: Iterable[int | str] = (),
        details: dict[str, Any] | None = None,
    ) -> bool:
        """Log an administrative action.

        Args:
            user_id: ID of the account performing the action (the bot)
            action: Tool name (e.g., 'ban_member', 'assign_role')
            guild_id: Guild where action occurred, if any
            target_type: Type of target (e.g., 'tool', 'role', 'user')
            target_ids: IDs of the affected entities
            details: Additional details, serialized as JSON

        Returns:
            True if logged successfully
        """
        try:
            payload = json.dumps(details or {}, ensure_ascii=False, default=str)
        except (TypeError, ValueError) as e:
            logging.error("Failed to serialize audit details for %s: %s", action, e)
            payload = "{}"

        self.logger.info(
            "📋 AUDIT: [%s] %s by %s (target: %s:%s) - %s",
            guild_id,
            action,
            user_id,
            target_type,
            ",".join(str(t) for t in target_ids) or "-",
            payload,
        )
        return True


# Global audit logger instance
audit = AuditLogger()


# Convenience async function
async def log_admin_action(
    user_id: int, action: str, guild_id: int | str | None = None, **kwargs
) -> bool:
    """Log an administrative action (convenience function)."""
    return await audit.log_action(user_id, action, guild_id, **kwargs)
