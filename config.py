# pylint: disable=invalid-name
"""
Centralized Configuration Module for the Guild MCP Server.
Uses dataclass for settings management with environment variable support.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

PLACEHOLDER_TOKENS = ("", "your_token_here")


def _safe_int_env(key: str, default: int) -> int:
    """Safely parse integer from environment variable with fallback."""
    try:
        value = os.getenv(key)
        if value:
            return int(value)
        return default
    except (ValueError, TypeError):
        logging.warning("Invalid integer value for %s, using default: %d", key, default)
        return default


def _bool_env(key: str, default: bool = False) -> bool:
    value = os.getenv(key)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes")


@dataclass
class ServerSettings:
    """Server configuration settings loaded from environment variables."""

    # Discord
    discord_token: str = field(default_factory=lambda: os.getenv("DISCORD_TOKEN", ""), repr=False)
    # Server used when a tool call omits guildId; empty means every call must name one
    default_guild_id: str = field(default_factory=lambda: os.getenv("DISCORD_GUILD_ID", "").strip())
    ready_timeout: int = field(default_factory=lambda: _safe_int_env("DISCORD_READY_TIMEOUT", 60))

    # MCP
    server_name: str = field(
        default_factory=lambda: os.getenv("MCP_SERVER_NAME", "discord-guild-admin")
    )

    # Logging
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    logs_dir: str = field(default_factory=lambda: os.getenv("LOGS_DIR", "logs"))
    json_logs: bool = field(default_factory=lambda: _bool_env("JSON_LOGS"))

    def __post_init__(self):
        """Clamp values that would make startup hang or fail."""
        if self.ready_timeout <= 0:
            logging.warning("DISCORD_READY_TIMEOUT must be positive, using default: 60")
            self.ready_timeout = 60

    def validate_required_secrets(self) -> list[str]:
        """Validate that critical settings are present. Returns list of errors."""
        errors: list[str] = []
        if self.discord_token in PLACEHOLDER_TOKENS:
            errors.append("DISCORD_TOKEN is not set or is a placeholder")
        if self.default_guild_id and not self.default_guild_id.isdigit():
            errors.append("DISCORD_GUILD_ID must be a numeric Discord server ID")
        return errors

    def get_secrets_summary(self) -> dict[str, bool]:
        """Get a summary of which settings are configured."""
        return {
            "discord_token": self.discord_token not in PLACEHOLDER_TOKENS,
            "default_guild_id": bool(self.default_guild_id),
            "json_logs": self.json_logs,
        }

    def __repr__(self) -> str:
        """Custom repr that redacts sensitive fields."""
        return (
            f"ServerSettings(default_guild_id={self.default_guild_id!r}, "
            f"server_name={self.server_name!r}, "
            f"log_level={self.log_level!r}, "
            f"logs_dir={self.logs_dir!r})"
        )


# Global instance
settings = ServerSettings()
