"""
Logger Utility Module
Sets up smart color-coded logging and handles log file rotation.

Console output goes to stderr: stdout carries the MCP stdio transport.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

# Emoji to ASCII mapping for console compatibility
EMOJI_MAP = {
    "🧠": "[BRAIN]",
    "✅": "[OK]",
    "❌": "[X]",
    "⚠️": "[!]",
    "🚀": "[START]",
    "🛑": "[STOP]",
    "🛠️": "[TOOL]",
    "🗑️": "[DELETE]",
    "✏️": "[EDIT]",
    "➕": "[+]",
    "➖": "[-]",
    "📋": "[AUDIT]",
    "📊": "[STATS]",
    "💬": "[CHAT]",
    "📨": "[DM]",
    "🔗": "[LINK]",
    "📅": "[EVENT]",
    "🔨": "[BAN]",
    "👢": "[KICK]",
    "🤖": "[BOT]",
}

LOG_FILE = "guild_mcp.log"
ERROR_LOG_FILE = "guild_mcp_errors.log"
JSON_LOG_FILE = "guild_mcp_structured.jsonl"
MAX_LOG_BYTES = 5 * 1024 * 1024


def safe_ascii(text: Any) -> str:
    """Convert emojis to ASCII-safe text"""
    result = str(text)
    for emoji, ascii_text in EMOJI_MAP.items():
        result = result.replace(emoji, ascii_text)
    # Replace any remaining non-ASCII with ?
    return result.encode("ascii", "replace").decode("ascii")


def _console_supports_unicode() -> bool:
    encoding = getattr(sys.stderr, "encoding", None) or ""
    return encoding.lower().replace("-", "") in ("utf8", "utf16", "utf32")


CONSOLE_UNICODE_SAFE = _console_supports_unicode()


class SmartLogFormatter(logging.Formatter):
    """Custom formatter with colors for console output"""

    grey = "\x1b[38;20m"
    green = "\x1b[32;20m"
    yellow = "\x1b[33;20m"
    red = "\x1b[31;20m"
    bold_red = "\x1b[31;1m"
    reset = "\x1b[0m"
    format_str = "%(asctime)s [%(levelname)s] %(message)s"

    FORMATS = {
        logging.DEBUG: grey + format_str + reset,
        logging.INFO: green + format_str + reset,
        logging.WARNING: yellow + format_str + reset,
        logging.ERROR: red + format_str + reset,
        logging.CRITICAL: bold_red + format_str + reset,
    }

    def format(self, record: logging.LogRecord) -> str:
        log_fmt = self.FORMATS.get(record.levelno)
        formatter = logging.Formatter(log_fmt, datefmt="%Y-%m-%d %H:%M:%S")
        formatted = formatter.format(record)
        # Convert to ASCII-safe if console doesn't support Unicode
        if not CONSOLE_UNICODE_SAFE:
            return safe_ascii(formatted)
        return formatted


class JSONLogFormatter(logging.Formatter):
    """Structured JSON formatter for log analysis."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now().isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": safe_ascii(record.getMessage()),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        # Add exception info if present
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=True)


def setup_smart_logging(logs_dir: str = "logs", level: str = "INFO", json_logs: bool = False) -> None:
    """Initialize logging with file and console handlers.

    Args:
        logs_dir: Directory for the rotating log files (created if missing).
        level: Root log level name, e.g. "INFO" or "DEBUG".
        json_logs: If True, also create a JSON-formatted log file for analysis.
    """
    logger = logging.getLogger()
    numeric_level = logging.getLevelName(level.upper())
    logger.setLevel(numeric_level if isinstance(numeric_level, int) else logging.INFO)
    if logger.hasHandlers():
        logger.handlers.clear()

    # Formatter for files
    file_fmt = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(message)s (%(filename)s:%(lineno)d)",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    log_path = Path(logs_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    file_handler = RotatingFileHandler(
        log_path / LOG_FILE, maxBytes=MAX_LOG_BYTES, backupCount=5, encoding="utf-8"
    )
    file_handler.setFormatter(file_fmt)

    error_handler = RotatingFileHandler(
        log_path / ERROR_LOG_FILE, maxBytes=MAX_LOG_BYTES, backupCount=5, encoding="utf-8"
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(file_fmt)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(SmartLogFormatter())

    logger.addHandler(file_handler)
    logger.addHandler(error_handler)
    logger.addHandler(console_handler)

    # Optional: JSON structured logs for analysis
    if json_logs:
        json_handler = RotatingFileHandler(
            log_path / JSON_LOG_FILE, maxBytes=MAX_LOG_BYTES, backupCount=3, encoding="utf-8"
        )
        json_handler.setFormatter(JSONLogFormatter())
        logger.addHandler(json_handler)
        logging.info("📊 JSON structured logging enabled")

    # discord.py is chatty at INFO about gateway events
    logging.getLogger("discord").setLevel(max(logger.level, logging.WARNING))

    logging.info("🧠 Smart Logging System Initialized.")
