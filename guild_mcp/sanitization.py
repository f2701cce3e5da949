"""
Input Sanitization Module.
Normalizes free-form identifiers supplied by the agent before they reach Discord.
"""

from __future__ import annotations

import re

from .errors import InvalidArgument

INVITE_URL_PREFIXES = (
    "https://discord.gg/",
    "http://discord.gg/",
    "https://discord.com/invite/",
    "http://discord.com/invite/",
)

_WEBHOOK_URL = re.compile(
    r"^https://(?:(?:canary|ptb)\.)?discord(?:app)?\.com/api/webhooks/\d{17,20}/[A-Za-z0-9._-]{60,}/?$"
)


def extract_invite_code(value: str | None) -> str:
    """Reduce an invite reference to its bare code.

    Accepts a bare code or a URL with one of INVITE_URL_PREFIXES; surrounding
    whitespace is dropped. A bare code is returned unchanged.

    Args:
        value: Raw invite code or URL from the agent

    Returns:
        The invite code
    """
    if value is None or not value.strip():
        raise InvalidArgument("inviteCode cannot be null")
    code = value.strip()
    for prefix in INVITE_URL_PREFIXES:
        if code.startswith(prefix):
            code = code[len(prefix):]
            break
    code = code.strip()
    if not code:
        raise InvalidArgument("inviteCode cannot be null")
    return code


def normalize_name(name: str) -> str:
    """Normalize a channel or category name for comparison."""
    return name.strip().lower().removeprefix("#")


def is_webhook_url(url: str) -> bool:
    return bool(_WEBHOOK_URL.match(url.strip()))


__all__ = ["INVITE_URL_PREFIXES", "extract_invite_code", "is_webhook_url", "normalize_name"]
