"""
Command Executors Package.
One module per resource domain; importing the package registers every tool.
"""

from __future__ import annotations

from . import (
    channels,
    events,
    invites,
    messages,
    moderation,
    roles,
    server,
    users,
    voice,
    webhooks,
)

__all__ = [
    "channels",
    "events",
    "invites",
    "messages",
    "moderation",
    "roles",
    "server",
    "users",
    "voice",
    "webhooks",
]
