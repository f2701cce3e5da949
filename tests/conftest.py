"""
Pytest Configuration and Fixtures.
Shared fixtures for all test modules.
"""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent.resolve()
sys.path.insert(0, str(PROJECT_ROOT))


# ==================== Async Support ====================
# Use pytest-asyncio's recommended configuration for session-scoped event loops

pytest_plugins = ("pytest_asyncio",)


@pytest.fixture(scope="session")
def event_loop_policy():
    """Return the event loop policy for the test session."""
    return asyncio.DefaultEventLoopPolicy()


# ==================== Test IDs ====================

# Obviously fake IDs make leaks into real servers easy to spot
TEST_GUILD_ID = 111222333
TEST_BOT_ID = 555000555
TEST_OWNER_ID = 999888777
TEST_USER_ID = 123456789
TEST_ROLE_ID = 444555666
TEST_CHANNEL_ID = 987654321


def _async_iter(items: list[Any]):
    async def _gen(*_args, **_kwargs):
        for item in items:
            yield item

    return _gen


@pytest.fixture
def async_iter() -> Callable[[list[Any]], Callable[..., Any]]:
    """Build a side_effect that returns a fresh async iterator over ``items`` per call."""
    return _async_iter


# ==================== Discord Fixtures ====================


@pytest.fixture
def bot_top_role() -> Any:
    role = MagicMock(spec=discord.Role)
    role.id = 1000
    role.name = "Bot"
    role.position = 10
    return role


@pytest.fixture
def mock_guild(bot_top_role: Any) -> Any:
    """Create a mock Discord guild whose lookups return nothing until entities are added."""
    guild = MagicMock(spec=discord.Guild)
    guild.id = TEST_GUILD_ID
    guild.name = "Test Server"
    guild.owner_id = TEST_OWNER_ID

    me = MagicMock(spec=discord.Member)
    me.id = TEST_BOT_ID
    me.name = "GuildBot"
    me.top_role = bot_top_role
    guild.me = me

    guild._roles = {}
    guild._members = {}
    guild._channels = {}
    guild._events = {}
    guild.get_role = MagicMock(side_effect=lambda i: guild._roles.get(i))
    guild.get_member = MagicMock(side_effect=lambda i: guild._members.get(i))
    guild.get_channel = MagicMock(side_effect=lambda i: guild._channels.get(i))
    guild.get_channel_or_thread = MagicMock(side_effect=lambda i: guild._channels.get(i))
    guild.get_scheduled_event = MagicMock(side_effect=lambda i: guild._events.get(i))
    guild.fetch_member = AsyncMock(
        side_effect=discord.NotFound(MagicMock(status=404), "Unknown Member")
    )
    guild.roles = []
    guild.members = []
    guild.channels = []
    guild.categories = []
    guild.scheduled_events = []
    return guild


@pytest.fixture
def mock_client(mock_guild: Any) -> Any:
    """Create a mock Discord client that knows exactly one guild."""
    client = MagicMock(spec=discord.Client)
    client.user = MagicMock(spec=discord.ClientUser)
    client.user.id = TEST_BOT_ID
    client.get_guild = MagicMock(
        side_effect=lambda i: mock_guild if i == TEST_GUILD_ID else None
    )
    client.get_channel = MagicMock(side_effect=lambda i: mock_guild._channels.get(i))
    client.get_user = MagicMock(return_value=None)
    client.fetch_user = AsyncMock(side_effect=discord.NotFound(MagicMock(status=404), "Unknown User"))
    client.fetch_invite = AsyncMock()
    client.fetch_webhook = AsyncMock()
    return client


@pytest.fixture
def tool_ctx(mock_client: Any) -> Any:
    """ToolContext with the test guild configured as the default server."""
    from guild_mcp import ToolContext

    return ToolContext.create(mock_client, str(TEST_GUILD_ID))


@pytest.fixture
def make_role(mock_guild: Any) -> Callable[..., Any]:
    """Factory adding a role to the mock guild."""

    def _make(
        role_id: int = TEST_ROLE_ID,
        name: str = "Member",
        above_bot: bool = False,
        default: bool = False,
    ) -> Any:
        role = MagicMock(spec=discord.Role)
        role.id = role_id
        role.name = name
        role.position = 20 if above_bot else 1
        role.hoist = False
        role.mentionable = False
        role.colour = discord.Colour(0x3498DB)
        role.permissions = discord.Permissions(0)
        role.is_default = MagicMock(return_value=default)
        role.__ge__ = MagicMock(return_value=above_bot)  # role >= bot_top_role
        role.edit = AsyncMock(return_value=None)
        role.delete = AsyncMock()
        mock_guild._roles[role_id] = role
        return role

    return _make


@pytest.fixture
def make_member(mock_guild: Any) -> Callable[..., Any]:
    """Factory adding a cached member to the mock guild."""

    def _make(
        user_id: int = TEST_USER_ID,
        name: str = "testuser",
        above_bot: bool = False,
        voice_channel: Any = None,
    ) -> Any:
        member = MagicMock(spec=discord.Member)
        member.id = user_id
        member.name = name
        member.display_name = name.title()
        member.global_name = None
        member.discriminator = "0"
        member.nick = None
        member.roles = []

        top_role = MagicMock(spec=discord.Role)
        top_role.__ge__ = MagicMock(return_value=above_bot)  # member.top_role >= bot top role
        member.top_role = top_role

        if voice_channel is None:
            member.voice = None
        else:
            member.voice = MagicMock(spec=discord.VoiceState)
            member.voice.channel = voice_channel

        member.timeout = AsyncMock()
        member.edit = AsyncMock()
        member.add_roles = AsyncMock()
        member.remove_roles = AsyncMock()
        member.move_to = AsyncMock()
        mock_guild._members[user_id] = member
        mock_guild.members.append(member)
        return member

    return _make


@pytest.fixture
def make_channel(mock_guild: Any) -> Callable[..., Any]:
    """Factory adding a channel of the given discord.py class to the mock guild."""

    def _make(
        kind: type = discord.TextChannel,
        channel_id: int = TEST_CHANNEL_ID,
        name: str = "general",
    ) -> Any:
        channel = MagicMock(spec=kind)
        channel.id = channel_id
        channel.name = name
        channel.guild = mock_guild
        channel.delete = AsyncMock()
        channel.edit = AsyncMock()
        mock_guild._channels[channel_id] = channel
        mock_guild.channels.append(channel)
        if kind is discord.CategoryChannel:
            mock_guild.categories.append(channel)
            channel.channels = []
        return channel

    return _make


# ==================== Environment Fixtures ====================


@pytest.fixture
def mock_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set up mock environment variables."""
    monkeypatch.setenv("DISCORD_TOKEN", "test_token")
    monkeypatch.setenv("DISCORD_GUILD_ID", str(TEST_GUILD_ID))


# ==================== Pytest Configuration ====================


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
