"""
Tests for guild_mcp.commands.voice module.
"""

from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

TEST_USER_ID = 123456789
VOICE_ID = 2001
STAGE_ID = 2002
TEXT_ID = 2003


class TestMoveMember:
    """Tests for move_member."""

    @pytest.mark.asyncio
    async def test_not_in_voice_fails_before_remote_call(self, tool_ctx, make_member, make_channel):
        from guild_mcp import execute_tool_call
        from guild_mcp.errors import ErrorKind

        make_channel(discord.VoiceChannel, VOICE_ID, "Lounge")
        member = make_member()
        result = await execute_tool_call(
            tool_ctx, "move_member", {"userId": str(TEST_USER_ID), "channelId": str(VOICE_ID)}
        )

        assert result.kind is ErrorKind.VALIDATION_FAILURE
        assert result.text == "User is not connected to any voice channel"
        member.move_to.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_move_to_stage(self, tool_ctx, make_member, make_channel):
        from guild_mcp import execute_tool_call

        current = make_channel(discord.VoiceChannel, VOICE_ID, "Lounge")
        stage = make_channel(discord.StageChannel, STAGE_ID, "Town Hall")
        member = make_member(voice_channel=current)
        result = await execute_tool_call(
            tool_ctx, "move_member", {"userId": str(TEST_USER_ID), "channelId": str(STAGE_ID)}
        )

        assert result.ok
        member.move_to.assert_awaited_once_with(stage)

    @pytest.mark.asyncio
    async def test_target_not_voice(self, tool_ctx, make_member, make_channel):
        from guild_mcp import execute_tool_call
        from guild_mcp.errors import ErrorKind

        current = make_channel(discord.VoiceChannel, VOICE_ID)
        make_channel(discord.TextChannel, TEXT_ID)
        make_member(voice_channel=current)
        result = await execute_tool_call(
            tool_ctx, "move_member", {"userId": str(TEST_USER_ID), "channelId": str(TEXT_ID)}
        )
        assert result.kind is ErrorKind.TYPE_MISMATCH
        assert "voice or stage channel" in result.text


class TestDisconnectMember:
    """Tests for disconnect_member."""

    @pytest.mark.asyncio
    async def test_disconnect(self, tool_ctx, make_member, make_channel):
        from guild_mcp import execute_tool_call

        current = make_channel(discord.VoiceChannel, VOICE_ID, "Lounge")
        member = make_member(voice_channel=current)
        result = await execute_tool_call(tool_ctx, "disconnect_member", {"userId": str(TEST_USER_ID)})

        assert result.ok
        assert "Lounge" in result.text
        member.move_to.assert_awaited_once_with(None)

    @pytest.mark.asyncio
    async def test_not_in_voice(self, tool_ctx, make_member):
        from guild_mcp import execute_tool_call
        from guild_mcp.errors import ErrorKind

        make_member()
        result = await execute_tool_call(tool_ctx, "disconnect_member", {"userId": str(TEST_USER_ID)})
        assert result.kind is ErrorKind.VALIDATION_FAILURE


class TestModifyVoiceState:
    """Tests for modify_voice_state."""

    @pytest.mark.asyncio
    async def test_needs_mute_or_deafen(self, tool_ctx, make_member, make_channel):
        from guild_mcp import execute_tool_call
        from guild_mcp.errors import ErrorKind

        make_member(voice_channel=make_channel(discord.VoiceChannel, VOICE_ID))
        result = await execute_tool_call(tool_ctx, "modify_voice_state", {"userId": str(TEST_USER_ID)})

        assert result.kind is ErrorKind.INVALID_ARGUMENT
        assert result.text == "At least one of 'mute' or 'deafen' must be provided"

    @pytest.mark.asyncio
    async def test_mute_only(self, tool_ctx, make_member, make_channel):
        from guild_mcp import execute_tool_call

        member = make_member(voice_channel=make_channel(discord.VoiceChannel, VOICE_ID))
        result = await execute_tool_call(
            tool_ctx, "modify_voice_state", {"userId": str(TEST_USER_ID), "mute": "true"}
        )

        assert result.ok
        member.edit.assert_awaited_once_with(mute=True)

    @pytest.mark.asyncio
    async def test_not_in_voice(self, tool_ctx, make_member):
        from guild_mcp import execute_tool_call
        from guild_mcp.errors import ErrorKind

        member = make_member()
        result = await execute_tool_call(
            tool_ctx, "modify_voice_state", {"userId": str(TEST_USER_ID), "deafen": "false"}
        )
        assert result.kind is ErrorKind.VALIDATION_FAILURE
        member.edit.assert_not_awaited()


class TestVoiceChannels:
    """Tests for voice and stage channel creation and editing."""

    @pytest.mark.asyncio
    async def test_create_voice_channel_in_category(self, tool_ctx, mock_guild, make_channel):
        from guild_mcp import execute_tool_call

        category = make_channel(discord.CategoryChannel, 3000, "Voice")
        created = MagicMock(spec=discord.VoiceChannel)
        created.id, created.name = 77, "Lounge"
        mock_guild.create_voice_channel = AsyncMock(return_value=created)
        result = await execute_tool_call(
            tool_ctx,
            "create_voice_channel",
            {"name": "Lounge", "categoryId": "3000", "userLimit": "10"},
        )

        assert result.ok
        mock_guild.create_voice_channel.assert_awaited_once_with(
            "Lounge", user_limit=10, category=category
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bitrate", ["7999", "384001"])
    async def test_bitrate_bounds(self, tool_ctx, bitrate):
        from guild_mcp import execute_tool_call
        from guild_mcp.errors import ErrorKind

        result = await execute_tool_call(
            tool_ctx, "create_stage_channel", {"name": "Stage", "bitrate": bitrate}
        )
        assert result.kind is ErrorKind.VALIDATION_FAILURE

    @pytest.mark.asyncio
    async def test_user_limit_bound(self, tool_ctx):
        from guild_mcp import execute_tool_call
        from guild_mcp.errors import ErrorKind

        result = await execute_tool_call(
            tool_ctx, "create_voice_channel", {"name": "Lounge", "userLimit": "100"}
        )
        assert result.kind is ErrorKind.VALIDATION_FAILURE

    @pytest.mark.asyncio
    async def test_edit_rejects_text_channel(self, tool_ctx, make_channel):
        from guild_mcp import execute_tool_call
        from guild_mcp.errors import ErrorKind

        make_channel(discord.TextChannel, TEXT_ID)
        result = await execute_tool_call(
            tool_ctx, "edit_voice_channel", {"channelId": str(TEXT_ID), "name": "x"}
        )
        assert result.kind is ErrorKind.TYPE_MISMATCH

    @pytest.mark.asyncio
    async def test_edit_stage_ignores_user_limit(self, tool_ctx, make_channel):
        from guild_mcp import execute_tool_call

        stage = make_channel(discord.StageChannel, STAGE_ID)
        result = await execute_tool_call(
            tool_ctx,
            "edit_voice_channel",
            {"channelId": str(STAGE_ID), "userLimit": "5", "rtcRegion": "auto"},
        )

        assert result.ok
        stage.edit.assert_awaited_once_with(rtc_region=None)

    @pytest.mark.asyncio
    async def test_edit_voice_region(self, tool_ctx, make_channel):
        from guild_mcp import execute_tool_call

        voice = make_channel(discord.VoiceChannel, VOICE_ID)
        await execute_tool_call(
            tool_ctx,
            "edit_voice_channel",
            {"channelId": str(VOICE_ID), "rtcRegion": "rotterdam", "userLimit": "5"},
        )
        voice.edit.assert_awaited_once_with(user_limit=5, rtc_region="rotterdam")
