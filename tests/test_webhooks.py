"""
Tests for guild_mcp.commands.webhooks module.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import discord
import pytest

TEXT_ID = 7001
WEBHOOK_TOKEN = "A1b2-C3d4_E5f6.G7h8" * 4
WEBHOOK_URL = f"https://discord.com/api/webhooks/123456789012345678/{WEBHOOK_TOKEN}"


def _webhook(name: str = "Alerts", webhook_id: int = 900) -> MagicMock:
    webhook = MagicMock(spec=discord.Webhook)
    webhook.id = webhook_id
    webhook.name = name
    webhook.url = f"https://discord.com/api/webhooks/{webhook_id}/token"
    webhook.delete = AsyncMock()
    return webhook


class TestCreateWebhook:
    """Tests for create_webhook."""

    @pytest.mark.asyncio
    async def test_create(self, tool_ctx, make_channel):
        from guild_mcp import execute_tool_call

        channel = make_channel(discord.TextChannel, TEXT_ID)
        channel.create_webhook = AsyncMock(return_value=_webhook())
        result = await execute_tool_call(
            tool_ctx, "create_webhook", {"channelId": str(TEXT_ID), "name": "Alerts"}
        )

        assert result.text == "Created Alerts webhook: https://discord.com/api/webhooks/900/token"
        channel.create_webhook.assert_awaited_once_with(name="Alerts")

    @pytest.mark.asyncio
    async def test_voice_channel_rejected(self, tool_ctx, make_channel):
        from guild_mcp import execute_tool_call
        from guild_mcp.errors import ErrorKind

        make_channel(discord.VoiceChannel, TEXT_ID)
        result = await execute_tool_call(
            tool_ctx, "create_webhook", {"channelId": str(TEXT_ID), "name": "Alerts"}
        )
        assert result.kind is ErrorKind.TYPE_MISMATCH

    @pytest.mark.asyncio
    async def test_without_manage_webhooks(self, tool_ctx, make_channel):
        from guild_mcp import execute_tool_call
        from guild_mcp.errors import ErrorKind

        channel = make_channel(discord.TextChannel, TEXT_ID)
        channel.create_webhook = AsyncMock(side_effect=discord.Forbidden(MagicMock(), "Missing Permissions"))
        result = await execute_tool_call(
            tool_ctx, "create_webhook", {"channelId": str(TEXT_ID), "name": "Alerts"}
        )

        assert result.kind is ErrorKind.FORBIDDEN_PERMISSION
        assert result.text == "Bot lacks permission to manage webhooks"


class TestDeleteWebhook:
    """Tests for delete_webhook."""

    @pytest.mark.asyncio
    async def test_delete(self, tool_ctx, mock_client):
        from guild_mcp import execute_tool_call

        webhook = _webhook()
        mock_client.fetch_webhook = AsyncMock(return_value=webhook)
        result = await execute_tool_call(tool_ctx, "delete_webhook", {"webhookId": "900"})

        assert result.text == "Successfully deleted webhook Alerts"
        mock_client.fetch_webhook.assert_awaited_once_with(900)
        webhook.delete.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unknown_webhook(self, tool_ctx, mock_client):
        from guild_mcp import execute_tool_call
        from guild_mcp.errors import ErrorKind

        mock_client.fetch_webhook = AsyncMock(
            side_effect=discord.NotFound(MagicMock(status=404), "Unknown Webhook")
        )
        result = await execute_tool_call(tool_ctx, "delete_webhook", {"webhookId": "900"})

        assert result.kind is ErrorKind.NOT_FOUND
        assert result.text == "Webhook not found by webhookId"


class TestListWebhooks:
    """Tests for list_webhooks."""

    @pytest.mark.asyncio
    async def test_list(self, tool_ctx, make_channel):
        from guild_mcp import execute_tool_call

        channel = make_channel(discord.TextChannel, TEXT_ID, "ops")
        channel.webhooks = AsyncMock(return_value=[_webhook("A", 1), _webhook("B", 2)])
        result = await execute_tool_call(tool_ctx, "list_webhooks", {"channelId": str(TEXT_ID)})

        assert result.text.startswith("Retrieved 2 webhooks")
        assert "- B (ID: 2)" in result.text

    @pytest.mark.asyncio
    async def test_empty(self, tool_ctx, make_channel):
        from guild_mcp import execute_tool_call

        channel = make_channel(discord.TextChannel, TEXT_ID, "ops")
        channel.webhooks = AsyncMock(return_value=[])
        result = await execute_tool_call(tool_ctx, "list_webhooks", {"channelId": str(TEXT_ID)})
        assert result.text == "No webhooks found in channel ops."


class TestSendWebhookMessage:
    """Tests for send_webhook_message."""

    @pytest.mark.asyncio
    async def test_send(self, tool_ctx, mock_client):
        from guild_mcp import execute_tool_call

        webhook = _webhook()
        sent = MagicMock()
        sent.id = 555
        sent.jump_url = "https://discord.com/channels/1/2/555"
        webhook.send = AsyncMock(return_value=sent)
        with patch("discord.Webhook.from_url", return_value=webhook) as from_url:
            result = await execute_tool_call(
                tool_ctx, "send_webhook_message", {"webhookUrl": WEBHOOK_URL, "message": "deploy done"}
            )

        assert result.ok
        from_url.assert_called_once_with(WEBHOOK_URL, client=mock_client)
        webhook.send.assert_awaited_once_with(content="deploy done", wait=True)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com/api/webhooks/123456789012345678/token",
            "http://discord.com/api/webhooks/123456789012345678/token",
            "not a url",
        ],
    )
    async def test_rejects_non_webhook_urls(self, tool_ctx, url):
        from guild_mcp import execute_tool_call
        from guild_mcp.errors import ErrorKind

        with patch("discord.Webhook.from_url") as from_url:
            result = await execute_tool_call(
                tool_ctx, "send_webhook_message", {"webhookUrl": url, "message": "hi"}
            )

        assert result.kind is ErrorKind.VALIDATION_FAILURE
        from_url.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "url",
        [
            WEBHOOK_URL,
            f"https://canary.discord.com/api/webhooks/123456789012345678/{WEBHOOK_TOKEN}",
            f"https://discordapp.com/api/webhooks/12345678901234567/{WEBHOOK_TOKEN}/",
        ],
    )
    async def test_accepted_urls_reach_the_webhook(self, tool_ctx, mock_client, url):
        from guild_mcp import execute_tool_call

        mock_client._connection = MagicMock()
        mock_client.http = MagicMock()
        sent = MagicMock()
        sent.id = 556
        sent.jump_url = "https://discord.com/channels/1/2/556"
        with patch.object(discord.Webhook, "send", AsyncMock(return_value=sent)) as send:
            result = await execute_tool_call(
                tool_ctx, "send_webhook_message", {"webhookUrl": url, "message": "hi"}
            )

        assert result.ok
        assert result.affected_ids == ("556",)
        send.assert_awaited_once_with(content="hi", wait=True)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "url",
        [
            f"https://discord.com/api/v10/webhooks/123456789012345678/{WEBHOOK_TOKEN}",
            "https://discord.com/api/webhooks/123456789012345678/shorttoken",
        ],
    )
    async def test_urls_discord_py_would_refuse(self, tool_ctx, url):
        from guild_mcp import execute_tool_call
        from guild_mcp.errors import ErrorKind

        result = await execute_tool_call(
            tool_ctx, "send_webhook_message", {"webhookUrl": url, "message": "hi"}
        )
        assert result.kind is ErrorKind.VALIDATION_FAILURE

    @pytest.mark.asyncio
    async def test_from_url_rejection_is_validation_failure(self, tool_ctx):
        from guild_mcp import execute_tool_call
        from guild_mcp.errors import ErrorKind

        with patch("discord.Webhook.from_url", side_effect=ValueError("Invalid webhook URL given.")):
            result = await execute_tool_call(
                tool_ctx, "send_webhook_message", {"webhookUrl": WEBHOOK_URL, "message": "hi"}
            )

        assert result.kind is ErrorKind.VALIDATION_FAILURE
        assert "Invalid webhook URL given." in result.text
