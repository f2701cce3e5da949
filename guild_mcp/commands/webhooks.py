"""
Webhook Commands Module.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord

from ..errors import ValidationFailure, translate_errors
from ..params import Param
from ..results import OperationResult
from ..sanitization import is_webhook_url
from ..tool_definitions import CHANNEL_ID, MESSAGE_TEXT, tool

if TYPE_CHECKING:
    from ..tool_executor import ToolContext


@tool(
    "create_webhook",
    "Creates a webhook on a text channel",
    CHANNEL_ID,
    Param("name", "Webhook name", required=True, max_length=80),
)
async def create_webhook(ctx: ToolContext, channel_id, name) -> OperationResult:
    channel = ctx.entities.any_channel(channel_id, discord.TextChannel, "text channel")
    with translate_errors("manage webhooks"):
        webhook = await channel.create_webhook(name=name)
    logging.info("🪝 Created webhook %s (%s) on %s", webhook.name, webhook.id, channel.name)
    return OperationResult.success(
        f"Created {webhook.name} webhook: {webhook.url}", webhook.id
    )


@tool(
    "delete_webhook",
    "Deletes a webhook",
    Param("webhookId", "Discord webhook ID", kind="snowflake", required=True),
)
async def delete_webhook(ctx: ToolContext, webhook_id) -> OperationResult:
    webhook = await ctx.entities.webhook(webhook_id)
    with translate_errors("manage webhooks", not_found="Webhook not found by webhookId"):
        await webhook.delete()
    logging.info("🗑️ Deleted webhook %s (%s)", webhook.name, webhook_id)
    return OperationResult.success(f"Successfully deleted webhook {webhook.name}", webhook_id)


@tool(
    "list_webhooks",
    "Lists the webhooks of a text channel",
    CHANNEL_ID,
    mutating=False,
)
async def list_webhooks(ctx: ToolContext, channel_id) -> OperationResult:
    channel = ctx.entities.any_channel(channel_id, discord.TextChannel, "text channel")
    with translate_errors("manage webhooks"):
        webhooks = await channel.webhooks()
    if not webhooks:
        return OperationResult.success(f"No webhooks found in channel {channel.name}.")

    body = "\n".join(f"- {w.name} (ID: {w.id}) {w.url}" for w in webhooks)
    return OperationResult.success(f"Retrieved {len(webhooks)} webhooks:\n{body}")


@tool(
    "send_webhook_message",
    "Sends a message through a webhook URL",
    Param("webhookUrl", "Discord webhook URL", required=True),
    MESSAGE_TEXT,
)
async def send_webhook_message(ctx: ToolContext, webhook_url, message) -> OperationResult:
    url = webhook_url.strip()
    if not is_webhook_url(url):
        raise ValidationFailure("webhookUrl must be a Discord webhook URL (https://discord.com/api/webhooks/<id>/<token>)")

    try:
        webhook = discord.Webhook.from_url(url, client=ctx.client)
    except ValueError as exc:
        raise ValidationFailure(f"webhookUrl is not a valid Discord webhook URL: {exc}") from exc
    with translate_errors("use this webhook", not_found="Webhook not found by webhookUrl"):
        sent = await webhook.send(content=message, wait=True)
    logging.info("🪝 Sent webhook message %s via %s", sent.id, webhook.id)
    return OperationResult.success(
        f"Message sent successfully. Message link: {sent.jump_url}", sent.id
    )
