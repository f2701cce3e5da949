"""
Main Entry Point
Connects the Discord client and serves the guild administration tools over MCP stdio.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import sys
from typing import Any

import discord
from dotenv import load_dotenv
from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

# Load .env EARLY - before any modules that might use env vars
load_dotenv()

from config import ServerSettings, settings  # noqa: E402
from guild_mcp import ToolContext, execute_tool_call, get_tool_definitions  # noqa: E402
from utils.monitoring.logger import setup_smart_logging  # noqa: E402


class GuildAdminClient(discord.Client):
    """Discord client that signals when its cache is ready for tool calls."""

    def __init__(self, **options: Any) -> None:
        super().__init__(**options)
        self.ready_event = asyncio.Event()

    async def on_ready(self) -> None:
        """Called when the client is connected and the guild cache is populated"""
        logging.info("🤖 %s is Online and Ready!", self.user)
        logging.info("📊 Connected to %d guilds", len(self.guilds))
        self.ready_event.set()


def create_client() -> GuildAdminClient:
    intents = discord.Intents.default()
    intents.members = True
    intents.voice_states = True
    intents.guild_scheduled_events = True
    intents.message_content = True
    return GuildAdminClient(intents=intents)


def create_server(ctx: ToolContext, name: str) -> Server:
    """Build the MCP server exposing every registered tool."""
    app = Server(name)

    @app.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [types.Tool(**definition) for definition in get_tool_definitions()]

    # Arguments are parsed by each tool's ParamSchema
    @app.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        result = await execute_tool_call(ctx, name, arguments)
        if not result.ok:
            # Raised errors are returned to the agent as isError results
            raise RuntimeError(f"[{result.kind.value}] {result.text}")
        return [types.TextContent(type="text", text=result.text)]

    return app


async def start_client(client: GuildAdminClient, token: str, timeout: int) -> asyncio.Task:
    """Start the client in the background and wait until it is ready.

    Raises:
        discord.DiscordException: Login or gateway connection failed
        TimeoutError: The client did not become ready within ``timeout`` seconds
    """
    client_task = asyncio.create_task(client.start(token), name="discord-client")
    ready_task = asyncio.create_task(client.ready_event.wait(), name="discord-ready")
    done, _ = await asyncio.wait(
        {client_task, ready_task}, timeout=timeout, return_when=asyncio.FIRST_COMPLETED
    )
    if ready_task in done:
        return client_task

    ready_task.cancel()
    try:
        if client_task in done:
            # Re-raises the login/connection failure
            client_task.result()
            raise RuntimeError("Discord client stopped before becoming ready")
        client_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await client_task
        raise TimeoutError(f"Discord client was not ready after {timeout} seconds")
    finally:
        await client.close()


async def main(config: ServerSettings = settings) -> None:
    client = create_client()
    client_task = await start_client(client, config.discord_token, config.ready_timeout)

    ctx = ToolContext.create(client, config.default_guild_id)
    if not ctx.scopes.has_default:
        logging.warning("⚠️ DISCORD_GUILD_ID is not set: every tool call must pass guildId")
    app = create_server(ctx, config.server_name)

    logging.info("🚀 Serving %d tools over MCP stdio as %s", len(get_tool_definitions()), config.server_name)
    try:
        async with stdio_server() as (read_stream, write_stream):
            await app.run(read_stream, write_stream, app.create_initialization_options())
    finally:
        logging.info("🛑 Shutting down Discord client...")
        await client.close()
        with contextlib.suppress(asyncio.CancelledError):
            await client_task


def run() -> None:
    """Console entry point."""
    setup_smart_logging(settings.logs_dir, settings.log_level, settings.json_logs)

    errors = settings.validate_required_secrets()
    if errors:
        for error in errors:
            logging.critical("❌ %s", error)
        sys.exit(1)
    logging.info("Configuration: %r", settings)

    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logging.info("🛑 Stopped by user (Ctrl+C)")
    except (discord.DiscordException, TimeoutError, RuntimeError) as e:
        logging.critical("❌ Could not start the Discord client: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    run()
