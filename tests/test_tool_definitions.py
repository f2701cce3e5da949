"""Tests for tool_definitions module."""

import pytest

EXPECTED_TOOLS = {
    # Server and users
    "get_server_info", "list_active_threads", "get_user_id_by_name",
    # Moderation
    "kick_member", "ban_member", "unban_member", "timeout_member", "remove_timeout",
    "set_nickname", "get_bans",
    # Roles
    "list_roles", "create_role", "edit_role", "delete_role", "assign_role", "remove_role",
    # Channels
    "create_text_channel", "delete_channel", "find_channel", "list_channels",
    "create_category", "delete_category", "find_category", "list_channels_in_category",
    # Voice
    "create_voice_channel", "create_stage_channel", "edit_voice_channel",
    "move_member", "disconnect_member", "modify_voice_state",
    # Events
    "create_guild_scheduled_event", "edit_guild_scheduled_event", "delete_guild_scheduled_event",
    "list_guild_scheduled_events", "get_guild_scheduled_event_users",
    # Invites
    "create_invite", "list_invites", "delete_invite", "get_invite_details",
    # Messages
    "send_message", "edit_message", "delete_message", "read_messages",
    "add_reaction", "remove_reaction",
    "send_private_message", "edit_private_message", "delete_private_message",
    "read_private_messages",
    # Webhooks
    "create_webhook", "delete_webhook", "list_webhooks", "send_webhook_message",
}


class TestGetToolDefinitions:
    """Tests for get_tool_definitions function."""

    def test_every_tool_registered(self):
        """Test that importing the package registers the whole tool set."""
        from guild_mcp import get_tool_definitions

        names = {d["name"] for d in get_tool_definitions()}
        assert names == EXPECTED_TOOLS

    def test_all_declarations_have_description(self):
        from guild_mcp import get_tool_definitions

        for decl in get_tool_definitions():
            assert isinstance(decl["description"], str)
            assert decl["description"]

    def test_every_property_is_a_string(self):
        """Arguments travel as strings whatever their logical type."""
        from guild_mcp import get_tool_definitions

        for decl in get_tool_definitions():
            schema = decl["inputSchema"]
            assert schema["type"] == "object"
            for prop in schema["properties"].values():
                assert prop["type"] == "string"
                assert prop["description"]

    def test_required_names_are_properties(self):
        from guild_mcp import get_tool_definitions

        for decl in get_tool_definitions():
            schema = decl["inputSchema"]
            assert set(schema["required"]) <= set(schema["properties"])

    def test_guild_id_never_required(self):
        from guild_mcp import get_tool_definitions

        for decl in get_tool_definitions():
            assert "guildId" not in decl["inputSchema"]["required"]


class TestSpecificTools:
    """Tests for specific tool definitions."""

    @pytest.mark.parametrize(
        "name, required",
        [
            ("create_text_channel", ["name"]),
            ("ban_member", ["userId"]),
            ("timeout_member", ["userId", "durationSeconds"]),
            ("assign_role", ["roleId", "userId"]),
            ("delete_category", ["categoryId"]),
            ("create_guild_scheduled_event", ["name", "scheduledStartTime", "entityType"]),
            ("send_webhook_message", ["webhookUrl", "message"]),
            ("delete_invite", ["inviteCode"]),
        ],
    )
    def test_required_parameters(self, name, required):
        from guild_mcp.tool_definitions import get_tool

        spec = get_tool(name)
        assert spec is not None
        assert sorted(spec.input_schema()["required"]) == sorted(required)

    def test_read_only_tools_not_mutating(self):
        from guild_mcp.tool_definitions import get_tool

        for name in ("list_roles", "get_bans", "read_messages", "get_invite_details", "find_channel"):
            assert get_tool(name).mutating is False
        for name in ("ban_member", "send_message", "delete_invite"):
            assert get_tool(name).mutating is True

    def test_unknown_tool(self):
        from guild_mcp.tool_definitions import get_tool

        assert get_tool("not_a_tool") is None


class TestToolDecorator:
    """Tests for the tool registration decorator."""

    def test_duplicate_name_rejected(self):
        from guild_mcp.tool_definitions import tool

        with pytest.raises(ValueError, match="already registered"):

            @tool("kick_member", "Duplicate")
            async def _duplicate(ctx):
                return None

    def test_registers_and_returns_handler(self, monkeypatch):
        from guild_mcp import tool_definitions
        from guild_mcp.params import Param

        monkeypatch.setattr(tool_definitions, "TOOL_REGISTRY", {})

        async def handler(ctx, foo_bar):
            return foo_bar

        returned = tool_definitions.tool("sample_tool", "Sample", Param("fooBar", "Foo", required=True))(handler)

        assert returned is handler
        spec = tool_definitions.TOOL_REGISTRY["sample_tool"]
        assert spec.input_schema() == {
            "type": "object",
            "properties": {"fooBar": {"type": "string", "description": "Foo"}},
            "required": ["fooBar"],
        }
