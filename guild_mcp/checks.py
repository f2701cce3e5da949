"""
Pre-flight Checks Module.
Local rules enforced before a remote call is issued.
"""

from __future__ import annotations

import discord

from .errors import Forbidden, PreconditionFailed, UpstreamError

# Per-action wording for the @everyone refusal
_PUBLIC_ROLE_MESSAGES = {
    "edit": "Cannot edit the @everyone role directly. This operation is risky and restricted.",
    "delete": "Cannot delete the @everyone role",
    "assign": "Cannot assign the @everyone role - all members have it by default",
    "remove": "Cannot remove the @everyone role - all members have it by default",
}


def ensure_not_public_role(role: discord.Role, action: str) -> None:
    """Refuse to edit, delete, assign or remove the guild's @everyone role."""
    if role.is_default():
        message = _PUBLIC_ROLE_MESSAGES.get(action, f"Cannot {action} the @everyone role")
        raise Forbidden(message, reason="policy")


def _bot_member(guild: discord.Guild) -> discord.Member:
    if guild.me is None:
        raise UpstreamError("Bot member is not available in this server yet, try again shortly")
    return guild.me


def ensure_role_below_bot(guild: discord.Guild, role: discord.Role, action: str) -> None:
    """The bot can only manage roles strictly below its own top role."""
    bot_top_role = _bot_member(guild).top_role
    if role >= bot_top_role:
        raise Forbidden(
            f"Cannot {action} this role - it is higher in the hierarchy than the bot's highest role",
            reason="hierarchy",
        )


def ensure_member_below_bot(guild: discord.Guild, member: discord.Member, action: str) -> None:
    """The bot can only moderate members ranked strictly below it."""
    bot = _bot_member(guild)
    if member.id == guild.owner_id or member.top_role >= bot.top_role:
        raise Forbidden(
            f"Cannot {action} this user - they have a higher or equal role than the bot",
            reason="hierarchy",
        )


def ensure_in_voice(member: discord.Member) -> discord.VoiceState:
    """Return the member's voice state, or fail if they are not connected."""
    voice = member.voice
    if voice is None or voice.channel is None:
        raise PreconditionFailed("User is not connected to any voice channel")
    return voice


__all__ = [
    "ensure_in_voice",
    "ensure_member_below_bot",
    "ensure_not_public_role",
    "ensure_role_below_bot",
]
