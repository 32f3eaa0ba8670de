from __future__ import annotations

import re
from typing import Any, Callable, Optional

import discord

from phrasecast.config import Settings
from phrasecast.context import CastContext
from phrasecast.types import ArgumentType


Caster = Callable[[CastContext, str], Any]


class MentionGrammar:
    """Full-match mention patterns; the id digit count is bounded by settings."""

    def __init__(self, min_digits: int = 17, max_digits: int = 20) -> None:
        snowflake = rf"(?P<id>\d{{{min_digits},{max_digits}}})"
        self.user = re.compile(rf"<@!?{snowflake}>")
        self.channel = re.compile(rf"<#{snowflake}>")
        self.role = re.compile(rf"<@&{snowflake}>")
        self.emoji = re.compile(rf"<a?:\w+:{snowflake}>")

    @classmethod
    def from_settings(cls, settings: Settings) -> "MentionGrammar":
        return cls(settings.mention_id_min_digits, settings.mention_id_max_digits)

    @staticmethod
    def extract(pattern: re.Pattern[str], phrase: str) -> Optional[int]:
        match = pattern.fullmatch(phrase or "")
        return int(match.group("id")) if match else None


def mention_caster(pattern: re.Pattern[str], lookup: Callable[[CastContext, int], Any]) -> Caster:
    def caster(ctx: CastContext, phrase: str) -> Any:
        if not phrase:
            return None
        object_id = MentionGrammar.extract(pattern, phrase)
        if object_id is None:
            return None
        return lookup(ctx, object_id)

    return caster


def _user(ctx: CastContext, user_id: int) -> Any:
    return ctx.client.get_user(user_id)


def _member(ctx: CastContext, user_id: int) -> Any:
    return ctx.guild.get_member(user_id)


def _channel(ctx: CastContext, channel_id: int) -> Any:
    return ctx.guild.get_channel(channel_id)


def _role(ctx: CastContext, role_id: int) -> Any:
    return ctx.guild.get_role(role_id)


def _emoji(ctx: CastContext, emoji_id: int) -> Any:
    return discord.utils.get(ctx.guild.emojis, id=emoji_id)


def build_mention_casters(grammar: MentionGrammar) -> dict[str, Caster]:
    return {
        ArgumentType.USER_MENTION: mention_caster(grammar.user, _user),
        ArgumentType.MEMBER_MENTION: mention_caster(grammar.user, _member),
        ArgumentType.CHANNEL_MENTION: mention_caster(grammar.channel, _channel),
        ArgumentType.ROLE_MENTION: mention_caster(grammar.role, _role),
        ArgumentType.EMOJI_MENTION: mention_caster(grammar.emoji, _emoji),
    }
