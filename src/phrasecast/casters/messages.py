from __future__ import annotations

from typing import Any, Awaitable, Callable, Optional

import discord

from phrasecast.casters.entities import channel_kind
from phrasecast.config import Settings
from phrasecast.context import CastContext
from phrasecast.services.logger_service import LoggerService
from phrasecast.types import ArgumentType
from phrasecast.utils.discord_utils import TRANSIENT_ERRORS, FetchStatus, fetch_message, parse_snowflake


AsyncCaster = Callable[[CastContext, str], Awaitable[Any]]


class MessageLocator:
    """Direct and guild-wide message lookup by id."""

    def __init__(self, settings: Settings, logger: LoggerService) -> None:
        self.settings = settings
        self.logger = logger

    async def fetch_here(self, ctx: CastContext, phrase: str) -> Optional[discord.Message]:
        message_id = parse_snowflake(phrase)
        if message_id is None:
            return None
        try:
            return await ctx.channel.fetch_message(message_id)
        except (discord.HTTPException, *TRANSIENT_ERRORS):
            return None

    async def search_guild(self, guild: Any, phrase: str) -> Optional[discord.Message]:
        """
        Try each message-bearing channel of `guild` in cache order, one at a time.

        The first channel that returns the message wins. A malformed request ends
        the search immediately since no other channel can accept the same id.
        """

        tried = 0
        for channel in guild.channels:
            if channel_kind(channel) not in self.settings.message_channel_kinds:
                continue
            tried += 1
            outcome = await fetch_message(channel, phrase, self.settings.malformed_request_prefix)
            if outcome.status is FetchStatus.FOUND:
                return outcome.message
            if outcome.status is FetchStatus.MALFORMED:
                self.logger.log(
                    "message_search.aborted",
                    guild_id=getattr(guild, "id", None),
                    channel_id=getattr(channel, "id", None),
                    tried=tried,
                    error=outcome.error,
                )
                return None
        self.logger.log("message_search.exhausted", guild_id=getattr(guild, "id", None), tried=tried)
        return None

    async def cast_message(self, ctx: CastContext, phrase: str) -> Optional[discord.Message]:
        if not phrase:
            return None
        return await self.fetch_here(ctx, phrase)

    async def cast_guild_message(self, ctx: CastContext, phrase: str) -> Optional[discord.Message]:
        if not phrase:
            return None
        return await self.search_guild(ctx.guild, phrase)

    async def cast_relevant_message(self, ctx: CastContext, phrase: str) -> Optional[discord.Message]:
        if not phrase:
            return None
        here = await self.fetch_here(ctx, phrase)
        if here is not None:
            return here
        if ctx.guild is not None:
            return await self.search_guild(ctx.guild, phrase)
        return None


async def cast_invite(ctx: CastContext, phrase: str) -> Optional[discord.Invite]:
    if not phrase:
        return None
    try:
        return await ctx.client.fetch_invite(phrase)
    except (discord.HTTPException, *TRANSIENT_ERRORS):
        return None


def build_message_casters(settings: Settings, logger: LoggerService) -> dict[str, AsyncCaster]:
    locator = MessageLocator(settings, logger)
    return {
        ArgumentType.MESSAGE: locator.cast_message,
        ArgumentType.GUILD_MESSAGE: locator.cast_guild_message,
        ArgumentType.RELEVANT_MESSAGE: locator.cast_relevant_message,
        ArgumentType.INVITE: cast_invite,
    }
