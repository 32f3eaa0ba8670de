from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import discord
from discord.ext import commands


@dataclass(frozen=True)
class CastContext:
    client: Any
    channel: Any
    author: Any
    guild: Any = None
    message: Any = None

    @classmethod
    def from_message(cls, client: discord.Client, message: discord.Message) -> "CastContext":
        return cls(
            client=client,
            channel=message.channel,
            author=message.author,
            guild=message.guild,
            message=message,
        )

    @classmethod
    def from_context(cls, ctx: commands.Context) -> "CastContext":
        return cls(
            client=ctx.bot,
            channel=ctx.channel,
            author=ctx.author,
            guild=ctx.guild,
            message=ctx.message,
        )

    @property
    def is_private(self) -> bool:
        return getattr(self.channel, "type", None) == discord.ChannelType.private

    @property
    def is_guild_channel(self) -> bool:
        kind = getattr(self.channel, "type", None)
        if kind is None:
            return False
        return kind not in (discord.ChannelType.private, discord.ChannelType.group)
