from __future__ import annotations

from typing import Any

from discord.ext import commands

from phrasecast.context import CastContext


class TypeConverter(commands.Converter):
    """
    Use a registered type name as a command parameter annotation.

    The bot must carry the TypeResolver on its `type_resolver` attribute.
    """

    def __init__(self, type_name: str) -> None:
        self.type_name = str(type_name)

    async def convert(self, ctx: commands.Context, argument: str) -> Any:
        resolver = getattr(ctx.bot, "type_resolver", None)
        if resolver is None:
            raise commands.BadArgument("No type resolver is attached to this bot.")
        result = await resolver.cast(self.type_name, CastContext.from_context(ctx), argument)
        if result is None:
            raise commands.BadArgument(f"Could not convert {argument!r} to {self.type_name}.")
        return result
