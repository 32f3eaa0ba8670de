from __future__ import annotations

import asyncio
from types import SimpleNamespace

import aiohttp
import discord

from phrasecast.config import Settings
from phrasecast.context import CastContext
from phrasecast.services.logger_service import LoggerService
from phrasecast.type_resolver import TypeResolver
from phrasecast.types import ArgumentType


MESSAGE_ID = "123456789012345678"


def _not_found() -> discord.NotFound:
    return discord.NotFound(SimpleNamespace(status=404, reason="Not Found"), {"code": 10008, "message": "Unknown Message"})


def _malformed() -> discord.HTTPException:
    return discord.HTTPException(
        SimpleNamespace(status=400, reason="Bad Request"),
        {"code": 50035, "message": "Invalid Form Body"},
    )


class StubChannel:
    def __init__(self, cid: int, kind: discord.ChannelType, result=None) -> None:
        self.id = cid
        self.type = kind
        self.result = result
        self.calls: list[int] = []

    async def fetch_message(self, message_id: int):
        self.calls.append(message_id)
        if isinstance(self.result, Exception):
            raise self.result
        if self.result is None:
            raise _not_found()
        return self.result


def _disconnected() -> aiohttp.ClientConnectionError:
    return aiohttp.ClientConnectionError("disconnected")


def _resolver(**overrides) -> tuple[TypeResolver, LoggerService]:
    settings = Settings(log_echo=False, **overrides)
    logger = LoggerService(echo=False)
    return TypeResolver(settings=settings, logger=logger), logger


def _ctx(channel: StubChannel, guild=None) -> CastContext:
    return CastContext(client=SimpleNamespace(), channel=channel, author=SimpleNamespace(id=1), guild=guild)


def test_guild_search_aborts_on_malformed_request() -> None:
    a = StubChannel(1, discord.ChannelType.voice, SimpleNamespace(id=1))
    b = StubChannel(2, discord.ChannelType.text, _not_found())
    c = StubChannel(3, discord.ChannelType.text, _malformed())
    d = StubChannel(4, discord.ChannelType.text, SimpleNamespace(id=int(MESSAGE_ID)))
    guild = SimpleNamespace(id=10, channels=[a, b, c, d])
    resolver, logger = _resolver()

    result = asyncio.run(resolver.cast(ArgumentType.GUILD_MESSAGE, _ctx(b, guild), MESSAGE_ID))

    assert result is None
    assert a.calls == []
    assert b.calls == [int(MESSAGE_ID)]
    assert c.calls == [int(MESSAGE_ID)]
    assert d.calls == []
    assert logger.events("message_search") == ["message_search.aborted"]


def test_guild_search_first_success_wins() -> None:
    found = SimpleNamespace(id=int(MESSAGE_ID))
    b = StubChannel(2, discord.ChannelType.text, discord.Forbidden(SimpleNamespace(status=403, reason="Forbidden"), "Missing Access"))
    c = StubChannel(3, discord.ChannelType.text, found)
    d = StubChannel(4, discord.ChannelType.text, SimpleNamespace(id=0))
    guild = SimpleNamespace(id=10, channels=[b, c, d])
    resolver, _ = _resolver()

    assert asyncio.run(resolver.cast(ArgumentType.GUILD_MESSAGE, _ctx(b, guild), MESSAGE_ID)) is found
    assert d.calls == []


def test_guild_search_exhausted_returns_none() -> None:
    b = StubChannel(2, discord.ChannelType.text)
    c = StubChannel(3, discord.ChannelType.news, SimpleNamespace(id=5))
    guild = SimpleNamespace(id=10, channels=[b, c])
    resolver, logger = _resolver()

    assert asyncio.run(resolver.cast(ArgumentType.GUILD_MESSAGE, _ctx(b, guild), MESSAGE_ID)) is None
    assert c.calls == []
    assert logger.events("message_search") == ["message_search.exhausted"]


def test_message_channel_kinds_are_configurable() -> None:
    found = SimpleNamespace(id=5)
    c = StubChannel(3, discord.ChannelType.news, found)
    guild = SimpleNamespace(id=10, channels=[c])
    resolver, _ = _resolver(message_channel_kinds=("text", "news"))

    assert asyncio.run(resolver.cast(ArgumentType.GUILD_MESSAGE, _ctx(c, guild), MESSAGE_ID)) is found


def test_guild_search_rejects_non_snowflake_without_fetching() -> None:
    b = StubChannel(2, discord.ChannelType.text)
    guild = SimpleNamespace(id=10, channels=[b])
    resolver, _ = _resolver()

    assert asyncio.run(resolver.cast(ArgumentType.GUILD_MESSAGE, _ctx(b, guild), "hello")) is None
    assert b.calls == []


def test_message_fetches_from_current_channel_only() -> None:
    found = SimpleNamespace(id=7)
    here = StubChannel(2, discord.ChannelType.text, found)
    resolver, _ = _resolver()
    assert asyncio.run(resolver.cast(ArgumentType.MESSAGE, _ctx(here), MESSAGE_ID)) is found

    missing = StubChannel(3, discord.ChannelType.text)
    assert asyncio.run(resolver.cast(ArgumentType.MESSAGE, _ctx(missing), MESSAGE_ID)) is None


def test_relevant_message_falls_back_to_guild_search() -> None:
    found = SimpleNamespace(id=8)
    here = StubChannel(2, discord.ChannelType.text)
    elsewhere = StubChannel(3, discord.ChannelType.text, found)
    guild = SimpleNamespace(id=10, channels=[here, elsewhere])
    resolver, _ = _resolver()

    assert asyncio.run(resolver.cast(ArgumentType.RELEVANT_MESSAGE, _ctx(here, guild), MESSAGE_ID)) is found
    assert len(here.calls) == 2


def test_relevant_message_without_guild_stops_after_direct_fetch() -> None:
    dm = StubChannel(2, discord.ChannelType.private)
    resolver, logger = _resolver()

    assert asyncio.run(resolver.cast(ArgumentType.RELEVANT_MESSAGE, _ctx(dm), MESSAGE_ID)) is None
    assert dm.calls == [int(MESSAGE_ID)]
    assert logger.events("message_search") == []


def test_invite_folds_http_errors_into_none() -> None:
    invite = SimpleNamespace(code="abc")

    async def fetch_invite(code: str):
        if code == "abc":
            return invite
        raise _not_found()

    ctx = CastContext(client=SimpleNamespace(fetch_invite=fetch_invite), channel=None, author=None)
    resolver, _ = _resolver()
    assert asyncio.run(resolver.cast(ArgumentType.INVITE, ctx, "abc")) is invite
    assert asyncio.run(resolver.cast(ArgumentType.INVITE, ctx, "nope")) is None


def test_guild_search_skips_channels_that_disconnect() -> None:
    found = SimpleNamespace(id=int(MESSAGE_ID))
    b = StubChannel(2, discord.ChannelType.text, _disconnected())
    c = StubChannel(3, discord.ChannelType.text, asyncio.TimeoutError())
    d = StubChannel(4, discord.ChannelType.text, found)
    guild = SimpleNamespace(id=10, channels=[b, c, d])
    resolver, logger = _resolver()

    assert asyncio.run(resolver.cast(ArgumentType.GUILD_MESSAGE, _ctx(b, guild), MESSAGE_ID)) is found
    assert b.calls == c.calls == d.calls == [int(MESSAGE_ID)]
    assert logger.events("message_search") == []


def test_message_and_invite_fold_disconnects_into_none() -> None:
    here = StubChannel(2, discord.ChannelType.text, _disconnected())
    resolver, _ = _resolver()
    assert asyncio.run(resolver.cast(ArgumentType.MESSAGE, _ctx(here), MESSAGE_ID)) is None

    async def fetch_invite(code: str):
        raise asyncio.TimeoutError()

    ctx = CastContext(client=SimpleNamespace(fetch_invite=fetch_invite), channel=None, author=None)
    assert asyncio.run(resolver.cast(ArgumentType.INVITE, ctx, "abc")) is None
