from __future__ import annotations

import asyncio
from types import SimpleNamespace

import pytest

from phrasecast.config import Settings
from phrasecast.errors import UnknownArgumentType
from phrasecast.services.logger_service import LoggerService
from phrasecast.type_resolver import TypeResolver
from phrasecast.types import ArgumentType


CTX = SimpleNamespace()


def _resolver() -> TypeResolver:
    return TypeResolver(settings=Settings(log_echo=False), logger=LoggerService(echo=False))


def test_every_builtin_type_is_registered() -> None:
    resolver = _resolver()
    for name in ArgumentType:
        assert name in resolver
        assert resolver.lookup(name.value) is resolver.lookup(name)
    assert len(resolver.names()) == len(ArgumentType)


def test_every_builtin_returns_none_for_empty_phrase() -> None:
    resolver = _resolver()
    for name in resolver.names():
        assert asyncio.run(resolver.cast(name, CTX, "")) is None, name


def test_register_type_replaces_existing_caster() -> None:
    resolver = _resolver()
    original = resolver.lookup("integer")

    def doubled(ctx, phrase):
        return int(phrase) * 2

    returned = resolver.register_type("integer", doubled)

    assert returned is resolver
    assert resolver.lookup("integer") is doubled
    assert resolver.lookup("integer") is not original
    assert asyncio.run(resolver.cast(ArgumentType.INTEGER, CTX, "21")) == 42
    assert resolver.logger.events("caster.") == ["caster.replaced"]


def test_register_types_applies_in_order_and_chains() -> None:
    resolver = _resolver()
    first = lambda ctx, phrase: "first"  # noqa: E731
    second = lambda ctx, phrase: "second"  # noqa: E731

    returned = resolver.register_types({"custom": first, "other": first}).register_type("custom", second)

    assert returned is resolver
    assert resolver.lookup("custom") is second
    assert resolver.lookup("other") is first
    assert resolver.logger.events("caster.") == ["caster.registered", "caster.registered", "caster.replaced"]


def test_cast_awaits_async_casters() -> None:
    resolver = _resolver()

    async def slow_upper(ctx, phrase):
        await asyncio.sleep(0)
        return phrase.upper() if phrase else None

    resolver.register_type("shout", slow_upper)
    assert asyncio.run(resolver.cast("shout", CTX, "hey")) == "HEY"
    assert asyncio.run(resolver.cast("lowercase", CTX, "HEY")) == "hey"


def test_lookup_of_unknown_type_is_absent() -> None:
    resolver = _resolver()
    assert resolver.lookup("nope") is None
    assert resolver.type("nope") is None
    with pytest.raises(UnknownArgumentType):
        asyncio.run(resolver.cast("nope", CTX, "x"))
