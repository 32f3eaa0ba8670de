from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

from phrasecast.context import CastContext
from phrasecast.errors import HandlerNotAttached
from phrasecast.types import ArgumentType

if TYPE_CHECKING:
    from phrasecast.type_resolver import TypeResolver


Caster = Callable[[CastContext, str], Any]


def build_module_casters(resolver: "TypeResolver") -> dict[str, Caster]:
    # Handlers are read at call time so late attachment is picked up.

    def command_alias(ctx: CastContext, phrase: str) -> Any:
        if not phrase:
            return None
        return resolver.command_handler.find_command(phrase) or None

    def command(ctx: CastContext, phrase: str) -> Any:
        if not phrase:
            return None
        return resolver.command_handler.modules.get(phrase) or None

    def inhibitor(ctx: CastContext, phrase: str) -> Any:
        if not phrase:
            return None
        if resolver.inhibitor_handler is None:
            raise HandlerNotAttached("inhibitor")
        return resolver.inhibitor_handler.modules.get(phrase) or None

    def listener(ctx: CastContext, phrase: str) -> Any:
        if not phrase:
            return None
        if resolver.listener_handler is None:
            raise HandlerNotAttached("listener")
        return resolver.listener_handler.modules.get(phrase) or None

    return {
        ArgumentType.COMMAND_ALIAS: command_alias,
        ArgumentType.COMMAND: command,
        ArgumentType.INHIBITOR: inhibitor,
        ArgumentType.LISTENER: listener,
    }
