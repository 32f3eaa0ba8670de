from __future__ import annotations

import inspect
from typing import Any, Callable, Mapping, Optional

from phrasecast.casters.entities import build_entity_casters
from phrasecast.casters.mentions import MentionGrammar, build_mention_casters
from phrasecast.casters.messages import build_message_casters
from phrasecast.casters.modules import build_module_casters
from phrasecast.casters.scalar import SCALAR_CASTERS
from phrasecast.config import Settings
from phrasecast.context import CastContext
from phrasecast.errors import UnknownArgumentType
from phrasecast.modules import CommandHandler, ModuleHandler, ModuleRegistry
from phrasecast.resolver import ClientUtil
from phrasecast.services.logger_service import LoggerService


Caster = Callable[[CastContext, str], Any]


class TypeResolver:
    """
    Registry of argument type casters, keyed by type name.

    Built-in casters are registered on construction. Registering a name that is
    already present replaces the previous caster.
    """

    def __init__(
        self,
        command_handler: Optional[CommandHandler] = None,
        *,
        settings: Optional[Settings] = None,
        logger: Optional[LoggerService] = None,
        oracle: Optional[ClientUtil] = None,
    ) -> None:
        self.settings = settings or Settings()
        self.logger = logger or LoggerService(max_rows=self.settings.log_max_rows, echo=self.settings.log_echo)
        self.oracle = oracle or ClientUtil(
            case_sensitive=self.settings.case_sensitive,
            whole_word=self.settings.whole_word,
        )
        if command_handler is None:
            command_handler = ModuleRegistry("command")
        self.command_handler: CommandHandler = command_handler
        self.inhibitor_handler: Optional[ModuleHandler] = None
        self.listener_handler: Optional[ModuleHandler] = None
        self.types: dict[str, Caster] = {}
        self.add_builtin_types()

    def add_builtin_types(self) -> None:
        builtins: dict[str, Caster] = {}
        builtins.update(SCALAR_CASTERS)
        builtins.update(build_entity_casters(self.oracle))
        builtins.update(build_message_casters(self.settings, self.logger))
        builtins.update(build_mention_casters(MentionGrammar.from_settings(self.settings)))
        builtins.update(build_module_casters(self))
        for name, fn in builtins.items():
            self.types[str(name)] = fn

    def lookup(self, name: str) -> Optional[Caster]:
        return self.types.get(str(name))

    type = lookup

    def register_type(self, name: str, fn: Caster) -> "TypeResolver":
        key = str(name)
        event = "caster.replaced" if key in self.types else "caster.registered"
        self.types[key] = fn
        self.logger.log(event, name=key)
        return self

    def register_types(self, types: Mapping[str, Caster]) -> "TypeResolver":
        for name, fn in types.items():
            self.register_type(name, fn)
        return self

    def attach_inhibitor_handler(self, handler: ModuleHandler) -> "TypeResolver":
        self.inhibitor_handler = handler
        self.logger.log("handler.attached", handler="inhibitor")
        return self

    def attach_listener_handler(self, handler: ModuleHandler) -> "TypeResolver":
        self.listener_handler = handler
        self.logger.log("handler.attached", handler="listener")
        return self

    def names(self) -> list[str]:
        return list(self.types)

    def __contains__(self, name: object) -> bool:
        return str(name) in self.types

    async def cast(self, name: str, ctx: CastContext, phrase: str) -> Any:
        """Run the caster for `name`, awaiting it when it is a coroutine."""
        caster = self.lookup(name)
        if caster is None:
            raise UnknownArgumentType(str(name))
        result = caster(ctx, phrase)
        if inspect.isawaitable(result):
            result = await result
        return result
