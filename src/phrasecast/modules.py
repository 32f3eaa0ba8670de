from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from discord.ext import commands


class ModuleHandler(Protocol):
    @property
    def modules(self) -> Mapping[str, Any]: ...


class CommandHandler(ModuleHandler, Protocol):
    def find_command(self, name: str) -> Optional[Any]: ...


class ModuleRegistry:
    """Exact-key store of loaded modules (commands, inhibitors or listeners)."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self._modules: dict[str, Any] = {}
        self._aliases: dict[str, str] = {}

    @property
    def modules(self) -> Mapping[str, Any]:
        return self._modules

    def register(self, module_id: str, module: Any, aliases: tuple[str, ...] = ()) -> Any:
        if module_id in self._modules:
            raise ValueError(f"{self.kind} {module_id!r} is already registered.")
        self._modules[module_id] = module
        for alias in (module_id, *aliases):
            conflict = self._aliases.get(alias.lower())
            if conflict is not None and conflict != module_id:
                del self._modules[module_id]
                raise ValueError(f"Alias {alias!r} is already used by {self.kind} {conflict!r}.")
        for alias in (module_id, *aliases):
            self._aliases[alias.lower()] = module_id
        return module

    def remove(self, module_id: str) -> Optional[Any]:
        module = self._modules.pop(module_id, None)
        if module is not None:
            self._aliases = {alias: mid for alias, mid in self._aliases.items() if mid != module_id}
        return module

    def get(self, module_id: str) -> Optional[Any]:
        return self._modules.get(module_id)

    def find_command(self, name: str) -> Optional[Any]:
        module_id = self._aliases.get(name.lower())
        return self._modules.get(module_id) if module_id is not None else None

    def __len__(self) -> int:
        return len(self._modules)


class BotCommandRegistry:
    """Expose a discord.ext.commands bot's commands as a command handler."""

    def __init__(self, bot: commands.Bot) -> None:
        self.bot = bot

    @property
    def modules(self) -> Mapping[str, commands.Command]:
        return {command.qualified_name: command for command in self.bot.walk_commands()}

    def find_command(self, name: str) -> Optional[commands.Command]:
        return self.bot.get_command(name)
