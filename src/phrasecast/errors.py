from __future__ import annotations


class PhrasecastError(Exception):
    pass


class UnknownArgumentType(PhrasecastError, LookupError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown argument type: {name!r}")
        self.name = name


class HandlerNotAttached(PhrasecastError, RuntimeError):
    """Raised when a module caster runs before its registry was attached."""

    def __init__(self, handler: str) -> None:
        super().__init__(f"The {handler} handler is not attached to this TypeResolver.")
        self.handler = handler
