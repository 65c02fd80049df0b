"""Command registry — single source of truth for command → handler mapping.

Handlers are registered with a decorator in ``handlers.py``; the dispatcher
and the callback handler both go through :meth:`CommandRegistry.dispatch`,
and ``/help`` renders :meth:`CommandRegistry.entries`.
"""

from __future__ import annotations

import dataclasses
from typing import Callable, Protocol, runtime_checkable

from sdk.client import CairnClient
from sdk.models import Message


@runtime_checkable
class CommandHandler(Protocol):
    """Handler invoked with the client and the message that carried the command."""
    def __call__(self, client: CairnClient, message: Message) -> None: ...  # noqa: E704


@dataclasses.dataclass(frozen=True, slots=True)
class CommandEntry:
    """Metadata for a single registered slash-command."""
    command: str              # e.g. "/menu"
    description: str          # shown in /help
    handler: CommandHandler


class CommandRegistry:
    """Singleton command registry.

    Usage::

        @registry.register("/ping", description="Ping")
        def handle_ping(client, message): ...

        registry.dispatch("/ping", client, message)
    """

    _instance: CommandRegistry | None = None
    _entries: dict[str, CommandEntry]

    def __new__(cls) -> CommandRegistry:
        if cls._instance is None:
            inst = super().__new__(cls)
            inst._entries = {}
            cls._instance = inst
        return cls._instance

    def register(self, command: str, *, description: str) -> Callable[[CommandHandler], CommandHandler]:
        """Decorator that registers the decorated function for *command*."""
        def decorator(func: CommandHandler) -> CommandHandler:
            self._entries[command] = CommandEntry(command=command, description=description, handler=func)
            return func
        return decorator

    def get(self, command: str) -> CommandEntry | None:
        return self._entries.get(command)

    def entries(self) -> dict[str, CommandEntry]:
        """Return a copy of all registered commands, in registration order."""
        return dict(self._entries)

    def dispatch(self, command: str, client: CairnClient, message: Message) -> bool:
        """Look up *command* and invoke its handler.

        Returns ``True`` if a handler was found and called, ``False`` otherwise.
        """
        entry = self.get(command)
        if entry is None:
            return False
        entry.handler(client, message)
        return True


# Module-level singleton — import this everywhere.
registry = CommandRegistry()
