"""Reference bot built on the SDK — polling loop, command and callback handlers.

This package may import from ``core/``, ``sdk/`` and ``config`` only.
"""

from bot.callbacks import handle_callback_query
from bot.dispatcher import process_update, run
from bot.handlers import (
    handle_help,
    handle_hide,
    handle_menu,
    handle_start,
    handle_whoami,
)

__all__ = [
    # Dispatcher
    "run",
    "process_update",
    # Command handlers
    "handle_start",
    "handle_menu",
    "handle_whoami",
    "handle_hide",
    "handle_help",
    # Callback handlers
    "handle_callback_query",
]
