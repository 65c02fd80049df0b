"""Slash-command handlers for the reference bot.

Each handler is registered with :data:`bot.registry.registry` and exercises
one of the client's outbound commands.
"""

from core.logger import CairnLogger
from sdk.client import CairnClient
from sdk.keyboards import (
    inline_button_with_callback,
    inline_keyboard,
    inline_keyboard_row,
    keyboard_button,
    keyboard_row,
    reply_keyboard,
)
from sdk.models import Message
from bot.registry import registry

logger = CairnLogger.get_logger()

# Callback tokens carried by the /menu inline buttons.
CALLBACK_PING = "menu:ping"
CALLBACK_WHOAMI = "menu:whoami"


@registry.register("/start", description="Show the command keyboard")
def handle_start(client: CairnClient, message: Message) -> None:
    """Reply with a resized reply keyboard holding the main commands."""
    markup = reply_keyboard(
        keyboard_row(keyboard_button("/menu"), keyboard_button("/whoami")),
        keyboard_row(keyboard_button("/help"), keyboard_button("/hide")),
    )
    client.send_markup(message.chat.id, "👋 Pick a command below.", markup)
    logger.info("Sent start keyboard", extra={"chat_id": message.chat.id})


@registry.register("/menu", description="Show an inline menu")
def handle_menu(client: CairnClient, message: Message) -> None:
    markup = inline_keyboard(
        inline_keyboard_row(
            inline_button_with_callback("🏓 Ping", CALLBACK_PING),
            inline_button_with_callback("🪪 Who am I?", CALLBACK_WHOAMI),
        ),
    )
    client.send_inline_keyboard(message.chat.id, "📋 Menu:", markup)


@registry.register("/whoami", description="Show what the API knows about this chat")
def handle_whoami(client: CairnClient, message: Message) -> None:
    """Look the chat up with ``getChat`` and echo the user fields back."""
    user = client.get_user_info(message.chat.id)
    full_name = " ".join(part for part in (user.first_name, user.last_name) if part) or "—"
    username = f"@{user.username}" if user.username else "—"
    client.send_message(
        message.chat.id,
        f"🪪 Chat info:\n"
        f"• ID: {user.id}\n"
        f"• Name: {full_name}\n"
        f"• Username: {username}",
    )


@registry.register("/hide", description="Hide the command keyboard")
def handle_hide(client: CairnClient, message: Message) -> None:
    client.send_message(message.chat.id, "⌨️ Keyboard hidden. Use /start to bring it back.")


@registry.register("/help", description="List available commands")
def handle_help(client: CairnClient, message: Message) -> None:
    lines = [f"{entry.command} — {entry.description}" for entry in registry.entries().values()]
    client.send_message(message.chat.id, "📖 Available commands:\n" + "\n".join(lines))
