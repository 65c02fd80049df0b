"""Callback-query handlers for the /menu inline keyboard."""

from core.logger import CairnLogger
from sdk.client import CairnClient
from sdk.models import CallbackQuery
from bot.handlers import CALLBACK_PING, CALLBACK_WHOAMI, handle_whoami

logger = CairnLogger.get_logger()


def handle_callback_query(client: CairnClient, callback_query: CallbackQuery) -> None:
    """Dispatch a button press from the /menu keyboard.

    Queries whose originating message is no longer available (too old, or
    sent from an inline result) cannot be answered in-chat and are skipped.
    """
    data = callback_query.data or ""
    message = callback_query.message
    user_id = callback_query.from_field.id

    if message is None:
        logger.warning("Callback query without message, skipping", extra={"user_id": user_id, "callback_data": data})
        return

    logger.info("Callback query", extra={"user_id": user_id, "chat_id": message.chat.id, "callback_data": data})

    if data == CALLBACK_PING:
        client.send_message(message.chat.id, "🏓 Pong!")
    elif data == CALLBACK_WHOAMI:
        handle_whoami(client, message)
    else:
        logger.debug("Unknown callback data", extra={"user_id": user_id, "callback_data": data})
