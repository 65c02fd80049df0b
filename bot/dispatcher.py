"""Update dispatcher and main polling loop.

Routes each incoming update to a command handler in :mod:`bot.handlers` or to
:mod:`bot.callbacks`.  The loop is blocking and strictly sequential: one poll,
then every update of the batch in order, then the next poll.  Because the
client advances its offset only after a successful poll, a failed poll is
simply retried after :data:`config.IDLE_SECONDS` without losing updates.
"""

import time
from typing import Callable, Optional

from core.logger import CairnLogger
from sdk.client import CairnClient
from sdk.exceptions import CairnError
from sdk.models import Update
from bot.registry import registry
from bot.callbacks import handle_callback_query

# Import handlers module so @registry.register decorators execute.
import bot.handlers as _handlers  # noqa: F401

logger = CairnLogger.get_logger()


def _command_of(text: str) -> str:
    """``"/menu@my_bot extra"`` → ``"/menu"``; non-commands → ``""``."""
    if not text.startswith("/"):
        return ""
    return text.split()[0].split("@")[0]


def process_update(client: CairnClient, update: Update) -> None:
    """Dispatch a single update.

    API failures raised by a handler are logged and do not stop the loop;
    the update is not retried since its offset has already been consumed.
    """
    try:
        if update.callback_query:
            handle_callback_query(client, update.callback_query)
            return

        message = update.effective_message
        if message is None:
            logger.debug("Update has no message — skipping", extra={"update_id": update.update_id})
            return

        command = _command_of(message.text or "")
        if command and registry.dispatch(command, client, message):
            return
        logger.debug("No command matched", extra={"update_id": update.update_id, "chat_id": message.chat.id})
    except CairnError as exc:
        logger.error(
            "Handler failed",
            extra={"update_id": update.update_id, "error_kind": type(exc).__name__, "error": str(exc)},
        )


def run(
    client: CairnClient,
    idle_seconds: float = 5.0,
    max_polls: Optional[int] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Poll forever (or *max_polls* times) and dispatch every update.

    A failed poll is logged and retried after *idle_seconds*.
    """
    logger.info("Cairn bot is running. Polling for updates...", extra={"offset": client.offset})
    polls = 0
    while max_polls is None or polls < max_polls:
        polls += 1
        try:
            updates = client.get_updates()
        except CairnError as exc:
            logger.warning(
                "getUpdates failed, retrying",
                extra={"api_endpoint": "getUpdates", "error_kind": type(exc).__name__, "error": str(exc), "retry_in": idle_seconds},
            )
            sleep(idle_seconds)
            continue

        if updates:
            logger.debug("Received updates", extra={"count": len(updates), "offset": client.offset})
        for update in updates:
            process_update(client, update)
