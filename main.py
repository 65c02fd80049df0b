"""Entry point — build a :class:`~sdk.client.CairnClient` from :mod:`config` and run the bot."""

from config import (
    API_URL,
    BOT_TOKEN,
    IDLE_SECONDS,
    LOG_ENABLED,
    POLL_TIMEOUT,
    REQUEST_TIMEOUT,
    logger,
)
from sdk.client import CairnClient
from bot.dispatcher import run


def build_client() -> CairnClient:
    """Create the client described by the environment.

    Raises:
        EnvironmentError: If ``BOT_TOKEN`` is not set.
    """
    if not BOT_TOKEN:
        raise EnvironmentError("BOT_TOKEN environment variable is not set or is empty.")
    return CairnClient(
        BOT_TOKEN,
        api_url=API_URL,
        timeout=REQUEST_TIMEOUT,
        poll_timeout=POLL_TIMEOUT,
        log_enabled=LOG_ENABLED,
    )


def main() -> None:
    client = build_client()
    me = client.get_me()
    logger.info("Authorised", extra={"bot_id": me.id, "bot_username": me.username})
    try:
        run(client, idle_seconds=IDLE_SECONDS)
    except KeyboardInterrupt:
        logger.info("Stopped by user", extra={"offset": client.offset})


if __name__ == "__main__":
    main()
