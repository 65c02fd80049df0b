"""CairnClient -- service layer over the Telegram Bot API endpoints Cairn uses.

Every public method is one blocking request: payloads come from
:mod:`sdk.keyboards`, go out through :class:`~sdk.transport.Transport`, and
come back through :func:`~sdk.envelope.decode` as pydantic models.  Failures
are raised as :class:`~sdk.exceptions.CairnError` subclasses; nothing is
retried.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Union
from urllib.parse import urlencode

from sdk import keyboards
from sdk.cursor import CursorStore
from sdk.envelope import decode
from sdk.models import (
    Chat,
    InlineKeyboardMarkup,
    Message,
    ReplyKeyboardMarkup,
    Update,
    User,
)
from sdk.poller import UpdatePoller
from sdk.transport import Transport, silent_logger

DEFAULT_API_URL = "https://api.telegram.org"


class CairnClient:
    """Client-side service layer for the Telegram Bot API.

    The token and base URL are fixed for the lifetime of the client; the
    polling offset moves forward on every successful non-empty poll.  Poll
    from one thread at a time.

    Args:
        token: Bot token issued by @BotFather.  Embedded in the URL path.
        api_url: API root, without the ``/bot<token>`` suffix.
        timeout: Per-request timeout in seconds.
        poll_timeout: Long-poll timeout passed to ``getUpdates``.
        log_enabled: When false the client logs nothing at all.
        logger: Logger used when logging is enabled; defaults to
            ``cairn.sdk``, which propagates to the :class:`~core.logger.CairnLogger`
            handlers once they are set up.
        offset: Initial polling offset.
        allowed_updates: Update kinds to request from ``getUpdates``.
        limit: Maximum number of updates per poll (1-100).
        transport: Pre-built transport, mainly for tests.  An injected
            transport keeps its own logger for request and response records;
            ``log_enabled`` and ``logger`` still govern the records the
            client and its poller emit.
    """

    _DEFAULT_TIMEOUT: float = 10.0

    def __init__(
        self,
        token: str,
        *,
        api_url: str = DEFAULT_API_URL,
        timeout: float = _DEFAULT_TIMEOUT,
        poll_timeout: int = 0,
        log_enabled: bool = False,
        logger: Optional[logging.Logger] = None,
        offset: int = 0,
        allowed_updates: Optional[Sequence[str]] = None,
        limit: Optional[int] = None,
        transport: Optional[Transport] = None,
    ) -> None:
        if not token:
            raise ValueError("bot token must not be empty")

        self._token = token
        self._base_url = f"{api_url.rstrip('/')}/bot{token}"
        if log_enabled:
            self._logger = logger if logger is not None else logging.getLogger("cairn.sdk")
        else:
            self._logger = silent_logger()
        self._transport = transport if transport is not None else Transport(timeout=timeout, logger=self._logger)
        self._poller = UpdatePoller(
            self._transport,
            self._base_url,
            cursor=CursorStore(offset),
            poll_timeout=poll_timeout,
            limit=limit,
            allowed_updates=allowed_updates,
            logger=self._logger,
        )

    # ------------------------------------------------------------------
    #  Internal helpers
    # ------------------------------------------------------------------

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def offset(self) -> int:
        """Lowest update id not yet retrieved."""
        return self._poller.cursor.current()

    def _url(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> str:
        url = f"{self._base_url}/{endpoint.lstrip('/')}"
        if params:
            url = f"{url}?{urlencode(params)}"
        return url

    def _get(self, endpoint: str, result_type: Any, params: Optional[Dict[str, Any]] = None) -> Any:
        raw = self._transport.execute("GET", self._url(endpoint, params))
        return decode(raw, result_type, logger=self._logger)

    def _post(self, endpoint: str, payload: Dict[str, Any], result_type: Any) -> Any:
        raw = self._transport.execute("POST", self._url(endpoint), payload)
        return decode(raw, result_type, logger=self._logger)

    # ------------------------------------------------------------------
    #  Outbound commands
    # ------------------------------------------------------------------

    def send_message(self, chat_id: int, text: str) -> Message:
        """Send a text message and remove any reply keyboard shown in the chat."""
        message = self._post("sendMessage", keyboards.plain_message(chat_id, text), Message)
        self._logger.info("Message sent", extra={"chat_id": chat_id, "api_endpoint": "sendMessage"})
        return message

    def send_message_to_channel(self, channel_id: Union[int, str], text: str) -> Message:
        """Send a text message to a channel (``@channelusername`` or numeric id)."""
        message = self._post("sendMessage", keyboards.channel_message(channel_id, text), Message)
        self._logger.info("Message sent", extra={"chat_id": channel_id, "api_endpoint": "sendMessage"})
        return message

    def send_markup(self, chat_id: int, text: str, reply_markup: ReplyKeyboardMarkup) -> Message:
        """Send a text message with a custom reply keyboard."""
        payload = keyboards.message_with_reply_keyboard(chat_id, text, reply_markup)
        message = self._post("sendMessage", payload, Message)
        self._logger.info("Message with reply keyboard sent", extra={"chat_id": chat_id, "api_endpoint": "sendMessage"})
        return message

    def send_inline_keyboard(self, chat_id: int, text: str, reply_markup: InlineKeyboardMarkup) -> Message:
        """Send a text message with an inline keyboard attached."""
        payload = keyboards.message_with_inline_keyboard(chat_id, text, reply_markup)
        message = self._post("sendMessage", payload, Message)
        self._logger.info("Message with inline keyboard sent", extra={"chat_id": chat_id, "api_endpoint": "sendMessage"})
        return message

    # ------------------------------------------------------------------
    #  Reads
    # ------------------------------------------------------------------

    def get_updates(self) -> List[Update]:
        """Return the updates received since the previous successful call."""
        return self._poller.poll()

    def get_user_info(self, chat_id: int) -> User:
        """Look up *chat_id* with ``getChat`` and return its user fields."""
        chat: Chat = self._get("getChat", Chat, {"chat_id": chat_id})
        user = chat.as_user()
        self._logger.info("Fetched user info", extra={"chat_id": chat_id, "api_endpoint": "getChat", "user": user.model_dump()})
        return user

    def get_me(self) -> User:
        """Return the bot's own account. Handy for checking the token."""
        return self._get("getMe", User)
