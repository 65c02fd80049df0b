"""Tests for CairnClient and the exception hierarchy."""

import json
import sys
import os
from urllib.parse import parse_qs, urlparse
from unittest.mock import MagicMock

import pytest
import requests

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from sdk.client import CairnClient
from sdk.exceptions import (
    CairnError,
    DecodingError,
    EncodingError,
    ServiceRejectedError,
    TransportError,
    UnexpectedStatusError,
)
from sdk.keyboards import (
    inline_button_with_callback,
    inline_keyboard,
    keyboard_button,
    keyboard_row,
    reply_keyboard,
)
from sdk.models import Message, User
from sdk.transport import Transport, silent_logger

TOKEN = "123:ABC"

SENT_MESSAGE = {
    "ok": True,
    "result": {"message_id": 1, "date": 0, "chat": {"id": 42, "type": "private"}, "text": "hello"},
}


def _response(body, status: int = 200) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    resp.content = body if isinstance(body, bytes) else json.dumps(body).encode()
    return resp


def _client(*responses, **kwargs) -> tuple[CairnClient, MagicMock]:
    session = MagicMock()
    session.request.side_effect = list(responses)
    transport = Transport(session=session)
    return CairnClient(TOKEN, api_url="https://api.example.com", transport=transport, **kwargs), session


def _sent_payload(session: MagicMock) -> dict:
    return json.loads(session.request.call_args.kwargs["data"])


# ── Exceptions ───────────────────────────────────────────────────────────────


class TestExceptions:
    """Every error kind shares one base class."""

    @pytest.mark.parametrize(
        "cls",
        [EncodingError, TransportError, UnexpectedStatusError, DecodingError, ServiceRejectedError],
    )
    def test_hierarchy(self, cls) -> None:
        assert issubclass(cls, CairnError)
        assert issubclass(cls, Exception)

    def test_unexpected_status_attributes(self) -> None:
        exc = UnexpectedStatusError(429, '{"ok":false}')
        assert exc.status_code == 429
        assert exc.body == '{"ok":false}'
        assert "429" in str(exc)

    def test_service_rejected_default(self) -> None:
        exc = ServiceRejectedError()
        assert exc.description is None
        assert "no description" in str(exc)


# ── Construction ─────────────────────────────────────────────────────────────


class TestClientInit:
    """Validate client initialisation."""

    def test_base_url_embeds_token(self) -> None:
        c = CairnClient(TOKEN)
        assert c.base_url == "https://api.telegram.org/bot123:ABC"

    def test_api_url_strip(self) -> None:
        c = CairnClient(TOKEN, api_url="https://api.example.com/")
        assert c.base_url == "https://api.example.com/bot123:ABC"

    def test_empty_token_rejected(self) -> None:
        with pytest.raises(ValueError):
            CairnClient("")

    def test_initial_offset(self) -> None:
        assert CairnClient(TOKEN).offset == 0
        assert CairnClient(TOKEN, offset=55).offset == 55

    def test_logging_disabled_by_default(self) -> None:
        c = CairnClient(TOKEN)
        assert c._logger is silent_logger()
        assert c._transport.logger is silent_logger()

    def test_injected_logger_when_enabled(self) -> None:
        logger = MagicMock()
        c = CairnClient(TOKEN, log_enabled=True, logger=logger)
        assert c._transport.logger is logger

    def test_injected_logger_ignored_when_disabled(self) -> None:
        c = CairnClient(TOKEN, log_enabled=False, logger=MagicMock())
        assert c._transport.logger is silent_logger()

    def test_injected_transport_keeps_own_logger(self) -> None:
        logger = MagicMock()
        transport = Transport(session=MagicMock())
        c = CairnClient(TOKEN, log_enabled=True, logger=logger, transport=transport)
        assert c._transport.logger is silent_logger()
        assert c._logger is logger


# ── Outbound commands ────────────────────────────────────────────────────────


class TestSendMethods:
    """Each send is one POST to sendMessage with the right body."""

    def test_send_message(self) -> None:
        c, session = _client(_response(SENT_MESSAGE))
        message = c.send_message(42, "hello")

        assert isinstance(message, Message)
        assert message.message_id == 1
        args = session.request.call_args.args
        assert args == ("POST", "https://api.example.com/bot123:ABC/sendMessage")
        assert _sent_payload(session) == {
            "chat_id": 42,
            "text": "hello",
            "reply_markup": {"remove_keyboard": True},
        }

    def test_send_message_to_channel(self) -> None:
        c, session = _client(_response(SENT_MESSAGE))
        c.send_message_to_channel("@news", "hello")
        assert _sent_payload(session) == {"chat_id": "@news", "text": "hello"}

    def test_send_markup(self) -> None:
        c, session = _client(_response(SENT_MESSAGE))
        c.send_markup(42, "pick", reply_keyboard(keyboard_row(keyboard_button("A"))))
        assert _sent_payload(session)["reply_markup"] == {
            "keyboard": [[{"text": "A"}]],
            "resize_keyboard": True,
        }

    def test_send_inline_keyboard(self) -> None:
        c, session = _client(_response(SENT_MESSAGE))
        c.send_inline_keyboard(42, "menu", inline_keyboard([inline_button_with_callback("Go", "go")]))
        assert _sent_payload(session)["reply_markup"] == {
            "inline_keyboard": [[{"text": "Go", "callback_data": "go"}]],
        }

    def test_send_rejected(self) -> None:
        c, _ = _client(_response({"ok": False, "error_code": 403, "description": "Forbidden: bot was blocked by the user"}))
        with pytest.raises(ServiceRejectedError) as exc_info:
            c.send_message(42, "hello")
        assert exc_info.value.error_code == 403

    def test_send_bad_status(self) -> None:
        c, _ = _client(_response(b'{"ok":false}', status=400))
        with pytest.raises(UnexpectedStatusError) as exc_info:
            c.send_message(42, "hello")
        assert exc_info.value.status_code == 400

    def test_send_network_error(self) -> None:
        c, _ = _client(requests.ConnectionError("offline"))
        with pytest.raises(TransportError):
            c.send_message(42, "hello")


# ── Reads ────────────────────────────────────────────────────────────────────


class TestReadMethods:
    """GET endpoints and the update poller."""

    def test_get_user_info_projects_chat(self) -> None:
        c, session = _client(_response({
            "ok": True,
            "result": {"id": 42, "type": "private", "first_name": "Ada", "last_name": "Lovelace", "username": "ada", "bio": "…"},
        }))
        user = c.get_user_info(42)

        assert user == User(id=42, first_name="Ada", last_name="Lovelace", username="ada")
        method, url = session.request.call_args.args
        assert method == "GET"
        parsed = urlparse(url)
        assert parsed.path == "/bot123:ABC/getChat"
        assert parse_qs(parsed.query) == {"chat_id": ["42"]}

    def test_get_user_info_for_group(self) -> None:
        c, _ = _client(_response({"ok": True, "result": {"id": -100, "type": "group", "title": "Team"}}))
        user = c.get_user_info(-100)
        assert user.id == -100
        assert user.first_name == ""

    def test_get_me(self) -> None:
        c, session = _client(_response({"ok": True, "result": {"id": 1, "is_bot": True, "first_name": "Bot", "username": "cairn_bot"}}))
        me = c.get_me()
        assert me.is_bot is True
        assert me.username == "cairn_bot"
        assert session.request.call_args.args[1].endswith("/bot123:ABC/getMe")

    def test_get_updates_advances_offset(self) -> None:
        c, session = _client(
            _response({"ok": True, "result": [{"update_id": 5}, {"update_id": 6}, {"update_id": 9}]}),
            _response({"ok": True, "result": []}),
        )
        updates = c.get_updates()
        assert [u.update_id for u in updates] == [5, 6, 9]
        assert c.offset == 10

        assert c.get_updates() == []
        assert c.offset == 10
        assert "offset=10" in session.request.call_args.args[1]

    def test_get_updates_failure_keeps_offset(self) -> None:
        c, _ = _client(_response(b"not json"), offset=3)
        with pytest.raises(DecodingError):
            c.get_updates()
        assert c.offset == 3

    def test_get_updates_logs_through_client_logger(self) -> None:
        logger = MagicMock()
        c, _ = _client(
            _response({"ok": True, "result": [{"update_id": 4}]}),
            log_enabled=True,
            logger=logger,
        )
        c.get_updates()
        messages = [call.args[0] for call in logger.info.call_args_list]
        assert "Fetched updates" in messages

    def test_limit_and_allowed_updates_in_query(self) -> None:
        c, session = _client(
            _response({"ok": True, "result": []}),
            limit=5,
            allowed_updates=["message", "callback_query"],
        )
        c.get_updates()
        query = parse_qs(urlparse(session.request.call_args.args[1]).query)
        assert query["limit"] == ["5"]
        assert json.loads(query["allowed_updates"][0]) == ["message", "callback_query"]
