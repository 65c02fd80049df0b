"""Payload builders for ``sendMessage`` and its keyboards.

Pure functions only; nothing here touches the network.  Rows and grids are
not validated, so empty ones pass straight through to the API.
"""

from __future__ import annotations

from typing import Any, Dict, List, Union

from sdk.models import (
    InlineKeyboardButton,
    InlineKeyboardMarkup,
    KeyboardButton,
    ReplyKeyboardMarkup,
    ReplyKeyboardRemove,
)

ChatId = Union[int, str]


# ── Buttons, rows, grids ─────────────────────────────────────────────────────


def keyboard_button(text: str) -> KeyboardButton:
    return KeyboardButton(text=text)


def inline_button_with_callback(label: str, data: str) -> InlineKeyboardButton:
    """Inline button that sends *data* back as a callback query when tapped."""
    return InlineKeyboardButton(text=label, callback_data=data)


def keyboard_row(*buttons: Any) -> List[Any]:
    return list(buttons)


def inline_keyboard_row(*buttons: InlineKeyboardButton) -> List[InlineKeyboardButton]:
    return list(buttons)


def keyboard_grid(*rows: List[Any]) -> List[List[Any]]:
    return [list(row) for row in rows]


def reply_keyboard(*rows: List[KeyboardButton], resize: bool = True) -> ReplyKeyboardMarkup:
    """Reply keyboard from *rows*; resized to fit its buttons by default."""
    return ReplyKeyboardMarkup(keyboard=keyboard_grid(*rows), resize_keyboard=resize)


def inline_keyboard(*rows: List[InlineKeyboardButton]) -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(inline_keyboard=keyboard_grid(*rows))


# ── Message payloads ─────────────────────────────────────────────────────────


def plain_message(chat_id: ChatId, text: str) -> Dict[str, Any]:
    """Text message that also clears any reply keyboard left in the chat."""
    return {
        "chat_id": chat_id,
        "text": text,
        "reply_markup": ReplyKeyboardRemove(remove_keyboard=True).model_dump(exclude_none=True),
    }


def channel_message(channel_id: ChatId, text: str) -> Dict[str, Any]:
    """Text message for a channel; channels have no keyboards to clear."""
    return {"chat_id": channel_id, "text": text}


def message_with_reply_keyboard(chat_id: ChatId, text: str, keyboard: ReplyKeyboardMarkup) -> Dict[str, Any]:
    return {
        "chat_id": chat_id,
        "text": text,
        "reply_markup": keyboard.model_dump(exclude_none=True),
    }


def message_with_inline_keyboard(chat_id: ChatId, text: str, keyboard: InlineKeyboardMarkup) -> Dict[str, Any]:
    return {
        "chat_id": chat_id,
        "text": text,
        "reply_markup": keyboard.model_dump(exclude_none=True),
    }
