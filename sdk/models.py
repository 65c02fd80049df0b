"""Pydantic data models for the subset of the Telegram Bot API Cairn speaks.

Inbound models (``Update``, ``Message``, ``Chat``…) tolerate unknown fields so
new API additions never break decoding.  Outbound models (keyboards) are
dumped with ``exclude_none=True`` before they reach the wire.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class User(BaseModel):
    """This object represents a Telegram user or bot."""

    id: int
    first_name: str = ""
    last_name: Optional[str] = None
    username: Optional[str] = None
    is_bot: Optional[bool] = None
    language_code: Optional[str] = None

    model_config = {"populate_by_name": True, "extra": "ignore"}


class Chat(BaseModel):
    """This object represents a chat."""

    id: int
    type: str
    title: Optional[str] = None
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    bio: Optional[str] = None
    description: Optional[str] = None

    model_config = {"populate_by_name": True, "extra": "ignore"}

    def as_user(self) -> User:
        """Project the chat onto a :class:`User` (id and name fields only)."""
        return User(
            id=self.id,
            first_name=self.first_name or "",
            last_name=self.last_name,
            username=self.username,
        )


class MessageEntity(BaseModel):
    """This object represents one special entity in a text message. For example, hashtags, usernames, URLs, etc."""

    type: str
    offset: int
    length: int
    url: Optional[str] = None

    model_config = {"populate_by_name": True, "extra": "ignore"}


class Message(BaseModel):
    """This object represents a message."""

    message_id: int
    date: int
    chat: Chat
    from_field: Optional[User] = Field(None, alias="from")
    sender_chat: Optional[Chat] = None
    text: Optional[str] = None
    entities: Optional[List[MessageEntity]] = None
    reply_markup: Optional[InlineKeyboardMarkup] = None

    model_config = {"populate_by_name": True, "extra": "ignore"}


class CallbackQuery(BaseModel):
    """An incoming callback query from a callback button in an inline keyboard."""

    id: str
    from_field: User = Field(..., alias="from")
    chat_instance: Optional[str] = None
    message: Optional[Message] = None
    inline_message_id: Optional[str] = None
    data: Optional[str] = None

    model_config = {"populate_by_name": True, "extra": "ignore"}


class Update(BaseModel):
    """An incoming update. At most **one** of the optional fields is present in any given update."""

    update_id: int
    message: Optional[Message] = None
    edited_message: Optional[Message] = None
    channel_post: Optional[Message] = None
    edited_channel_post: Optional[Message] = None
    callback_query: Optional[CallbackQuery] = None

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @property
    def effective_message(self) -> Optional[Message]:
        """Return whichever message-like body this update carries, if any."""
        return (
            self.message
            or self.edited_message
            or self.channel_post
            or self.edited_channel_post
        )


# ── Keyboards ────────────────────────────────────────────────────────────────


class KeyboardButton(BaseModel):
    """One button of the reply keyboard."""

    text: str

    model_config = {"populate_by_name": True}


class ReplyKeyboardMarkup(BaseModel):
    """A custom keyboard replacing the user's normal input for the whole chat."""

    keyboard: List[List[KeyboardButton]]
    resize_keyboard: Optional[bool] = None
    one_time_keyboard: Optional[bool] = None

    model_config = {"populate_by_name": True}


class ReplyKeyboardRemove(BaseModel):
    """Tells clients to remove the current custom keyboard and show the default one."""

    remove_keyboard: bool = True

    model_config = {"populate_by_name": True}


class InlineKeyboardButton(BaseModel):
    """One button of an inline keyboard."""

    text: str
    callback_data: Optional[str] = None
    url: Optional[str] = None

    model_config = {"populate_by_name": True}


class InlineKeyboardMarkup(BaseModel):
    """An inline keyboard that appears right next to the message it belongs to."""

    inline_keyboard: List[List[InlineKeyboardButton]]

    model_config = {"populate_by_name": True}


Message.model_rebuild()
CallbackQuery.model_rebuild()
Update.model_rebuild()
