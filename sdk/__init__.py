"""Telegram Bot API client SDK — transport, envelope decoding, update polling.

The :class:`CairnClient` class wraps the endpoints Cairn needs with
synchronous methods.  Lower-level pieces (:class:`Transport`,
:func:`decode`, :class:`CursorStore`, :class:`UpdatePoller`) are exported for
callers that want to compose them differently.

Usage::

    from sdk import CairnClient, CairnError
    from sdk.keyboards import inline_keyboard, inline_button_with_callback
"""

from sdk.client import CairnClient
from sdk.cursor import CursorStore
from sdk.envelope import decode
from sdk.exceptions import (
    CairnError,
    DecodingError,
    EncodingError,
    ServiceRejectedError,
    TransportError,
    UnexpectedStatusError,
)
from sdk.poller import UpdatePoller
from sdk.transport import Transport

__all__ = [
    "CairnClient",
    "CursorStore",
    "UpdatePoller",
    "Transport",
    "decode",
    "CairnError",
    "EncodingError",
    "TransportError",
    "UnexpectedStatusError",
    "DecodingError",
    "ServiceRejectedError",
]
