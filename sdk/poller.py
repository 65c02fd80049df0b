"""Cursor-based ``getUpdates`` polling.

Each :meth:`UpdatePoller.poll` is an independent GET request carrying the
current offset; the offset is the only state shared between polls.  A
successful poll advances the cursor past the returned batch, a failed one
leaves it where it was so the same events are fetched again next time.
"""

from __future__ import annotations

import json
import logging
import threading
from typing import List, Optional, Sequence
from urllib.parse import urlencode

from sdk.cursor import CursorStore
from sdk.envelope import decode
from sdk.models import Update
from sdk.transport import Transport


class UpdatePoller:
    """Fetches the next batch of updates exactly once.

    Args:
        transport: Transport used for the GET request.
        base_url: Bot API base URL including the token (``.../bot<token>``).
        cursor: Offset store advanced after every successful poll.
        poll_timeout: Server-side long-poll timeout in seconds; ``0`` polls
            without waiting.  The HTTP timeout is extended by the same amount.
        limit: Optional maximum batch size (1-100).
        allowed_updates: Optional list of update kinds to receive.
        logger: Destination for decode and batch records; defaults to the
            transport's logger.
    """

    def __init__(
        self,
        transport: Transport,
        base_url: str,
        cursor: Optional[CursorStore] = None,
        poll_timeout: int = 0,
        limit: Optional[int] = None,
        allowed_updates: Optional[Sequence[str]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._transport = transport
        self._logger = logger if logger is not None else transport.logger
        self._base_url = base_url.rstrip("/")
        self._cursor = cursor if cursor is not None else CursorStore()
        self._poll_timeout = poll_timeout
        self._limit = limit
        self._allowed_updates = list(allowed_updates) if allowed_updates is not None else None
        self._lock = threading.Lock()

    @property
    def cursor(self) -> CursorStore:
        return self._cursor

    def build_url(self, offset: int) -> str:
        """Return the ``getUpdates`` URL for *offset*."""
        params: dict[str, object] = {"offset": offset}
        if self._poll_timeout:
            params["timeout"] = self._poll_timeout
        if self._limit is not None:
            params["limit"] = self._limit
        if self._allowed_updates is not None:
            params["allowed_updates"] = json.dumps(self._allowed_updates)
        return f"{self._base_url}/getUpdates?{urlencode(params)}"

    def poll(self) -> List[Update]:
        """Fetch pending updates and advance the cursor past them.

        Returns an empty list when nothing is pending.  Errors from the
        transport or the decoder propagate unchanged and leave the cursor
        untouched.
        """
        with self._lock:
            url = self.build_url(self._cursor.current())
            raw = self._transport.execute(
                "GET",
                url,
                timeout=self._transport.timeout + self._poll_timeout,
            )
            updates: List[Update] = decode(raw, List[Update], logger=self._logger)
            offset = self._cursor.advance(updates)
            self._logger.info(
                "Fetched updates",
                extra={"api_endpoint": "getUpdates", "count": len(updates), "offset": offset},
            )
            return updates
