"""Polling offset for ``getUpdates``."""

from __future__ import annotations

import threading
from typing import Any, Iterable, Mapping, Union

from sdk.models import Update


def _update_id(event: Union[Update, Mapping[str, Any]]) -> int:
    if isinstance(event, Mapping):
        return int(event["update_id"])
    return int(event.update_id)


class CursorStore:
    """Holds the lowest update id not yet retrieved.

    The value only moves forward.  :meth:`advance` takes the maximum id over
    the whole batch rather than trusting the server to put it last.
    """

    def __init__(self, initial: int = 0) -> None:
        self._offset = initial
        self._lock = threading.Lock()

    def current(self) -> int:
        with self._lock:
            return self._offset

    def advance(self, events: Iterable[Union[Update, Mapping[str, Any]]]) -> int:
        """Move past every event in *events* and return the new offset.

        An empty batch leaves the offset untouched.
        """
        ids = [_update_id(event) for event in events]
        with self._lock:
            if ids:
                self._offset = max(self._offset, max(ids) + 1)
            return self._offset

    def __repr__(self) -> str:
        return f"CursorStore(offset={self._offset})"
