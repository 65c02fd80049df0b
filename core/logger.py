"""CairnLogger — Singleton JSON logger with console and rotating file output.

Owns the ``cairn`` logger and writes structured JSON to both stdout and
``logs/cairn.log`` (5 MB per file, five backups).  The SDK never configures
handlers itself: its modules log to children of ``cairn`` (``cairn.sdk``,
``cairn.sdk.envelope``) and reach these handlers by propagation once the
singleton has been created, usually from :mod:`config`.  The reference bot
logs to ``cairn`` directly.

A :class:`~sdk.client.CairnClient` built with ``log_enabled=False`` logs to
``cairn.silent`` instead, which has a ``NullHandler`` and does not
propagate, so a disabled client emits nothing here even when this logger is
configured.

SDK records identify the Bot API call by method name only (the
``api_endpoint`` extra, e.g. ``sendMessage``), never by URL, so the bot token
embedded in ``/bot<token>/`` paths does not reach the log file.

Tests that need a fresh handler set call :meth:`CairnLogger.reset`.
"""

import json
import logging
import os
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Optional


class _JsonFormatter(logging.Formatter):
    """Format every log record as a single-line JSON object.

    Standard fields (timestamp, level, logger, message, module, func_name)
    are always present.  Any *extra* key-value pairs passed via the ``extra``
    parameter of a logging call are merged into the JSON object.  The SDK
    relies on this for its context fields:

    * ``api_endpoint`` on every transport record;
    * ``method`` and ``payload`` (the JSON request body) on ``Sending request``;
    * ``status_code`` and ``body`` on ``Received response`` and on
      ``Unexpected status code``;
    * ``error`` with the token-redacted failure text;
    * ``count`` and ``offset`` on ``Fetched updates``;
    * ``description`` and ``error_code`` when Telegram answers ``ok: false``;
    * ``error_kind``, ``update_id``, ``chat_id`` and ``user_id`` from the bot.

    Values JSON cannot represent are written with ``str()``.  A record logged
    with ``exc_info`` gets the formatted traceback under ``exc_info``.

    Example::

        logger.info("Message sent", extra={"chat_id": 42, "api_endpoint": "sendMessage"})

    Produces::

        {"timestamp": "…", "level": "INFO", …, "chat_id": 42, "api_endpoint": "sendMessage"}
    """

    # Keys that belong to the standard LogRecord — everything else is extra.
    _BUILTIN_ATTRS: frozenset[str] = frozenset(vars(logging.LogRecord(
        name="", level=0, pathname="", lineno=0, msg="", args=(), exc_info=None,
    )))

    def format(self, record: logging.LogRecord) -> str:
        """Serialize *record* to a JSON string."""
        log_entry: dict = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "func_name": record.funcName,
        }

        for key, value in record.__dict__.items():
            if key not in self._BUILTIN_ATTRS and key not in log_entry:
                log_entry[key] = value

        if record.exc_info:
            log_entry["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class CairnLogger:
    """Singleton logger with dual handlers (console + rotating file).

    Usage::

        from core.logger import CairnLogger

        logger = CairnLogger.get_logger()
        logger.info("Bot started")
    """

    _instance: Optional["CairnLogger"] = None
    _logger: Optional[logging.Logger] = None

    LOGGER_NAME: str = "cairn"

    # Rotation settings
    _LOG_DIR: str = "logs"
    _LOG_FILE: str = "cairn.log"
    _MAX_BYTES: int = 5 * 1024 * 1024  # 5 MB
    _BACKUP_COUNT: int = 5

    def __new__(cls, level: int = logging.INFO, log_dir: Optional[str] = None) -> "CairnLogger":
        """Ensure only one instance is ever created (Singleton)."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._init_logger(level, log_dir or cls._LOG_DIR)
        return cls._instance

    # ------------------------------------------------------------------
    # Initialisation helpers
    # ------------------------------------------------------------------

    def _init_logger(self, level: int, log_dir: str) -> None:
        """Create the underlying :class:`logging.Logger` and attach handlers."""
        self._logger = logging.getLogger(self.LOGGER_NAME)
        self._logger.setLevel(level)

        # Avoid duplicate handlers if the module is reloaded.
        if self._logger.handlers:
            return

        formatter = _JsonFormatter()

        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(level)
        stream_handler.setFormatter(formatter)
        self._logger.addHandler(stream_handler)

        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, self._LOG_FILE),
            maxBytes=self._MAX_BYTES,
            backupCount=self._BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        self._logger.addHandler(file_handler)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @staticmethod
    def get_logger(level: int = logging.INFO, log_dir: Optional[str] = None) -> logging.Logger:
        """Return the shared :class:`logging.Logger` instance.

        Creates the singleton on first call; later calls return the same
        logger regardless of *level* and *log_dir*.
        """
        instance = CairnLogger(level, log_dir)
        assert instance._logger is not None  # guaranteed by __new__
        return instance._logger

    def cleanup(self) -> None:
        """Flush and close all handlers attached to the logger."""
        if self._logger is None:
            return
        for handler in list(self._logger.handlers):
            handler.flush()
            handler.close()
            self._logger.removeHandler(handler)

    @classmethod
    def reset(cls) -> None:
        """Close the handlers and forget the singleton."""
        if cls._instance is not None:
            cls._instance.cleanup()
        cls._instance = None
