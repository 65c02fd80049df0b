"""Single-request HTTP transport for the Telegram Bot API.

:class:`Transport` sends exactly one request per :meth:`Transport.execute`
call and classifies the outcome: it either returns the raw response bytes or
raises one of :class:`~sdk.exceptions.EncodingError`,
:class:`~sdk.exceptions.TransportError` or
:class:`~sdk.exceptions.UnexpectedStatusError`.  Nothing is retried here;
interpreting the body is the job of :mod:`sdk.envelope`.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional

import requests
from pydantic import BaseModel

from sdk.exceptions import EncodingError, TransportError, UnexpectedStatusError

_SUCCESS_STATUS = 200
_TOKEN_IN_PATH = re.compile(r"/bot[^/\s]+/")

# Loggers handed to clients built with logging disabled.
_silent_logger = logging.getLogger("cairn.silent")
_silent_logger.addHandler(logging.NullHandler())
_silent_logger.propagate = False


def silent_logger() -> logging.Logger:
    """Return a logger that drops every record."""
    return _silent_logger


def endpoint_name(url: str) -> str:
    """Return the API method name of *url* (``.../bot<token>/getMe?x=1`` → ``getMe``).

    Used for log context so the token embedded in the path is never logged.
    """
    return url.split("?", 1)[0].rstrip("/").rsplit("/", 1)[-1]


def redact(text: str) -> str:
    """Mask the bot token in any URL path found in *text*."""
    return _TOKEN_IN_PATH.sub("/bot***/", text)


def _json_default(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(exclude_none=True, by_alias=True)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_body(body: Any) -> bytes:
    """Serialise *body* to UTF-8 JSON, dumping any pydantic models it contains.

    Raises:
        EncodingError: If *body* holds a value JSON cannot represent,
            including NaN and infinities.
    """
    try:
        return json.dumps(body, default=_json_default, ensure_ascii=False, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise EncodingError(f"failed to marshal payload: {exc}") from exc


class Transport:
    """Executes one HTTP request and returns the raw body on status 200.

    Args:
        timeout: Default request timeout in seconds.
        logger: Destination for diagnostic records.  ``None`` means silent.
        session: Optional :class:`requests.Session`; the module-level
            :mod:`requests` functions are used otherwise.
    """

    _DEFAULT_TIMEOUT: float = 10.0

    def __init__(
        self,
        timeout: float = _DEFAULT_TIMEOUT,
        logger: Optional[logging.Logger] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._timeout = timeout
        self._logger = logger if logger is not None else silent_logger()
        self._http = session if session is not None else requests

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def execute(
        self,
        method: str,
        url: str,
        body: Any = None,
        timeout: Optional[float] = None,
    ) -> bytes:
        """Send *method* to *url* with an optional JSON *body*.

        Returns:
            The raw response bytes when the status code is 200.

        Raises:
            EncodingError: If *body* cannot be serialised.
            TransportError: On connection, DNS, timeout or read failures.
            UnexpectedStatusError: If the status code is anything but 200.
        """
        endpoint = endpoint_name(url)
        method = method.upper()
        kwargs: dict[str, Any] = {"timeout": timeout if timeout is not None else self._timeout}

        if body is not None:
            try:
                data = encode_body(body)
            except EncodingError as exc:
                self._logger.error("Failed to marshal payload", extra={"api_endpoint": endpoint, "error": str(exc)})
                raise
            self._logger.info("Sending request", extra={"api_endpoint": endpoint, "method": method, "payload": data.decode("utf-8")})
            kwargs["data"] = data
            kwargs["headers"] = {"Content-Type": "application/json"}
        else:
            self._logger.info("Sending request", extra={"api_endpoint": endpoint, "method": method})

        try:
            response = self._http.request(method, url, **kwargs)
            # Full body is read before the status check.
            content = response.content
        except requests.RequestException as exc:
            error = redact(str(exc))
            self._logger.error("Failed to send request", extra={"api_endpoint": endpoint, "error": error})
            raise TransportError(f"failed to send request to {endpoint}: {error}") from exc

        text = content.decode("utf-8", errors="replace")
        self._logger.info(
            "Received response",
            extra={"api_endpoint": endpoint, "status_code": response.status_code, "body": text},
        )

        if response.status_code != _SUCCESS_STATUS:
            self._logger.error(
                "Unexpected status code",
                extra={"api_endpoint": endpoint, "status_code": response.status_code, "body": text},
            )
            raise UnexpectedStatusError(response.status_code, text)

        return content
