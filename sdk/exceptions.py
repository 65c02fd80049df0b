"""Exception hierarchy for the Cairn Telegram SDK.

Every failure the client can surface is one of the five kinds below, so
callers branch on type instead of parsing messages.
"""

from typing import Optional


class CairnError(Exception):
    """Base class for every error raised by :mod:`sdk`."""


class EncodingError(CairnError):
    """The outbound payload could not be serialised to JSON."""


class TransportError(CairnError):
    """The request could not be sent, or its response could not be read.

    The underlying :class:`requests.RequestException` is chained as
    ``__cause__``.
    """


class UnexpectedStatusError(CairnError):
    """The API answered with an HTTP status other than 200.

    Attributes:
        status_code: HTTP status code returned by the API.
        body: Raw response body, decoded as text.
    """

    def __init__(self, status_code: int, body: str = "") -> None:
        """Initialise with the HTTP status code and raw body."""
        self.status_code = status_code
        self.body = body
        super().__init__(f"unexpected status code {status_code}: {body}")


class DecodingError(CairnError):
    """The response body is not valid JSON or does not match the expected shape."""

    def __init__(self, message: str, body: str = "") -> None:
        self.body = body
        super().__init__(message)


class ServiceRejectedError(CairnError):
    """The response envelope reported ``ok: false``.

    The API may include a ``description`` and an ``error_code``; both are
    optional on the wire and default to ``None`` here.
    """

    def __init__(self, description: Optional[str] = None, error_code: Optional[int] = None) -> None:
        self.description = description
        self.error_code = error_code
        super().__init__(f"telegram returned an error: {description or 'no description'}")
