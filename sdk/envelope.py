"""Decoder for the uniform ``{"ok": bool, "result": T}`` response envelope."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional, Union

from pydantic import TypeAdapter, ValidationError

from sdk.exceptions import DecodingError, ServiceRejectedError

_sdk_logger = logging.getLogger("cairn.sdk.envelope")


def decode(raw: Union[bytes, str], result_type: Any, logger: Optional[logging.Logger] = None) -> Any:
    """Unwrap *raw* and return its ``result`` validated as *result_type*.

    *result_type* is anything pydantic can build a :class:`TypeAdapter` for:
    a model class, ``list[Update]``, ``bool``…

    Raises:
        DecodingError: If *raw* is not UTF-8 JSON, is not an envelope object, or its
            ``result`` does not match *result_type*.
        ServiceRejectedError: If the envelope says ``ok: false``.  ``result``
            is not looked at in that case.
    """
    log = logger if logger is not None else _sdk_logger
    if isinstance(raw, bytes):
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            body = raw.decode("utf-8", errors="replace")
            log.error("Response is not valid UTF-8", extra={"error": str(exc)})
            raise DecodingError(f"response is not valid UTF-8: {exc}", body) from exc
    else:
        text = raw

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        log.error("Failed to decode response JSON", extra={"error": str(exc)})
        raise DecodingError(f"failed to decode response JSON: {exc}", text) from exc

    if not isinstance(data, dict) or not isinstance(data.get("ok"), bool):
        log.error("Response is not an envelope", extra={"body": text})
        raise DecodingError("response is not an {ok, result} envelope", text)

    if not data["ok"]:
        description = data.get("description")
        error_code = data.get("error_code")
        log.error("Telegram returned an error", extra={"description": description, "error_code": error_code})
        raise ServiceRejectedError(
            description if isinstance(description, str) else None,
            error_code if isinstance(error_code, int) else None,
        )

    try:
        return TypeAdapter(result_type).validate_python(data.get("result"))
    except ValidationError as exc:
        log.error("Response result has an unexpected shape", extra={"error": str(exc)})
        raise DecodingError(f"unexpected result shape: {exc}", text) from exc
