"""Response normalization for S&S API payloads."""

from typing import Any

from ss_activewear.models.schemas import ProductRecord
from ss_activewear.utils.errors import InvalidResponseShapeError, UpstreamReportedErrors


def extract_error_messages(payload: Any) -> list[str]:
    """Messages from an ``{"errors": [{"message": ...}]}`` payload, else ``[]``."""
    if not isinstance(payload, dict):
        return []
    errors = payload.get("errors")
    if not isinstance(errors, list) or not errors:
        return []
    messages = []
    for err in errors:
        if isinstance(err, dict):
            messages.append(str(err.get("message") or "Unknown error"))
        else:
            messages.append(str(err))
    return messages


def normalize(raw: Any) -> list[ProductRecord]:
    """
    Coerce a raw API payload into a list of product records.

    Args:
        raw: Decoded JSON body (``None``, object or array).

    Returns:
        ``[]`` for ``None``, ``[raw]`` for a single object, ``raw`` for an array.

    Raises:
        UpstreamReportedErrors: The payload carries an ``errors`` array.
        InvalidResponseShapeError: The payload is a bare scalar.
    """
    if raw is None:
        return []
    if isinstance(raw, dict):
        messages = extract_error_messages(raw)
        if messages:
            raise UpstreamReportedErrors(messages)
        return [raw]
    if isinstance(raw, list):
        return raw
    raise InvalidResponseShapeError(
        f"Unexpected response from S&S API: expected an object or array, got {type(raw).__name__}"
    )
