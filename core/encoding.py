"""Query string and request body encoding."""

import json
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

from core.exceptions import EncodingError
from core.request_types import MultipartForm


def encode_query(data: Mapping[str, Any]) -> str:
    """Flatten ``data`` into a URL query string.

    Nested mappings use bracket notation (``a[b]=1``), sequences repeat
    their key and ``None`` values are dropped. Ordering follows the
    mapping's own key order.
    """
    if not isinstance(data, Mapping):
        raise EncodingError(f"Query payload must be a mapping, got {type(data).__name__}")
    pairs: list[tuple[str, str]] = []
    for key, value in data.items():
        _flatten(str(key), value, pairs)
    return urlencode(pairs)


def encode_body(data: Any) -> str:
    """Serialize ``data`` to a compact JSON text body."""
    try:
        return json.dumps(data, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise EncodingError(f"Payload is not JSON serializable: {e}") from e


def encode_multipart(data: Any) -> MultipartForm:
    """Pass a multipart payload through untouched."""
    if isinstance(data, MultipartForm):
        return data
    if isinstance(data, Mapping):
        return MultipartForm(fields=dict(data))
    raise EncodingError(f"Unsupported multipart payload: {type(data).__name__}")


def _flatten(prefix: str, value: Any, pairs: list[tuple[str, str]]) -> None:
    if value is None:
        return
    if isinstance(value, Mapping):
        for key, item in value.items():
            _flatten(f"{prefix}[{key}]", item, pairs)
    elif isinstance(value, (list, tuple)):
        for item in value:
            _flatten(prefix, item, pairs)
    else:
        pairs.append((prefix, _scalar(value)))


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
