"""Query string assembly."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from .errors import EncodingError


def _format_scalar(name: str, value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise EncodingError(
        f"Query parameter {name!r} has unsupported value type {type(value).__name__}; "
        "only scalar values can be encoded"
    )


def encode_query(params: Mapping[str, Any]) -> str:
    """Percent-encode ``params`` as ``k=v&k=v`` in insertion order.

    ``None`` values are left out.
    """
    pairs = []
    for name, value in params.items():
        if value is None:
            continue
        pairs.append(f"{quote(str(name), safe='')}={quote(_format_scalar(name, value), safe='')}")
    return "&".join(pairs)


def append_query(path: str, params: Mapping[str, Any] | None) -> str:
    """Append ``params`` to ``path`` with ``?``, or ``&`` if it already has a query."""
    if not params:
        return path
    query = encode_query(params)
    if not query:
        return path
    separator = "&" if "?" in path else "?"
    return f"{path}{separator}{query}"


__all__ = ["append_query", "encode_query"]
