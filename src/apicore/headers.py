"""Request header composition."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

import httpx

from .errors import EncodingError

if TYPE_CHECKING:
    from .auth import AuthStrategy
    from .config import ClientConfig

_SENSITIVE_HEADERS = frozenset({"authorization", "proxy-authorization", "x-api-key", "cookie"})


def default_headers(user_agent: str) -> dict[str, str]:
    return {
        "Accept": "application/json",
        "Content-Type": "application/json",
        "User-Agent": user_agent,
    }


def merge_headers(*layers: Mapping[str, str] | None) -> dict[str, str]:
    """Merge header mappings left to right.

    Names compare case-insensitively; a later layer replaces the earlier
    entry and its spelling of the name.
    """
    merged: dict[str, str] = {}
    index: dict[str, str] = {}
    for layer in layers:
        if not layer:
            continue
        for name, value in layer.items():
            previous = index.pop(name.lower(), None)
            if previous is not None:
                del merged[previous]
            merged[name] = value
            index[name.lower()] = name
    return merged


def compose_headers(
    config: ClientConfig,
    auth: AuthStrategy,
    overrides: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Defaults, then auth headers, then per-call overrides."""
    return merge_headers(
        default_headers(config.user_agent),
        auth(config.credentials),
        overrides,
    )


def get_header(headers: Mapping[str, str], name: str, default: str | None = None) -> str | None:
    lowered = name.lower()
    for key, value in headers.items():
        if key.lower() == lowered:
            return value
    return default


def ensure_encodable(headers: Mapping[str, str]) -> None:
    """Raise EncodingError for a header httpx cannot put on the wire."""
    for name, value in headers.items():
        try:
            httpx.Headers({name: value})
        except (TypeError, UnicodeEncodeError) as e:
            # the value may be a credential, keep it out of the message
            raise EncodingError(f"Header {name!r} cannot be encoded: {type(e).__name__}") from e


def mask_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Copy of ``headers`` safe for logs."""
    masked = dict(headers)
    for key, value in masked.items():
        if key.lower() in _SENSITIVE_HEADERS:
            # keep the auth scheme ("Bearer", "Basic") readable
            scheme, sep, _ = value.partition(" ")
            masked[key] = f"{scheme} ***" if sep else "***"
    return masked


__all__ = [
    "compose_headers",
    "default_headers",
    "ensure_encodable",
    "get_header",
    "mask_headers",
    "merge_headers",
]
