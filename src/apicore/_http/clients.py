"""Factory functions for the httpx clients owned by transports."""

from __future__ import annotations

from typing import Any

import httpx

from ..config import DEFAULT_TIMEOUT


def _client_kwargs(timeout: float | None, follow_redirects: bool) -> dict[str, Any]:
    effective_timeout = timeout if timeout is not None else DEFAULT_TIMEOUT
    return {
        "timeout": httpx.Timeout(effective_timeout),
        "follow_redirects": follow_redirects,
    }


def create_base_client(
    timeout: float | None = None,
    *,
    follow_redirects: bool = False,
) -> httpx.Client:
    """Create a sync httpx client with basic configuration (no auth).

    Auth and default headers are composed per request by the dispatcher,
    so the client itself carries none.

    Args:
        timeout: Request timeout in seconds. Defaults to DEFAULT_TIMEOUT.
        follow_redirects: Passed through to httpx.

    Returns:
        An httpx.Client with basic configuration.
    """
    return httpx.Client(**_client_kwargs(timeout, follow_redirects))


def create_base_async_client(
    timeout: float | None = None,
    *,
    follow_redirects: bool = False,
) -> httpx.AsyncClient:
    """Create an async httpx client with basic configuration (no auth).

    Args:
        timeout: Request timeout in seconds. Defaults to DEFAULT_TIMEOUT.
        follow_redirects: Passed through to httpx.

    Returns:
        An httpx.AsyncClient with basic configuration.
    """
    return httpx.AsyncClient(**_client_kwargs(timeout, follow_redirects))


__all__ = ["create_base_client", "create_base_async_client"]
