"""HTTP transport implementations for sync and async clients."""

from __future__ import annotations

import abc
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

import httpx

from ..errors import TransportError, TransportTimeoutError
from .clients import create_base_async_client, create_base_client

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TransportResponse:
    """Status, headers and raw body of one HTTP exchange.

    ``headers`` joins repeated fields; ``header_items`` keeps them apart
    when the transport can provide them.
    """

    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""
    header_items: tuple[tuple[str, str], ...] = ()


def _from_httpx(response: httpx.Response) -> TransportResponse:
    return TransportResponse(
        status_code=response.status_code,
        headers=dict(response.headers.items()),
        body=response.content,
        header_items=tuple(response.headers.multi_items()),
    )


def _wrap_error(e: httpx.RequestError, method: str, url: str) -> TransportError:
    logger.debug("%s %s failed: %r", method, url, e)
    error_cls = TransportTimeoutError if isinstance(e, httpx.TimeoutException) else TransportError
    return error_cls(f"{method} {url} failed: {e}", method=method, url=url)


class BaseTransport(abc.ABC):
    """Executes one fully resolved HTTP request.

    Implementations raise TransportError when no response was obtained;
    any HTTP status, including 4xx/5xx, is a normal return.
    """

    @abc.abstractmethod
    async def perform(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: bytes | None,
    ) -> TransportResponse: ...

    @abc.abstractmethod
    def close(self) -> None: ...


class BlockingTransport(BaseTransport):
    """
    Synchronous HTTP transport using httpx.Client.

    Methods are declared async but don't actually await anything,
    allowing them to be executed via iter_coroutine().
    """

    def __init__(self, client: httpx.Client | None = None, *, timeout: float | None = None) -> None:
        self._owns_client = client is None
        self._timeout = timeout
        self._client: httpx.Client | None = (
            client if client is not None else create_base_client(timeout=timeout)
        )

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = create_base_client(timeout=self._timeout)
        return self._client

    async def perform(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: bytes | None,
    ) -> TransportResponse:
        try:
            response = self._get_client().request(method, url, headers=headers, content=body)
        except httpx.RequestError as e:
            raise _wrap_error(e, method, url) from e
        return _from_httpx(response)

    def close(self) -> None:
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None


class AsyncTransport(BaseTransport):
    """Asynchronous HTTP transport using httpx.AsyncClient."""

    def __init__(
        self, client: httpx.AsyncClient | None = None, *, timeout: float | None = None
    ) -> None:
        self._owns_client = client is None
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = (
            client if client is not None else create_base_async_client(timeout=timeout)
        )

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = create_base_async_client(timeout=self._timeout)
        return self._client

    async def perform(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: bytes | None,
    ) -> TransportResponse:
        try:
            response = await self._get_client().request(method, url, headers=headers, content=body)
        except httpx.RequestError as e:
            raise _wrap_error(e, method, url) from e
        return _from_httpx(response)

    def close(self) -> None:
        """Drop the client reference. Use aclose() to release connections."""
        if self._client is not None and self._owns_client:
            logger.warning(
                "AsyncTransport.close() leaves the connection pool open; await aclose() instead"
            )
            self._client = None

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None


__all__ = [
    "AsyncTransport",
    "BaseTransport",
    "BlockingTransport",
    "TransportResponse",
]
