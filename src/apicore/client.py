"""Base API clients: request assembly, dispatch and response normalization."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

import httpx

from ._http import AsyncTransport, BaseTransport, BlockingTransport, iter_coroutine
from .auth import AuthStrategy, NoAuth
from .config import DEFAULT_TIMEOUT, ClientConfig, resolve_credentials
from .encoding import encode_payload
from .headers import compose_headers, ensure_encodable, get_header, mask_headers, merge_headers
from .query import append_query
from .response import RawExchange, RawRequest, RawResponse, ResponseResult, parse_body

logger = logging.getLogger(__name__)

HTTP_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"})


@dataclass(frozen=True)
class RequestSpec:
    """One call as an endpoint method describes it."""

    method: str
    path: str
    query_params: Mapping[str, Any] = field(default_factory=dict)
    payload: Any = ""
    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        method = self.method.upper()
        if method not in HTTP_METHODS:
            raise ValueError(f"Unsupported HTTP method {self.method!r}")
        object.__setattr__(self, "method", method)


class BaseApiClient:
    """Shared async dispatch logic for ApiClient and AsyncApiClient.

    Concrete clients subclass ApiClient or AsyncApiClient, set the class
    attributes below and add one small method per API operation that calls
    ``api_call``.
    """

    DEFAULT_BASE_URL: ClassVar[str | None] = None
    CREDENTIAL_ENV: ClassVar[Mapping[str, str]] = {}
    AUTH: ClassVar[AuthStrategy] = NoAuth()
    CLIENT_NAME: ClassVar[str] = "apicore"
    CLIENT_VERSION: ClassVar[str] = "0.1.0"

    _transport: BaseTransport

    def __init__(
        self,
        *,
        base_url: str | None = None,
        credentials: Mapping[str, str | None] | None = None,
        include_raw: bool = False,
        timeout: float | None = None,
    ):
        self._config = ClientConfig(
            base_url=base_url or self.DEFAULT_BASE_URL,  # type: ignore[arg-type]
            credentials=resolve_credentials(self.CREDENTIAL_ENV, credentials),
            include_raw=include_raw,
            timeout=DEFAULT_TIMEOUT if timeout is None else timeout,
            user_agent=f"{self.CLIENT_NAME}/{self.CLIENT_VERSION}",
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    def build_path(self, path: str, query_params: Mapping[str, Any] | None) -> str:
        """Append the query string. Override to support structured values."""
        return append_query(path, query_params)

    async def _dispatch(self, spec: RequestSpec) -> ResponseResult:
        config = self._config

        headers = compose_headers(config, type(self).AUTH, spec.headers)
        path = self.build_path(spec.path, spec.query_params)
        content_type = get_header(headers, "content-type")
        encoded = encode_payload(content_type, spec.payload)
        if encoded.content_type and encoded.content_type != content_type:
            headers = merge_headers(headers, {"Content-Type": encoded.content_type})
        ensure_encodable(headers)
        url = config.build_url(path)

        logger.debug("%s %s headers=%s", spec.method, url, mask_headers(headers))
        response = await self._transport.perform(spec.method, url, headers, encoded.content)
        logger.debug("%s %s -> %s", spec.method, url, response.status_code)

        data, parse_error = parse_body(response.headers, response.body)

        raw = None
        if config.include_raw:
            raw = RawExchange(
                request=RawRequest(spec.method, url, headers, encoded.content),
                response=RawResponse(
                    response.status_code,
                    response.header_items or tuple(response.headers.items()),
                    response.body,
                ),
            )

        return ResponseResult(
            status_code=response.status_code,
            data=data,
            headers=response.headers,
            raw=raw,
            parse_error=parse_error,
        )

    async def _api_call(
        self,
        method: str,
        path: str,
        query_params: Mapping[str, Any] | None = None,
        payload: Any = "",
        headers: Mapping[str, str] | None = None,
    ) -> ResponseResult:
        spec = RequestSpec(
            method=method,
            path=path,
            query_params=query_params or {},
            payload=payload,
            headers=headers or {},
        )
        return await self._dispatch(spec)


class ApiClient(BaseApiClient):
    """Synchronous API client."""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        credentials: Mapping[str, str | None] | None = None,
        include_raw: bool = False,
        timeout: float | None = None,
        transport: BaseTransport | None = None,
        http_client: httpx.Client | None = None,
    ):
        super().__init__(
            base_url=base_url,
            credentials=credentials,
            include_raw=include_raw,
            timeout=timeout,
        )
        self._transport = transport or BlockingTransport(http_client, timeout=self._config.timeout)

    def api_call(
        self,
        method: str,
        path: str,
        query_params: Mapping[str, Any] | None = None,
        payload: Any = "",
        headers: Mapping[str, str] | None = None,
    ) -> ResponseResult:
        """Send one request and return its normalized result.

        Args:
            method: HTTP verb.
            path: Path relative to the base URL, e.g. ``"/v1/items"``.
            query_params: Scalar query parameters, encoded in order.
            payload: Body as a mapping/sequence, or pre-serialized str/bytes.
            headers: Per-call headers; they override defaults and auth.

        Returns:
            ResponseResult for any HTTP status.

        Raises:
            EncodingError: The payload, a query value or a header can't be
                encoded. Nothing was sent.
            TransportError: No response was received.
        """
        return iter_coroutine(self._api_call(method, path, query_params, payload, headers))

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> ApiClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class AsyncApiClient(BaseApiClient):
    """Asynchronous API client."""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        credentials: Mapping[str, str | None] | None = None,
        include_raw: bool = False,
        timeout: float | None = None,
        transport: BaseTransport | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        super().__init__(
            base_url=base_url,
            credentials=credentials,
            include_raw=include_raw,
            timeout=timeout,
        )
        self._transport = transport or AsyncTransport(http_client, timeout=self._config.timeout)

    async def api_call(
        self,
        method: str,
        path: str,
        query_params: Mapping[str, Any] | None = None,
        payload: Any = "",
        headers: Mapping[str, str] | None = None,
    ) -> ResponseResult:
        """Async counterpart of ApiClient.api_call."""
        return await self._api_call(method, path, query_params, payload, headers)

    async def close(self) -> None:
        if isinstance(self._transport, AsyncTransport):
            await self._transport.aclose()
        else:
            self._transport.close()

    async def __aenter__(self) -> AsyncApiClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()


__all__ = ["ApiClient", "AsyncApiClient", "BaseApiClient", "HTTP_METHODS", "RequestSpec"]
