"""Request-dispatch core for REST API client libraries."""

from ._http import AsyncTransport, BaseTransport, BlockingTransport, TransportResponse
from .auth import AuthStrategy, BasicAuth, BearerAuth, HeaderAuth, NoAuth
from .client import ApiClient, AsyncApiClient, BaseApiClient, RequestSpec
from .config import ClientConfig, resolve_credentials
from .encoding import ENCODERS, EncodedBody, encode_payload
from .errors import (
    ApiCoreError,
    ConfigurationError,
    EncodingError,
    ResponseParseError,
    TransportError,
    TransportTimeoutError,
)
from .headers import compose_headers, merge_headers
from .query import append_query
from .response import RawExchange, RawRequest, RawResponse, ResponseResult

__version__ = "0.1.0"

__all__ = [
    # Clients
    "ApiClient",
    "AsyncApiClient",
    "BaseApiClient",
    "RequestSpec",
    "ClientConfig",
    "resolve_credentials",
    # Auth
    "AuthStrategy",
    "NoAuth",
    "BearerAuth",
    "HeaderAuth",
    "BasicAuth",
    # Request assembly
    "compose_headers",
    "merge_headers",
    "append_query",
    "encode_payload",
    "EncodedBody",
    "ENCODERS",
    # Results
    "ResponseResult",
    "RawExchange",
    "RawRequest",
    "RawResponse",
    # Transport
    "BaseTransport",
    "BlockingTransport",
    "AsyncTransport",
    "TransportResponse",
    # Errors
    "ApiCoreError",
    "ConfigurationError",
    "TransportError",
    "TransportTimeoutError",
    "EncodingError",
    "ResponseParseError",
]
