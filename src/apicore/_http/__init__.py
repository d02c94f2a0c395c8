"""Transport primitive shared by the sync and async clients."""

from .clients import create_base_async_client, create_base_client
from .iter_coroutine import iter_coroutine
from .transport import (
    AsyncTransport,
    BaseTransport,
    BlockingTransport,
    TransportResponse,
)

__all__ = [
    "iter_coroutine",
    "BaseTransport",
    "BlockingTransport",
    "AsyncTransport",
    "TransportResponse",
    "create_base_client",
    "create_base_async_client",
]
