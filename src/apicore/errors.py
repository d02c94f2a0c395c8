"""Error types raised (or returned) by the request-dispatch core."""

from __future__ import annotations


class ApiCoreError(Exception):
    """Base error for the dispatch core."""


class ConfigurationError(ApiCoreError):
    """Client construction failed: base URL missing or malformed."""


class TransportError(ApiCoreError):
    """The network call failed before any response was received."""

    def __init__(self, message: str, *, method: str | None = None, url: str | None = None):
        super().__init__(message)
        self.method = method
        self.url = url


class TransportTimeoutError(TransportError):
    """Connect, read, write or pool timeout."""


class EncodingError(ApiCoreError):
    """The request could not be encoded. Nothing was sent."""

    def __init__(self, message: str, *, content_type: str | None = None):
        super().__init__(message)
        self.content_type = content_type


class ResponseParseError(ApiCoreError):
    """A response body did not parse against its declared content type.

    Not raised by the dispatcher: it is attached to
    ``ResponseResult.parse_error`` and the raw text stays in ``data``.
    """

    def __init__(self, message: str, *, content_type: str, body: str):
        super().__init__(message)
        self.content_type = content_type
        self.body = body


__all__ = [
    "ApiCoreError",
    "ConfigurationError",
    "TransportError",
    "TransportTimeoutError",
    "EncodingError",
    "ResponseParseError",
]
