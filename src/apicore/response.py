"""Uniform result shape returned by every dispatched call."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .encoding import is_json_content_type
from .errors import ResponseParseError
from .headers import get_header

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RawRequest:
    method: str
    url: str
    headers: Mapping[str, str]
    body: bytes | None


@dataclass(frozen=True, slots=True)
class RawResponse:
    """Response as received. ``headers`` keeps repeated fields such as Set-Cookie."""

    status_code: int
    headers: tuple[tuple[str, str], ...]
    body: bytes

    def get_all(self, name: str) -> list[str]:
        lowered = name.lower()
        return [value for key, value in self.headers if key.lower() == lowered]


@dataclass(frozen=True, slots=True)
class RawExchange:
    """The request as sent and the response as received."""

    request: RawRequest
    response: RawResponse

    def to_dict(self) -> dict[str, Any]:
        return {
            "request": {
                "method": self.request.method,
                "url": self.request.url,
                "headers": dict(self.request.headers),
                "body": _text(self.request.body or b""),
            },
            "response": {
                "statusCode": self.response.status_code,
                "headers": [[key, value] for key, value in self.response.headers],
                "body": _text(self.response.body),
            },
        }


@dataclass(frozen=True, slots=True)
class ResponseResult:
    """What an endpoint method returns.

    ``data`` is set for every status code; callers branch on
    ``status_code``. ``raw`` is only present when the client was built with
    ``include_raw=True``.
    """

    status_code: int
    data: Any
    headers: Mapping[str, str] = field(default_factory=dict)
    raw: RawExchange | None = None
    parse_error: ResponseParseError | None = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def raise_for_parse_error(self) -> None:
        if self.parse_error is not None:
            raise self.parse_error

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"statusCode": self.status_code, "data": self.data}
        if self.raw is not None:
            result["raw"] = self.raw.to_dict()
        return result


def _charset(content_type: str | None) -> str:
    for param in (content_type or "").split(";")[1:]:
        key, _, value = param.strip().partition("=")
        if key.lower() == "charset" and value:
            return value.strip('"')
    return "utf-8"


def _decode(body: bytes, encoding: str = "utf-8") -> str:
    try:
        return body.decode(encoding)
    except LookupError:
        return body.decode("utf-8")


def _text(body: bytes, encoding: str = "utf-8") -> str:
    try:
        return body.decode(encoding, errors="replace")
    except LookupError:
        return body.decode("utf-8", errors="replace")


def parse_body(headers: Mapping[str, str], body: bytes) -> tuple[Any, ResponseParseError | None]:
    """Decode a response body according to its ``Content-Type``.

    Returns:
        ``(data, parse_error)``. JSON-family bodies are parsed. Other bodies
        are returned as text, or as the original ``bytes`` when they do not
        decode in the declared charset. When a declared-JSON body fails to
        decode or parse, ``data`` is the text with undecodable bytes replaced
        and ``parse_error`` describes the failure.
    """
    if not body:
        return "", None

    content_type = get_header(headers, "content-type")
    encoding = _charset(content_type)
    if not is_json_content_type(content_type):
        try:
            return _decode(body, encoding), None
        except UnicodeDecodeError:
            return body, None

    try:
        return json.loads(_decode(body, encoding)), None
    except ValueError as e:
        # UnicodeDecodeError is a ValueError too
        logger.warning("Response declared %s but did not parse: %s", content_type, e)
        text = _text(body, encoding)
        error = ResponseParseError(
            f"Invalid JSON in response body: {e}",
            content_type=content_type or "",
            body=text,
        )
        return text, error


__all__ = [
    "RawExchange",
    "RawRequest",
    "RawResponse",
    "ResponseResult",
    "parse_body",
]
