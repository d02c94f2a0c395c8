"""Payload encoding keyed by content type."""

from __future__ import annotations

import io
import json
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import httpx

from .errors import EncodingError

JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
MULTIPART_CONTENT_TYPE = "multipart/form-data"


@dataclass(frozen=True, slots=True)
class EncodedBody:
    """Wire body plus the content type it was encoded for.

    ``content_type`` can differ from the requested one, e.g. when a
    multipart boundary had to be generated.
    """

    content: bytes | None
    content_type: str | None


Encoder = Callable[[str, Any], EncodedBody]


def normalize_content_type(content_type: str | None) -> str:
    """``"Application/JSON; charset=utf-8"`` -> ``"application/json"``."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def is_json_content_type(content_type: str | None) -> bool:
    media_type = normalize_content_type(content_type)
    return media_type in (JSON_CONTENT_TYPE, "text/json") or media_type.endswith("+json")


def _is_empty(payload: Any) -> bool:
    return payload is None or (isinstance(payload, (str, bytes)) and len(payload) == 0)


def _passthrough(payload: str | bytes) -> bytes:
    return payload.encode("utf-8") if isinstance(payload, str) else payload


def _form_value(name: str, value: Any, content_type: str = FORM_CONTENT_TYPE) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise EncodingError(
        f"Form field {name!r} has unsupported value type {type(value).__name__}",
        content_type=content_type,
    )


def _require_mapping(content_type: str, payload: Any) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise EncodingError(
            f"{normalize_content_type(content_type)} payload must be a mapping, "
            f"got {type(payload).__name__}",
            content_type=content_type,
        )
    return payload


def encode_json(content_type: str, payload: Any) -> EncodedBody:
    if isinstance(payload, (str, bytes)):
        return EncodedBody(_passthrough(payload), content_type)
    try:
        text = json.dumps(payload, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as e:
        raise EncodingError(
            f"Payload is not JSON serializable: {e}", content_type=content_type
        ) from e
    return EncodedBody(text.encode("utf-8"), content_type)


def encode_form(content_type: str, payload: Any) -> EncodedBody:
    fields = _require_mapping(content_type, payload)
    pairs = []
    for name, value in fields.items():
        if value is None:
            continue
        values = value if isinstance(value, (list, tuple)) else (value,)
        for item in values:
            encoded = quote(_form_value(name, item, content_type), safe="")
            pairs.append(f"{quote(str(name), safe='')}={encoded}")
    return EncodedBody("&".join(pairs).encode("ascii"), content_type)


def _boundary(content_type: str) -> str | None:
    for param in content_type.split(";")[1:]:
        key, _, value = param.strip().partition("=")
        if key.lower() == "boundary" and value:
            return value.strip('"')
    return None


def _is_file(value: Any) -> bool:
    return isinstance(value, (bytes, tuple, io.IOBase))


def encode_multipart(content_type: str, payload: Any) -> EncodedBody:
    fields = _require_mapping(content_type, payload)
    boundary = _boundary(content_type) or os.urandom(16).hex()
    content_type = f"{MULTIPART_CONTENT_TYPE}; boundary={boundary}"

    # Plain values go in as filename-less parts so httpx always builds a
    # multipart body, even when there are no files.
    parts: list[tuple[str, Any]] = []
    for name, value in fields.items():
        if value is None:
            continue
        if _is_file(value):
            parts.append((name, value if isinstance(value, tuple) else (name, value)))
            continue
        values = value if isinstance(value, list) else [value]
        for item in values:
            parts.append((name, (None, _form_value(name, item, content_type).encode("utf-8"))))

    try:
        request = httpx.Request(
            "POST",
            "http://multipart.invalid/",
            files=parts,
            headers={"Content-Type": content_type},
        )
        content = request.read()
    except (TypeError, ValueError) as e:
        raise EncodingError(f"Cannot encode multipart body: {e}", content_type=content_type) from e
    return EncodedBody(content, content_type)


def encode_passthrough(content_type: str, payload: Any) -> EncodedBody:
    if isinstance(payload, (str, bytes)):
        return EncodedBody(_passthrough(payload), content_type)
    media_type = normalize_content_type(content_type)
    raise EncodingError(
        f"No encoder for structured payload under content type {media_type!r}",
        content_type=content_type,
    )


ENCODERS: dict[str, Encoder] = {
    JSON_CONTENT_TYPE: encode_json,
    "text/json": encode_json,
    FORM_CONTENT_TYPE: encode_form,
    MULTIPART_CONTENT_TYPE: encode_multipart,
}


def get_encoder(content_type: str | None) -> Encoder:
    media_type = normalize_content_type(content_type)
    encoder = ENCODERS.get(media_type)
    if encoder is not None:
        return encoder
    if is_json_content_type(media_type):
        return encode_json
    return encode_passthrough


def encode_payload(content_type: str | None, payload: Any) -> EncodedBody:
    """Serialize ``payload`` for ``content_type``.

    Args:
        content_type: The request's ``Content-Type`` header value.
        payload: ``None``/empty, a mapping or sequence, or pre-serialized
            ``str``/``bytes``.

    Returns:
        The encoded body. ``content`` is ``None`` for an empty payload.

    Raises:
        EncodingError: If the payload cannot be encoded for the content type.
    """
    if _is_empty(payload):
        return EncodedBody(None, content_type)
    return get_encoder(content_type)(content_type or "", payload)


__all__ = [
    "ENCODERS",
    "EncodedBody",
    "Encoder",
    "FORM_CONTENT_TYPE",
    "JSON_CONTENT_TYPE",
    "MULTIPART_CONTENT_TYPE",
    "encode_form",
    "encode_json",
    "encode_multipart",
    "encode_passthrough",
    "encode_payload",
    "get_encoder",
    "is_json_content_type",
    "normalize_content_type",
]
