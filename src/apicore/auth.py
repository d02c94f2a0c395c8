"""Authentication header strategies.

A strategy turns resolved credentials into request headers. Each concrete
client picks one (or writes its own callable) since header names and
encodings differ between APIs. A strategy whose credentials are unset adds
no headers; the upstream API reports the missing auth.
"""

from __future__ import annotations

import base64
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol


class AuthStrategy(Protocol):
    def __call__(self, credentials: Mapping[str, str | None]) -> Mapping[str, str]: ...


@dataclass(frozen=True)
class NoAuth:
    """Send no authentication headers."""

    def __call__(self, credentials: Mapping[str, str | None]) -> Mapping[str, str]:
        return {}


@dataclass(frozen=True)
class BearerAuth:
    """``Authorization: Bearer <token>`` (RFC 6750)."""

    credential: str = "token"

    def __call__(self, credentials: Mapping[str, str | None]) -> Mapping[str, str]:
        token = credentials.get(self.credential)
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}


@dataclass(frozen=True)
class HeaderAuth:
    """A custom header carrying one credential, e.g. ``X-Api-Key``."""

    header_name: str
    credential: str = "api_key"
    prefix: str = ""

    def __call__(self, credentials: Mapping[str, str | None]) -> Mapping[str, str]:
        value = credentials.get(self.credential)
        if not value:
            return {}
        return {self.header_name: f"{self.prefix}{value}"}


@dataclass(frozen=True)
class BasicAuth:
    """``Authorization: Basic base64(user:password)`` (RFC 7617).

    Either half may be empty (e.g. token-as-username APIs), but not both.
    """

    username: str = "username"
    password: str = "password"

    def __call__(self, credentials: Mapping[str, str | None]) -> Mapping[str, str]:
        user = credentials.get(self.username) or ""
        secret = credentials.get(self.password) or ""
        if not user and not secret:
            return {}
        encoded = base64.b64encode(f"{user}:{secret}".encode()).decode("ascii")
        return {"Authorization": f"Basic {encoded}"}


__all__ = ["AuthStrategy", "NoAuth", "BearerAuth", "HeaderAuth", "BasicAuth"]
