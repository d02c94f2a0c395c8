"""Client configuration and credential resolution."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

import httpx

from .errors import ConfigurationError

DEFAULT_TIMEOUT = 60.0
DEFAULT_USER_AGENT = "apicore/0.1.0"


def resolve_credentials(
    env_vars: Mapping[str, str],
    explicit: Mapping[str, str | None] | None = None,
    environ: Mapping[str, str] | None = None,
) -> dict[str, str | None]:
    """Resolve credentials from explicit values, falling back to the environment.

    Args:
        env_vars: Credential name -> environment variable name.
        explicit: Credential name -> value supplied by the caller.
        environ: Environment to read from. Defaults to ``os.environ``.

    Returns:
        Credential name -> resolved value, ``None`` when unset. A non-empty
        explicit value always wins, independently for each name.
    """
    explicit = explicit or {}
    env = os.environ if environ is None else environ

    resolved: dict[str, str | None] = {}
    for name in (*env_vars, *(k for k in explicit if k not in env_vars)):
        value = explicit.get(name)
        if not value:
            var = env_vars.get(name)
            value = env.get(var) if var else None
        resolved[name] = value or None
    return resolved


def validate_base_url(base_url: str | None) -> str:
    """Return ``base_url`` without a trailing slash, or raise ConfigurationError."""
    if not base_url or not isinstance(base_url, str):
        raise ConfigurationError("Missing base URL. Pass base_url=... or set DEFAULT_BASE_URL.")
    try:
        url = httpx.URL(base_url)
    except httpx.InvalidURL as e:
        raise ConfigurationError(f"Malformed base URL {base_url!r}: {e}") from e
    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigurationError(f"Base URL must be an absolute http(s) URL, got {base_url!r}")
    return base_url.rstrip("/")


@dataclass(frozen=True, eq=False)
class ClientConfig:
    """Immutable per-client configuration, built once at construction.

    Compared and hashed by identity: ``credentials`` is a read-only mapping
    proxy, which is not hashable.
    """

    base_url: str
    credentials: Mapping[str, str | None] = field(default_factory=dict)
    include_raw: bool = False
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", validate_base_url(self.base_url))
        object.__setattr__(self, "credentials", MappingProxyType(dict(self.credentials)))

    def build_url(self, path: str) -> str:
        return self.base_url + path


__all__ = [
    "ClientConfig",
    "DEFAULT_TIMEOUT",
    "DEFAULT_USER_AGENT",
    "resolve_credentials",
    "validate_base_url",
]
