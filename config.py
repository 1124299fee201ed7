import os
from dataclasses import dataclass

import httpx


DEFAULT_BASE_URL = "http://localhost:8080/api/v3"
DEFAULT_CONNECT_TIMEOUT = 10.0  # seconds
DEFAULT_READ_TIMEOUT = 30.0  # seconds
DEFAULT_MAX_IN_MEMORY_SIZE = 1024 * 1024  # 1 MiB

_TRUTHY = {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class ClientConfig:
    """
    Purpose:  Immutable base configuration handed to RestClient at construction.

    - base_url: every request path is appended to this
    - connect_timeout / read_timeout: bound each call, in seconds
    - max_in_memory_size: largest response body (bytes) the client will buffer
    - strict_query_params: raise on malformed "key=value" strings instead of
      dropping them
    """
    base_url: str = DEFAULT_BASE_URL
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    read_timeout: float = DEFAULT_READ_TIMEOUT
    max_in_memory_size: int = DEFAULT_MAX_IN_MEMORY_SIZE
    strict_query_params: bool = False

    def __post_init__(self):
        if self.connect_timeout <= 0 or self.read_timeout <= 0:
            raise ValueError("timeouts must be positive")
        if self.max_in_memory_size <= 0:
            raise ValueError("max_in_memory_size must be positive")

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Build a config from PETSTORE_* environment variables, falling back to defaults."""
        strict = (os.getenv("PETSTORE_STRICT_QUERY_PARAMS") or "").strip().lower() in _TRUTHY
        return cls(
            base_url=os.getenv("PETSTORE_BASE_URL", DEFAULT_BASE_URL),
            connect_timeout=_env_float("PETSTORE_CONNECT_TIMEOUT", DEFAULT_CONNECT_TIMEOUT),
            read_timeout=_env_float("PETSTORE_READ_TIMEOUT", DEFAULT_READ_TIMEOUT),
            max_in_memory_size=_env_int("PETSTORE_MAX_IN_MEMORY_SIZE", DEFAULT_MAX_IN_MEMORY_SIZE),
            strict_query_params=strict,
        )

    def to_httpx_timeout(self) -> httpx.Timeout:
        # read applies to write/pool too; connect is the only one tuned separately
        return httpx.Timeout(self.read_timeout, connect=self.connect_timeout)
