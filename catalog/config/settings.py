"""Runtime settings for the catalog services and the gateway.

Environment variables are loaded from a ``.env`` file using ``python-dotenv``
and exposed through a frozen Pydantic settings object.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

# Load environment variables from a .env file if present
load_dotenv()

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
DEFAULT_RACING_DB = os.path.join("db", "racing.db")
DEFAULT_SPORTS_DB = os.path.join("db", "sports.db")
DEFAULT_RACING_ENDPOINT = "localhost:9000"
DEFAULT_SPORTS_ENDPOINT = "localhost:9999"
DEFAULT_API_ENDPOINT = "localhost:8000"
DEFAULT_SEED_COUNT = 100
UPSTREAM_TIMEOUT = 10.0  # seconds
DEFAULT_LOG_LEVEL = "DEBUG"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseModel):
    """Immutable settings object used across the application."""

    racing_db: str = DEFAULT_RACING_DB
    sports_db: str = DEFAULT_SPORTS_DB
    racing_endpoint: str = DEFAULT_RACING_ENDPOINT
    sports_endpoint: str = DEFAULT_SPORTS_ENDPOINT
    api_endpoint: str = DEFAULT_API_ENDPOINT
    seed_count: int = DEFAULT_SEED_COUNT
    upstream_timeout: float = UPSTREAM_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL

    model_config = ConfigDict(frozen=True)


def split_endpoint(value: str) -> tuple[str, int]:
    """Split ``host:port`` into its parts.

    >>> split_endpoint("localhost:9000")
    ('localhost', 9000)
    >>> split_endpoint(":8000")
    ('0.0.0.0', 8000)
    """
    host, sep, port = value.strip().rpartition(":")
    if not sep or not port.isdigit() or not 0 < int(port) < 65536:
        raise RuntimeError(f"Endpoint must look like host:port, got {value!r}")
    return host or "0.0.0.0", int(port)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from exc
    if value < 0:
        raise RuntimeError(f"{name} must not be negative")
    return value


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise RuntimeError(f"{name} must be positive")
    return value


def _env_log_level(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().upper()
    if value not in LOG_LEVELS:
        raise RuntimeError(f"{name} must be one of {', '.join(LOG_LEVELS)}, got {raw!r}")
    return value


def _build_settings() -> Settings:
    """Construct the ``Settings`` instance based on environment variables."""

    endpoints = {
        "racing_endpoint": os.getenv("CATALOG_RACING_ENDPOINT", DEFAULT_RACING_ENDPOINT),
        "sports_endpoint": os.getenv("CATALOG_SPORTS_ENDPOINT", DEFAULT_SPORTS_ENDPOINT),
        "api_endpoint": os.getenv("CATALOG_API_ENDPOINT", DEFAULT_API_ENDPOINT),
    }
    for value in endpoints.values():
        split_endpoint(value)

    return Settings(
        racing_db=os.getenv("CATALOG_RACING_DB", DEFAULT_RACING_DB),
        sports_db=os.getenv("CATALOG_SPORTS_DB", DEFAULT_SPORTS_DB),
        seed_count=_env_int("CATALOG_SEED_COUNT", DEFAULT_SEED_COUNT),
        upstream_timeout=_env_float("CATALOG_UPSTREAM_TIMEOUT", UPSTREAM_TIMEOUT),
        log_level=_env_log_level("CATALOG_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        **endpoints,
    )


# Public settings instance
settings = _build_settings()
