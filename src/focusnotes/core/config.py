"""Configuration settings."""

import os
from dataclasses import dataclass

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 5000
DEFAULT_ALLOW_ORIGIN = "http://localhost:5173"
MAX_PORT = 65535
FALSY_VALUES = frozenset({"0", "false", "no", "off"})


class ConfigError(ValueError):
    """Raised when an environment variable holds an unusable value."""


@dataclass(frozen=True)
class Settings:
    """Process settings read from the environment."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    allow_origins: tuple[str, ...] = (DEFAULT_ALLOW_ORIGIN,)
    log_json: bool = True


def _read_port() -> int:
    raw = os.environ.get("PORT")
    if not raw:
        return DEFAULT_PORT
    try:
        port = int(raw)
    except ValueError as e:
        msg = f"Invalid PORT: {raw!r}. Must be an integer."
        raise ConfigError(msg) from e
    if not 0 < port <= MAX_PORT:
        msg = f"Invalid PORT: {port}. Must be between 1 and {MAX_PORT}."
        raise ConfigError(msg)
    return port


def _read_origins() -> tuple[str, ...]:
    # ALLOW_ORIGIN (comma-separated) or fallback to the Vite dev server
    raw = os.environ.get("ALLOW_ORIGIN") or DEFAULT_ALLOW_ORIGIN
    return tuple(origin.strip() for origin in raw.split(",") if origin.strip())


def get_settings() -> Settings:
    """Build settings from ``PORT``, ``HOST``, ``ALLOW_ORIGIN`` and friends."""
    log_json = os.environ.get("FOCUSNOTES_LOG_JSON", "true").strip().lower()
    return Settings(
        host=os.environ.get("HOST") or DEFAULT_HOST,
        port=_read_port(),
        allow_origins=_read_origins(),
        log_json=log_json not in FALSY_VALUES,
    )
