"""Configuration and environment helpers for the project.

Provides small helpers to read typed environment variables and exposes
project-level configuration constants used across the codebase (e.g.
TIMELINE_API_BASE_URL, HTTP_VERIFY, cache sizing and the runtime profile).
"""

from __future__ import annotations

import os


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


# Timeline game REST back end
TIMELINE_API_BASE_URL = os.environ.get("TIMELINE_API_BASE_URL", "http://localhost:3000").strip()
HTTP_TIMEOUT = _env_float("HTTP_TIMEOUT", 10.0)

# Network / HTTP
HTTP_VERIFY = _env_bool("HTTP_VERIFY", False)

# Cache (seconds)
CACHE_MAX_SIZE = _env_int("CACHE_MAX_SIZE", 1000)
CACHE_DEFAULT_TTL = _env_float("CACHE_DEFAULT_TTL", 300.0)
CACHE_CLEANUP_INTERVAL = _env_float("CACHE_CLEANUP_INTERVAL", 300.0)

# Runtime profile: periodic cache cleanup only runs in "production"
RUNTIME_ENV = os.environ.get("RUNTIME_ENV", "development").strip().lower()

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").strip().upper()
