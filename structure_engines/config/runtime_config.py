"""Runtime configuration helpers for the structure engines."""
from __future__ import annotations

import os
from typing import Optional

DEFAULT_IWGO_FOLDER = "iwgos"
DEFAULT_LOG_LEVEL = "INFO"

_TRUTHY = {"1", "true", "yes", "on"}


def _get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(name, default)


def get_env() -> Optional[str]:
    return _get_env("ENV") or _get_env("APP_ENV")


def get_iwgo_folder() -> str:
    return _get_env("IWGO_FOLDER") or DEFAULT_IWGO_FOLDER


def get_iwgo_auto_create() -> bool:
    """Whether the manager creates a missing blueprint folder instead of loading nothing."""
    return (_get_env("IWGO_AUTO_CREATE") or "").strip().lower() in _TRUTHY


def get_default_seed() -> Optional[int]:
    raw = (_get_env("IWGO_DEFAULT_SEED") or "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"IWGO_DEFAULT_SEED must be an integer, got {raw!r}")


def get_log_level() -> str:
    return (_get_env("LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()


def config_snapshot() -> dict:
    """Return a snapshot of relevant env-driven config."""
    return {
        "env": get_env(),
        "iwgo_folder": get_iwgo_folder(),
        "iwgo_auto_create": get_iwgo_auto_create(),
        "default_seed": get_default_seed(),
        "log_level": get_log_level(),
    }
