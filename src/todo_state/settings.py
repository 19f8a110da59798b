from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - TODO_SEED: 'default' (the four starter todos) or 'empty'
    - LOG_LEVEL: logging level name, 'INFO' by default
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins; '*' by default
    """

    seed: str
    log_level: str
    cors_allow_origins: List[str]


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    seed = _get_env("TODO_SEED", "default").strip().lower()
    if seed not in {"default", "empty"}:
        # Fallback to the starter todos if unsupported
        seed = "default"

    log_level = _get_env("LOG_LEVEL", "INFO").strip().upper()
    origins = _parse_origins(_get_env("CORS_ALLOW_ORIGINS", "*"))

    return Settings(
        seed=seed,
        log_level=log_level,
        cors_allow_origins=origins,
    )
