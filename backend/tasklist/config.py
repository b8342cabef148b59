"""Settings loaded from environment variables (+ optional .env)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv(override=False)

ENV_PREFIX = "TASKLIST"


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [p.strip() for p in raw.replace(",", " ").split() if p.strip()]


@dataclass(frozen=True)
class Settings:
    database_path: str = "tasklist.db"

    # Assistant
    anthropic_api_key: str = ""
    assistant_model: str = "claude-sonnet-4-5"
    assistant_max_tokens: int = 1024
    assistant_max_retries: int = 2

    # Auth (tokens are issued by the identity service; we only verify them)
    jwt_secret: str = "dev-secret-change-me"
    jwt_algorithm: str = "HS256"
    jwt_ttl_seconds: int = 30 * 24 * 60 * 60

    cors_origins: list[str] = field(default_factory=lambda: ["http://localhost:5173"])

    log_level: str = "INFO"
    log_dir: str = ""


def load_settings() -> Settings:
    return Settings(
        database_path=_env(_k("DATABASE_PATH"), "tasklist.db"),
        anthropic_api_key=_env("ANTHROPIC_API_KEY"),
        assistant_model=_env(_k("ASSISTANT_MODEL"), "claude-sonnet-4-5"),
        assistant_max_tokens=_env_int(_k("ASSISTANT_MAX_TOKENS"), 1024),
        assistant_max_retries=_env_int(_k("ASSISTANT_MAX_RETRIES"), 2),
        jwt_secret=_env(_k("JWT_SECRET"), "dev-secret-change-me"),
        jwt_algorithm=_env(_k("JWT_ALGORITHM"), "HS256"),
        jwt_ttl_seconds=_env_int(_k("JWT_TTL_SECONDS"), 30 * 24 * 60 * 60),
        cors_origins=_env_list(_k("CORS_ORIGINS"), ["http://localhost:5173"]),
        log_level=_env(_k("LOG_LEVEL"), "INFO").upper(),
        log_dir=_env(_k("LOG_DIR")),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
