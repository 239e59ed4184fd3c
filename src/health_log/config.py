"""Runtime settings read from the environment (and a local .env file)."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


STORE_BACKENDS = ("memory", "sqlite", "dynamodb")

DEFAULT_SQLITE_PATH = os.path.join("data", "health_log.db")
DEFAULT_DYNAMODB_TABLE = "HealthLogUserData"
DEFAULT_PORT = 5000


def _get_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    store_backend: str = "memory"
    sqlite_path: str = DEFAULT_SQLITE_PATH
    dynamodb_table: str = DEFAULT_DYNAMODB_TABLE
    dynamodb_region: str | None = None
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = DEFAULT_PORT
    debug: bool = False

    def __post_init__(self) -> None:
        if self.store_backend not in STORE_BACKENDS:
            raise ValueError(
                f"unknown store backend {self.store_backend!r}; expected one of {', '.join(STORE_BACKENDS)}"
            )


def load_settings() -> Settings:
    load_dotenv()

    return Settings(
        store_backend=os.getenv("HEALTH_LOG_STORE", "memory").strip().lower(),
        sqlite_path=os.getenv("HEALTH_LOG_SQLITE_PATH", DEFAULT_SQLITE_PATH),
        dynamodb_table=os.getenv("HEALTH_LOG_DYNAMODB_TABLE", DEFAULT_DYNAMODB_TABLE),
        dynamodb_region=os.getenv("HEALTH_LOG_DYNAMODB_REGION") or None,
        log_level=os.getenv("HEALTH_LOG_LOG_LEVEL", "INFO").strip().upper(),
        host=os.getenv("HOST", "127.0.0.1"),
        port=_get_int_env("PORT", DEFAULT_PORT),
        debug=os.getenv("FLASK_DEBUG", "").strip() == "1",
    )
