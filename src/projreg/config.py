"""Environment-driven runtime settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

TRUE_VALUES = {"1", "true", "yes", "y", "on"}

PROJREG_ADMIN = "PROJREG_ADMIN"
PROJREG_DB_PATH = "PROJREG_DB_PATH"
PROJREG_TOKEN_NAME = "PROJREG_TOKEN_NAME"
PROJREG_TOKEN_SYMBOL = "PROJREG_TOKEN_SYMBOL"
PROJREG_HOST = "PROJREG_HOST"
PROJREG_PORT = "PROJREG_PORT"
PROJREG_LOG_LEVEL = "PROJREG_LOG_LEVEL"
PROJREG_LOG_JSON = "PROJREG_LOG_JSON"
PROJREG_CALLER = "PROJREG_CALLER"


@dataclass(frozen=True)
class Settings:
    administrator: str
    db_path: Path
    token_name: str
    token_symbol: str
    host: str
    port: int
    log_level: str
    log_json: bool


def _env(name: str, default: str = "") -> str:
    return str(os.getenv(name, default)).strip()


def _env_bool(name: str, default: bool) -> bool:
    raw = _env(name, "1" if default else "0").lower()
    return raw in TRUE_VALUES


def _env_int(name: str, default: int) -> int:
    raw = _env(name, str(default))
    try:
        return int(raw)
    except ValueError:
        return default


def get_settings() -> Settings:
    return Settings(
        administrator=_env(PROJREG_ADMIN, "admin"),
        db_path=Path(_env(PROJREG_DB_PATH, ".projreg/projreg.db")),
        token_name=_env(PROJREG_TOKEN_NAME, "Project Registry"),
        token_symbol=_env(PROJREG_TOKEN_SYMBOL, "PRJ"),
        host=_env(PROJREG_HOST, "0.0.0.0"),
        port=_env_int(PROJREG_PORT, 8000),
        log_level=_env(PROJREG_LOG_LEVEL, "INFO").upper() or "INFO",
        log_json=_env_bool(PROJREG_LOG_JSON, default=False),
    )


def get_default_caller() -> str | None:
    """Caller identity the CLI acts as when `--caller` is not given."""
    return _env(PROJREG_CALLER) or None


def validate_settings(settings: Settings) -> list[str]:
    issues: list[str] = []
    if not settings.administrator:
        issues.append(f"{PROJREG_ADMIN} must not be empty")
    if not 0 < settings.port < 65536:
        issues.append(f"{PROJREG_PORT} must be between 1 and 65535")
    if not settings.token_symbol:
        issues.append(f"{PROJREG_TOKEN_SYMBOL} must not be empty")
    return issues
