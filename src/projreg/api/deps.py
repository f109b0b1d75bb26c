"""Shared API dependency providers."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from fastapi import Header

from projreg.config import Settings, get_settings
from projreg.core.registry import ProjectRegistry, build_registry
from projreg.db.store import SQLiteStore

_REGISTRIES: dict[Path, ProjectRegistry] = {}


@lru_cache(maxsize=1)
def get_app_settings() -> Settings:
    return get_settings()


def get_store() -> SQLiteStore:
    db_path = get_app_settings().db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return SQLiteStore(db_path=db_path)


def get_registry() -> ProjectRegistry:
    """Return the process-wide registry for the configured database.

    One instance per database keeps every request behind the same mutation lock.
    """
    store = get_store()
    registry = _REGISTRIES.get(store.db_path)
    if registry is None:
        registry = build_registry(store, get_app_settings())
        _REGISTRIES[store.db_path] = registry
    return registry


def get_caller(x_caller_id: str | None = Header(default=None)) -> str | None:
    return x_caller_id
