"""SQLite migrations for registry storage."""

from __future__ import annotations

import aiosqlite

SCHEMA_VERSION = 1


async def apply_migrations(conn: aiosqlite.Connection) -> None:
    """Create registry schema if missing, seed the id counter, and set schema version."""
    await conn.execute(
        """
        CREATE TABLE IF NOT EXISTS schema_migrations (
            version INTEGER PRIMARY KEY
        )
        """
    )

    await conn.execute(
        """
        CREATE TABLE IF NOT EXISTS registry_state (
            key TEXT PRIMARY KEY,
            value INTEGER NOT NULL
        )
        """
    )

    await conn.execute(
        """
        CREATE TABLE IF NOT EXISTS projects (
            id INTEGER PRIMARY KEY,
            proposal_uri TEXT NOT NULL CHECK (length(proposal_uri) > 0),
            report_uri TEXT NOT NULL DEFAULT '',
            status TEXT NOT NULL,
            owner TEXT NOT NULL,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
        """
    )

    await conn.execute(
        """
        CREATE TABLE IF NOT EXISTS token_owners (
            token_id INTEGER PRIMARY KEY,
            owner TEXT NOT NULL,
            FOREIGN KEY(token_id) REFERENCES projects(id)
        )
        """
    )

    await conn.execute(
        """
        CREATE TABLE IF NOT EXISTS registry_events (
            seq INTEGER PRIMARY KEY AUTOINCREMENT,
            id TEXT NOT NULL UNIQUE,
            project_id INTEGER NOT NULL,
            event_type TEXT NOT NULL,
            payload TEXT NOT NULL,
            timestamp TEXT NOT NULL,
            FOREIGN KEY(project_id) REFERENCES projects(id)
        )
        """
    )

    await conn.execute("INSERT OR IGNORE INTO registry_state(key, value) VALUES ('next_id', 0)")
    await conn.execute("DELETE FROM schema_migrations")
    await conn.execute("INSERT INTO schema_migrations(version) VALUES (?)", (SCHEMA_VERSION,))
    await conn.commit()
