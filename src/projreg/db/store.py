"""Async SQLite persistence for registry records, token ownership and events."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from pathlib import Path

import aiosqlite

from projreg.db.migrations import apply_migrations
from projreg.models.events import EventType, RegistryEvent
from projreg.models.project import ProjectRecord, ProjectStatus

_OPEN_STATUSES = (ProjectStatus.UPCOMING.value, ProjectStatus.ONGOING.value)

# SQLite INTEGER is a signed 64-bit value; larger ids name no stored row.
_MAX_ROW_ID = 2**63 - 1


def _is_row_id(value: int) -> bool:
    return 0 <= value <= _MAX_ROW_ID


def _utc_isoformat(value: datetime) -> str:
    # Stored timestamps are UTC; naive filter values are read as UTC too.
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat()


class StoreConflictError(RuntimeError):
    """A guarded write found the row in an unexpected state."""


class SQLiteStore:
    """Data access layer for project records, token owners and the event log."""

    def __init__(self, db_path: Path) -> None:
        self._db_path = db_path

    @property
    def db_path(self) -> Path:
        return self._db_path

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[aiosqlite.Connection]:
        conn = await aiosqlite.connect(self._db_path)
        conn.row_factory = aiosqlite.Row
        try:
            await apply_migrations(conn)
            yield conn
        finally:
            await conn.close()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """Open a write transaction that commits on success and rolls back on error."""
        async with self.connection() as conn:
            await conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except BaseException:
                await conn.rollback()
                raise
            await conn.commit()

    async def next_id(self) -> int:
        async with self.connection() as conn:
            cursor = await conn.execute("SELECT value FROM registry_state WHERE key = 'next_id'")
            row = await cursor.fetchone()
        return int(row["value"]) if row is not None else 0

    async def create_project(self, project: ProjectRecord, event: RegistryEvent) -> None:
        """Insert a new record, mint its token and append its event in one transaction.

        Consumes the id counter only if it still equals `project.id`.
        """
        async with self.transaction() as conn:
            cursor = await conn.execute(
                "UPDATE registry_state SET value = value + 1 WHERE key = 'next_id' AND value = ?",
                (project.id,),
            )
            if cursor.rowcount != 1:
                msg = f"id counter no longer at {project.id}"
                raise StoreConflictError(msg)
            await conn.execute(
                """
                INSERT INTO projects(
                    id,
                    proposal_uri,
                    report_uri,
                    status,
                    owner,
                    created_at,
                    updated_at
                )
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    project.id,
                    project.proposal_uri,
                    project.report_uri,
                    project.status.value,
                    project.owner,
                    project.created_at.isoformat(),
                    project.updated_at.isoformat(),
                ),
            )
            await conn.execute(
                "INSERT INTO token_owners(token_id, owner) VALUES (?, ?)",
                (project.id, project.owner),
            )
            await self._insert_event(conn, event)

    async def update_project_status(self, project: ProjectRecord, event: RegistryEvent) -> None:
        """Persist a status change and its event; refuses rows already finalized."""
        async with self.transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE projects
                SET status = ?, report_uri = ?, updated_at = ?
                WHERE id = ? AND status IN (?, ?)
                """,
                (
                    project.status.value,
                    project.report_uri,
                    project.updated_at.isoformat(),
                    project.id,
                    *_OPEN_STATUSES,
                ),
            )
            if cursor.rowcount != 1:
                msg = f"project {project.id} is missing or already finalized"
                raise StoreConflictError(msg)
            await self._insert_event(conn, event)

    async def list_projects(self) -> list[ProjectRecord]:
        async with self.connection() as conn:
            cursor = await conn.execute("SELECT * FROM projects ORDER BY id ASC")
            rows = await cursor.fetchall()
        return [self._project_from_row(row) for row in rows]

    async def get_project(self, project_id: int) -> ProjectRecord | None:
        if not _is_row_id(project_id):
            return None
        async with self.connection() as conn:
            cursor = await conn.execute("SELECT * FROM projects WHERE id = ?", (project_id,))
            row = await cursor.fetchone()
        if row is None:
            return None
        return self._project_from_row(row)

    async def get_token_owner(self, token_id: int) -> str | None:
        if not _is_row_id(token_id):
            return None
        async with self.connection() as conn:
            cursor = await conn.execute(
                "SELECT owner FROM token_owners WHERE token_id = ?", (token_id,)
            )
            row = await cursor.fetchone()
        if row is None:
            return None
        return str(row["owner"])

    async def count_tokens(self, owner: str) -> int:
        async with self.connection() as conn:
            cursor = await conn.execute(
                "SELECT COUNT(*) AS total FROM token_owners WHERE owner = ?", (owner,)
            )
            row = await cursor.fetchone()
        return int(row["total"]) if row is not None else 0

    async def list_events(
        self,
        *,
        project_id: int | None = None,
        event_type: EventType | None = None,
        since: datetime | None = None,
        until: datetime | None = None,
    ) -> list[RegistryEvent]:
        query = "SELECT * FROM registry_events WHERE 1 = 1"
        params: list[str | int] = []

        if project_id is not None:
            if not _is_row_id(project_id):
                return []
            query += " AND project_id = ?"
            params.append(project_id)

        if event_type:
            query += " AND event_type = ?"
            params.append(event_type.value)

        if since:
            query += " AND timestamp >= ?"
            params.append(_utc_isoformat(since))

        if until:
            query += " AND timestamp <= ?"
            params.append(_utc_isoformat(until))

        query += " ORDER BY seq ASC"

        async with self.connection() as conn:
            cursor = await conn.execute(query, tuple(params))
            rows = await cursor.fetchall()

        return [self._event_from_row(row) for row in rows]

    @staticmethod
    async def _insert_event(conn: aiosqlite.Connection, event: RegistryEvent) -> None:
        await conn.execute(
            """
            INSERT INTO registry_events(id, project_id, event_type, payload, timestamp)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                event.id,
                event.project_id,
                event.event_type.value,
                json.dumps(event.payload),
                event.timestamp.isoformat(),
            ),
        )

    @staticmethod
    def _project_from_row(row: aiosqlite.Row) -> ProjectRecord:
        return ProjectRecord(
            id=int(row["id"]),
            proposal_uri=str(row["proposal_uri"]),
            report_uri=str(row["report_uri"]),
            status=ProjectStatus(str(row["status"])),
            owner=str(row["owner"]),
            created_at=datetime.fromisoformat(str(row["created_at"])),
            updated_at=datetime.fromisoformat(str(row["updated_at"])),
        )

    @staticmethod
    def _event_from_row(row: aiosqlite.Row) -> RegistryEvent:
        return RegistryEvent(
            id=str(row["id"]),
            project_id=int(row["project_id"]),
            event_type=EventType(str(row["event_type"])),
            payload=json.loads(str(row["payload"])),
            timestamp=datetime.fromisoformat(str(row["timestamp"])),
        )
