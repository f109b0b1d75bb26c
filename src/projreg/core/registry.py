"""Project registry: creation and lifecycle transitions."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime

from projreg.config import Settings
from projreg.core.access import AdminAuthority
from projreg.core.errors import InvalidArgument, InvalidState, NotFound, RegistryError
from projreg.core.ledger import TokenLedger
from projreg.core.lifecycle import check_transition
from projreg.db.store import SQLiteStore, StoreConflictError
from projreg.models.events import EventType, RegistryEvent
from projreg.models.project import ProjectRecord, ProjectStatus

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class RegistryInfo:
    """Static registry metadata plus the current id counter."""

    name: str
    symbol: str
    administrator: str
    next_id: int


class ProjectRegistry:
    """Manage project records behind a single administrator.

    Mutations are serialized by one lock per instance; reads go straight to
    the store.
    """

    def __init__(
        self,
        store: SQLiteStore,
        authority: AdminAuthority,
        *,
        name: str = "Project Registry",
        symbol: str = "PRJ",
    ) -> None:
        self._store = store
        self._authority = authority
        self._ledger = TokenLedger(store)
        self._name = name
        self._symbol = symbol
        self._lock = asyncio.Lock()

    @property
    def ledger(self) -> TokenLedger:
        return self._ledger

    @property
    def administrator(self) -> str:
        return self._authority.administrator

    def authorize(self, caller: str | None) -> None:
        """Raise `PermissionDenied` unless `caller` is the administrator."""
        try:
            self._authority.require_administrator(caller)
        except RegistryError as exc:
            LOGGER.warning("mutation rejected caller=%s kind=%s: %s", caller, exc.kind, exc)
            raise

    async def create(self, caller: str | None, proposal_uri: str) -> ProjectRecord:
        async with self._lock:
            try:
                self._authority.require_administrator(caller)
                if not isinstance(proposal_uri, str) or not proposal_uri:
                    msg = "proposal_uri must be a non-empty string"
                    raise InvalidArgument(msg)
            except RegistryError as exc:
                LOGGER.warning("create rejected caller=%s kind=%s: %s", caller, exc.kind, exc)
                raise

            project = ProjectRecord(
                id=await self._store.next_id(),
                proposal_uri=proposal_uri,
                owner=self._authority.administrator,
            )
            event = RegistryEvent(
                project_id=project.id,
                event_type=EventType.PROJECT_CREATED,
                payload={"id": project.id, "proposal_uri": project.proposal_uri},
            )
            try:
                await self._store.create_project(project, event)
            except StoreConflictError as exc:
                LOGGER.warning("create lost the id race id=%s: %s", project.id, exc)
                msg = "id counter moved; retry"
                raise InvalidState(msg) from exc

        LOGGER.info("project created id=%s proposal_uri=%s", project.id, project.proposal_uri)
        return project

    async def advance_status(
        self,
        caller: str | None,
        project_id: int,
        new_status: ProjectStatus | str,
        report_uri: str = "",
    ) -> ProjectRecord:
        async with self._lock:
            try:
                self._authority.require_administrator(caller)
                project = await self.require(project_id)
                target, stored_report = check_transition(project.status, new_status, report_uri)
            except RegistryError as exc:
                LOGGER.warning(
                    "advance rejected caller=%s id=%s kind=%s: %s",
                    caller,
                    project_id,
                    exc.kind,
                    exc,
                )
                raise

            project.status = target
            if target.is_terminal:
                project.report_uri = stored_report
            project.touch()
            event = RegistryEvent(
                project_id=project.id,
                event_type=EventType.PROJECT_STATUS_CHANGED,
                payload={
                    "id": project.id,
                    "status": project.status.value,
                    "report_uri": project.report_uri,
                },
            )
            try:
                await self._store.update_project_status(project, event)
            except StoreConflictError as exc:
                msg = "project already finalized"
                raise InvalidState(msg) from exc

        LOGGER.info("project %s moved to %s", project.id, project.status.value)
        return project

    async def get(self, project_id: int) -> ProjectRecord | None:
        return await self._store.get_project(project_id)

    async def require(self, project_id: int) -> ProjectRecord:
        project = await self._store.get_project(project_id)
        if project is None:
            msg = f"Project not found: {project_id}"
            raise NotFound(msg)
        return project

    async def list(self) -> list[ProjectRecord]:
        return await self._store.list_projects()

    async def next_id(self) -> int:
        return await self._store.next_id()

    async def events(
        self,
        *,
        project_id: int | None = None,
        event_type: EventType | None = None,
        since: datetime | None = None,
        until: datetime | None = None,
    ) -> list[RegistryEvent]:
        return await self._store.list_events(
            project_id=project_id,
            event_type=event_type,
            since=since,
            until=until,
        )

    async def info(self) -> RegistryInfo:
        return RegistryInfo(
            name=self._name,
            symbol=self._symbol,
            administrator=self._authority.administrator,
            next_id=await self._store.next_id(),
        )


def build_registry(store: SQLiteStore, settings: Settings) -> ProjectRegistry:
    """Wire a registry to `store` using the configured administrator and token metadata."""
    return ProjectRegistry(
        store,
        AdminAuthority(settings.administrator),
        name=settings.token_name,
        symbol=settings.token_symbol,
    )
