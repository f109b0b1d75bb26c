"""Event log routes."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, Query

from projreg.api.deps import get_registry
from projreg.api.routes.common import parse_event_type
from projreg.api.schemas.events import EventResponse, EventsResponse
from projreg.core.registry import ProjectRegistry
from projreg.models.events import RegistryEvent

router = APIRouter(prefix="/api/v1", tags=["events"])


def _events_response(events: list[RegistryEvent]) -> EventsResponse:
    return EventsResponse(
        items=[
            EventResponse(
                id=event.id,
                project_id=event.project_id,
                event_type=event.event_type.value,
                payload=event.payload,
                timestamp=event.timestamp,
            )
            for event in events
        ]
    )


@router.get("/events", response_model=EventsResponse)
async def list_events(
    event_type: str | None = None,
    since: datetime | None = Query(default=None),
    until: datetime | None = Query(default=None),
    registry: ProjectRegistry = Depends(get_registry),
) -> EventsResponse:
    events = await registry.events(
        event_type=parse_event_type(event_type),
        since=since,
        until=until,
    )
    return _events_response(events)


@router.get("/projects/{project_id}/events", response_model=EventsResponse)
async def list_project_events(
    project_id: int,
    event_type: str | None = None,
    since: datetime | None = Query(default=None),
    until: datetime | None = Query(default=None),
    registry: ProjectRegistry = Depends(get_registry),
) -> EventsResponse:
    await registry.require(project_id)
    events = await registry.events(
        project_id=project_id,
        event_type=parse_event_type(event_type),
        since=since,
        until=until,
    )
    return _events_response(events)
