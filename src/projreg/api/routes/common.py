"""Common route helpers."""

from __future__ import annotations

from fastapi import HTTPException, status

from projreg.models.events import EventType


def parse_event_type(event_type: str | None) -> EventType | None:
    """Parse an optional event type query value or return 400."""
    if event_type is None:
        return None
    try:
        return EventType(event_type)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid event_type",
        ) from exc
