"""Lifecycle event models for the registry log."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field


class EventType(str, Enum):
    """Event kinds appended by the registry."""

    PROJECT_CREATED = "ProjectCreated"
    PROJECT_STATUS_CHANGED = "ProjectStatusChanged"


class RegistryEvent(BaseModel):
    """Append-only event emitted on every successful mutation."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    project_id: int
    event_type: EventType
    payload: dict[str, str | int | float | bool | None] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
