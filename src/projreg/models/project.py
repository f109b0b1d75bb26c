"""Project record models."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field


class ProjectStatus(str, Enum):
    """Lifecycle status for a registered project."""

    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in {ProjectStatus.COMPLETED, ProjectStatus.CANCELLED}


class ProjectRecord(BaseModel):
    """One registered project and its document pointers."""

    id: int = Field(ge=0)
    proposal_uri: str
    report_uri: str = ""
    status: ProjectStatus = ProjectStatus.UPCOMING
    owner: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    def touch(self) -> None:
        """Update mutation timestamp."""
        self.updated_at = datetime.now(UTC)
