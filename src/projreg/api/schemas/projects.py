"""Project API schemas."""

from __future__ import annotations

from pydantic import BaseModel

from projreg.models.project import ProjectRecord


class CreateProjectRequest(BaseModel):
    """Payload for registering a project."""

    proposal_uri: str = ""


class AdvanceStatusRequest(BaseModel):
    """Payload for moving a project to a new lifecycle status."""

    status: str = ""
    report_uri: str = ""


class ProjectResponse(BaseModel):
    project: ProjectRecord


class ProjectsResponse(BaseModel):
    """Collection response for projects."""

    items: list[ProjectRecord]


class OwnerResponse(BaseModel):
    project_id: int
    owner: str


class BalanceResponse(BaseModel):
    owner: str
    balance: int


class RegistryInfoResponse(BaseModel):
    """Registry metadata."""

    name: str
    symbol: str
    administrator: str
    next_id: int
