"""Project routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from projreg.api.deps import get_caller, get_registry
from projreg.api.schemas.projects import (
    AdvanceStatusRequest,
    CreateProjectRequest,
    OwnerResponse,
    ProjectResponse,
    ProjectsResponse,
)
from projreg.core.registry import ProjectRegistry

router = APIRouter(prefix="/api/v1/projects", tags=["projects"])


@router.get("", response_model=ProjectsResponse)
async def list_projects(registry: ProjectRegistry = Depends(get_registry)) -> ProjectsResponse:
    return ProjectsResponse(items=await registry.list())


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_project(
    request: CreateProjectRequest,
    caller: str | None = Depends(get_caller),
    registry: ProjectRegistry = Depends(get_registry),
) -> dict[str, int]:
    project = await registry.create(caller, request.proposal_uri)
    return {"id": project.id}


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: int,
    registry: ProjectRegistry = Depends(get_registry),
) -> ProjectResponse:
    project = await registry.get(project_id)
    if project is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return ProjectResponse(project=project)


@router.post("/{project_id}/status", response_model=ProjectResponse)
async def advance_project_status(
    project_id: int,
    request: AdvanceStatusRequest,
    caller: str | None = Depends(get_caller),
    registry: ProjectRegistry = Depends(get_registry),
) -> ProjectResponse:
    project = await registry.advance_status(
        caller,
        project_id,
        request.status,
        request.report_uri,
    )
    return ProjectResponse(project=project)


@router.get("/{project_id}/owner", response_model=OwnerResponse)
async def get_project_owner(
    project_id: int,
    registry: ProjectRegistry = Depends(get_registry),
) -> OwnerResponse:
    owner = await registry.ledger.owner_of(project_id)
    return OwnerResponse(project_id=project_id, owner=owner)
