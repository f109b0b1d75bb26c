"""Registry metadata and token balance routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from projreg.api.deps import get_registry
from projreg.api.schemas.projects import BalanceResponse, RegistryInfoResponse
from projreg.core.registry import ProjectRegistry

router = APIRouter(prefix="/api/v1", tags=["registry"])


@router.get("/registry", response_model=RegistryInfoResponse)
async def registry_info(registry: ProjectRegistry = Depends(get_registry)) -> RegistryInfoResponse:
    info = await registry.info()
    return RegistryInfoResponse(
        name=info.name,
        symbol=info.symbol,
        administrator=info.administrator,
        next_id=info.next_id,
    )


@router.get("/owners/{owner}/balance", response_model=BalanceResponse)
async def owner_balance(
    owner: str,
    registry: ProjectRegistry = Depends(get_registry),
) -> BalanceResponse:
    return BalanceResponse(owner=owner, balance=await registry.ledger.balance_of(owner))
