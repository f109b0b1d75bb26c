from pathlib import Path

import pytest

from projreg.core.access import AdminAuthority
from projreg.core.errors import NotFound, OperationDisabled
from projreg.core.ledger import TokenLedger
from projreg.core.registry import ProjectRegistry
from projreg.db.store import SQLiteStore


@pytest.mark.asyncio
async def test_ledger_reads_minted_tokens(tmp_path: Path) -> None:
    store = SQLiteStore(tmp_path / "registry.db")
    registry = ProjectRegistry(store, AdminAuthority("admin"))
    await registry.create("admin", "ipfs://proposalA")
    ledger = TokenLedger(store)

    assert await ledger.exists(0)
    assert not await ledger.exists(1)
    assert await ledger.owner_of(0) == "admin"
    assert await ledger.balance_of("admin") == 1
    assert await ledger.balance_of("someone") == 0

    with pytest.raises(NotFound):
        await ledger.owner_of(1)


@pytest.mark.asyncio
@pytest.mark.parametrize("token_id", [0, 1, 12345])
@pytest.mark.parametrize("caller", ["admin", "mallory"])
async def test_transfers_and_approvals_are_disabled(
    tmp_path: Path,
    token_id: int,
    caller: str,
) -> None:
    store = SQLiteStore(tmp_path / "registry.db")
    registry = ProjectRegistry(store, AdminAuthority("admin"))
    await registry.create("admin", "ipfs://proposalA")
    ledger = registry.ledger

    with pytest.raises(OperationDisabled):
        ledger.transfer_from(caller, "admin", "bob", token_id)
    with pytest.raises(OperationDisabled):
        ledger.safe_transfer_from(caller, "admin", "bob", token_id, b"data")
    with pytest.raises(OperationDisabled):
        ledger.approve(caller, "bob", token_id)
    with pytest.raises(OperationDisabled):
        ledger.set_approval_for_all(caller, "bob", True)

    assert await ledger.owner_of(0) == "admin"
    assert len(await registry.events()) == 1
