"""Token ownership view over registered projects.

Project tokens are minted to the administrator when a record is created and
can never change hands. The standard transfer and approval calls exist here
only so that anything speaking the token interface gets a definite refusal.
"""

from __future__ import annotations

from projreg.core.errors import NotFound, OperationDisabled
from projreg.db.store import SQLiteStore

_NON_TRANSFERABLE = "project tokens are non-transferable"


class TokenLedger:
    """Read ownership of project tokens; refuse every transfer and approval."""

    def __init__(self, store: SQLiteStore) -> None:
        self._store = store

    async def exists(self, token_id: int) -> bool:
        return await self._store.get_token_owner(token_id) is not None

    async def owner_of(self, token_id: int) -> str:
        owner = await self._store.get_token_owner(token_id)
        if owner is None:
            msg = f"Project not found: {token_id}"
            raise NotFound(msg)
        return owner

    async def balance_of(self, owner: str) -> int:
        return await self._store.count_tokens(owner)

    def transfer_from(self, caller: str, sender: str, recipient: str, token_id: int) -> None:
        raise OperationDisabled(_NON_TRANSFERABLE)

    def safe_transfer_from(
        self,
        caller: str,
        sender: str,
        recipient: str,
        token_id: int,
        data: bytes = b"",
    ) -> None:
        raise OperationDisabled(_NON_TRANSFERABLE)

    def approve(self, caller: str, operator: str, token_id: int) -> None:
        raise OperationDisabled("project tokens cannot be approved for transfer")

    def set_approval_for_all(self, caller: str, operator: str, approved: bool) -> None:
        raise OperationDisabled("project tokens cannot be approved for transfer")
