"""Single-administrator access control."""

from __future__ import annotations

import hmac

from projreg.core.errors import PermissionDenied


class AdminAuthority:
    """Authorize mutating calls against one fixed administrator identity."""

    def __init__(self, administrator: str) -> None:
        if not administrator:
            msg = "administrator identity must not be empty"
            raise ValueError(msg)
        self._administrator = administrator

    @property
    def administrator(self) -> str:
        return self._administrator

    def is_administrator(self, caller: str | None) -> bool:
        if not isinstance(caller, str) or not caller:
            return False
        return hmac.compare_digest(caller.encode("utf-8"), self._administrator.encode("utf-8"))

    def require_administrator(self, caller: str | None) -> None:
        if not self.is_administrator(caller):
            msg = f"caller {caller or '<anonymous>'!r} is not the administrator"
            raise PermissionDenied(msg)
