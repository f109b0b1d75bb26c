"""Registry error taxonomy.

Every error carries a machine-readable ``kind`` and a human-readable
``reason``. Transport adapters map the kind to their own error surface.
"""

from __future__ import annotations

from typing import ClassVar


class RegistryError(Exception):
    """Base class for all rejected registry operations."""

    kind: ClassVar[str] = "registry_error"

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class PermissionDenied(RegistryError):
    """Caller is not the registry administrator."""

    kind = "permission_denied"


class NotFound(RegistryError):
    """Referenced project id has no record."""

    kind = "not_found"


class InvalidState(RegistryError):
    """Operation not permitted in the record's current status."""

    kind = "invalid_state"


class InvalidArgument(RegistryError):
    """Malformed input."""

    kind = "invalid_argument"


class OperationDisabled(RegistryError):
    """Structurally forbidden operation."""

    kind = "operation_disabled"
