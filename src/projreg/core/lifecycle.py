"""Per-record lifecycle state machine.

Every status mutation goes through :func:`check_transition`. Reaching
Completed or Cancelled requires a report URI; both are terminal.
"""

from __future__ import annotations

from typing import Final

from projreg.core.errors import InvalidArgument, InvalidState
from projreg.models.project import ProjectStatus

# Ongoing -> Ongoing stays allowed: re-asserting Ongoing is a harmless no-op.
ALLOWED_TRANSITIONS: Final[dict[ProjectStatus, frozenset[ProjectStatus]]] = {
    ProjectStatus.UPCOMING: frozenset(
        {ProjectStatus.ONGOING, ProjectStatus.COMPLETED, ProjectStatus.CANCELLED}
    ),
    ProjectStatus.ONGOING: frozenset(
        {ProjectStatus.ONGOING, ProjectStatus.COMPLETED, ProjectStatus.CANCELLED}
    ),
    ProjectStatus.COMPLETED: frozenset(),
    ProjectStatus.CANCELLED: frozenset(),
}


def parse_status(value: ProjectStatus | str) -> ProjectStatus:
    """Coerce raw input to a status, rejecting unknown values."""
    if isinstance(value, ProjectStatus):
        return value
    try:
        return ProjectStatus(str(value).strip().lower())
    except ValueError as exc:
        msg = f"unknown status: {value!r}"
        raise InvalidArgument(msg) from exc


def check_transition(
    current: ProjectStatus,
    requested: ProjectStatus | str,
    report_uri: str,
) -> tuple[ProjectStatus, str]:
    """Validate a status change.

    Returns the target status and the report URI the record should hold.
    Raises `InvalidState` when `current` is terminal and `InvalidArgument`
    when the target is unknown, Upcoming, or terminal without a report.
    """
    if current.is_terminal:
        msg = "project already finalized"
        raise InvalidState(msg)
    target = parse_status(requested)
    if target is ProjectStatus.UPCOMING:
        msg = "cannot move a project back to upcoming"
        raise InvalidArgument(msg)
    if target not in ALLOWED_TRANSITIONS[current]:
        msg = f"transition {current.value} -> {target.value} is not allowed"
        raise InvalidState(msg)
    if not target.is_terminal:
        return target, ""
    if not isinstance(report_uri, str) or not report_uri:
        msg = "report required"
        raise InvalidArgument(msg)
    return target, report_uri
