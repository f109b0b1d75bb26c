"""Project tool adapters for MCP exposure."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, TypeAlias

from projreg.core.errors import InvalidArgument
from projreg.models.events import EventType

ProjectOperation: TypeAlias = Literal["create", "advance", "get", "list", "events"]


@dataclass(slots=True)
class ProjectToolCall:
    """Canonical project tool call payload."""

    operation: ProjectOperation
    caller: str | None = None
    project_id: int | None = None
    proposal_uri: str | None = None
    status: str | None = None
    report_uri: str = ""
    event_type: EventType | None = None


_PROJECT_TOOL_OPERATIONS: dict[str, ProjectOperation] = {
    "registry.project.create": "create",
    "registry.project.advance": "advance",
    "registry.project.get": "get",
    "registry.project.list": "list",
    "registry.events.list": "events",
}

_MUTATING_OPERATIONS: frozenset[ProjectOperation] = frozenset({"create", "advance"})


def is_mutating_tool(tool_name: str) -> bool:
    return _PROJECT_TOOL_OPERATIONS.get(tool_name) in _MUTATING_OPERATIONS


def tool_caller(arguments: dict[str, Any]) -> str | None:
    """Return the caller identity; anything but a non-empty string is anonymous."""
    value = arguments.get("caller")
    return value if isinstance(value, str) and value else None


def parse_project_tool_call(tool_name: str, arguments: dict[str, Any]) -> ProjectToolCall | None:
    """Parse MCP project tool call into normalized payload.

    Returns `None` when the tool is not a project tool.
    Raises `InvalidArgument` for malformed arguments.
    """
    operation = _PROJECT_TOOL_OPERATIONS.get(tool_name)
    if operation is None:
        return None

    if operation in _MUTATING_OPERATIONS:
        return _parse_mutation(operation, arguments)

    caller = _optional_string(arguments, "caller")
    if operation == "list":
        return ProjectToolCall(operation="list", caller=caller)

    if operation == "events":
        raw_project_id = arguments.get("project_id")
        return ProjectToolCall(
            operation="events",
            caller=caller,
            project_id=None if raw_project_id is None else _required_int(arguments, "project_id"),
            event_type=_optional_event_type(arguments),
        )

    return ProjectToolCall(
        operation="get",
        caller=caller,
        project_id=_required_int(arguments, "project_id"),
    )


def _parse_mutation(operation: ProjectOperation, arguments: dict[str, Any]) -> ProjectToolCall:
    # A non-string caller is anonymous, and content checks on proposal_uri,
    # status and report_uri belong to the registry, so that permission errors
    # take precedence over them.
    if operation == "create":
        return ProjectToolCall(
            operation="create",
            caller=tool_caller(arguments),
            proposal_uri=_passthrough_string(arguments, "proposal_uri"),
        )

    return ProjectToolCall(
        operation="advance",
        caller=tool_caller(arguments),
        project_id=_required_int(arguments, "project_id"),
        status=_passthrough_string(arguments, "status"),
        report_uri=_passthrough_string(arguments, "report_uri"),
    )


def _passthrough_string(arguments: dict[str, Any], key: str) -> str:
    value = arguments.get(key)
    return value if isinstance(value, str) else ""


def _optional_string(arguments: dict[str, Any], key: str) -> str | None:
    value = arguments.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return value or None
    msg = f"{key} must be a string"
    raise InvalidArgument(msg)


def _required_int(arguments: dict[str, Any], key: str) -> int:
    value = arguments.get(key)
    if isinstance(value, bool):
        msg = f"{key} must be an integer"
        raise InvalidArgument(msg)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    if value is None:
        msg = f"{key} is required"
    else:
        msg = f"{key} must be an integer"
    raise InvalidArgument(msg)


def _optional_event_type(arguments: dict[str, Any]) -> EventType | None:
    value = _optional_string(arguments, "event_type")
    if value is None:
        return None
    try:
        return EventType(value)
    except ValueError as exc:
        msg = f"unknown event_type: {value}"
        raise InvalidArgument(msg) from exc
