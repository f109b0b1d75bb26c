"""Registry MCP tool/resource catalog."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final


@dataclass(slots=True)
class MCPTool:
    """MCP tool descriptor exposed by the registry."""

    name: str
    description: str


@dataclass(slots=True)
class MCPResource:
    """MCP resource descriptor exposed by the registry."""

    uri: str
    description: str


_REGISTERED_TOOLS: Final[list[MCPTool]] = [
    MCPTool(
        name="registry.project.create",
        description="Register a new project from a proposal document URI",
    ),
    MCPTool(
        name="registry.project.advance",
        description="Advance a project to ongoing, completed or cancelled",
    ),
    MCPTool(name="registry.project.get", description="Get one project record"),
    MCPTool(name="registry.project.list", description="List all project records"),
    MCPTool(name="registry.events.list", description="List lifecycle events"),
]

_REGISTERED_RESOURCES: Final[list[MCPResource]] = [
    MCPResource(uri="registry://projects", description="List of all project records"),
    MCPResource(uri="registry://project/{id}", description="One project record"),
    MCPResource(uri="registry://project/{id}/events", description="Lifecycle events for a project"),
]


def registered_tools() -> list[MCPTool]:
    """Return all registry MCP tools."""
    return list(_REGISTERED_TOOLS)


def registered_resources() -> list[MCPResource]:
    """Return all registry MCP resources."""
    return list(_REGISTERED_RESOURCES)


def find_tool(name: str) -> MCPTool | None:
    """Look up one MCP tool by name."""
    for tool in _REGISTERED_TOOLS:
        if tool.name == name:
            return tool
    return None
