"""MCP JSON-RPC transport endpoint."""

from __future__ import annotations

import logging
import re
from typing import Any

from fastapi import APIRouter, Depends

from projreg.api.deps import get_registry
from projreg.core.errors import InvalidArgument, RegistryError
from projreg.core.registry import ProjectRegistry
from projreg.mcp.server import find_tool, registered_resources, registered_tools
from projreg.mcp.tools.project_tools import (
    ProjectToolCall,
    is_mutating_tool,
    parse_project_tool_call,
    tool_caller,
)

LOGGER = logging.getLogger(__name__)

router = APIRouter(tags=["mcp-transport"])

REGISTRY_ERROR_CODE = -32000

_PROJECTS_URI = "registry://projects"
_PROJECT_URI = re.compile(r"^registry://project/(\d+)$")
_PROJECT_EVENTS_URI = re.compile(r"^registry://project/(\d+)/events$")


def _response(request_id: str | int | None, result: Any) -> dict[str, Any]:
    return {"jsonrpc": "2.0", "id": request_id, "result": result}


def _error(
    request_id: str | int | None,
    code: int,
    message: str,
    data: dict[str, Any] | None = None,
) -> dict[str, Any]:
    error: dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return {"jsonrpc": "2.0", "id": request_id, "error": error}


def _registry_error(request_id: str | int | None, exc: RegistryError) -> dict[str, Any]:
    return _error(request_id, REGISTRY_ERROR_CODE, exc.reason, {"kind": exc.kind})


@router.post("/mcp")
async def mcp_transport(
    payload: dict[str, Any],
    registry: ProjectRegistry = Depends(get_registry),
) -> dict[str, Any]:
    request_id = payload.get("id")
    method = payload.get("method")
    params = payload.get("params", {})

    if not isinstance(method, str):
        return _error(request_id, -32600, "Invalid method")
    if not isinstance(params, dict):
        return _error(request_id, -32602, "Invalid params")

    if method == "initialize":
        return _response(
            request_id,
            {
                "protocolVersion": "2025-11-25",
                "serverInfo": {"name": "projreg-mcp", "version": "0.1.0"},
                "capabilities": {
                    "tools": {"listChanged": False},
                    "resources": {"subscribe": False, "listChanged": False},
                },
            },
        )

    if method in {"notifications/initialized", "ping"}:
        return _response(request_id, {})

    if method == "tools/list":
        tools = [
            {"name": tool.name, "description": tool.description} for tool in registered_tools()
        ]
        return _response(request_id, {"tools": tools})

    if method == "resources/list":
        resources = [
            {"uri": resource.uri, "description": resource.description}
            for resource in registered_resources()
        ]
        return _response(request_id, {"resources": resources})

    if method == "tools/call":
        tool_name = params.get("name")
        arguments = params.get("arguments", {})
        if not isinstance(tool_name, str):
            return _error(request_id, -32602, "Missing tool name")
        if not isinstance(arguments, dict):
            return _error(request_id, -32602, "Invalid tool arguments")
        if find_tool(tool_name) is None:
            return _error(request_id, -32601, f"Unknown tool: {tool_name}")
        try:
            if is_mutating_tool(tool_name):
                registry.authorize(tool_caller(arguments))
            call = parse_project_tool_call(tool_name, arguments)
            if call is None:
                return _error(request_id, -32601, f"Unknown tool: {tool_name}")
            result = await _handle_tool_call(call, registry)
        except RegistryError as exc:
            LOGGER.info("mcp tool %s rejected kind=%s", tool_name, exc.kind)
            return _registry_error(request_id, exc)
        return _response(request_id, result)

    if method == "resources/read":
        uri = params.get("uri")
        if not isinstance(uri, str):
            return _error(request_id, -32602, "Missing resource uri")
        try:
            result = await _handle_resource_read(uri, registry)
        except RegistryError as exc:
            return _registry_error(request_id, exc)
        if result is None:
            return _error(request_id, -32602, f"Unknown resource: {uri}")
        return _response(request_id, result)

    return _error(request_id, -32601, f"Unknown method: {method}")


def _project_id(call: ProjectToolCall) -> int:
    if call.project_id is None:
        msg = "project_id is required"
        raise InvalidArgument(msg)
    return call.project_id


async def _handle_tool_call(call: ProjectToolCall, registry: ProjectRegistry) -> dict[str, Any]:
    if call.operation == "create":
        project = await registry.create(call.caller, call.proposal_uri or "")
        return {"id": project.id, "project": project.model_dump(mode="json")}

    if call.operation == "advance":
        project = await registry.advance_status(
            call.caller,
            _project_id(call),
            call.status or "",
            call.report_uri,
        )
        return {"project": project.model_dump(mode="json")}

    if call.operation == "get":
        project = await registry.require(_project_id(call))
        return {"project": project.model_dump(mode="json")}

    if call.operation == "list":
        projects = await registry.list()
        return {"items": [project.model_dump(mode="json") for project in projects]}

    events = await registry.events(project_id=call.project_id, event_type=call.event_type)
    return {"items": [event.model_dump(mode="json") for event in events]}


async def _handle_resource_read(uri: str, registry: ProjectRegistry) -> dict[str, Any] | None:
    if uri == _PROJECTS_URI:
        projects = await registry.list()
        return {"items": [project.model_dump(mode="json") for project in projects]}

    match = _PROJECT_URI.match(uri)
    if match:
        project = await registry.require(int(match.group(1)))
        return {"project": project.model_dump(mode="json")}

    match = _PROJECT_EVENTS_URI.match(uri)
    if match:
        project_id = int(match.group(1))
        await registry.require(project_id)
        events = await registry.events(project_id=project_id)
        return {"items": [event.model_dump(mode="json") for event in events]}

    return None
