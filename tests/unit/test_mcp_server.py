from projreg.mcp.server import find_tool, registered_resources, registered_tools


def test_registered_tools_contains_expected_surface() -> None:
    tools = registered_tools()
    names = {tool.name for tool in tools}

    assert len(tools) == 5
    assert "registry.project.create" in names
    assert "registry.project.advance" in names
    assert "registry.events.list" in names


def test_registered_tools_expose_no_transfer_surface() -> None:
    names = {tool.name for tool in registered_tools()}
    assert not any("transfer" in name or "approve" in name for name in names)


def test_registered_resources_contains_expected_uris() -> None:
    uris = {resource.uri for resource in registered_resources()}

    assert uris == {
        "registry://projects",
        "registry://project/{id}",
        "registry://project/{id}/events",
    }


def test_find_tool_returns_none_when_missing() -> None:
    assert find_tool("registry.unknown") is None


def test_find_tool_returns_match_when_present() -> None:
    tool = find_tool("registry.project.get")
    assert tool is not None
    assert tool.description
