#!/usr/bin/env python3
"""
Unit tests for the tool registry.
"""

import pytest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from youtube138_mcp.tool_registry import (
    TOOL_DESCRIPTORS,
    TOOL_ROUTES,
    MCPToolRegistry,
    ToolDescriptor,
    ToolRoute,
    create_mcp_tool_registry,
    list_tools,
)

EXPECTED_TOOLS = {
    "search": ["q"],
    "auto_complete": ["q"],
    "home": [],
}


@pytest.fixture
def registry():
    return create_mcp_tool_registry()


class TestListTools:
    """Test the static tool catalog."""

    def test_three_tools_in_order(self):
        assert [d.name for d in list_tools()] == ["search", "auto_complete", "home"]

    @pytest.mark.parametrize("name,required", list(EXPECTED_TOOLS.items()))
    def test_required_parameters(self, registry, name, required):
        descriptor = registry.get_tool(name)
        assert descriptor is not None
        assert descriptor.name == name
        assert descriptor.required_parameters == required

    @pytest.mark.parametrize("name", list(EXPECTED_TOOLS))
    def test_locale_parameters_have_defaults(self, registry, name):
        properties = registry.get_tool(name).input_schema()["properties"]
        assert properties["hl"]["default"] == "en"
        assert properties["gl"]["default"] == "US"
        assert properties["hl"]["type"] == "string"

    def test_home_has_no_query_parameter(self, registry):
        assert "q" not in registry.get_tool("home").input_schema()["properties"]

    def test_search_schema(self, registry):
        schema = registry.get_tool("search").input_schema()
        assert schema["type"] == "object"
        assert schema["required"] == ["q"]
        assert set(schema["properties"]) == {"q", "hl", "gl"}
        assert "default" not in schema["properties"]["q"]

    def test_list_tools_is_stable(self, registry):
        """Repeated calls return equal descriptors."""
        assert registry.list_tools() == registry.list_tools() == list_tools()

    def test_returned_list_is_a_copy(self, registry):
        tools = registry.list_tools()
        tools.clear()
        assert len(registry.list_tools()) == 3


class TestRoutes:
    """Test the tool name -> upstream route table."""

    @pytest.mark.parametrize("name,path", [
        ("search", "/search/"),
        ("auto_complete", "/auto-complete/"),
        ("home", "/home/"),
    ])
    def test_paths(self, registry, name, path):
        assert registry.get_route(name).path == path

    def test_every_descriptor_has_a_route(self):
        assert {d.name for d in TOOL_DESCRIPTORS} == set(TOOL_ROUTES)

    def test_route_required_matches_descriptor(self, registry):
        for descriptor in registry.list_tools():
            route = registry.get_route(descriptor.name)
            assert list(route.required) == descriptor.required_parameters

    def test_unknown_tool(self, registry):
        assert registry.get_tool("trending") is None
        assert registry.get_route("trending") is None


class TestRegistryValidation:
    """Test registry construction checks."""

    def test_duplicate_names_rejected(self):
        duplicate = (ToolDescriptor("home", "a"), ToolDescriptor("home", "b"))
        with pytest.raises(ValueError, match="Duplicate"):
            MCPToolRegistry(duplicate, {"home": ToolRoute("/home/")})

    def test_route_mismatch_rejected(self):
        with pytest.raises(ValueError, match="do not match"):
            MCPToolRegistry((ToolDescriptor("home", "a"),), {"search": ToolRoute("/search/")})

    def test_available_tool_names(self, registry):
        assert registry.get_available_tools() == list(EXPECTED_TOOLS)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
