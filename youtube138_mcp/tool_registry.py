"""
MCP tool registry for the YouTube138 MCP server.
Static catalog of tool descriptors and the tool name -> upstream route table.
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple
from dataclasses import dataclass, field


LANGUAGE_DESCRIPTION = (
    "Language code (optional), e.g. 'en' (English), 'zh' (Chinese). Defaults to 'en'"
)
REGION_DESCRIPTION = (
    "Country/region code (optional), e.g. 'US', 'CN'. Defaults to 'US'"
)


@dataclass(frozen=True)
class ToolParameter:
    """Definition of a single tool parameter."""
    name: str
    type: str
    description: str
    required: bool = False
    default: Optional[Any] = None

    def to_schema(self) -> Dict[str, Any]:
        """JSON schema fragment for this parameter."""
        schema: Dict[str, Any] = {
            "type": self.type,
            "description": self.description,
        }
        if self.default is not None:
            schema["default"] = self.default
        return schema


@dataclass(frozen=True)
class ToolDescriptor:
    """Name, description and parameter schema of one tool."""
    name: str
    description: str
    parameters: Tuple[ToolParameter, ...] = ()

    @property
    def required_parameters(self) -> List[str]:
        return [p.name for p in self.parameters if p.required]

    def input_schema(self) -> Dict[str, Any]:
        """
        Render the parameters as a JSON schema object.

        Returns:
            Schema dictionary with 'type', 'properties' and 'required'
        """
        return {
            "type": "object",
            "properties": {p.name: p.to_schema() for p in self.parameters},
            "required": self.required_parameters,
        }


@dataclass(frozen=True)
class ToolRoute:
    """Upstream path, required parameters and optional defaults for a tool."""
    path: str
    required: Tuple[str, ...] = ()
    defaults: Mapping[str, str] = field(default_factory=dict)


LANGUAGE_PARAMETER = ToolParameter("hl", "string", LANGUAGE_DESCRIPTION, default="en")
REGION_PARAMETER = ToolParameter("gl", "string", REGION_DESCRIPTION, default="US")

TOOL_DESCRIPTORS: Tuple[ToolDescriptor, ...] = (
    ToolDescriptor(
        name="search",
        description=(
            "Search YouTube videos. Searches video content by keyword and "
            "returns a list of matching videos."
        ),
        parameters=(
            ToolParameter(
                "q", "string",
                "Search keywords, e.g. 'programming tutorial', 'music'",
                required=True,
            ),
            LANGUAGE_PARAMETER,
            REGION_PARAMETER,
        ),
    ),
    ToolDescriptor(
        name="auto_complete",
        description=(
            "YouTube search autocomplete. Returns search suggestions for the "
            "given keyword prefix."
        ),
        parameters=(
            ToolParameter(
                "q", "string",
                "Search keyword prefix, e.g. 'pyth', 'java'",
                required=True,
            ),
            LANGUAGE_PARAMETER,
            REGION_PARAMETER,
        ),
    ),
    ToolDescriptor(
        name="home",
        description=(
            "Get YouTube home page recommendations. Returns the recommended "
            "videos shown on the YouTube home page."
        ),
        parameters=(
            LANGUAGE_PARAMETER,
            REGION_PARAMETER,
        ),
    ),
)

_LOCALE_DEFAULTS = {"hl": "en", "gl": "US"}

TOOL_ROUTES: Dict[str, ToolRoute] = {
    "search": ToolRoute("/search/", required=("q",), defaults=_LOCALE_DEFAULTS),
    "auto_complete": ToolRoute("/auto-complete/", required=("q",), defaults=_LOCALE_DEFAULTS),
    "home": ToolRoute("/home/", defaults=_LOCALE_DEFAULTS),
}


class MCPToolRegistry:
    """
    Registry of the YouTube138 tools.

    Descriptors and routes are fixed at import time; the registry only
    answers lookups and never mutates them.
    """

    def __init__(
        self,
        descriptors: Tuple[ToolDescriptor, ...] = TOOL_DESCRIPTORS,
        routes: Optional[Mapping[str, ToolRoute]] = None
    ):
        """
        Initialize the registry and check descriptors and routes agree.

        Raises:
            ValueError: If a tool name is duplicated or lacks a route
        """
        self._descriptors = tuple(descriptors)
        self._routes = dict(TOOL_ROUTES if routes is None else routes)

        names = [d.name for d in self._descriptors]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate tool names in registry: {names}")
        if set(names) != set(self._routes):
            raise ValueError(
                f"Tool descriptors {sorted(names)} do not match routes {sorted(self._routes)}"
            )

    def list_tools(self) -> List[ToolDescriptor]:
        """Get all tool descriptors in declaration order."""
        return list(self._descriptors)

    def get_available_tools(self) -> List[str]:
        """Get list of available tool names."""
        return [d.name for d in self._descriptors]

    def get_tool(self, name: str) -> Optional[ToolDescriptor]:
        """Get the descriptor for a tool, or None if unknown."""
        for descriptor in self._descriptors:
            if descriptor.name == name:
                return descriptor
        return None

    def get_route(self, name: str) -> Optional[ToolRoute]:
        """Get the upstream route for a tool, or None if unknown."""
        return self._routes.get(name)


def create_mcp_tool_registry() -> MCPToolRegistry:
    """
    Factory function to create the tool registry.

    Returns:
        MCP tool registry instance
    """
    return MCPToolRegistry()


def list_tools() -> List[ToolDescriptor]:
    """Get the three YouTube138 tool descriptors."""
    return list(TOOL_DESCRIPTORS)
