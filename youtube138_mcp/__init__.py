"""
YouTube138 MCP server package.
Exposes RapidAPI YouTube138 search, autocomplete and home feed as MCP tools.
"""

from .tool_registry import (
    MCPToolRegistry,
    ToolDescriptor,
    ToolParameter,
    ToolRoute,
    create_mcp_tool_registry,
    list_tools,
)
from .dispatcher import (
    ToolDispatcher,
    ToolResult,
    UpstreamError,
    UpstreamRequest,
    ToolInvocationError,
    MissingArgumentsError,
    MissingParameterError,
    MissingCredentialError,
    UnknownToolError,
    create_tool_dispatcher,
)

__all__ = [
    # Tool Registry
    'MCPToolRegistry',
    'ToolDescriptor',
    'ToolParameter',
    'ToolRoute',
    'create_mcp_tool_registry',
    'list_tools',

    # Dispatcher
    'ToolDispatcher',
    'ToolResult',
    'UpstreamError',
    'UpstreamRequest',
    'ToolInvocationError',
    'MissingArgumentsError',
    'MissingParameterError',
    'MissingCredentialError',
    'UnknownToolError',
    'create_tool_dispatcher',
]
