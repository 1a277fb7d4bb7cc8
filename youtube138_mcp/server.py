#!/usr/bin/env python3
"""
YouTube138 MCP Server

A Model Context Protocol server that provides YouTube search, search
autocomplete and home page recommendations via the RapidAPI YouTube138 API.
"""

import asyncio
import logging
import sys
from typing import Any, Dict, List, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from config.settings import RAPIDAPI_KEY_ENV, Settings, get_settings
from .dispatcher import ToolDispatcher, create_tool_dispatcher

logger = logging.getLogger(__name__)

SERVER_NAME = "youtube138-mcp-server"
SERVER_VERSION = "1.0.0"

CREDENTIAL_HELP = (
    f"Warning: {RAPIDAPI_KEY_ENV} environment variable is not set\n"
    "Set it with one of:\n"
    f"  Windows (PowerShell): $env:{RAPIDAPI_KEY_ENV}='your-api-key'\n"
    f"  Windows (CMD): set {RAPIDAPI_KEY_ENV}=your-api-key\n"
    f"  Linux/Mac: export {RAPIDAPI_KEY_ENV}='your-api-key'"
)


def create_youtube138_server(dispatcher: ToolDispatcher) -> Server:
    """
    Build an MCP server whose tools are served by the given dispatcher.

    Args:
        dispatcher: Tool dispatcher holding the registry and settings

    Returns:
        MCP Server with list_tools and call_tool handlers registered
    """
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def list_tools() -> List[Tool]:
        """List available YouTube138 tools."""
        return [
            Tool(
                name=descriptor.name,
                description=descriptor.description,
                inputSchema=descriptor.input_schema(),
            )
            for descriptor in dispatcher.registry.list_tools()
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> List[TextContent]:
        """Run a tool; invocation errors propagate so the SDK flags the call as failed."""
        result = await dispatcher.invoke(name, arguments)
        return [TextContent(type="text", text=result.text)]

    return server


async def run(settings: Optional[Settings] = None) -> None:
    """Run the MCP server over stdio."""
    settings = settings or get_settings()
    if not settings.has_credentials:
        # Keep serving; each tool call reports the missing key
        logger.warning(CREDENTIAL_HELP)

    server = create_youtube138_server(create_tool_dispatcher(settings))
    async with stdio_server() as (read_stream, write_stream):
        logger.info("YouTube138 MCP server started")
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def main() -> None:
    """Main entry point."""
    # stdout carries the MCP protocol; logs go to stderr
    logging.basicConfig(
        level=logging.INFO,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        asyncio.run(run())
    except Exception:
        logger.exception("Server failed to start")
        sys.exit(1)


if __name__ == "__main__":
    main()
