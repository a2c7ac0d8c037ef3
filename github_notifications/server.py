"""MCP stdio server exposing the notification tools."""

import asyncio
import logging
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from . import __version__
from .client import GitHubClient
from .settings import Settings, get_settings
from .tools import ALL_TOOLS, dispatch

log = logging.getLogger(__name__)

SERVER_NAME = "github-notifications"


class ToolCallError(Exception):
    """Raised from call_tool so the MCP runtime returns an isError result."""


def create_mcp_server(client: GitHubClient) -> Server:
    """Create and configure the MCP server with all tool handlers."""
    server = Server(SERVER_NAME)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return [
            Tool(name=tool.name, description=tool.description, inputSchema=tool.input_schema())
            for tool in ALL_TOOLS
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[TextContent]:
        # Handlers block on httpx; keep them off the event loop.
        result = await asyncio.to_thread(dispatch, client, name, arguments or {})
        if result.is_error:
            raise ToolCallError(result.text)
        return [TextContent(type="text", text=result.text)]

    return server


async def serve(settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    if not settings.github_token:
        log.warning("GITHUB_TOKEN is not set; GitHub will reject requests with 401")

    with GitHubClient(settings) as client:
        server = create_mcp_server(client)
        log.info("%s %s running on stdio (%d tools)", SERVER_NAME, __version__, len(ALL_TOOLS))
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())


def run(settings: Settings | None = None) -> None:
    asyncio.run(serve(settings))
