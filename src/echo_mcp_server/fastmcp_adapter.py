"""Adapters for exposing echo MCP tools via FastMCP."""

from __future__ import annotations

import logging
from typing import Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult

from echo_mcp.server import MCPServer
from echo_mcp.tools import ToolDefinition
from echo_mcp_server import SERVER_NAME, __version__
from echo_mcp_server.tools import build_server

logger = logging.getLogger(__name__)


class ToolDefinitionAdapter(Tool):
    """Expose a :class:`ToolDefinition` as a FastMCP tool.

    Calls are routed through :meth:`MCPServer.handle` so validation, error
    shaping and logging behave exactly as they do without a transport.
    """

    def __init__(self, definition: ToolDefinition, server: MCPServer) -> None:
        """Create a FastMCP tool wrapper for the provided definition."""
        super().__init__(
            name=definition.name,
            title=definition.title,
            description=definition.description,
            parameters=definition.input_schema(),
            tags=set(),
        )
        self._server = server

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        """Dispatch the call and translate the outcome for FastMCP."""
        result = self._server.handle(self.name, arguments)
        if result.is_error:
            raise ToolError(result.text)
        return ToolResult(content=result.text, structured_content=result.payload)


def to_fastmcp_tools(server: MCPServer) -> list[Tool]:
    """Wrap every registered tool for FastMCP."""
    return [
        ToolDefinitionAdapter(definition, server)
        for definition in server.registry.describe()
    ]


def build_fastmcp_app() -> tuple[FastMCP, MCPServer]:
    """Create a FastMCP server instance with all tools registered."""
    app = FastMCP(
        name=SERVER_NAME,
        version=__version__,
        instructions=(
            "Stateless text, hashing, encoding, UUID, random, JSON and timestamp "
            "utilities exposed over the Model Context Protocol."
        ),
    )
    server = build_server()
    for tool in to_fastmcp_tools(server):
        app.add_tool(tool)
    logger.info("Registered %d tools with FastMCP", len(server.registry))
    return app, server
