"""Tool registration helpers for the echo MCP server."""

from __future__ import annotations

import random

from echo_mcp.server import MCPServer, ToolRegistry
from echo_mcp.tools import ToolDefinition
from echo_mcp_server.tools.crypto import base64_tool, hash_tool
from echo_mcp_server.tools.generators import random_tool, uuid_tool
from echo_mcp_server.tools.info import info_tool
from echo_mcp_server.tools.json_tools import json_tool
from echo_mcp_server.tools.text import analyze_tool, echo_tool, format_tool
from echo_mcp_server.tools.timestamp import timestamp_tool


def build_tools(rng: random.Random | None = None) -> list[ToolDefinition]:
    """Instantiate all tool definitions in discovery order."""
    tools: list[ToolDefinition] = []

    def catalog() -> list[dict[str, str]]:
        return [{"name": tool.name, "description": tool.title} for tool in tools]

    tools.extend(
        [
            echo_tool(),
            format_tool(),
            analyze_tool(),
            hash_tool(),
            uuid_tool(),
            timestamp_tool(),
            base64_tool(),
            json_tool(),
            random_tool(rng),
            info_tool(catalog),
        ]
    )
    return tools


def build_registry(rng: random.Random | None = None) -> ToolRegistry:
    """Register every tool and freeze the registry."""
    return ToolRegistry(build_tools(rng)).freeze()


def build_server(rng: random.Random | None = None) -> MCPServer:
    """Create a dispatcher over the full tool catalog."""
    return MCPServer(build_registry(rng))
