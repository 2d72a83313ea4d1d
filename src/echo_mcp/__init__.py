"""echo_mcp package initialization."""

from echo_mcp.errors import MCPError
from echo_mcp.server import MCPServer, ToolRegistry, ToolResult
from echo_mcp.tools import ToolDefinition, ToolParameters

__all__ = [
    "MCPError",
    "MCPServer",
    "ToolDefinition",
    "ToolParameters",
    "ToolRegistry",
    "ToolResult",
]
