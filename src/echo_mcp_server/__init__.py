"""Model Context Protocol server exposing stateless text and data utilities."""

SERVER_NAME = "mcp-echo-tool"
SERVER_DESCRIPTION = "MCP utility server with text, hashing, encoding and data tools"
__version__ = "2.0.0"

__all__ = ["SERVER_DESCRIPTION", "SERVER_NAME", "__version__"]
