"""Server information tool."""

from __future__ import annotations

import platform
import sys
import time
from typing import Callable, Literal

import psutil
from pydantic import Field

from echo_mcp.errors import MCPError, raise_mcp_error
from echo_mcp.tools import ToolDefinition, ToolParameters
from echo_mcp_server import SERVER_DESCRIPTION, SERVER_NAME, __version__

CatalogProvider = Callable[[], list[dict[str, str]]]


class InfoParams(ToolParameters):
    """Parameters for the info tool."""

    detail: Literal["basic", "full"] = Field("basic", description="Level of detail")


def process_metrics() -> dict[str, object]:
    """Uptime and memory usage of the running server process."""
    process = psutil.Process()
    memory = process.memory_info()
    return {
        "uptime_seconds": round(time.time() - process.create_time(), 3),
        "memory_usage": {"rss": memory.rss, "vms": memory.vms},
    }


def info_tool(catalog: CatalogProvider) -> ToolDefinition:
    """Create the info tool.

    Args:
        catalog: Returns ``{"name", "description"}`` entries for every
            registered tool; consulted only for ``detail="full"``.
    """

    def handler(raw_params: dict[str, object]) -> dict[str, object]:
        try:
            params = InfoParams.model_validate(raw_params)
            response: dict[str, object] = {
                "name": SERVER_NAME,
                "version": __version__,
                "description": SERVER_DESCRIPTION,
                "python_version": platform.python_version(),
                "platform": sys.platform,
            }
            if params.detail == "full":
                response["tools"] = catalog()
                response["capabilities"] = {
                    "tools": True,
                    "resources": False,
                    "prompts": False,
                }
                response.update(process_metrics())
            return response
        except MCPError as error:
            raise error
        except Exception as exc:  # pragma: no cover - defensive path
            raise_mcp_error("InfoError", f"Failed to collect server info: {exc}")

    return ToolDefinition(
        name="info",
        title="Server Information",
        description="Get information about this MCP server and its capabilities.",
        parameters_model=InfoParams,
        handler=handler,
    )
