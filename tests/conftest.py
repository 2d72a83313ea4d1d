"""Shared test fixtures."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterator
from typing import Any, Callable

import pytest
from pydantic import Field

from echo_mcp.server import MCPServer
from echo_mcp.tools import ToolDefinition, ToolParameters
from echo_mcp_server.tools import build_server, build_tools


class ShoutParams(ToolParameters):
    """Parameters for the test-only shout tool."""

    text: str = Field(min_length=1)
    times: int = Field(1, ge=1, le=3)


ToolFactory = Callable[..., ToolDefinition]


@pytest.fixture()
def make_tool() -> ToolFactory:
    """Build small ad-hoc tool definitions for registry and dispatcher tests."""

    def factory(
        name: str = "shout",
        handler: Callable[[dict[str, Any]], dict[str, Any]] | None = None,
    ) -> ToolDefinition:
        def default_handler(params: dict[str, Any]) -> dict[str, Any]:
            return {"result": params["text"].upper() * params["times"]}

        return ToolDefinition(
            name=name,
            title=name.title(),
            description=f"Test tool {name}.",
            parameters_model=ShoutParams,
            handler=handler or default_handler,
        )

    return factory


@pytest.fixture()
def server() -> MCPServer:
    """Dispatcher over the full catalog with a seeded random source."""
    return build_server(random.Random(1234))


@pytest.fixture()
def tools() -> list[ToolDefinition]:
    return build_tools(random.Random(1234))


@pytest.fixture(autouse=True)
def _restore_package_loggers() -> Iterator[None]:
    """Undo handlers installed by ``main()`` so later tests see default logging."""
    loggers = [logging.getLogger(name) for name in ("echo_mcp", "echo_mcp_server")]
    saved = [(log.handlers[:], log.level, log.propagate) for log in loggers]
    yield
    for log, (handlers, level, propagate) in zip(loggers, saved):
        log.handlers = handlers
        log.setLevel(level)
        log.propagate = propagate


@pytest.fixture()
def anyio_backend() -> str:
    """Run ``@pytest.mark.anyio`` tests on asyncio only (FastMCP is asyncio-based)."""
    return "asyncio"
