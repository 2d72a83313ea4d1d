"""Tool registry and dispatcher.

This module holds the transport-free heart of the server: a registry of tool
definitions that is populated once at startup and then frozen, and a
dispatcher that turns a ``(name, arguments)`` pair into exactly one result.
Every per-call failure is represented in the result rather than raised, so a
bad call can never take the transport down.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from echo_mcp.errors import (
    ArgumentError,
    DuplicateToolError,
    MCPError,
    RegistryFrozenError,
    ReportedFailure,
    UnknownToolError,
)
from echo_mcp.tools import ToolDefinition

logger = logging.getLogger(__name__)


@dataclass
class ToolResult:
    """Result returned by tool execution.

    Attributes:
        name: Name of the tool that was called.
        payload: Structured payload returned by the tool, or the body of a
            reported failure.
        is_error: Whether the call failed.
        message: Human-readable failure message.

    """

    name: str
    payload: dict[str, Any] | None = None
    is_error: bool = False
    message: str | None = None

    @classmethod
    def success(cls, name: str, payload: dict[str, Any]) -> ToolResult:
        return cls(name=name, payload=payload)

    @classmethod
    def failure(
        cls, name: str, message: str, payload: dict[str, Any] | None = None
    ) -> ToolResult:
        return cls(name=name, payload=payload, is_error=True, message=message)

    @property
    def text(self) -> str:
        """Text rendered into the envelope content block."""
        if self.is_error and self.payload is None:
            return f"Error: {self.message}"
        return json.dumps(self.payload, indent=2, ensure_ascii=False)

    def to_envelope(self) -> dict[str, Any]:
        """Render the uniform ``callTool`` response envelope."""
        envelope: dict[str, Any] = {"content": [{"type": "text", "text": self.text}]}
        if self.is_error:
            envelope["isError"] = True
        return envelope

    def to_json(self) -> str:
        """Serialize the envelope to JSON.

        Returns:
            JSON representation of the tool result envelope.

        """
        return json.dumps(self.to_envelope(), indent=2, ensure_ascii=False)


class ToolRegistry:
    """Ordered mapping of tool names to definitions.

    The registry is filled during startup and frozen before it is handed to
    :class:`MCPServer`; after that it is read-only.
    """

    def __init__(self, tools: Iterable[ToolDefinition] = ()) -> None:
        """Initialize the registry, optionally with an initial set of tools."""
        self._tools: dict[str, ToolDefinition] = {}
        self._frozen = False
        self.register_tools(*tools)

    def register_tool(self, tool: ToolDefinition) -> None:
        """Register a tool with the registry.

        Args:
            tool: Tool definition to register.

        Raises:
            ValueError: If the tool name is empty.
            DuplicateToolError: If a tool with the same name is already
                registered.
            RegistryFrozenError: If the registry has been frozen.

        """
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register '{tool.name}': registry is frozen"
            )
        if not tool.name:
            raise ValueError("Tool name must be a non-empty string")
        if tool.name in self._tools:
            raise DuplicateToolError(f"Tool '{tool.name}' is already registered")
        self._tools[tool.name] = tool

    def register_tools(self, *tools: ToolDefinition) -> None:
        """Register multiple tools at once.

        Args:
            *tools: Collection of tool definitions to register.

        """
        for tool in tools:
            self.register_tool(tool)

    def freeze(self) -> ToolRegistry:
        """Make the registry read-only and return it."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, name: str) -> ToolDefinition | None:
        return self._tools.get(name)

    def available_tools(self) -> list[str]:
        """List the names of registered tools in registration order."""
        return list(self._tools)

    def describe(self) -> list[ToolDefinition]:
        """Return every tool definition in registration order."""
        return list(self._tools.values())

    def validate(
        self, name: str, arguments: Mapping[str, Any] | None
    ) -> dict[str, Any]:
        """Validate arguments for the named tool.

        Raises:
            UnknownToolError: If the tool name is not registered.
            ArgumentError: If the arguments fail validation.

        """
        tool = self._tools.get(name)
        if tool is None:
            raise UnknownToolError(name)
        return tool.validate(arguments)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[ToolDefinition]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)


class MCPServer:
    """Dispatcher for MCP tool calls.

    The server owns no state beyond the registry it was built with. It is
    intentionally free of transport details so it can be driven directly by
    tests, the command line, or the FastMCP adapter.
    """

    def __init__(self, registry: ToolRegistry | None = None) -> None:
        """Initialize the dispatcher around a registry."""
        self.registry = registry if registry is not None else ToolRegistry()

    def handle(
        self, name: str, arguments: Mapping[str, Any] | None = None
    ) -> ToolResult:
        """Execute a tool call and capture the outcome.

        Args:
            name: Name of the registered tool to execute.
            arguments: Raw arguments as received from the client.

        Returns:
            ToolResult describing either the payload or the failure.

        """
        tool = self.registry.get(name)
        if tool is None:
            logger.info("Rejected call to unknown tool %r", name)
            return ToolResult.failure(name, UnknownToolError(name).message)

        try:
            validated = tool.validate(arguments)
        except ArgumentError as error:
            logger.info("Invalid arguments for %s: %s", name, error.message)
            return ToolResult.failure(name, error.message)

        try:
            payload = tool.handler(validated)
        except ReportedFailure as failure:
            logger.info("Tool %s reported failure: %s", name, failure.message)
            return ToolResult.failure(name, failure.message, failure.body)
        except MCPError as error:
            logger.info("Tool %s failed: %s", name, error.message)
            return ToolResult.failure(name, error.message)
        except Exception as exc:
            logger.exception("Unhandled error in tool %s", name)
            return ToolResult.failure(name, str(exc) or type(exc).__name__)

        logger.debug("Tool %s completed", name)
        return ToolResult.success(name, payload)

    def list_tools(self) -> list[dict[str, Any]]:
        """Describe every registered tool for discovery."""
        return [tool.metadata() for tool in self.registry.describe()]

    def call_tool(
        self, name: str, arguments: Mapping[str, Any] | None = None
    ) -> dict[str, Any]:
        """Execute a tool call and return the wire envelope."""
        return self.handle(name, arguments).to_envelope()

    def available_tools(self) -> list[str]:
        return self.registry.available_tools()

    def to_catalog(self) -> dict[str, dict[str, Any]]:
        """Produce a catalog for discovery.

        Returns:
            Mapping of tool names to their metadata.

        """
        return {tool.name: tool.metadata() for tool in self.registry.describe()}
