"""Custom error types for MCP tooling."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, NoReturn, TypedDict


class MCPErrorPayload(TypedDict):
    """Structured JSON payload for MCP errors."""

    error: dict[str, object | None]


class MCPError(Exception):
    """Structured MCP error containing a JSON-friendly payload."""

    def __init__(
        self, error_type: str, message: str, details: object | None = None
    ) -> None:
        """Create a structured MCP error payload."""
        super().__init__(message)
        self.message = message
        self.error: MCPErrorPayload = {
            "error": {
                "type": error_type,
                "message": message,
                "details": details,
            }
        }

    @property
    def error_type(self) -> str:
        """Short machine-readable category of the error."""
        return str(self.error["error"]["type"])

    def to_dict(self) -> MCPErrorPayload:
        """Return the structured error payload."""
        return self.error


def raise_mcp_error(
    error_type: str, message: str, details: object | None = None
) -> NoReturn:
    """Raise an :class:`MCPError` with a structured payload."""
    raise MCPError(error_type=error_type, message=message, details=details)


class UnknownToolError(MCPError):
    """Raised when a call names a tool that is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__("UnknownTool", f"Unknown tool: {name}", {"name": name})
        self.name = name


class ReportedFailure(MCPError):
    """Handler failure that still carries a response body for the client.

    The dispatcher renders ``body`` as the envelope text instead of the usual
    ``Error: <message>`` line, while still flagging the envelope as an error.
    """

    def __init__(self, error_type: str, message: str, body: dict[str, Any]) -> None:
        super().__init__(error_type, message, body)
        self.body = body


class ArgumentError(MCPError):
    """Base class for argument validation failures."""

    def __init__(
        self, message: str, argument: str | None = None, details: object | None = None
    ) -> None:
        super().__init__("InvalidArguments", message, details)
        self.argument = argument


class MissingArgumentError(ArgumentError):
    """A required argument without a default was not supplied."""

    def __init__(self, argument: str) -> None:
        super().__init__(f"Missing required argument: '{argument}'", argument)


class ArgumentTypeError(ArgumentError):
    """An argument was supplied with the wrong JSON type."""

    def __init__(self, argument: str, expected: str) -> None:
        super().__init__(
            f"Invalid type for '{argument}': expected {expected}",
            argument,
            {"expected": expected},
        )
        self.expected = expected


class OutOfRangeError(ArgumentError):
    """A string length or numeric value fell outside the declared bounds."""

    def __init__(self, argument: str, constraint: str) -> None:
        super().__init__(
            f"Argument '{argument}' out of range: {constraint}",
            argument,
            {"constraint": constraint},
        )
        self.constraint = constraint


class InvalidEnumValueError(ArgumentError):
    """An enumeration argument received a value outside its allowed set."""

    def __init__(self, argument: str, received: object, allowed: Sequence[str]) -> None:
        self.received = received
        self.allowed = list(allowed)
        super().__init__(
            f"Invalid value for '{argument}': {received!r} "
            f"(expected one of: {', '.join(self.allowed)})",
            argument,
            {"received": received, "allowed": self.allowed},
        )


class DuplicateToolError(ValueError):
    """Raised at startup when two tools share a name."""


class RegistryFrozenError(RuntimeError):
    """Raised when registering into a registry that has been frozen."""
