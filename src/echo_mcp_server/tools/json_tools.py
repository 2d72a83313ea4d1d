"""JSON validation, formatting and inspection tool."""

from __future__ import annotations

import json
import math
from collections.abc import Iterator
from typing import Any, Literal

from pydantic import Field

from echo_mcp.errors import MCPError, ReportedFailure, raise_mcp_error
from echo_mcp.tools import ToolDefinition, ToolParameters


class JsonParams(ToolParameters):
    """Parameters for the json tool."""

    operation: Literal["validate", "format", "minify", "get_keys", "get_type"] = Field(
        "validate", description="Operation to perform"
    )
    data: str = Field(description="JSON string to process")
    indent: int = Field(2, ge=0, le=8, description="Indentation spaces (for format)")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Unexpected token {name} is not valid JSON")


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise ValueError(f"Number {text} is out of range")
    return value


def parse_json(data: str) -> Any:
    """Parse strict JSON.

    ``NaN``, ``Infinity`` and numbers that overflow to infinity are rejected;
    none of them could be written back out as JSON.

    Raises:
        ReportedFailure: If ``data`` is not valid JSON. The failure carries a
            ``{"valid": false, "error": ...}`` body for the client.
    """
    try:
        return json.loads(
            data, parse_constant=_reject_constant, parse_float=_parse_finite_float
        )
    except (RecursionError, ValueError) as exc:
        message = str(exc) or "Invalid JSON"
        raise ReportedFailure(
            "InvalidJSON", message, {"valid": False, "error": message}
        ) from exc


def json_type(value: Any) -> str:
    """Name a parsed value's JSON type, keeping null and array distinct."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def dumps(value: Any, indent: int | None = None) -> str:
    if not indent:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return json.dumps(value, indent=indent, ensure_ascii=False)


def dotted_keys(value: Any, prefix: str = "") -> Iterator[str]:
    """Yield dotted key paths, descending into nested objects only.

    A root array contributes its indices as keys; arrays below the root are
    not entered.
    """
    if isinstance(value, dict):
        items: Iterator[tuple[str, Any]] = iter(value.items())
    elif isinstance(value, list) and not prefix:
        items = ((str(index), item) for index, item in enumerate(value))
    else:
        return
    for key, child in items:
        path = f"{prefix}.{key}" if prefix else key
        yield path
        if isinstance(child, dict):
            yield from dotted_keys(child, path)


def _drop_none(payload: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in payload.items() if value is not None}


def json_tool() -> ToolDefinition:
    """Create the json tool."""

    def handler(raw_params: dict[str, object]) -> dict[str, object]:
        try:
            params = JsonParams.model_validate(raw_params)
            data = params.data
            parsed = parse_json(data)

            if params.operation == "format":
                return {"valid": True, "formatted": dumps(parsed, params.indent)}
            if params.operation == "minify":
                minified = dumps(parsed)
                return {
                    "valid": True,
                    "minified": minified,
                    "original_size": len(data),
                    "minified_size": len(minified),
                    "compression_ratio": round(len(minified) / len(data), 2),
                }
            if params.operation == "get_keys":
                return {"valid": True, "keys": list(dotted_keys(parsed))}
            if params.operation == "get_type":
                types = None
                if isinstance(parsed, dict):
                    types = {key: json_type(item) for key, item in parsed.items()}
                return _drop_none(
                    {"valid": True, "root_type": json_type(parsed), "types": types}
                )
            return _drop_none(
                {
                    "valid": True,
                    "type": json_type(parsed),
                    "size_bytes": len(data.encode("utf-8")),
                    "keys": list(parsed) if isinstance(parsed, dict) else None,
                    "array_length": len(parsed) if isinstance(parsed, list) else None,
                }
            )
        except MCPError as error:
            raise error
        except Exception as exc:  # pragma: no cover - defensive path
            raise_mcp_error("JsonError", f"Failed to process JSON: {exc}")

    return ToolDefinition(
        name="json",
        title="JSON Utilities",
        description="Validate, format, minify and inspect JSON data.",
        parameters_model=JsonParams,
        handler=handler,
    )
