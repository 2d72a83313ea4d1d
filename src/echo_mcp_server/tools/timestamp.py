"""Timestamp generation and conversion tool."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Literal

from dateutil import parser as date_parser
from pydantic import Field

from echo_mcp.errors import MCPError, raise_mcp_error
from echo_mcp.tools import ToolDefinition, ToolParameters
from echo_mcp_server.tools.common import EPOCH, all_formats, utc_now

# Pure-digit values below this are seconds, anything else milliseconds.
SECONDS_CUTOFF = 10_000_000_000


class TimestampParams(ToolParameters):
    """Parameters for the timestamp tool."""

    operation: Literal["now", "convert", "add", "format"] = Field(
        "now", description="Operation to perform"
    )
    value: str | None = Field(
        None,
        description="Value for convert/add/format (Unix timestamp or date string)",
    )
    format: Literal[
        "iso", "unix_ms", "unix_s", "utc", "locale", "date_only", "time_only"
    ] = Field("iso", description="Output format")
    add_ms: float | None = Field(
        None, alias="addMs", description="Milliseconds to add (for add operation)"
    )


def _invalid_date() -> MCPError:
    return MCPError("InvalidDate", "Invalid date value")


def parse_moment(value: str) -> datetime:
    """Parse a Unix timestamp or a date string into an aware UTC datetime.

    Digit-only values are Unix timestamps, in seconds when below
    :data:`SECONDS_CUTOFF` and milliseconds otherwise. Other values may be
    ISO-8601 (a trailing ``Z`` is accepted) or any free-form date that
    :func:`dateutil.parser.parse` understands, such as RFC 2822 or
    ``January 15, 2024``. Values without an offset are taken as UTC.

    Raises:
        MCPError: If the value cannot be parsed or is out of range.
    """
    text = value.strip()
    try:
        if text.isdigit() and text.isascii():
            number = int(text)
            millis = number * 1000 if number < SECONDS_CUTOFF else number
            return EPOCH + timedelta(milliseconds=millis)
        try:
            moment = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            moment = date_parser.parse(text)
    except (OverflowError, TypeError, ValueError) as exc:
        raise _invalid_date() from exc
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def shift(moment: datetime, add_ms: float) -> datetime:
    try:
        return moment + timedelta(milliseconds=add_ms)
    except OverflowError as exc:
        raise _invalid_date() from exc


def timestamp_tool() -> ToolDefinition:
    """Create the timestamp tool."""

    def handler(raw_params: dict[str, object]) -> dict[str, object]:
        try:
            params = TimestampParams.model_validate(raw_params)
            if params.operation == "convert":
                if not params.value:
                    raise_mcp_error(
                        "InvalidInput", "Value required for convert operation"
                    )
                moment = parse_moment(params.value)
            elif params.operation == "add":
                if not params.value or params.add_ms is None:
                    raise_mcp_error(
                        "InvalidInput", "Value and addMs required for add operation"
                    )
                moment = shift(parse_moment(params.value), params.add_ms)
            elif params.operation == "format" and params.value:
                moment = parse_moment(params.value)
            else:
                moment = utc_now()

            try:
                formats = all_formats(moment)
            except (OverflowError, ValueError) as exc:
                raise _invalid_date() from exc
            return {
                "operation": params.operation,
                "format": params.format,
                "result": formats[params.format],
                "all_formats": formats,
            }
        except MCPError as error:
            raise error
        except Exception as exc:  # pragma: no cover - defensive path
            raise_mcp_error("TimestampError", f"Failed to process timestamp: {exc}")

    return ToolDefinition(
        name="timestamp",
        title="Timestamp Utilities",
        description=(
            "Generate, convert, shift and format timestamps. Values may be Unix "
            "timestamps (seconds or milliseconds) or date strings. The format "
            "operation renders the given value, or the current time when no "
            "value is given."
        ),
        parameters_model=TimestampParams,
        handler=handler,
    )
