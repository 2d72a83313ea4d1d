"""Coverage for the timestamp tool."""

from __future__ import annotations

import re
from datetime import datetime, timezone

import pytest

from echo_mcp.errors import MCPError
from echo_mcp.server import MCPServer
from echo_mcp_server.tools.common import TIME_FORMATS, format_moment, iso_format
from echo_mcp_server.tools.timestamp import parse_moment

ISO_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


def test_now_returns_every_format(server: MCPServer) -> None:
    # Act
    payload = server.handle("timestamp", {}).payload

    # Assert
    assert payload["operation"] == "now"
    assert payload["format"] == "iso"
    assert ISO_PATTERN.match(payload["result"])
    assert list(payload["all_formats"]) == list(TIME_FORMATS)
    assert payload["result"] == payload["all_formats"]["iso"]


def test_convert_unix_seconds(server: MCPServer) -> None:
    """Values below ten billion are read as seconds."""
    # Act
    payload = server.handle(
        "timestamp", {"operation": "convert", "value": "1700000000"}
    ).payload

    # Assert
    formats = payload["all_formats"]
    assert payload["result"] == "2023-11-14T22:13:20.000Z"
    assert formats["unix_ms"] == 1700000000000
    assert formats["unix_s"] == 1700000000
    assert formats["utc"] == "Tue, 14 Nov 2023 22:13:20 GMT"
    assert formats["date_only"] == "2023-11-14"
    assert formats["time_only"] == "22:13:20.000"


def test_convert_unix_milliseconds(server: MCPServer) -> None:
    payload = server.handle(
        "timestamp",
        {"operation": "convert", "value": "1700000000123", "format": "unix_ms"},
    ).payload

    assert payload["result"] == 1700000000123
    assert payload["all_formats"]["iso"] == "2023-11-14T22:13:20.123Z"


@pytest.mark.parametrize(
    "value",
    [
        "2023-11-14T22:13:20Z",
        "2023-11-14T22:13:20.000Z",
        "2023-11-14T23:13:20+01:00",
        "2023-11-14T22:13:20",
        "Tue, 14 Nov 2023 22:13:20 GMT",
        "November 14, 2023 22:13:20",
        "2023/11/14 22:13:20",
        "14 Nov 2023 10:13:20 PM UTC",
    ],
)
def test_convert_date_strings(server: MCPServer, value: str) -> None:
    payload = server.handle(
        "timestamp", {"operation": "convert", "value": value, "format": "unix_s"}
    ).payload

    assert payload["result"] == 1700000000


def test_add_milliseconds(server: MCPServer) -> None:
    # Act
    payload = server.handle(
        "timestamp",
        {
            "operation": "add",
            "value": "2024-01-01T00:00:00Z",
            "addMs": 1500,
            "format": "time_only",
        },
    ).payload

    # Assert
    assert payload["result"] == "00:00:01.500"
    assert payload["all_formats"]["iso"] == "2024-01-01T00:00:01.500Z"


def test_add_negative_offset(server: MCPServer) -> None:
    payload = server.handle(
        "timestamp",
        {"operation": "add", "value": "2024-01-01T00:00:00Z", "addMs": -86400000},
    ).payload

    assert payload["result"] == "2023-12-31T00:00:00.000Z"


def test_format_uses_supplied_value(server: MCPServer) -> None:
    payload = server.handle(
        "timestamp",
        {"operation": "format", "value": "1700000000", "format": "date_only"},
    ).payload

    assert payload["result"] == "2023-11-14"


def test_format_without_value_uses_current_time(server: MCPServer) -> None:
    payload = server.handle("timestamp", {"operation": "format"}).payload

    assert ISO_PATTERN.match(payload["result"])


def test_convert_requires_value(server: MCPServer) -> None:
    envelope = server.call_tool("timestamp", {"operation": "convert"})

    assert envelope["isError"] is True
    assert envelope["content"][0]["text"] == (
        "Error: Value required for convert operation"
    )


@pytest.mark.parametrize(
    "arguments",
    [
        {"operation": "add", "value": "0"},
        {"operation": "add", "addMs": 5},
    ],
)
def test_add_requires_value_and_offset(
    server: MCPServer, arguments: dict[str, object]
) -> None:
    result = server.handle("timestamp", arguments)

    assert result.is_error is True
    assert result.message == "Value and addMs required for add operation"


@pytest.mark.parametrize("value", ["not-a-date", "2024-13-45", "99999999999999999999"])
def test_unparseable_values_are_reported(server: MCPServer, value: str) -> None:
    result = server.handle("timestamp", {"operation": "convert", "value": value})

    assert result.is_error is True
    assert result.message == "Invalid date value"


def test_unknown_format_is_rejected(server: MCPServer) -> None:
    result = server.handle("timestamp", {"format": "rfc9999"})

    assert result.is_error is True
    assert "rfc9999" in result.message


def test_naive_values_are_utc() -> None:
    moment = parse_moment("2024-02-29T12:00:00")

    assert moment == datetime(2024, 2, 29, 12, tzinfo=timezone.utc)


def test_locale_format_shape() -> None:
    moment = datetime(2024, 1, 1, 12, tzinfo=timezone.utc)

    rendered = format_moment(moment, "locale")

    assert re.match(r"^\d{1,2}/\d{1,2}/\d{4}, \d{1,2}:\d{2}:\d{2} (AM|PM)$", rendered)


def test_iso_format_truncates_to_milliseconds() -> None:
    moment = datetime(2024, 1, 1, 0, 0, 0, 123456, tzinfo=timezone.utc)

    assert iso_format(moment) == "2024-01-01T00:00:00.123Z"


def test_parse_moment_raises_mcp_error() -> None:
    with pytest.raises(MCPError) as error_info:
        parse_moment("yesterday")

    assert error_info.value.error_type == "InvalidDate"


@pytest.mark.parametrize("value", ["January 15, 2024", "2024/01/15", "15 Jan 2024"])
def test_convert_free_form_dates(server: MCPServer, value: str) -> None:
    """Common human-written dates are accepted and read as UTC midnight."""
    # Act
    payload = server.handle(
        "timestamp", {"operation": "convert", "value": value}
    ).payload

    # Assert
    assert payload["result"] == "2024-01-15T00:00:00.000Z"


def test_description_explains_format_value(server: MCPServer) -> None:
    tool = server.registry.get("timestamp")
    assert tool is not None

    assert "renders the given value" in tool.description
