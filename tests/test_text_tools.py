"""Coverage for the echo, format and analyze tools."""

from __future__ import annotations

import hashlib
import json

import pytest

from echo_mcp.server import MCPServer
from echo_mcp_server.tools.common import (
    apply_case,
    char_count,
    reverse_text,
    word_count,
)
from echo_mcp_server.tools.text import composition, format_text, slugify


@pytest.mark.parametrize(
    "message",
    [
        "Hello World",
        "a",
        "  padded  ",
        "tabs\tand\nnewlines",
        "na\u00efve cafe\u0301",
        "😀 ok",
    ],
)
def test_reverse_twice_is_identity(message: str) -> None:
    assert reverse_text(reverse_text(message)) == message


@pytest.mark.parametrize(
    ("message", "expected"),
    [("", 0), ("  ", 0), ("one", 1), ("  two   words ", 2), ("a\tb\nc", 3)],
)
def test_word_count(message: str, expected: int) -> None:
    assert word_count(message) == expected


def test_char_count_includes_whitespace() -> None:
    assert char_count("  a b  ") == 7


def test_reversal_works_on_code_points() -> None:
    """Non-BMP characters stay intact; combining marks are split."""
    assert reverse_text("a😀b") == "b😀a"
    assert char_count("😀") == 1
    assert reverse_text("e\u0301x") == "x\u0301e"


def test_echo_scenario(server: MCPServer) -> None:
    result = server.handle("echo", {"message": "Hello World"})

    assert result.is_error is False
    payload = result.payload
    assert payload["original"] == "Hello World"
    assert payload["reversed"] == "dlroW olleH"
    assert payload["stats"] == {
        "word_count": 2,
        "char_count": 11,
        "char_count_no_spaces": 10,
        "line_count": 1,
        "avg_word_length": 5.0,
    }
    assert "transformed" not in payload
    assert "hashes" not in payload
    assert payload["timestamps"]["iso"].endswith("Z")
    assert isinstance(payload["timestamps"]["unix"], int)
    assert payload["encoding"] == {
        "base64": "SGVsbG8gV29ybGQ=",
        "base64url": "SGVsbG8gV29ybGQ",
    }


def test_echo_whitespace_message_counts_no_words(server: MCPServer) -> None:
    payload = server.handle("echo", {"message": "   "}).payload

    assert payload["stats"]["word_count"] == 0
    assert payload["stats"]["char_count"] == 3
    assert payload["stats"]["avg_word_length"] == 0


def test_echo_transform_keeps_original(server: MCPServer) -> None:
    payload = server.handle(
        "echo", {"message": "hello world", "transform": "camelCase"}
    ).payload

    assert payload["original"] == "hello world"
    assert payload["transformed"] == "helloWorld"


def test_echo_hashes_only_on_request(server: MCPServer) -> None:
    payload = server.handle("echo", {"message": "abc", "includeHash": True}).payload

    assert payload["hashes"] == {
        "md5": hashlib.md5(b"abc").hexdigest(),
        "sha256": hashlib.sha256(b"abc").hexdigest(),
        "sha512": hashlib.sha512(b"abc").hexdigest(),
    }


def test_echo_counts_lines(server: MCPServer) -> None:
    payload = server.handle("echo", {"message": "a\r\nb\rc\nd"}).payload

    assert payload["stats"]["line_count"] == 4


@pytest.mark.parametrize(
    ("transform", "expected"),
    [
        ("uppercase", "HELLO BIG WORLD"),
        ("lowercase", "hello big world"),
        ("titlecase", "Hello Big World"),
        ("snake_case", "hello_big_world"),
        ("kebab-case", "hello-big-world"),
        ("camelCase", "helloBIGWorld"),
        ("none", "hello BIG world"),
    ],
)
def test_case_transforms(transform: str, expected: str) -> None:
    assert apply_case("hello BIG world", transform) == expected


@pytest.mark.parametrize(
    ("operation", "text", "expected"),
    [
        ("slugify", "hello world", "hello-world"),
        ("slugify", "  Hello, World!  -- Foo  ", "hello-world-foo"),
        ("reverse", "abc", "cba"),
        ("trim", "  abc \n", "abc"),
        ("remove_spaces", "a b\tc\nd", "abcd"),
        ("remove_punctuation", "Hi, there!", "Hi there"),
        ("sentence_case", "hello. WORLD! foo", "Hello. World! Foo"),
        ("titlecase", "hELLO wORLD", "Hello World"),
    ],
)
def test_format_operations(
    server: MCPServer, operation: str, text: str, expected: str
) -> None:
    payload = server.handle("format", {"text": text, "operation": operation}).payload

    assert payload == {"original": text, "operation": operation, "result": expected}


def test_slug_never_has_edge_hyphens() -> None:
    assert slugify("--Already--Hyphenated--") == "already-hyphenated"


def test_format_envelope_is_pretty_json(server: MCPServer) -> None:
    envelope = server.call_tool(
        "format", {"text": "hello world", "operation": "slugify"}
    )

    assert json.loads(envelope["content"][0]["text"])["result"] == "hello-world"


def test_analyze_counts(server: MCPServer) -> None:
    text = "Hello world. How are you?\n\nFine!"

    payload = server.handle("analyze", {"text": text}).payload

    assert payload["counts"] == {
        "characters": 32,
        "characters_no_spaces": 26,
        "words": 6,
        "sentences": 3,
        "paragraphs": 2,
    }
    assert payload["composition"] == {
        "letters": 23,
        "digits": 0,
        "spaces": 6,
        "punctuation": 3,
        "other": 0,
    }
    assert payload["word_length_distribution"] == {"3": 2, "4": 1, "5": 2, "6": 1}
    assert payload["averages"]["words_per_sentence"] == 2.0
    assert payload["readability"] == {
        "estimated_reading_time_min": 1,
        "complexity": "simple",
    }
    assert "character_frequency" not in payload


def test_consecutive_punctuation_is_one_sentence_boundary(server: MCPServer) -> None:
    payload = server.handle("analyze", {"text": "Wait... what?! Ok"}).payload

    assert payload["counts"]["sentences"] == 3


@pytest.mark.parametrize(
    "text", ["caf\u00e9_1", "Hello, World! 123", "tab\there", "😀 emoji ✓", "___"]
)
def test_composition_sums_to_length(text: str) -> None:
    buckets = composition(text)

    assert sum(buckets.values()) == len(text)
    assert buckets["other"] >= 0


def test_composition_other_bucket() -> None:
    assert composition("caf\u00e9_1") == {
        "letters": 3,
        "digits": 1,
        "spaces": 0,
        "punctuation": 0,
        "other": 2,
    }


def test_analyze_character_frequency(server: MCPServer) -> None:
    payload = server.handle(
        "analyze", {"text": "Abba, 42!", "includeCharFrequency": True}
    ).payload

    assert payload["character_frequency"] == {"a": 2, "b": 2}


def test_slug_keeps_non_ascii_letters(server: MCPServer) -> None:
    """Accented letters are word characters and survive slugging."""
    # Act
    payload = server.handle(
        "format", {"text": "Café Crème!", "operation": "slugify"}
    ).payload

    # Assert
    assert payload["result"] == "café-crème"


def test_remove_punctuation_keeps_non_ascii_letters() -> None:
    assert format_text("naïve, über!", "remove_punctuation") == "naïve über"
