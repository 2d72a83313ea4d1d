"""Text tools: echo, format and analyze."""

from __future__ import annotations

import hashlib
import math
import re
from collections import Counter
from typing import Literal

from pydantic import Field

from echo_mcp.errors import MCPError, raise_mcp_error
from echo_mcp.tools import ToolDefinition, ToolParameters
from echo_mcp_server.tools.common import (
    all_formats,
    apply_case,
    char_count,
    char_count_no_spaces,
    line_count,
    ratio,
    reverse_text,
    utc_now,
    word_count,
)
from echo_mcp_server.tools.crypto import b64_encode

_SENTENCE_BREAK = re.compile(r"[.!?]+")
_PARAGRAPH_BREAK = re.compile(r"\n\n+")
_LETTER = re.compile(r"[A-Za-z]")
_DIGIT = re.compile(r"[0-9]")
_SPACE = re.compile(r"\s")
_PUNCTUATION = re.compile(r"[^\w\s]")
_SENTENCE_START = re.compile(r"([.!?]\s+)([a-z])")
_NOT_SLUG = re.compile(r"[^\w\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")

WORDS_PER_MINUTE = 200


class EchoParams(ToolParameters):
    """Parameters for the echo tool."""

    message: str = Field(
        min_length=1, max_length=10000, description="The message to echo"
    )
    transform: Literal[
        "none",
        "uppercase",
        "lowercase",
        "titlecase",
        "snake_case",
        "kebab-case",
        "camelCase",
    ] = Field("none", description="Optional text transformation")
    include_hash: bool = Field(
        False, alias="includeHash", description="Include MD5, SHA256 and SHA512 hashes"
    )


class FormatParams(ToolParameters):
    """Parameters for the format tool."""

    text: str = Field(min_length=1, description="Text to format")
    operation: Literal[
        "uppercase",
        "lowercase",
        "titlecase",
        "reverse",
        "trim",
        "remove_spaces",
        "remove_punctuation",
        "slugify",
        "sentence_case",
    ] = Field(description="Formatting operation to apply")


class AnalyzeParams(ToolParameters):
    """Parameters for the analyze tool."""

    text: str = Field(min_length=1, description="Text to analyze")
    include_char_frequency: bool = Field(
        False,
        alias="includeCharFrequency",
        description="Include character frequency analysis",
    )


def slugify(text: str) -> str:
    """Lowercase, drop symbols, hyphenate whitespace and trim stray hyphens.

    Word characters are Unicode-aware, so accented letters are kept.
    """
    slug = _NOT_SLUG.sub("", text.lower())
    slug = _WHITESPACE.sub("-", slug)
    return _HYPHENS.sub("-", slug).strip("-")


def sentence_case(text: str) -> str:
    result = _SENTENCE_START.sub(
        lambda match: match.group(1) + match.group(2).upper(), text.lower()
    )
    return result[:1].upper() + result[1:]


def format_text(text: str, operation: str) -> str:
    """Apply a single formatting operation."""
    if operation == "reverse":
        return reverse_text(text)
    if operation == "trim":
        return text.strip()
    if operation == "remove_spaces":
        return _WHITESPACE.sub("", text)
    if operation == "remove_punctuation":
        return _PUNCTUATION.sub("", text)
    if operation == "slugify":
        return slugify(text)
    if operation == "sentence_case":
        return sentence_case(text)
    return apply_case(text, operation)


def composition(text: str) -> dict[str, int]:
    """Split the characters of ``text`` into disjoint buckets.

    The buckets always add up to ``len(text)``.
    """
    letters = len(_LETTER.findall(text))
    digits = len(_DIGIT.findall(text))
    spaces = len(_SPACE.findall(text))
    punctuation = len(_PUNCTUATION.findall(text))
    return {
        "letters": letters,
        "digits": digits,
        "spaces": spaces,
        "punctuation": punctuation,
        "other": len(text) - letters - digits - spaces - punctuation,
    }


def sentences(text: str) -> list[str]:
    return [part for part in _SENTENCE_BREAK.split(text) if part.strip()]


def paragraphs(text: str) -> list[str]:
    return [part for part in _PARAGRAPH_BREAK.split(text) if part.strip()]


def _complexity(words: int, sentence_total: int) -> str:
    if not words or not sentence_total:
        return "unknown"
    per_sentence = words / sentence_total
    if per_sentence > 20:
        return "complex"
    if per_sentence > 10:
        return "moderate"
    return "simple"


def echo_tool() -> ToolDefinition:
    """Create the echo tool."""

    def handler(raw_params: dict[str, object]) -> dict[str, object]:
        try:
            params = EchoParams.model_validate(raw_params)
            message = params.message
            words = word_count(message)
            no_spaces = char_count_no_spaces(message)
            formats = all_formats(utc_now())
            encoded = message.encode("utf-8")

            response: dict[str, object] = {"original": message}
            if params.transform != "none":
                response["transformed"] = apply_case(message, params.transform)
            response.update(
                {
                    "reversed": reverse_text(message),
                    "stats": {
                        "word_count": words,
                        "char_count": char_count(message),
                        "char_count_no_spaces": no_spaces,
                        "line_count": line_count(message),
                        "avg_word_length": ratio(no_spaces, words),
                    },
                    "timestamps": {
                        "iso": formats["iso"],
                        "unix": formats["unix_ms"],
                        "utc": formats["utc"],
                        "locale": formats["locale"],
                    },
                    "encoding": {
                        "base64": b64_encode(encoded),
                        "base64url": b64_encode(encoded, url_safe=True),
                    },
                }
            )
            if params.include_hash:
                response["hashes"] = {
                    "md5": hashlib.md5(encoded).hexdigest(),
                    "sha256": hashlib.sha256(encoded).hexdigest(),
                    "sha512": hashlib.sha512(encoded).hexdigest(),
                }
            return response
        except MCPError as error:
            raise error
        except Exception as exc:  # pragma: no cover - defensive path
            raise_mcp_error("EchoError", f"Failed to echo message: {exc}")

    return ToolDefinition(
        name="echo",
        title="Enhanced Echo",
        description=(
            "Echo a message with metadata and optional transformations: reversed "
            "text, word/character/line counts, timestamps, Base64 encodings and, "
            "on request, MD5/SHA256/SHA512 hashes."
        ),
        parameters_model=EchoParams,
        handler=handler,
    )


def format_tool() -> ToolDefinition:
    """Create the format tool."""

    def handler(raw_params: dict[str, object]) -> dict[str, object]:
        try:
            params = FormatParams.model_validate(raw_params)
            return {
                "original": params.text,
                "operation": params.operation,
                "result": format_text(params.text, params.operation),
            }
        except MCPError as error:
            raise error
        except Exception as exc:  # pragma: no cover - defensive path
            raise_mcp_error("FormatError", f"Failed to format text: {exc}")

    return ToolDefinition(
        name="format",
        title="Text Formatter",
        description=(
            "Format text with case, whitespace, punctuation and slug transforms."
        ),
        parameters_model=FormatParams,
        handler=handler,
    )


def analyze_tool() -> ToolDefinition:
    """Create the analyze tool."""

    def handler(raw_params: dict[str, object]) -> dict[str, object]:
        try:
            params = AnalyzeParams.model_validate(raw_params)
            text = params.text
            words = text.split()
            sentence_total = len(sentences(text))
            paragraph_total = len(paragraphs(text))
            no_spaces = char_count_no_spaces(text)
            lengths = Counter(len(word) for word in words)

            response: dict[str, object] = {
                "counts": {
                    "characters": len(text),
                    "characters_no_spaces": no_spaces,
                    "words": len(words),
                    "sentences": sentence_total,
                    "paragraphs": paragraph_total,
                },
                "averages": {
                    "words_per_sentence": ratio(len(words), sentence_total),
                    "chars_per_word": ratio(no_spaces, len(words)),
                    "sentences_per_paragraph": ratio(sentence_total, paragraph_total),
                },
                "composition": composition(text),
                "word_length_distribution": {
                    str(length): lengths[length] for length in sorted(lengths)
                },
                "readability": {
                    "estimated_reading_time_min": math.ceil(
                        len(words) / WORDS_PER_MINUTE
                    ),
                    "complexity": _complexity(len(words), sentence_total),
                },
            }
            if params.include_char_frequency:
                response["character_frequency"] = dict(
                    Counter(_LETTER.findall(text.lower()))
                )
            return response
        except MCPError as error:
            raise error
        except Exception as exc:  # pragma: no cover - defensive path
            raise_mcp_error("AnalyzeError", f"Failed to analyze text: {exc}")

    return ToolDefinition(
        name="analyze",
        title="Text Analyzer",
        description=(
            "Analyze text and report counts, averages, composition and readability."
        ),
        parameters_model=AnalyzeParams,
        handler=handler,
    )
