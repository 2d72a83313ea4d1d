"""Hashing and Base64 tools."""

from __future__ import annotations

import base64
import binascii
import hashlib
from typing import Literal

from pydantic import Field

from echo_mcp.errors import MCPError, raise_mcp_error
from echo_mcp.tools import ToolDefinition, ToolParameters

HASH_ALGORITHMS = {
    "md5": "md5",
    "sha1": "sha1",
    "sha256": "sha256",
    "sha512": "sha512",
    "sha3-256": "sha3_256",
}


class HashParams(ToolParameters):
    """Parameters for the hash tool."""

    data: str = Field(description="Data to hash")
    algorithm: Literal["md5", "sha1", "sha256", "sha512", "sha3-256"] = Field(
        "sha256", description="Hash algorithm"
    )
    encoding: Literal["hex", "base64", "base64url"] = Field(
        "hex", description="Output encoding"
    )


class Base64Params(ToolParameters):
    """Parameters for the base64 tool."""

    operation: Literal["encode", "decode"] = Field(description="Operation to perform")
    data: str = Field(description="Data to encode or decode")
    url_safe: bool = Field(
        False, alias="urlSafe", description="Use the URL-safe Base64 alphabet"
    )


def digest(data: str, algorithm: str, encoding: str) -> str:
    """Hash the UTF-8 bytes of ``data`` and encode the digest."""
    raw = hashlib.new(HASH_ALGORITHMS[algorithm], data.encode("utf-8")).digest()
    if encoding == "base64":
        return base64.b64encode(raw).decode("ascii")
    if encoding == "base64url":
        return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")
    return raw.hex()


def b64_encode(data: bytes, url_safe: bool = False) -> str:
    """Encode bytes; the URL-safe alphabet is emitted without padding."""
    if url_safe:
        return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")
    return base64.b64encode(data).decode("ascii")


def b64_decode(data: str, url_safe: bool = False) -> bytes:
    """Decode Base64 text, tolerating missing padding.

    Raises:
        binascii.Error: If the input contains characters outside the
            alphabet or has an impossible length.
    """
    padded = data + "=" * (-len(data) % 4)
    if url_safe:
        return base64.b64decode(padded, altchars=b"-_", validate=True)
    return base64.b64decode(padded, validate=True)


def hash_tool() -> ToolDefinition:
    """Create the hash tool."""

    def handler(raw_params: dict[str, object]) -> dict[str, object]:
        try:
            params = HashParams.model_validate(raw_params)
            return {
                "input_length": len(params.data),
                "algorithm": params.algorithm,
                "encoding": params.encoding,
                "hash": digest(params.data, params.algorithm, params.encoding),
            }
        except MCPError as error:
            raise error
        except Exception as exc:  # pragma: no cover - defensive path
            raise_mcp_error("HashError", f"Failed to hash data: {exc}")

    return ToolDefinition(
        name="hash",
        title="Hash Generator",
        description="Generate cryptographic hashes (MD5, SHA-1, SHA-2, SHA3-256).",
        parameters_model=HashParams,
        handler=handler,
    )


def base64_tool() -> ToolDefinition:
    """Create the base64 tool."""

    def handler(raw_params: dict[str, object]) -> dict[str, object]:
        try:
            params = Base64Params.model_validate(raw_params)
            if params.operation == "encode":
                result = b64_encode(params.data.encode("utf-8"), params.url_safe)
            else:
                try:
                    decoded = b64_decode(params.data, params.url_safe)
                except (binascii.Error, ValueError):
                    raise_mcp_error("InvalidInput", "Invalid Base64 input")
                result = decoded.decode("utf-8", errors="replace")
            return {
                "operation": params.operation,
                "input_length": len(params.data),
                "output_length": len(result),
                "url_safe": params.url_safe,
                "result": result,
            }
        except MCPError as error:
            raise error
        except Exception as exc:  # pragma: no cover - defensive path
            raise_mcp_error("Base64Error", f"Failed to process Base64 data: {exc}")

    return ToolDefinition(
        name="base64",
        title="Base64 Encoder/Decoder",
        description="Encode text to Base64 or decode Base64 back to text.",
        parameters_model=Base64Params,
        handler=handler,
    )
