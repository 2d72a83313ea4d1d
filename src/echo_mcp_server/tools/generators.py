"""UUID and random data tools."""

from __future__ import annotations

import logging
import math
import random
import string
import uuid
from typing import Literal

from pydantic import Field

from echo_mcp.errors import MCPError, raise_mcp_error
from echo_mcp.tools import ToolDefinition, ToolParameters

logger = logging.getLogger(__name__)

HEX_ALPHABET = "0123456789abcdef"
ALPHANUMERIC_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits
STRING_ALPHABET = ALPHANUMERIC_ALPHABET + "!@#$%^&*"


class UuidParams(ToolParameters):
    """Parameters for the uuid tool."""

    version: Literal["v4", "v7"] = Field("v4", description="UUID version to generate")
    count: int = Field(1, ge=1, le=100, description="Number of UUIDs to generate")
    uppercase: bool = Field(False, description="Return UUIDs in uppercase")


class RandomParams(ToolParameters):
    """Parameters for the random tool."""

    kind: Literal["integer", "float", "hex", "alphanumeric", "string", "boolean"] = (
        Field("integer", alias="type", description="Type of random data")
    )
    minimum: float | None = Field(
        None, alias="min", description="Minimum value (for numbers, default 0)"
    )
    maximum: float | None = Field(
        None, alias="max", description="Maximum value (for numbers, default 100)"
    )
    length: int = Field(16, ge=1, le=1000, description="Length (for strings and hex)")
    count: int = Field(1, ge=1, le=100, description="Number of values to generate")


def generate_uuids(count: int, uppercase: bool = False) -> list[str]:
    """Generate version-4 UUIDs."""
    values = [str(uuid.uuid4()) for _ in range(count)]
    if uppercase:
        return [value.upper() for value in values]
    return values


def random_value(
    rng: random.Random, kind: str, low: float, high: float, length: int
) -> object:
    """Draw a single value of the requested kind."""
    if kind == "integer":
        return rng.randint(math.ceil(low), math.floor(high))
    if kind == "float":
        return low + rng.random() * (high - low)
    if kind == "boolean":
        return rng.random() < 0.5
    if kind == "hex":
        alphabet = HEX_ALPHABET
    elif kind == "alphanumeric":
        alphabet = ALPHANUMERIC_ALPHABET
    else:
        alphabet = STRING_ALPHABET
    return "".join(rng.choice(alphabet) for _ in range(length))


def uuid_tool() -> ToolDefinition:
    """Create the uuid tool.

    Only version-4 UUIDs are produced. A request for ``v7`` is accepted and
    echoed back in ``version``, while ``generated_version`` reports what was
    actually generated.
    """

    def handler(raw_params: dict[str, object]) -> dict[str, object]:
        try:
            params = UuidParams.model_validate(raw_params)
            if params.version != "v4":
                logger.warning(
                    "UUID %s requested; generating version 4 instead", params.version
                )
            uuids = generate_uuids(params.count, params.uppercase)
            return {
                "version": params.version,
                "generated_version": "v4",
                "count": len(uuids),
                "uuids": uuids,
            }
        except MCPError as error:
            raise error
        except Exception as exc:  # pragma: no cover - defensive path
            raise_mcp_error("UuidError", f"Failed to generate UUIDs: {exc}")

    return ToolDefinition(
        name="uuid",
        title="UUID Generator",
        description=(
            "Generate UUIDs (Universally Unique Identifiers). Identifiers are "
            "always version 4, whatever version is requested."
        ),
        parameters_model=UuidParams,
        handler=handler,
    )


def random_tool(rng: random.Random | None = None) -> ToolDefinition:
    """Create the random tool.

    Args:
        rng: Random source, mainly for seeding in tests. Defaults to a
            system-seeded :class:`random.Random`.
    """
    source = rng if rng is not None else random.Random()

    def handler(raw_params: dict[str, object]) -> dict[str, object]:
        try:
            params = RandomParams.model_validate(raw_params)
            low = 0 if params.minimum is None else params.minimum
            high = 100 if params.maximum is None else params.maximum
            if params.kind in ("integer", "float"):
                if low > high:
                    raise_mcp_error(
                        "InvalidInput", "min must be less than or equal to max"
                    )
                if params.kind == "integer" and math.ceil(low) > math.floor(high):
                    raise_mcp_error(
                        "InvalidInput", f"No integer lies between {low} and {high}"
                    )
            values = [
                random_value(source, params.kind, low, high, params.length)
                for _ in range(params.count)
            ]
            return {
                "type": params.kind,
                "count": len(values),
                "values": values[0] if params.count == 1 else values,
            }
        except MCPError as error:
            raise error
        except Exception as exc:  # pragma: no cover - defensive path
            raise_mcp_error("RandomError", f"Failed to generate random data: {exc}")

    return ToolDefinition(
        name="random",
        title="Random Data Generator",
        description="Generate random integers, floats, booleans, hex or text strings.",
        parameters_model=RandomParams,
        handler=handler,
    )
