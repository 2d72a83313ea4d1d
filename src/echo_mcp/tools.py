"""Tool definitions and argument validation for the echo MCP core."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Dict, Literal, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator
from pydantic.fields import FieldInfo
from pydantic_core import ErrorDetails

from echo_mcp.errors import (
    ArgumentError,
    ArgumentTypeError,
    InvalidEnumValueError,
    MissingArgumentError,
    OutOfRangeError,
)

_TYPE_NAMES = {
    "string_type": "string",
    "int_type": "integer",
    "int_from_float": "integer",
    "float_type": "number",
    "finite_number": "finite number",
    "bool_type": "boolean",
}

_RANGE_CONSTRAINTS = {
    "string_too_short": ("min_length", "must be at least {} characters"),
    "string_too_long": ("max_length", "must be at most {} characters"),
    "greater_than_equal": ("ge", "must be >= {}"),
    "greater_than": ("gt", "must be > {}"),
    "less_than_equal": ("le", "must be <= {}"),
    "less_than": ("lt", "must be < {}"),
}


class ToolParameters(BaseModel):
    """Base parameters schema for MCP tools.

    Arguments are checked strictly (no string-to-number coercion) and unknown
    argument names are ignored so that newer clients keep working. Integer
    fields still accept integral floats such as ``2.0``.
    """

    model_config = ConfigDict(extra="ignore", strict=True, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _integral_floats(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        converted = dict(data)
        for name, field in cls.model_fields.items():
            if field.annotation is not int:
                continue
            for key in {name, field.alias or name}:
                value = converted.get(key)
                if isinstance(value, float) and value.is_integer():
                    converted[key] = int(value)
        return converted


def _literal_values(annotation: Any) -> list[str]:
    """Collect the allowed values of a ``Literal`` annotation, unions included."""
    origin = get_origin(annotation)
    if origin is Literal:
        return [str(value) for value in get_args(annotation)]
    if origin is Union or (origin is not None and type(None) in get_args(annotation)):
        values: list[str] = []
        for member in get_args(annotation):
            values.extend(_literal_values(member))
        return values
    return []


def _wire_fields(model: type[ToolParameters]) -> dict[str, FieldInfo]:
    return {field.alias or name: field for name, field in model.model_fields.items()}


def _to_argument_error(
    model: type[ToolParameters], detail: ErrorDetails
) -> ArgumentError:
    """Translate the first pydantic error into the argument error taxonomy."""
    loc = detail.get("loc", ())
    if not loc:
        return ArgumentError(f"Invalid arguments: {detail['msg']}")

    argument = str(loc[0])
    error_type = detail["type"]
    ctx = detail.get("ctx") or {}

    if error_type == "missing":
        return MissingArgumentError(argument)
    if error_type in ("literal_error", "enum"):
        field = _wire_fields(model).get(argument)
        allowed = _literal_values(field.annotation) if field is not None else []
        return InvalidEnumValueError(argument, detail.get("input"), allowed)
    if error_type in _RANGE_CONSTRAINTS:
        key, template = _RANGE_CONSTRAINTS[error_type]
        return OutOfRangeError(argument, template.format(ctx.get(key)))
    if error_type in _TYPE_NAMES:
        return ArgumentTypeError(argument, _TYPE_NAMES[error_type])
    return ArgumentError(f"Invalid value for '{argument}': {detail['msg']}", argument)


def _flatten_property(schema: dict[str, Any]) -> dict[str, Any]:
    """Reduce a pydantic property schema to a plain JSON-Schema property."""
    prop = {key: value for key, value in schema.items() if key != "title"}
    variants = prop.pop("anyOf", None)
    if variants is not None:
        non_null = [variant for variant in variants if variant.get("type") != "null"]
        if len(non_null) == 1:
            prop = {**non_null[0], **prop}
        else:
            prop["anyOf"] = variants
        if prop.get("default", ...) is None:
            del prop["default"]
    return prop


@dataclass(frozen=True)
class ToolDefinition:
    """Description of a tool that can be registered with the server.

    Attributes:
        name: Unique name of the tool.
        title: Short display name.
        description: Human-readable description of the tool purpose.
        parameters_model: Pydantic model used to validate input parameters.
        handler: Callable that executes the tool logic.
    """

    name: str
    title: str
    description: str
    parameters_model: type[ToolParameters]
    handler: Callable[[Dict[str, Any]], Dict[str, Any]]

    def validate(self, parameters: Mapping[str, Any] | None) -> Dict[str, Any]:
        """Validate incoming tool parameters and fill in defaults.

        Fields are checked in declaration order and only the first violation
        is reported. Wire input is matched by alias only, so Python field
        names are ignored like any other unknown argument. Optional arguments
        without a default are omitted from the result when the caller did not
        send them.

        Args:
            parameters: Raw arguments as received from the client.

        Raises:
            ArgumentError: If parameter validation fails.

        Returns:
            Validated parameter dictionary keyed by Python field names.
        """

        if parameters is None:
            parameters = {}
        elif isinstance(parameters, Mapping):
            parameters = dict(parameters)
        try:
            model = self.parameters_model.model_validate(
                parameters, by_alias=True, by_name=False
            )
        except ValidationError as error:
            raise _to_argument_error(
                self.parameters_model, error.errors()[0]
            ) from error

        validated = model.model_dump()
        for name, field in self.parameters_model.model_fields.items():
            if (
                not field.is_required()
                and field.default is None
                and name not in model.model_fields_set
            ):
                validated.pop(name, None)
        return validated

    def input_schema(self) -> Dict[str, Any]:
        """Return the JSON-Schema object advertised during discovery."""

        schema = self.parameters_model.model_json_schema(by_alias=True)
        properties = {
            name: _flatten_property(prop)
            for name, prop in schema.get("properties", {}).items()
        }
        return {
            "type": "object",
            "properties": properties,
            "required": list(schema.get("required", [])),
        }

    def metadata(self) -> Dict[str, Any]:
        """Return a discovery-friendly description of the tool."""

        return {
            "name": self.name,
            "title": self.title,
            "description": self.description,
            "inputSchema": self.input_schema(),
        }
