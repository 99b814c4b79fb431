"""
Argument schemas for tools.

Each tool declares its arguments as a tuple of ArgSpec. The same specs render
the JSON schema advertised on tools/list and normalize incoming arguments, so
discovery and validation share one source.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import logging
from typing import Any

from git_status_mcp.errors import InvalidArgumentError

logger = logging.getLogger("git-mcp.schema")

ARG_TYPES = ("string", "integer", "number", "boolean")


@dataclass(frozen=True)
class ArgSpec:
    """Declared tool argument."""

    name: str
    type: str
    description: str
    required: bool = False
    default: Any = None
    minimum: int | float | None = None

    def __post_init__(self) -> None:
        if self.type not in ARG_TYPES:
            raise ValueError(f"Unsupported argument type for '{self.name}': {self.type}")

    def to_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": self.type, "description": self.description}
        if self.default is not None:
            schema["default"] = self.default
        if self.minimum is not None:
            schema["minimum"] = self.minimum
        return schema


def build_input_schema(params: tuple[ArgSpec, ...]) -> dict[str, Any]:
    """Render specs as a JSON schema object."""
    schema: dict[str, Any] = {
        "type": "object",
        "properties": {p.name: p.to_schema() for p in params},
    }
    required = [p.name for p in params if p.required]
    if required:
        schema["required"] = required
    return schema


def _coerce_string(spec: ArgSpec, value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise InvalidArgumentError(spec.name, f"expected string, got {type(value).__name__}")


def _coerce_integer(spec: ArgSpec, value: Any) -> int:
    if isinstance(value, bool):
        raise InvalidArgumentError(spec.name, "expected integer, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise InvalidArgumentError(spec.name, f"expected integer, got {value!r}")
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            raise InvalidArgumentError(
                spec.name, f"expected integer, got {value!r}"
            ) from None
    raise InvalidArgumentError(spec.name, f"expected integer, got {type(value).__name__}")


def _coerce_number(spec: ArgSpec, value: Any) -> int | float:
    if isinstance(value, bool):
        raise InvalidArgumentError(spec.name, "expected number, got bool")
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            raise InvalidArgumentError(spec.name, f"expected number, got {value!r}") from None
    raise InvalidArgumentError(spec.name, f"expected number, got {type(value).__name__}")


def _coerce_boolean(spec: ArgSpec, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise InvalidArgumentError(spec.name, f"expected boolean, got {value!r}")


_COERCERS = {
    "string": _coerce_string,
    "integer": _coerce_integer,
    "number": _coerce_number,
    "boolean": _coerce_boolean,
}


def normalize_arguments(params: tuple[ArgSpec, ...], arguments: Any) -> dict[str, Any]:
    """
    Apply declared specs to raw arguments.

    Missing or null fields take their default; convertible values are coerced.
    Unknown fields are dropped.

    Raises:
        InvalidArgumentError: On a missing required field, an unconvertible
            value, or a value below its minimum.
    """
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, Mapping):
        raise InvalidArgumentError(
            "arguments", f"expected an object, got {type(arguments).__name__}"
        )

    known = {p.name for p in params}
    extra = sorted(str(k) for k in arguments if k not in known)
    if extra:
        logger.debug(f"Ignoring unknown arguments: {extra}")

    normalized: dict[str, Any] = {}
    for spec in params:
        value = arguments.get(spec.name)
        if value is None:
            if spec.required:
                raise InvalidArgumentError(spec.name, "is required")
            normalized[spec.name] = spec.default
            continue

        value = _COERCERS[spec.type](spec, value)
        if spec.minimum is not None and value < spec.minimum:
            raise InvalidArgumentError(spec.name, f"must be >= {spec.minimum}, got {value}")
        normalized[spec.name] = value

    return normalized
