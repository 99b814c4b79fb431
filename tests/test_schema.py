"""Tests for argument schemas and normalization."""

import pytest

from git_status_mcp.errors import InvalidArgumentError
from git_status_mcp.schema import ArgSpec, build_input_schema, normalize_arguments

PARAMS = (
    ArgSpec(name="directory", type="string", description="Directory"),
    ArgSpec(name="count", type="integer", description="Count", default=10, minimum=0),
)


def test_missing_fields_take_defaults():
    assert normalize_arguments(PARAMS, {}) == {"directory": None, "count": 10}
    assert normalize_arguments(PARAMS, None) == {"directory": None, "count": 10}


def test_null_value_takes_default():
    assert normalize_arguments(PARAMS, {"count": None})["count"] == 10


@pytest.mark.parametrize(
    "raw, expected",
    [(5, 5), ("5", 5), (" 7 ", 7), (3.0, 3), (0, 0)],
)
def test_integer_coercion(raw, expected):
    assert normalize_arguments(PARAMS, {"count": raw})["count"] == expected


@pytest.mark.parametrize("raw", ["abc", 2.5, True, [1], {"n": 1}])
def test_integer_rejects_unconvertible(raw):
    with pytest.raises(InvalidArgumentError) as exc_info:
        normalize_arguments(PARAMS, {"count": raw})

    assert exc_info.value.field == "count"
    assert exc_info.value.code == "INVALID_ARGUMENT"


def test_minimum_enforced():
    with pytest.raises(InvalidArgumentError, match="must be >= 0"):
        normalize_arguments(PARAMS, {"count": -1})


def test_string_coercion_and_rejection():
    assert normalize_arguments(PARAMS, {"directory": 42})["directory"] == "42"

    with pytest.raises(InvalidArgumentError) as exc_info:
        normalize_arguments(PARAMS, {"directory": ["a"]})
    assert exc_info.value.field == "directory"


def test_unknown_fields_are_dropped():
    result = normalize_arguments(PARAMS, {"count": 1, "verbose": True})

    assert result == {"directory": None, "count": 1}


def test_non_mapping_arguments_rejected():
    with pytest.raises(InvalidArgumentError) as exc_info:
        normalize_arguments(PARAMS, ["not", "a", "dict"])

    assert exc_info.value.field == "arguments"


def test_required_field():
    params = (ArgSpec(name="path", type="string", description="Path", required=True),)

    with pytest.raises(InvalidArgumentError, match="is required"):
        normalize_arguments(params, {})


def test_number_and_boolean_coercion():
    params = (
        ArgSpec(name="ratio", type="number", description="Ratio"),
        ArgSpec(name="flag", type="boolean", description="Flag", default=False),
    )

    assert normalize_arguments(params, {"ratio": "0.5", "flag": "true"}) == {
        "ratio": 0.5,
        "flag": True,
    }
    with pytest.raises(InvalidArgumentError):
        normalize_arguments(params, {"flag": "maybe"})


def test_unsupported_type_rejected_at_declaration():
    with pytest.raises(ValueError):
        ArgSpec(name="x", type="array", description="X")


def test_build_input_schema():
    schema = build_input_schema(PARAMS)

    assert schema == {
        "type": "object",
        "properties": {
            "directory": {"type": "string", "description": "Directory"},
            "count": {"type": "integer", "description": "Count", "default": 10, "minimum": 0},
        },
    }
