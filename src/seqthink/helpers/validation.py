"""
Thought Validation Helpers

Structural acceptance of an incoming tool payload (camelCase keys)
into an internal thought record (snake_case keys).

Only the four sequencing fields are enforced. Everything else is a
typed passthrough: enum-like fields (phase, complexity, status) are
advisory and are not checked against their allowed values here.
"""

from typing import Any, Callable, Optional

from seqthink.errors import InvalidInputError


# =============================================================================
# Primitive Checks
# =============================================================================

def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _require_sequence_number(data: dict, wire_name: str) -> int:
    """Accept a positive integral number, returning it as int."""
    value = data.get(wire_name)
    if not _is_number(value):
        raise InvalidInputError(wire_name, "must be a number")
    if value != int(value) or value < 1:
        raise InvalidInputError(wire_name, "must be a positive integer")
    return int(value)


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    raise TypeError(f"expected boolean, got {type(value).__name__}")


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError("expected integer, got bool")
    result = int(value)
    if result != value and not isinstance(value, str):
        raise ValueError(f"expected integer, got {value}")
    return result


def _to_int_list(value: Any) -> list[int]:
    if not isinstance(value, (list, tuple, set)):
        raise TypeError(f"expected array, got {type(value).__name__}")
    result = []
    for item in value:
        number = _to_int(item)
        if number not in result:
            result.append(number)
    return result


def _to_str_list(value: Any) -> list[str]:
    if not isinstance(value, (list, tuple, set)):
        raise TypeError(f"expected array, got {type(value).__name__}")
    return [str(item) for item in value]


# (wire name, record key, cast)
OPTIONAL_FIELDS: tuple[tuple[str, str, Callable[[Any], Any]], ...] = (
    ("isRevision", "is_revision", _to_bool),
    ("revisesThought", "revises_thought", _to_int),
    ("branchFromThought", "branch_from_thought", _to_int),
    ("branchId", "branch_id", str),
    ("needsMoreThoughts", "needs_more_thoughts", _to_bool),
    ("phase", "phase", str),
    ("dependencies", "dependencies", _to_int_list),
    ("toolsUsed", "tools_used", _to_str_list),
    ("complexity", "complexity", str),
    ("status", "status", str),
)


def _cast_optional(data: dict, wire_name: str, cast: Callable[[Any], Any]) -> Optional[Any]:
    value = data.get(wire_name)
    if value is None:
        return None
    try:
        return cast(value)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(wire_name, str(e))


# =============================================================================
# Validation
# =============================================================================

def validate_thought_number(value: Any) -> int:
    """Check a lookup argument the same way thoughtNumber is checked."""
    return _require_sequence_number({"thoughtNumber": value}, "thoughtNumber")


def validate_thought_data(data: Any) -> dict[str, Any]:
    """
    Validate a raw tool payload and build a thought record.

    Args:
        data: Untyped payload as received from the tool call

    Returns:
        Record dict with snake_case keys. Optional fields that were not
        supplied are None; list fields default to empty lists.

    Raises:
        InvalidInputError: naming the first missing or mistyped field
    """
    if not isinstance(data, dict):
        raise InvalidInputError("input", "must be an object")

    thought = data.get("thought")
    if not isinstance(thought, str) or not thought.strip():
        raise InvalidInputError("thought", "must be a non-empty string")

    thought_number = _require_sequence_number(data, "thoughtNumber")
    total_thoughts = _require_sequence_number(data, "totalThoughts")

    next_thought_needed = data.get("nextThoughtNeeded")
    if not isinstance(next_thought_needed, bool):
        raise InvalidInputError("nextThoughtNeeded", "must be a boolean")

    record: dict[str, Any] = {
        "thought": thought,
        "thought_number": thought_number,
        "total_thoughts": total_thoughts,
        "next_thought_needed": next_thought_needed,
    }

    for wire_name, key, cast in OPTIONAL_FIELDS:
        record[key] = _cast_optional(data, wire_name, cast)

    record["dependencies"] = record["dependencies"] or []
    record["tools_used"] = record["tools_used"] or []
    record["is_revision"] = bool(record["is_revision"])

    return record
