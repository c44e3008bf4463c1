"""
Layer 1: Thought Validation Tests

Tests for validate_thought_data and the error hierarchy it raises.
"""
import pytest

from seqthink.errors import InvalidInputError, ThinkingError, ValidationError
from seqthink.helpers.validation import validate_thought_data


class TestRequiredFields:
    """Tests for the four sequencing fields."""

    def test_valid_payload_becomes_record(self, make_payload):
        """Verify camelCase payload maps to a snake_case record."""
        record = validate_thought_data(make_payload(2, 4))

        assert record["thought_number"] == 2
        assert record["total_thoughts"] == 4
        assert record["next_thought_needed"] is True
        assert record["dependencies"] == []
        assert record["tools_used"] == []
        assert record["is_revision"] is False
        assert record["phase"] is None

    def test_non_dict_rejected(self):
        """Verify a non-object payload names the input."""
        with pytest.raises(InvalidInputError) as exc:
            validate_thought_data(["thought"])

        assert exc.value.field == "input"

    @pytest.mark.parametrize("thought", [None, "", "   ", 42])
    def test_bad_thought_rejected(self, make_payload, thought):
        """Verify thought must be a non-empty string."""
        with pytest.raises(InvalidInputError) as exc:
            validate_thought_data(make_payload(thought=thought))

        assert exc.value.message == "Invalid thought: must be a non-empty string"

    @pytest.mark.parametrize("field", ["thoughtNumber", "totalThoughts"])
    def test_non_numeric_sequence_rejected(self, make_payload, field):
        """Verify strings and booleans are not numbers."""
        for bad in ("3", True, None):
            payload = make_payload()
            payload[field] = bad
            with pytest.raises(InvalidInputError) as exc:
                validate_thought_data(payload)
            assert exc.value.message == f"Invalid {field}: must be a number"

    @pytest.mark.parametrize("value", [0, -1, 2.5])
    def test_non_positive_sequence_rejected(self, make_payload, value):
        """Verify sequence numbers must be positive integers."""
        with pytest.raises(InvalidInputError) as exc:
            validate_thought_data(make_payload(thoughtNumber=value))

        assert "positive integer" in exc.value.message

    def test_integral_float_accepted(self, make_payload):
        """Verify 3.0 is accepted as thought 3."""
        record = validate_thought_data(make_payload(thoughtNumber=3.0))

        assert record["thought_number"] == 3
        assert isinstance(record["thought_number"], int)

    def test_missing_next_thought_needed(self, make_payload):
        """Verify the continuation flag is required."""
        payload = make_payload()
        del payload["nextThoughtNeeded"]

        with pytest.raises(InvalidInputError) as exc:
            validate_thought_data(payload)

        assert exc.value.message == "Invalid nextThoughtNeeded: must be a boolean"
        assert exc.value.code == "INVALID_INPUT"


class TestOptionalFields:
    """Tests for typed passthrough of optional fields."""

    def test_optional_fields_mapped(self, make_payload):
        """Verify every optional field lands under its record key."""
        record = validate_thought_data(make_payload(
            3,
            isRevision=True,
            revisesThought=1,
            branchFromThought=2,
            branchId="alt",
            needsMoreThoughts=False,
            phase="Analysis",
            dependencies=[1, 2],
            toolsUsed=["grep"],
            complexity="medium",
            status="in-progress",
        ))

        assert record["is_revision"] is True
        assert record["revises_thought"] == 1
        assert record["branch_from_thought"] == 2
        assert record["branch_id"] == "alt"
        assert record["needs_more_thoughts"] is False
        assert record["phase"] == "Analysis"
        assert record["dependencies"] == [1, 2]
        assert record["tools_used"] == ["grep"]
        assert record["complexity"] == "medium"
        assert record["status"] == "in-progress"

    def test_dependencies_deduplicated(self, make_payload):
        """Verify repeated dependencies collapse, keeping order."""
        record = validate_thought_data(make_payload(4, dependencies=[2, 1, 2]))

        assert record["dependencies"] == [2, 1]

    def test_string_boolean_accepted(self, make_payload):
        """Verify 'true' is read as a boolean for optional flags."""
        record = validate_thought_data(make_payload(isRevision="true"))

        assert record["is_revision"] is True

    def test_bad_dependencies_rejected(self, make_payload):
        """Verify a non-array dependencies field names the field."""
        with pytest.raises(InvalidInputError) as exc:
            validate_thought_data(make_payload(dependencies="1,2"))

        assert exc.value.field == "dependencies"

    def test_unknown_phase_passes_through(self, make_payload):
        """Verify phases are advisory and not checked here."""
        record = validate_thought_data(make_payload(phase="Brainstorm"))

        assert record["phase"] == "Brainstorm"


class TestErrorHierarchy:
    """Tests for the structured error dicts."""

    def test_invalid_input_is_validation_error(self):
        """Verify InvalidInputError sits under ValidationError and ThinkingError."""
        error = InvalidInputError("thought", "must be a non-empty string")

        assert isinstance(error, ValidationError)
        assert isinstance(error, ThinkingError)

    def test_to_dict_marks_failure(self):
        """Verify to_dict carries the failure flag."""
        result = InvalidInputError("thoughtNumber", "must be a number").to_dict()

        assert result == {
            "success": False,
            "error": "Invalid thoughtNumber: must be a number",
            "code": "INVALID_INPUT",
            "status": "failed",
        }
