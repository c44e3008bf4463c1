"""
Sequential Thinking Error Hierarchy

Standardized error handling for the thinking pipeline.
All exceptions inherit from ThinkingError so the tool boundary can
turn any of them into a structured failure response.
"""


class ThinkingError(Exception):
    """Base exception for all sequential thinking errors."""

    def __init__(self, message: str, code: str = "THINKING_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to response dict for MCP tool returns."""
        return {
            "success": False,
            "error": self.message,
            "code": self.code,
            "status": "failed"
        }


# =============================================================================
# Validation Errors
# =============================================================================

class ValidationError(ThinkingError):
    """Raised when input validation fails."""

    def __init__(self, field: str, message: str, code: str = "VALIDATION_ERROR"):
        super().__init__(message, code)
        self.field = field


class InvalidInputError(ValidationError):
    """Raised when a submitted thought is missing or mistypes a field."""

    def __init__(self, field: str, detail: str):
        super().__init__(
            field,
            f"Invalid {field}: {detail}",
            "INVALID_INPUT"
        )
        self.detail = detail


# =============================================================================
# History Errors
# =============================================================================

class ThoughtNotFoundError(ThinkingError):
    """Raised when no thought with the given sequence number is stored."""

    def __init__(self, thought_number: int):
        super().__init__(
            f"Thought {thought_number} not found",
            "THOUGHT_NOT_FOUND"
        )
        self.thought_number = thought_number


# =============================================================================
# Pipeline Errors
# =============================================================================

class ProcessingError(ThinkingError):
    """Raised when an enrichment stage fails unexpectedly."""

    def __init__(self, detail: str):
        super().__init__(
            f"Thought processing failed: {detail}",
            "PROCESSING_ERROR"
        )
        self.detail = detail
