"""Input validation with strong typing."""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from .config import get_settings


# Validation limits
MAX_PROPS_DEPTH = 20


class ValidationError(Exception):
    """Validation failed."""

    pass


@dataclass(frozen=True)
class ValidationResult:
    """Validation error with details (for Result pattern)."""

    message: str
    field: str | None = None
    value: Any | None = None


class RequestValidator(BaseModel):
    """Base validator with strict configuration."""

    model_config = ConfigDict(
        strict=True, validate_assignment=True, extra="forbid", frozen=True  # Immutable by default
    )


class IntentRequest(RequestValidator):
    """Validated free-text instruction."""

    message: str

    @field_validator("message")
    @classmethod
    def validate_message(cls, v: str) -> str:
        """Strip and enforce the configured length bounds."""
        stripped = v.strip()
        settings = get_settings()
        if len(stripped) < settings.min_intent_length:
            raise ValueError(
                f"Intent must be at least {settings.min_intent_length} characters"
            )
        if len(stripped) > settings.max_intent_length:
            raise ValueError(
                f"Intent must be at most {settings.max_intent_length} characters"
            )
        return stripped


def validate_json_depth(obj: Any, max_depth: int = MAX_PROPS_DEPTH, current_depth: int = 0) -> None:
    """
    Validate JSON nesting depth to prevent stack overflow.

    Args:
        obj: Object to validate
        max_depth: Maximum allowed nesting depth
        current_depth: Current depth (internal)

    Raises:
        ValidationError: If depth exceeds limit
    """
    if current_depth > max_depth:
        raise ValidationError(f"JSON nesting depth {current_depth} exceeds maximum {max_depth}")

    if isinstance(obj, dict):
        for value in obj.values():
            validate_json_depth(value, max_depth, current_depth + 1)
    elif isinstance(obj, list):
        for item in obj:
            validate_json_depth(item, max_depth, current_depth + 1)
