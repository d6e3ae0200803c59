"""Core utilities and infrastructure."""

from .config import Settings, PatchStrategy, get_settings
from .validate import (
    ValidationError,
    ValidationResult,
    IntentRequest,
    validate_json_depth,
)
from .errors import (
    IntentUIError,
    GenerationError,
    OutputSafetyError,
    ExplanationError,
    PipelineError,
    Stage,
)
from .logging_config import configure_logging, get_logger, LogContext
from .tracing import trace_operation
from .json import decode_json_value, safe_json_dumps, JSONParseError


__all__ = [
    # Config
    "Settings",
    "PatchStrategy",
    "get_settings",
    # Validation
    "ValidationError",
    "ValidationResult",
    "IntentRequest",
    "validate_json_depth",
    # Errors
    "IntentUIError",
    "GenerationError",
    "OutputSafetyError",
    "ExplanationError",
    "PipelineError",
    "Stage",
    # Logging
    "configure_logging",
    "get_logger",
    "LogContext",
    "trace_operation",
    # JSON
    "decode_json_value",
    "safe_json_dumps",
    "JSONParseError",
]
