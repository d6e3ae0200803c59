"""Pipeline error taxonomy.

Every fatal error reaching a caller is a ``PipelineError`` naming the stage
that failed. ``GenerationError`` is the only error recovered internally: the
patch path raises it and the pipeline falls back to a full compile.
"""

from enum import Enum


class IntentUIError(Exception):
    """Base class for all pipeline errors."""


class GenerationError(IntentUIError):
    """Incremental patching hit an unexpected structural state."""


class OutputSafetyError(IntentUIError):
    """Compiled or patched code failed the output safety gate."""

    def __init__(self, message: str, violations: list[str] | None = None) -> None:
        self.violations = violations or [message]
        super().__init__(message)


class ExplanationError(IntentUIError):
    """Explanation broke its length or content rules."""


class Stage(str, Enum):
    """Pipeline stages, in execution order."""

    PLANNING = "planning"
    VALIDATION = "validation"
    GENERATION = "generation"
    SAFETY = "safety check"
    EXPLANATION = "explanation"


class PipelineError(IntentUIError):
    """A fatal error wrapped with the stage that raised it."""

    def __init__(self, stage: Stage, cause: Exception) -> None:
        self.stage = stage
        self.cause = cause
        super().__init__(f"{stage.value} failed: {cause}")
