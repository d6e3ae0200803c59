"""
Stage Tracing
Structured start/end/error logging around pipeline stages.
"""

import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog

logger: structlog.BoundLogger | None = None

SLOW_OPERATION_SECONDS = 1.0


def _get_logger() -> structlog.BoundLogger:
    """Get or create logger instance."""
    global logger
    if logger is None:
        logger = structlog.get_logger(__name__)
    return logger


@contextmanager
def trace_operation(operation: str, **kwargs: Any) -> Iterator[None]:
    """
    Context manager for tracing operations with structured logging.

    Durations are only logged; they never reach pipeline output.

    Args:
        operation: Name of the operation
        **kwargs: Additional context to log
    """
    log = _get_logger()
    start = time.perf_counter()
    log.debug("operation_start", operation=operation, **kwargs)

    try:
        yield
    except Exception as e:
        duration = time.perf_counter() - start
        log.error(
            "operation_error",
            operation=operation,
            error=str(e),
            duration_ms=duration * 1000,
            **kwargs,
        )
        raise
    else:
        duration = time.perf_counter() - start
        if duration > SLOW_OPERATION_SECONDS:
            log.warning("operation_slow", operation=operation, duration_ms=duration * 1000, **kwargs)
        else:
            log.debug("operation_end", operation=operation, duration_ms=duration * 1000, **kwargs)
