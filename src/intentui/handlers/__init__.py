"""Request handlers."""

from .ui import GenerationResult, UIPipeline, generate

__all__ = ["GenerationResult", "UIPipeline", "generate"]
