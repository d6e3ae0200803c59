"""
IntentUI
Deterministic intent-to-UI planning, compilation and incremental patching.
"""

from intentui.handlers import GenerationResult, UIPipeline, generate

__version__ = "0.1.0"

__all__ = ["GenerationResult", "UIPipeline", "generate", "__version__"]
