"""
UI Orchestrator
Generation, iteration and rollback on top of the pipeline and a version store
"""

from typing import Optional

from intentui.core import get_logger, get_settings
from intentui.handlers.ui import GenerationResult, UIPipeline
from .history import InMemoryVersionStore, VersionRecord, VersionStore

logger = get_logger(__name__)


class UIOrchestrator:
    """
    Ties pipeline runs to version history.

    Every successful run is appended as a new version and activated; a failed
    run stores nothing.
    """

    def __init__(self, pipeline: Optional[UIPipeline] = None, store: Optional[VersionStore] = None):
        self.pipeline = pipeline or UIPipeline()
        self.store = store if store is not None else InMemoryVersionStore()

    def generate(self, intent: str) -> VersionRecord:
        """
        Generate a UI from scratch.

        Args:
            intent: Free-text instruction

        Returns:
            The stored, active version

        Raises:
            PipelineError: If any pipeline stage fails
        """
        result = self.pipeline.run(intent)
        return self._store(result, intent)

    def iterate(self, version_number: int, intent: str) -> VersionRecord:
        """
        Apply a follow-up instruction to a stored version.

        Raises:
            VersionNotFoundError: If the base version does not exist
            PipelineError: If any pipeline stage fails
        """
        base = self.store.get(version_number)
        result = self.pipeline.run(intent, base.plan, base.code)
        record = self._store(result, intent)
        logger.info("version_iterated", base=version_number, version=record.version_number, patched=result.patched)
        return record

    def rollback(self, version_number: int) -> VersionRecord:
        """Make an earlier version active again."""
        record = self.store.activate(version_number)
        logger.info("version_rollback", version=version_number)
        return record

    def history(self, limit: Optional[int] = None) -> list[VersionRecord]:
        """Newest versions first, at most ``limit`` (default from settings)."""
        return self.store.history(limit if limit is not None else get_settings().history_limit)

    def _store(self, result: GenerationResult, intent: str) -> VersionRecord:
        return self.store.append(
            VersionRecord(
                version_number=self.store.next_version_number(),
                intent=intent,
                plan=result.plan,
                code=result.code,
                explanation=result.explanation,
            )
        )
