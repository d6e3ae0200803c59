"""
Version History
Append-only record of generated UI versions with a single active pointer
"""

from collections.abc import Callable
from datetime import datetime, timezone
from typing import Optional, Protocol

from pydantic import BaseModel, Field

from intentui.core import IntentUIError, get_logger
from intentui.agents.models import Plan

logger = get_logger(__name__)


class VersionNotFoundError(IntentUIError):
    """No version with the requested number."""

    def __init__(self, version_number: int) -> None:
        self.version_number = version_number
        super().__init__(f"Version {version_number} not found")


class VersionRecord(BaseModel):
    """One generated UI version"""
    version_number: int = Field(..., ge=1)
    intent: str
    plan: Plan
    code: str
    explanation: str
    created_at: Optional[datetime] = Field(default=None, description="Stamped by the store")
    is_active: bool = False


class VersionStore(Protocol):
    """Protocol for version persistence"""

    def append(self, record: VersionRecord) -> VersionRecord:
        """Store a new version and make it the active one"""
        ...

    def get(self, version_number: int) -> VersionRecord:
        """Get a version, raising VersionNotFoundError if missing"""
        ...

    def active(self) -> Optional[VersionRecord]:
        """Currently active version"""
        ...

    def activate(self, version_number: int) -> VersionRecord:
        """Make a stored version the active one"""
        ...

    def history(self, limit: Optional[int] = None) -> list[VersionRecord]:
        """Newest versions first"""
        ...

    def next_version_number(self) -> int:
        ...


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryVersionStore:
    """
    Reference store keeping records in process memory.

    Records are never rewritten except for the active flag; activating one
    record deactivates every other.
    """

    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        self.clock = clock
        self._records: dict[int, VersionRecord] = {}

    def append(self, record: VersionRecord) -> VersionRecord:
        if record.version_number in self._records:
            raise ValueError(f"Version {record.version_number} already exists")

        stored = record.model_copy(update={"created_at": record.created_at or self.clock(), "is_active": False})
        self._records[stored.version_number] = stored
        logger.info("version_stored", version=stored.version_number)
        return self.activate(stored.version_number)

    def get(self, version_number: int) -> VersionRecord:
        record = self._records.get(version_number)
        if record is None:
            raise VersionNotFoundError(version_number)
        return record

    def active(self) -> Optional[VersionRecord]:
        return next((r for r in self._records.values() if r.is_active), None)

    def activate(self, version_number: int) -> VersionRecord:
        target = self.get(version_number)
        for number, record in self._records.items():
            if record.is_active != (number == version_number):
                self._records[number] = record.model_copy(update={"is_active": number == version_number})
        logger.debug("version_activated", version=target.version_number)
        return self._records[version_number]

    def history(self, limit: Optional[int] = None) -> list[VersionRecord]:
        records = sorted(self._records.values(), key=lambda r: r.version_number, reverse=True)
        return records[:limit] if limit is not None else records

    def next_version_number(self) -> int:
        return max(self._records, default=0) + 1
