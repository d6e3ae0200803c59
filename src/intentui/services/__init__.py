"""
Version Services
History persistence and orchestration of generation runs
"""

from .history import (
    InMemoryVersionStore,
    VersionNotFoundError,
    VersionRecord,
    VersionStore,
)
from .orchestrator import UIOrchestrator

__all__ = [
    "InMemoryVersionStore",
    "VersionNotFoundError",
    "VersionRecord",
    "VersionStore",
    "UIOrchestrator",
]
