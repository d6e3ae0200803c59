"""Version history and orchestrator tests."""

from datetime import datetime, timezone

import pytest

from intentui.core import PipelineError, get_settings
from intentui.agents import Plan
from intentui.services import InMemoryVersionStore, UIOrchestrator, VersionNotFoundError, VersionRecord


def record(number: int, intent: str = "Create a dashboard") -> VersionRecord:
    return VersionRecord(version_number=number, intent=intent, plan=Plan(), code="", explanation="")


@pytest.fixture
def store(fixed_clock):
    return InMemoryVersionStore(clock=fixed_clock)


@pytest.fixture
def orchestrator(store):
    return UIOrchestrator(store=store)


# ============================================================================
# Store
# ============================================================================

@pytest.mark.unit
def test_append_activates_and_stamps(store):
    stored = store.append(record(1))

    assert stored.is_active is True
    assert stored.created_at == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
    assert store.active() == stored


@pytest.mark.unit
def test_single_active_pointer(store):
    store.append(record(1))
    store.append(record(2))

    assert [r.is_active for r in store.history()] == [True, False]

    store.activate(1)
    assert store.active().version_number == 1
    assert store.get(2).is_active is False


@pytest.mark.unit
def test_append_keeps_explicit_timestamp(store):
    when = datetime(2020, 5, 5, tzinfo=timezone.utc)
    stored = store.append(record(1).model_copy(update={"created_at": when}))
    assert stored.created_at == when


@pytest.mark.unit
def test_duplicate_version_rejected(store):
    store.append(record(1))
    with pytest.raises(ValueError):
        store.append(record(1))


@pytest.mark.unit
def test_missing_version(store):
    with pytest.raises(VersionNotFoundError):
        store.get(7)
    with pytest.raises(VersionNotFoundError):
        store.activate(7)


@pytest.mark.unit
def test_history_newest_first_with_limit(store):
    for number in (1, 2, 3):
        store.append(record(number))

    assert [r.version_number for r in store.history()] == [3, 2, 1]
    assert [r.version_number for r in store.history(2)] == [3, 2]


@pytest.mark.unit
def test_next_version_number(store):
    assert store.next_version_number() == 1
    store.append(record(1))
    assert store.next_version_number() == 2


@pytest.mark.unit
def test_empty_store_has_no_active(store):
    assert store.active() is None


# ============================================================================
# Orchestrator
# ============================================================================

@pytest.mark.unit
def test_generate_stores_version(orchestrator, store):
    version = orchestrator.generate("Create a dashboard with analytics")

    assert version.version_number == 1
    assert version.is_active is True
    assert version.plan.layout == "dashboard"
    assert store.get(1).code == version.code


@pytest.mark.unit
def test_iterate_builds_on_stored_version(orchestrator):
    base = orchestrator.generate("Create a dashboard with analytics")
    version = orchestrator.iterate(base.version_number, "Remove the table")

    assert version.version_number == 2
    assert version.plan.modifications == ["Removed table"]
    assert "<Table" not in version.code
    assert orchestrator.store.get(1).is_active is False


@pytest.mark.unit
def test_rollback(orchestrator):
    orchestrator.generate("Create a dashboard with analytics")
    orchestrator.iterate(1, "Remove the table")

    restored = orchestrator.rollback(1)

    assert restored.is_active is True
    assert orchestrator.store.active().version_number == 1
    assert "<Table" in restored.code


@pytest.mark.unit
def test_iterate_missing_version(orchestrator):
    with pytest.raises(VersionNotFoundError):
        orchestrator.iterate(3, "Remove the table")


@pytest.mark.unit
def test_failed_run_stores_nothing(orchestrator):
    with pytest.raises(PipelineError):
        orchestrator.generate("no")
    assert orchestrator.history() == []


@pytest.mark.unit
def test_history_default_limit(orchestrator, monkeypatch):
    monkeypatch.setenv("INTENTUI_HISTORY_LIMIT", "2")
    get_settings.cache_clear()
    for _ in range(3):
        orchestrator.generate("Create a dashboard with analytics")

    assert [r.version_number for r in orchestrator.history()] == [3, 2]
    assert len(orchestrator.history(10)) == 3
