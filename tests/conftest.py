"""Pytest configuration and fixtures."""

import os
import sys
from datetime import datetime, timezone

import pytest
import structlog
from prometheus_client import CollectorRegistry

from intentui.core import get_settings
from intentui.agents import IntentPlanner, Plan
from intentui.codegen import CodeCompiler
from intentui.monitoring import MetricsCollector


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ["INTENTUI_LOG_LEVEL"] = "DEBUG"
    os.environ["INTENTUI_PATCH_STRATEGY"] = "combined"
    os.environ["INTENTUI_ENABLE_PATCHING"] = "true"

    # Keep log lines off stdout, which carries generated code
    structlog.configure(logger_factory=structlog.PrintLoggerFactory(sys.stderr))


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings():
    """Test settings."""
    return get_settings()


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Settings are cached per process; tests that patch the environment need a fresh copy."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def metrics():
    """Collector bound to an isolated registry."""
    return MetricsCollector(registry=CollectorRegistry())


@pytest.fixture
def fixed_clock():
    """Deterministic clock for history stores."""
    return lambda: datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


# ============================================================================
# Plan Fixtures
# ============================================================================

@pytest.fixture
def planner():
    return IntentPlanner()


@pytest.fixture
def compiler():
    return CodeCompiler()


@pytest.fixture
def dashboard_plan(planner) -> Plan:
    """Plan created from a dashboard instruction."""
    return planner.plan("Create a dashboard with analytics")


@pytest.fixture
def form_plan(planner) -> Plan:
    return planner.plan("Build a contact form")


@pytest.fixture
def default_plan(planner) -> Plan:
    return planner.plan("Make me something nice")


@pytest.fixture
def dashboard_code(compiler, dashboard_plan) -> str:
    return compiler.compile(dashboard_plan)


@pytest.fixture
def default_code(compiler, default_plan) -> str:
    return compiler.compile(default_plan)


@pytest.fixture
def sample_plan_data():
    """Raw plan data as it would come back from persistence."""
    return {
        "layout": "default",
        "components": [
            {"type": "Navbar", "props": {"title": "Application"}, "children": []},
            {
                "type": "Card",
                "props": {"title": "Welcome"},
                "children": [
                    {"type": "Button", "props": {"variant": "primary", "children": "Get Started"}, "children": []}
                ],
            },
        ],
        "modifications": [],
    }
