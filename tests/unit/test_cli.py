"""Command-line entry point and logging setup tests."""

import logging

import pytest
import structlog

from intentui import __main__ as cli
from intentui.core import Settings, configure_logging, decode_json_value, get_logger


def last_error_line(capsys) -> str:
    return capsys.readouterr().err.strip().splitlines()[-1]


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    monkeypatch.setattr(cli, "configure_logging", lambda settings: None)


@pytest.mark.unit
def test_create_prints_code(capsys, dashboard_code):
    capsys.readouterr()
    assert cli.main(["Create a dashboard with analytics"]) == 0

    captured = capsys.readouterr()
    assert captured.out == dashboard_code + "\n"
    assert "dashboard layout" in captured.err


@pytest.mark.unit
def test_modify_with_previous_files(capsys, tmp_path, dashboard_plan, dashboard_code):
    plan_file = tmp_path / "plan.json"
    plan_file.write_text(dashboard_plan.model_dump_json())
    code_file = tmp_path / "ui.tsx"
    code_file.write_text(dashboard_code)
    capsys.readouterr()

    assert cli.main(['Add a button called "Export"', "--plan", str(plan_file), "--code", str(code_file), "--json"]) == 0

    result = decode_json_value(capsys.readouterr().out)
    assert result["patched"] is True
    assert result["plan"]["modifications"] == ['Added button "Export"']
    assert 'children="Export"' in result["code"]


@pytest.mark.unit
def test_invalid_intent_exits_nonzero(capsys):
    assert cli.main(["ab"]) == 1
    assert last_error_line(capsys).startswith("error: validation failed: ")


@pytest.mark.unit
def test_missing_plan_file(capsys, tmp_path):
    assert cli.main(["Remove the table", "--plan", str(tmp_path / "missing.json")]) == 1
    assert last_error_line(capsys).startswith("error: ")


@pytest.mark.unit
def test_malformed_plan_file(capsys, tmp_path):
    plan_file = tmp_path / "plan.json"
    plan_file.write_text("{not json")

    assert cli.main(["Remove the table", "--plan", str(plan_file)]) == 1
    assert last_error_line(capsys).startswith("error: ")


@pytest.mark.unit
def test_configure_logging_json(capsys):
    root = logging.getLogger()
    root_handlers, root_level = root.handlers[:], root.level
    structlog_config = structlog.get_config()
    try:
        configure_logging(Settings(log_level="WARNING", json_logs=True), cache_loggers=False)

        assert logging.getLogger().level == logging.WARNING
        get_logger("intentui.test").warning("json_line", key="value")
        record = decode_json_value(capsys.readouterr().err.strip().splitlines()[-1])
        assert record["levelname"] == "WARNING"
        assert record["name"] == "intentui.test"
        event = decode_json_value(record["message"])
        assert event["event"] == "json_line"
        assert event["key"] == "value"
    finally:
        structlog.configure(**structlog_config)
        root.handlers[:] = root_handlers
        root.setLevel(root_level)
