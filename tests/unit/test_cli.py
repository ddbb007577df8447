"""Tests for CLI module."""

import io
import json
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from unittest.mock import patch

import pytest

from list_test_reporter.cli import main, resolve_settings, run
from list_test_reporter.models.result import TestResult
from list_test_reporter.models.settings import ReporterSettings
from list_test_reporter.output_style import OutputStyle


def event(fully_qualified_name: str, outcome: str = "passed", **extra: object) -> str:
    """Encode one result event as a JSON line."""
    test_case = {"fully_qualified_name": fully_qualified_name, "class_test_count": 1}
    return json.dumps({"test_case": test_case, "outcome": outcome, **extra}) + "\n"


def test_run_returns_zero_without_failures(caplog: pytest.LogCaptureFixture) -> None:
    """Returns exit code 0 and logs the totals."""
    stream = io.StringIO()

    with caplog.at_level(logging.INFO):
        exit_code = run(
            [event("A.Test1"), event("B.Test1", "skipped")],
            ReporterSettings(),
            stream,
            OutputStyle(ascii=True),
        )

    assert exit_code == 0
    assert "Tests: 2, Passed: 1, Failed: 0, Skipped: 1" in stream.getvalue()
    assert "Reported 2 test(s): 1 passed, 0 failed, 1 skipped" in caplog.text


def test_run_returns_one_with_failures() -> None:
    """Returns exit code 1 when any test failed."""
    stream = io.StringIO()

    exit_code = run(
        [event("A.Test1", "failed", error_message="boom")],
        ReporterSettings(),
        stream,
        OutputStyle(ascii=True),
    )

    assert exit_code == 1
    assert "[FAIL]" in stream.getvalue()
    assert "Error: boom" in stream.getvalue()


def test_run_suppresses_other_console_output(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Silences stdout while keeping the report on its own stream."""
    stream = io.StringIO()

    def noisy_results(lines: Iterable[str]) -> Iterator[TestResult]:
        print("noise from the engine")
        yield from ()

    with patch("list_test_reporter.cli.read_results", noisy_results):
        run(
            [],
            ReporterSettings(suppress_console_output=True),
            stream,
            OutputStyle(ascii=True),
        )

    assert "noise from the engine" not in capsys.readouterr().out
    assert "Tests: 0" in stream.getvalue()


def test_resolve_settings_without_file() -> None:
    """Uses defaults when no settings file is given."""
    settings = resolve_settings(None)

    assert settings == ReporterSettings()


def test_resolve_settings_overrides_file(tmp_path: Path) -> None:
    """Prefers command line flags over the settings file."""
    path = tmp_path / "settings.yaml"
    path.write_text("reporter:\n  collapse_theories: false\n  show_test_list: false\n")

    settings = resolve_settings(path, collapse_theories=True)

    assert settings.collapse_theories is True
    assert settings.show_test_list is False


def test_main_reports_events_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Replays an events file and exits with the run's exit code."""
    events_path = tmp_path / "events.jsonl"
    events_path.write_text(event("A.Test1") + event("A.Test2", "failed"))

    argv = ["list-test-reporter", "--events", str(events_path), "--ascii"]

    with patch("sys.argv", argv), pytest.raises(SystemExit) as exc_info:
        main()

    assert exc_info.value.code == 1
    assert "Tests: 2, Passed: 1, Failed: 1, Skipped: 0" in capsys.readouterr().out


def test_main_rejects_missing_events_file(tmp_path: Path) -> None:
    """Exits with a usage error for a missing events file."""
    argv = ["list-test-reporter", "--events", str(tmp_path / "missing.jsonl")]

    with patch("sys.argv", argv), pytest.raises(SystemExit) as exc_info:
        main()

    assert exc_info.value.code == 2


def test_main_rejects_invalid_settings(tmp_path: Path) -> None:
    """Exits with a usage error for an invalid settings file."""
    settings_path = tmp_path / "settings.yaml"
    settings_path.write_text("")
    argv = ["list-test-reporter", "--settings", str(settings_path)]

    with patch("sys.argv", argv), pytest.raises(SystemExit) as exc_info:
        main()

    assert exc_info.value.code == 2


def test_main_skips_undecodable_event_lines(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Treats invalid UTF-8 as a malformed line and still prints the summary."""
    events_path = tmp_path / "events.jsonl"
    events_path.write_bytes(
        event("A.Test1").encode()
        + b"\xff\xfe not utf-8\n"
        + event("B.Test1", "skipped").encode()
    )
    argv = ["list-test-reporter", "--events", str(events_path), "--ascii"]

    with patch("sys.argv", argv), pytest.raises(SystemExit) as exc_info:
        main()

    assert exc_info.value.code == 0
    assert "Tests: 2, Passed: 1, Failed: 0, Skipped: 1" in capsys.readouterr().out
