"""CLI entry point replaying a result event stream through the list reporter."""

import argparse
import io
import logging
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from list_test_reporter.console import suppressed_console_output
from list_test_reporter.events import read_results
from list_test_reporter.models.settings import ReporterSettings
from list_test_reporter.output_style import OutputStyle
from list_test_reporter.reporter import ListTestReporter
from list_test_reporter.settings_loader import load_settings


def run(
    events: Iterable[str],
    settings: ReporterSettings,
    stream: TextIO,
    style: OutputStyle,
) -> int:
    """Report every result from ``events`` and return the exit code."""
    log = logging.getLogger("list_test_reporter")

    reporter = ListTestReporter.create(settings=settings, stream=stream, style=style)

    with suppressed_console_output(settings.suppress_console_output_enabled):
        for result in read_results(events):
            reporter.on_result(result)
        summary = reporter.on_run_complete()

    log.info(
        "Reported %d test(s): %d passed, %d failed, %d skipped",
        summary.total,
        summary.passed,
        summary.failed,
        summary.skipped,
    )
    return 1 if summary.has_failures else 0


def resolve_settings(
    settings_path: Path | None,
    *,
    suppress_console_output: bool | None = None,
    collapse_theories: bool | None = None,
    show_test_list: bool | None = None,
) -> ReporterSettings:
    """Combine the settings file with command line overrides."""
    settings = load_settings(settings_path) if settings_path else ReporterSettings()
    return settings.with_overrides(
        suppress_console_output=suppress_console_output,
        collapse_theories=collapse_theories,
        show_test_list=show_test_list,
    )


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Render a stream of test results as a per-class test list"
    )
    parser.add_argument(
        "--events",
        default="-",
        help="JSON Lines file with one test result per line ('-' for stdin)",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="YAML file with a 'reporter' settings section",
    )
    parser.add_argument(
        "--collapse-theories",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Aggregate parameterized runs of a method into one line",
    )
    parser.add_argument(
        "--show-test-list",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="List individual results (the summary is always printed)",
    )
    parser.add_argument(
        "--suppress-console-output",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Silence other console output while the report is produced",
    )
    parser.add_argument(
        "--ascii",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Use ASCII tags instead of emoji symbols (default: auto-detect)",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        settings = resolve_settings(
            args.settings,
            suppress_console_output=args.suppress_console_output,
            collapse_theories=args.collapse_theories,
            show_test_list=args.show_test_list,
        )
    except (FileNotFoundError, ValueError) as e:
        parser.error(str(e))

    if args.ascii is None:
        style = OutputStyle.from_environment()
    else:
        style = OutputStyle(ascii=args.ascii)

    if args.events == "-":
        if isinstance(sys.stdin, io.TextIOWrapper):
            sys.stdin.reconfigure(errors="replace")
        exit_code = run(sys.stdin, settings, sys.stdout, style)
    else:
        events_path = Path(args.events)
        if not events_path.is_file():
            parser.error(f"Events file not found: {events_path}")
        with events_path.open(encoding="utf-8", errors="replace") as events:
            exit_code = run(events, settings, sys.stdout, style)
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
