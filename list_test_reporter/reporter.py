"""Streaming list reporter driven by result and run-complete events."""

import logging
import sys
import threading
from dataclasses import dataclass, field
from typing import TextIO

from list_test_reporter.console import Console, select_console
from list_test_reporter.models.result import TestResult
from list_test_reporter.models.settings import ReporterSettings
from list_test_reporter.models.summary import RunSummary
from list_test_reporter.output_style import OutputStyle
from list_test_reporter.scheduler import ClassScheduler
from list_test_reporter.theory import TheoryAggregator

log = logging.getLogger(__name__)


@dataclass(kw_only=True)
class ListTestReporter:
    """Prints a per-class test list while results arrive from parallel workers.

    The execution engine calls ``on_result`` for every finished test, from any
    thread, and ``on_run_complete`` once at the end. Every call is handled as
    one critical section, and no exception escapes to the engine. Create one
    reporter per run.
    """

    console: Console
    style: OutputStyle = field(default_factory=OutputStyle)
    settings: ReporterSettings = field(default_factory=ReporterSettings)

    _scheduler: ClassScheduler = field(init=False, repr=False)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False
    )
    _passed: int = field(default=0, init=False)
    _failed: int = field(default=0, init=False)
    _skipped: int = field(default=0, init=False)
    _header_printed: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        aggregator = TheoryAggregator(
            console=self.console,
            style=self.style,
            collapse_theories=self.settings.collapse_theories_enabled,
        )
        self._scheduler = ClassScheduler(
            console=self.console, style=self.style, aggregator=aggregator
        )

    @classmethod
    def create(
        cls,
        *,
        settings: ReporterSettings | None = None,
        stream: TextIO | None = None,
        style: OutputStyle | None = None,
    ) -> "ListTestReporter":
        """Create a reporter writing to ``stream`` (stdout by default)."""
        style = style or OutputStyle.from_environment()
        console = select_console(stream or sys.stdout, style)
        return cls(
            console=console, style=style, settings=settings or ReporterSettings()
        )

    @property
    def summary(self) -> RunSummary:
        """Totals of every result received so far."""
        return RunSummary(
            passed=self._passed, failed=self._failed, skipped=self._skipped
        )

    def on_result(self, result: TestResult) -> None:
        """Handle one finished test."""
        with self._lock:
            try:
                self._count(result)
                if not self._is_shown(result):
                    self._scheduler.record_hidden(result)
                    return
                self._print_header()
                self._scheduler.submit(result)
            except Exception:
                log.exception(
                    "Failed to report result of %s",
                    result.test_case.fully_qualified_name,
                )

    def on_run_complete(self) -> RunSummary:
        """Flush everything still buffered and print the summary."""
        with self._lock:
            try:
                self._scheduler.finish()
                self._print_summary()
            except Exception:
                log.exception("Failed to complete the test report")
            return self.summary

    def _count(self, result: TestResult) -> None:
        if result.outcome == "passed":
            self._passed += 1
        elif result.outcome == "failed":
            self._failed += 1
        else:
            self._skipped += 1

    def _is_shown(self, result: TestResult) -> bool:
        show_test_list = result.test_case.show_test_list
        if show_test_list is None:
            return self.settings.show_test_list_enabled
        return show_test_list

    def _print_header(self) -> None:
        if self._header_printed:
            return
        for line in self.style.report_header():
            self.console.emit_line(line)
        self._header_printed = True

    def _print_summary(self) -> None:
        summary = self.summary
        log.debug(
            "Run complete: %d passed, %d failed, %d skipped",
            summary.passed,
            summary.failed,
            summary.skipped,
        )
        self.console.emit_line(self.style.horizontal_line)
        self.console.emit_line(
            self.style.summary(summary.passed, summary.failed, summary.skipped)
        )
        self.console.emit_line(self.style.horizontal_line)
        self.console.emit_line()
