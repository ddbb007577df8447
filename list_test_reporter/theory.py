"""Aggregation of parameterized test runs into a single live-updating line."""

import logging
from dataclasses import dataclass, field

from list_test_reporter.console import Console
from list_test_reporter.models.result import TestResult, get_base_method_name
from list_test_reporter.output_style import OutputStyle

log = logging.getLogger(__name__)

MAX_TRACE_LINES = 5


@dataclass(kw_only=True)
class TheoryGroup:
    """Running tally of consecutive runs of one base method."""

    method: str
    run_count: int = 0
    failed_count: int = 0
    skipped_count: int = 0
    duration: float = 0.0
    failures: list[TestResult] = field(default_factory=list)
    first_result: TestResult | None = None

    def add(self, result: TestResult) -> None:
        """Count one run; unknown outcomes count as skipped."""
        if self.first_result is None:
            self.first_result = result
        self.run_count += 1
        self.duration += result.duration

        if result.outcome == "failed":
            self.failed_count += 1
            self.failures.append(result)
        elif result.outcome != "passed":
            self.skipped_count += 1


def print_failure_details(
    console: Console, style: OutputStyle, result: TestResult
) -> None:
    """Print the error message and the head of the stack trace of a failure."""
    if result.error_message:
        console.emit_line(style.failure_message(result.error_message))

    if not result.error_stack_trace:
        return

    for line in result.error_stack_trace.split("\n")[:MAX_TRACE_LINES]:
        if line.strip():
            console.emit_line(style.failure_trace_line(line.strip()))


@dataclass(kw_only=True)
class TheoryAggregator:
    """Renders the result stream of the active class.

    At most one group is open at a time. Failure details of a group are only
    printed when the group is finalized.
    """

    console: Console
    style: OutputStyle
    collapse_theories: bool = True
    group: TheoryGroup | None = None

    def handle(self, result: TestResult) -> None:
        """Render one result, extending the open group where it continues it."""
        test_case = result.test_case
        collapse = (
            self.collapse_theories
            if test_case.collapse_theories is None
            else test_case.collapse_theories
        )
        base_method = get_base_method_name(test_case.test_name) if collapse else None

        if base_method is None:
            self.finalize()
            self._print_single_result(result)
            return

        if self.group is None or self.group.method != base_method:
            self.finalize()
            self.group = TheoryGroup(method=base_method)

        self.group.add(result)
        self._print_group_progress(self.group)

    def finalize(self) -> None:
        """Close the open group, printing the details of its failed runs."""
        if self.group is None:
            return

        group, self.group = self.group, None
        log.debug(
            "Finalized theory %s: %d run(s), %d failed, %d skipped",
            group.method,
            group.run_count,
            group.failed_count,
            group.skipped_count,
        )
        for failure in group.failures:
            self.console.emit_line(self.style.failure_name(failure.test_case.test_name))
            print_failure_details(self.console, self.style, failure)

    def _print_group_progress(self, group: TheoryGroup) -> None:
        line = self._format_group(group)
        if group.run_count > 1:
            self.console.replace_last_line(line)
        else:
            self.console.emit_line(line)

    def _format_group(self, group: TheoryGroup) -> str:
        style = self.style

        if group.run_count == 1 and group.first_result is not None:
            return self._format_single_result(group.first_result, group.method)

        if group.failed_count:
            return style.grouped_failed_result(
                group.method, group.failed_count, group.run_count, group.duration
            )
        if group.skipped_count:
            return style.grouped_skipped_result(
                group.method, group.skipped_count, group.run_count
            )
        return style.grouped_passed_result(
            group.method, group.run_count, group.duration
        )

    def _print_single_result(self, result: TestResult) -> None:
        self.console.emit_line(
            self._format_single_result(result, result.test_case.test_name)
        )
        if result.outcome == "failed":
            print_failure_details(self.console, self.style, result)

    def _format_single_result(self, result: TestResult, test_name: str) -> str:
        style = self.style

        if result.outcome == "passed":
            return style.passed_result(test_name, result.duration)
        if result.outcome == "failed":
            return style.failed_result(test_name, result.duration)
        if result.outcome == "skipped":
            return style.skipped_result(test_name, result.skip_reason)
        return style.unknown_result(test_name, result.outcome)
