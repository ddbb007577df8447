"""Stateless formatting of report lines with ANSI styling and an ASCII fallback."""

import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass

RESET = "\x1b[0m"
BOLD = "\x1b[1m"
DIM = "\x1b[2m"
RED = "\x1b[31m"
GREEN = "\x1b[32m"
YELLOW = "\x1b[33m"
CYAN = "\x1b[36m"
CURSOR_UP_CLEAR_LINE = "\x1b[1A\x1b[2K"

HORIZONTAL_LINE_WIDTH = 60


def detect_ascii_mode(
    platform: str | None = None, environ: Mapping[str, str] | None = None
) -> bool:
    """Check whether the terminal needs plain ASCII symbols.

    Only legacy Windows consoles qualify: Windows Terminal sets WT_SESSION and
    most other modern terminals set TERM_PROGRAM.
    """
    platform = sys.platform if platform is None else platform
    environ = os.environ if environ is None else environ

    if not platform.startswith("win"):
        return False
    return not environ.get("WT_SESSION") and not environ.get("TERM_PROGRAM")


@dataclass(frozen=True, kw_only=True)
class OutputStyle:
    """Maps results and aggregates to styled lines."""

    ascii: bool = False

    @classmethod
    def from_environment(cls) -> "OutputStyle":
        """Create a style matching the current terminal."""
        return cls(ascii=detect_ascii_mode())

    @property
    def passed_symbol(self) -> str:
        """Symbol of a passed test."""
        return "[PASS]" if self.ascii else "✅"

    @property
    def failed_symbol(self) -> str:
        """Symbol of a failed test."""
        return "[FAIL]" if self.ascii else "❌"

    @property
    def skipped_symbol(self) -> str:
        """Symbol of a skipped test."""
        return "[SKIP]" if self.ascii else "⏭️"

    @property
    def unknown_symbol(self) -> str:
        """Symbol of a test with an unrecognized outcome."""
        return "[????]" if self.ascii else "❓"

    @property
    def horizontal_line(self) -> str:
        """Rule framing the report header and the summary."""
        return ("-" if self.ascii else "─") * HORIZONTAL_LINE_WIDTH

    @property
    def _skipped_spacing(self) -> str:
        # The skip emoji carries a variation selector and renders one cell short
        return " " if self.ascii else "  "

    def format_duration(self, seconds: float) -> str:
        """Format a duration as seconds from one second up, milliseconds below."""
        if seconds >= 1:
            return f"{DIM}({seconds:.1f}s){RESET}"
        return f"{DIM}({seconds * 1000:.0f}ms){RESET}"

    def report_header(self) -> list[str]:
        """Lines opening the report."""
        return [
            "",
            self.horizontal_line,
            f" {BOLD}T E S T S{RESET}",
            self.horizontal_line,
        ]

    def class_header(self, class_name: str) -> str:
        """Heading printed once before the results of a class."""
        return f"Running {CYAN}{class_name}{RESET}"

    def passed_result(self, test_name: str, duration: float) -> str:
        """Line of a passed test."""
        return (
            f"  {self.passed_symbol} {GREEN}{test_name}{RESET} "
            f"{self.format_duration(duration)}"
        )

    def failed_result(self, test_name: str, duration: float) -> str:
        """Line of a failed test."""
        return (
            f"  {self.failed_symbol} {RED}{test_name}{RESET} "
            f"{self.format_duration(duration)}"
        )

    def skipped_result(self, test_name: str, reason: str | None = None) -> str:
        """Line of a skipped test with its optional reason."""
        reason_text = f" {DIM}({reason}){RESET}" if reason else ""
        return (
            f"  {self.skipped_symbol}{self._skipped_spacing}"
            f"{YELLOW}{test_name}{RESET}{reason_text}"
        )

    def unknown_result(self, test_name: str, outcome: str) -> str:
        """Line of a test whose outcome is shown by its raw name."""
        return (
            f"  {self.unknown_symbol} {YELLOW}{test_name}{RESET} "
            f"{DIM}({outcome}){RESET}"
        )

    def grouped_passed_result(self, method: str, runs: int, duration: float) -> str:
        """Line of a parameterized method whose runs all passed."""
        return (
            f"  {self.passed_symbol} {GREEN}{method}{RESET} "
            f"{self.format_duration(duration)} {DIM}{runs} runs{RESET}"
        )

    def grouped_failed_result(
        self, method: str, failed: int, runs: int, duration: float
    ) -> str:
        """Line of a parameterized method with failed runs."""
        return (
            f"  {self.failed_symbol} {RED}{method}{RESET} "
            f"{self.format_duration(duration)} {RED}{failed}/{runs} runs failed{RESET}"
        )

    def grouped_skipped_result(self, method: str, skipped: int, runs: int) -> str:
        """Line of a parameterized method with skipped runs and no failures."""
        return (
            f"  {self.skipped_symbol}{self._skipped_spacing}{YELLOW}{method}{RESET} "
            f"{DIM}{skipped}/{runs} runs skipped{RESET}"
        )

    def failure_name(self, test_name: str) -> str:
        """Heading of a failure detail block inside a theory group."""
        return f"    {RED}{test_name}{RESET}"

    def failure_message(self, message: str) -> str:
        """Error message line of a failure detail block."""
        return f"    {RED}Error: {message}{RESET}"

    def failure_trace_line(self, line: str) -> str:
        """Stack trace line of a failure detail block."""
        return f"    {RED}{line}{RESET}"

    def summary(self, passed: int, failed: int, skipped: int) -> str:
        """Run summary, red when anything failed."""
        total = passed + failed + skipped
        counts = (
            f"Tests: {total}, Passed: {passed}, Failed: {failed}, Skipped: {skipped}"
        )
        if failed > 0:
            return f"{self.failed_symbol} {RED}{counts}{RESET}"
        return f"{self.passed_symbol} {GREEN}{counts}{RESET}"
