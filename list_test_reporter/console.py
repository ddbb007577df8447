"""Output targets for the report."""

import os
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager, redirect_stderr, redirect_stdout
from dataclasses import dataclass, field
from typing import TextIO

from list_test_reporter.output_style import CURSOR_UP_CLEAR_LINE, OutputStyle


class Console(ABC):
    """Line-oriented output target.

    Theory groups rewrite their summary line in place. Targets that cannot
    move the cursor implement ``replace_last_line`` by appending instead.
    """

    @abstractmethod
    def emit_line(self, line: str = "") -> None:
        """Write a new line."""

    @abstractmethod
    def replace_last_line(self, line: str) -> None:
        """Replace the most recently written line."""


@dataclass(frozen=True, kw_only=True)
class StreamConsole(Console):
    """Console writing whole lines to a text stream."""

    stream: TextIO = field(repr=False)

    def emit_line(self, line: str = "") -> None:
        """Write a new line and flush it."""
        self.stream.write(f"{line}\n")
        self.stream.flush()


@dataclass(frozen=True, kw_only=True)
class TerminalConsole(StreamConsole):
    """Interactive terminal supporting cursor movement."""

    def replace_last_line(self, line: str) -> None:
        """Move the cursor up, clear the line and write the replacement."""
        self.stream.write(CURSOR_UP_CLEAR_LINE)
        self.emit_line(line)


@dataclass(frozen=True, kw_only=True)
class LogConsole(StreamConsole):
    """Append-only target such as a file or a CI log."""

    def replace_last_line(self, line: str) -> None:
        """Append the replacement as a new line."""
        self.emit_line(line)


def select_console(stream: TextIO, style: OutputStyle) -> Console:
    """Pick the console for a stream: live updates only on a modern terminal."""
    isatty = getattr(stream, "isatty", None)
    if not style.ascii and isatty is not None and isatty():
        return TerminalConsole(stream=stream)
    return LogConsole(stream=stream)


@contextmanager
def suppressed_console_output(enabled: bool = True) -> Iterator[None]:
    """Silence writes to sys.stdout and sys.stderr within the block.

    Consoles created before entering keep the stream they were given.
    """
    if not enabled:
        yield
        return

    with (
        open(os.devnull, "w", encoding="utf-8") as devnull,
        redirect_stdout(devnull),
        redirect_stderr(devnull),
    ):
        yield
