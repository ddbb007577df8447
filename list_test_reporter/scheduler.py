"""Per-class scheduling of the result stream."""

import logging
from dataclasses import dataclass, field

from list_test_reporter.console import Console
from list_test_reporter.flush_policy import (
    completed_without_failures,
    drain_order,
    pick_next_active,
)
from list_test_reporter.models.result import TestResult
from list_test_reporter.output_style import OutputStyle
from list_test_reporter.theory import TheoryAggregator

log = logging.getLogger(__name__)


@dataclass(kw_only=True)
class ClassState:
    """Progress of one test class.

    The first non-zero expected count wins. A class whose expected count stays
    unknown (0) never completes and is only printed by the end-of-run drain.
    """

    name: str
    first_seen: int
    expected: int = 0
    received: int = 0
    buffer: list[TestResult] = field(default_factory=list)
    header_printed: bool = False
    completed: bool = False

    @property
    def pending_count(self) -> int:
        """Number of buffered results waiting to be printed."""
        return len(self.buffer)

    @property
    def has_failures(self) -> bool:
        """Whether a buffered result failed."""
        return any(result.outcome == "failed" for result in self.buffer)

    def record(self, result: TestResult) -> None:
        """Count a received result and mark the class completed when all arrived."""
        if not self.expected and result.test_case.class_test_count > 0:
            self.expected = result.test_case.class_test_count
        self.received += 1
        if self.expected > 0 and self.received >= self.expected:
            self.completed = True


@dataclass(kw_only=True)
class SchedulerState:
    """Mutable state of one run."""

    active_class: str | None = None
    classes: dict[str, ClassState] = field(default_factory=dict)
    buffered: dict[str, ClassState] = field(default_factory=dict)
    any_class_header_printed: bool = False

    def class_state(self, class_name: str) -> ClassState:
        """Return the state of a class, creating it on first sight."""
        if (state := self.classes.get(class_name)) is None:
            state = ClassState(name=class_name, first_seen=len(self.classes))
            self.classes[class_name] = state
        return state


@dataclass(kw_only=True)
class ClassScheduler:
    """Decides which class streams to the console and which classes wait.

    Exactly one class is active at a time. Results of the active class are
    printed as they arrive, results of other classes are buffered until their
    class is flushed or becomes active.
    """

    console: Console
    style: OutputStyle
    aggregator: TheoryAggregator
    state: SchedulerState = field(default_factory=SchedulerState)

    def submit(self, result: TestResult) -> None:
        """Route one result to the console or to its class buffer."""
        state = self.state
        class_state = state.class_state(result.test_case.class_name)
        class_state.record(result)

        if state.active_class is None:
            self._activate(class_state)
            self.aggregator.handle(result)
        elif class_state.name == state.active_class:
            self.aggregator.handle(result)
        else:
            class_state.buffer.append(result)
            state.buffered.setdefault(class_state.name, class_state)

        if class_state.completed and class_state.name == state.active_class:
            self._switch_active_class()

    def record_hidden(self, result: TestResult) -> None:
        """Count a result that is not listed toward its class's completion."""
        state = self.state
        class_state = state.class_state(result.test_case.class_name)
        class_state.record(result)

        if class_state.completed and class_state.name == state.active_class:
            self._switch_active_class()

    def finish(self) -> None:
        """Drain every buffered class: passing classes first, then failing ones."""
        self.aggregator.finalize()
        self.state.active_class = None

        remaining = drain_order(self.state.buffered)
        log.debug("Draining %d buffered class(es)", len(remaining))
        for class_state in remaining:
            self._flush(class_state)

    def _switch_active_class(self) -> None:
        state = self.state
        outgoing = state.active_class

        while state.active_class is not None:
            self.aggregator.finalize()

            for class_state in completed_without_failures(state.buffered):
                self._flush(class_state)

            next_class = pick_next_active(state.buffered)
            if next_class is None:
                log.debug("Class %s completed, no buffered class left", outgoing)
                state.active_class = None
                return

            log.debug("Switching active class from %s to %s", outgoing, next_class.name)
            self._activate(next_class)
            self._stream_buffer(next_class)

            if not next_class.completed:
                return
            outgoing = next_class.name

    def _activate(self, class_state: ClassState) -> None:
        self.state.active_class = class_state.name
        self._print_class_header(class_state)

    def _flush(self, class_state: ClassState) -> None:
        log.debug(
            "Flushing class %s (%d result(s))",
            class_state.name,
            class_state.pending_count,
        )
        self._print_class_header(class_state)
        self._stream_buffer(class_state)
        self.aggregator.finalize()

    def _stream_buffer(self, class_state: ClassState) -> None:
        del self.state.buffered[class_state.name]
        pending, class_state.buffer = class_state.buffer, []
        for result in pending:
            self.aggregator.handle(result)

    def _print_class_header(self, class_state: ClassState) -> None:
        if class_state.header_printed:
            return
        if self.state.any_class_header_printed:
            self.console.emit_line()
        self.console.emit_line(self.style.class_header(class_state.name))
        class_state.header_printed = True
        self.state.any_class_header_printed = True
