"""Ordering rules for promoting and draining buffered classes."""

from collections.abc import Mapping, Sequence
from typing import Protocol, TypeVar


class BufferedClass(Protocol):
    """View of a class with results waiting to be printed."""

    @property
    def name(self) -> str: ...

    @property
    def first_seen(self) -> int: ...

    @property
    def completed(self) -> bool: ...

    @property
    def pending_count(self) -> int: ...

    @property
    def has_failures(self) -> bool: ...


T = TypeVar("T", bound=BufferedClass)


def completed_without_failures(
    buffered: Mapping[str, T],
) -> Sequence[T]:
    """Classes that can be flushed as soon as the active class completes."""
    return [
        state
        for state in buffered.values()
        if state.completed and not state.has_failures
    ]


def pick_next_active(buffered: Mapping[str, T]) -> T | None:
    """Choose the buffered class that takes over the active slot.

    Classes without failures win over classes with failures, then the larger
    buffer wins, then the class seen first.
    """
    if not buffered:
        return None
    return min(
        buffered.values(),
        key=lambda state: (state.has_failures, -state.pending_count, state.first_seen),
    )


def drain_order(buffered: Mapping[str, T]) -> Sequence[T]:
    """End-of-run order: passing classes by name, then failing classes by name."""
    return sorted(buffered.values(), key=lambda state: (state.has_failures, state.name))
