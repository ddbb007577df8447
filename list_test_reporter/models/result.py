"""Models for test results delivered by the execution engine."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Literal

TestOutcome = Literal["passed", "failed", "skipped", "none", "not_found"]


def get_class_name(fully_qualified_name: str) -> str:
    """Return the owning class of a test identity.

    The identity has the form ``Namespace.ClassName.MethodName`` optionally
    followed by a parameter suffix, e.g. ``Namespace.ClassName.Method(x: 1)``.
    """
    name = fully_qualified_name.partition("(")[0]
    last_dot = name.rfind(".")
    return name[:last_dot] if last_dot > 0 else name


def get_base_method_name(test_name: str) -> str | None:
    """Return the method name without its parameter suffix, if it has one."""
    paren_index = test_name.find("(")
    return test_name[:paren_index] if paren_index > 0 else None


@dataclass(frozen=True, kw_only=True)
class TestCase:
    """Identity of a test together with the metadata the engine attaches to it.

    ``class_test_count`` is the number of results expected for the owning
    class, 0 when the engine does not know it. The two flags are ``None`` when
    the engine leaves them to the run settings.
    """

    __test__ = False

    fully_qualified_name: str
    display_name: str | None = None
    class_test_count: int = 0
    collapse_theories: bool | None = None
    show_test_list: bool | None = None

    @property
    def class_name(self) -> str:
        """Owning class of this test."""
        return get_class_name(self.fully_qualified_name)

    @property
    def test_name(self) -> str:
        """Display name relative to the owning class."""
        display_name = self.display_name or self.fully_qualified_name
        prefix = f"{self.class_name}."
        if display_name.startswith(prefix):
            return display_name[len(prefix) :]
        return display_name


@dataclass(frozen=True, kw_only=True)
class TestResult:
    """Terminal outcome of one test execution.

    Outcomes other than passed, failed and skipped are reported as unknown
    and keep their raw name.
    """

    __test__ = False

    test_case: TestCase
    outcome: TestOutcome | str
    duration: float = 0.0
    error_message: str | None = None
    error_stack_trace: str | None = None
    messages: Sequence[str] = field(default_factory=tuple)

    @property
    def skip_reason(self) -> str | None:
        """Reason shown next to a skipped test."""
        if self.error_message:
            return self.error_message
        return self.messages[0] if self.messages else None
