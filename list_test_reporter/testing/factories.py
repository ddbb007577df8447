"""Test factories for generating result events."""

from polyfactory import Use
from polyfactory.factories import DataclassFactory

from list_test_reporter.models.result import TestCase, TestResult


class TestCaseFactory(DataclassFactory[TestCase]):
    """Factory for TestCase."""

    __model__ = TestCase

    fully_qualified_name = "Namespace.ClassA.Test1"
    display_name = None
    class_test_count = 0
    collapse_theories = None
    show_test_list = None


class TestResultFactory(DataclassFactory[TestResult]):
    """Factory for TestResult."""

    __model__ = TestResult

    test_case = Use(TestCaseFactory.build)
    outcome = "passed"
    duration = 0.01
    error_message = None
    error_stack_trace = None
    messages = ()


def make_result(
    fully_qualified_name: str,
    outcome: str = "passed",
    *,
    class_test_count: int = 0,
    collapse_theories: bool | None = None,
    show_test_list: bool | None = None,
    error_message: str | None = None,
    error_stack_trace: str | None = None,
    duration: float = 0.01,
) -> TestResult:
    """Build a result for the given identity and metadata."""
    return TestResultFactory.build(
        test_case=TestCaseFactory.build(
            fully_qualified_name=fully_qualified_name,
            class_test_count=class_test_count,
            collapse_theories=collapse_theories,
            show_test_list=show_test_list,
        ),
        outcome=outcome,
        error_message=error_message,
        error_stack_trace=error_stack_trace,
        duration=duration,
    )
