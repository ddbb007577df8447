"""Tests for result identity parsing."""

import pytest

from list_test_reporter.models.result import (
    TestCase,
    TestResult,
    get_base_method_name,
    get_class_name,
)


@pytest.mark.parametrize(
    ("fully_qualified_name", "expected"),
    [
        ("Namespace.ClassA.Test1", "Namespace.ClassA"),
        ("Namespace.ClassA.TestMethod(x: 1)", "Namespace.ClassA"),
        ("Namespace.ClassA.TestMethod(value: 1.5)", "Namespace.ClassA"),
        ("ClassA.Test1", "ClassA"),
        ("Test1", "Test1"),
    ],
)
def test_get_class_name(fully_qualified_name: str, expected: str) -> None:
    """Strips the parameter suffix and the method segment."""
    assert get_class_name(fully_qualified_name) == expected


@pytest.mark.parametrize(
    ("test_name", "expected"),
    [
        ("TestMethod(x: 1)", "TestMethod"),
        ("TestMethod", None),
        ("(x: 1)", None),
    ],
)
def test_get_base_method_name(test_name: str, expected: str | None) -> None:
    """Returns the method name only for parameterized tests."""
    assert get_base_method_name(test_name) == expected


def test_test_name_strips_class_prefix_from_display_name() -> None:
    """Reports the display name relative to the owning class."""
    test_case = TestCase(
        fully_qualified_name="Namespace.ClassA.TestMethod(x: 1)",
        display_name="Namespace.ClassA.TestMethod(x: 1)",
    )

    assert test_case.class_name == "Namespace.ClassA"
    assert test_case.test_name == "TestMethod(x: 1)"


def test_test_name_keeps_short_display_name() -> None:
    """Keeps a display name that does not repeat the class."""
    test_case = TestCase(
        fully_qualified_name="Namespace.ClassA.TestMethod(x: 1)",
        display_name="TestMethod(x: 1)",
    )

    assert test_case.test_name == "TestMethod(x: 1)"


def test_test_name_falls_back_to_fully_qualified_name() -> None:
    """Derives the test name from the identity when no display name is set."""
    test_case = TestCase(fully_qualified_name="Namespace.ClassA.Test1")

    assert test_case.test_name == "Test1"


def test_skip_reason_prefers_error_message() -> None:
    """Uses the error message, then the first message, as skip reason."""
    test_case = TestCase(fully_qualified_name="Namespace.ClassA.Test1")

    with_message = TestResult(
        test_case=test_case,
        outcome="skipped",
        error_message="Database unavailable",
        messages=["ignored"],
    )
    with_messages = TestResult(
        test_case=test_case, outcome="skipped", messages=["later"]
    )
    without_reason = TestResult(test_case=test_case, outcome="skipped")

    assert with_message.skip_reason == "Database unavailable"
    assert with_messages.skip_reason == "later"
    assert without_reason.skip_reason is None
