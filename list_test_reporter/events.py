"""Decoding of result events from JSON Lines."""

import logging
from collections.abc import Iterable, Iterator

from pydantic import TypeAdapter, ValidationError

from list_test_reporter.models.result import TestResult

log = logging.getLogger(__name__)

_result_adapter = TypeAdapter(TestResult)


def parse_result(line: str) -> TestResult:
    """Parse one JSON encoded result.

    Raises:
        ValidationError: If the line is not valid JSON or not a valid result

    """
    return _result_adapter.validate_json(line)


def read_results(lines: Iterable[str]) -> Iterator[TestResult]:
    """Yield results from JSON Lines, skipping blank and malformed lines."""
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            yield parse_result(line)
        except ValidationError as e:
            log.warning(
                "Skipping malformed result on line %d: %d validation error(s)",
                line_number,
                e.error_count(),
            )
