"""Pass/fail counts and failure excerpts computed from parsed test records."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel, Field, computed_field

from ci_testgrid.config import settings
from ci_testgrid.entities import TestOutcome, TestRecord


class TestRunSummary(BaseModel):
    total: int = 0
    passed: int = 0
    failed: int = 0
    skipped: int = 0
    duration_seconds: float = 0.0
    failed_tests: List[str] = Field(default_factory=list)
    more_failed: int = 0  # failed tests not listed in failed_tests

    @computed_field
    @property
    def status(self) -> str:
        return TestOutcome.FAIL.value if self.failed else TestOutcome.PASS.value


def summarize_records(
    records: Sequence[TestRecord], max_failed_tests: Optional[int] = None
) -> TestRunSummary:
    if max_failed_tests is None:
        max_failed_tests = settings.SUMMARY_MAX_FAILED_TESTS

    failed = [r.name for r in records if r.result == TestOutcome.FAIL]
    listed = failed[: max(0, max_failed_tests)]

    return TestRunSummary(
        total=len(records),
        passed=sum(1 for r in records if r.result == TestOutcome.PASS),
        failed=len(failed),
        skipped=sum(1 for r in records if r.result == TestOutcome.SKIP),
        duration_seconds=sum(r.duration_seconds for r in records),
        failed_tests=listed,
        more_failed=len(failed) - len(listed),
    )


def failure_excerpts(
    records: Sequence[TestRecord], max_lines: Optional[int] = None
) -> Dict[str, List[str]]:
    """
    Map each failed test to the last ``max_lines`` lines of its output.

    Failed tests with no captured output map to an empty list.
    """
    if max_lines is None:
        max_lines = settings.SUMMARY_MAX_LOG_LINES

    excerpts: Dict[str, List[str]] = {}
    for record in records:
        if record.result != TestOutcome.FAIL:
            continue
        excerpts[record.name] = record.logs[-max_lines:] if max_lines > 0 else []
    return excerpts
