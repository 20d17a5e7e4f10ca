"""
Base classes for log parsers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ci_testgrid.entities import TestOutcome, TestRecord


@dataclass
class ParsedLog:
    """Aggregate view of the tests found in a CI log."""

    framework: Optional[str]
    language: Optional[str]
    tests_run: int
    tests_failed: int
    tests_skipped: int
    test_duration_seconds: Optional[float]
    failed_tests: List[str] = field(default_factory=list)

    @property
    def tests_ok(self) -> int:
        return max(0, self.tests_run - self.tests_failed - self.tests_skipped)

    @classmethod
    def from_records(
        cls,
        records: Sequence[TestRecord],
        framework: Optional[str] = None,
        language: Optional[str] = None,
    ) -> ParsedLog:
        failed = [r.name for r in records if r.result == TestOutcome.FAIL]
        skipped = sum(1 for r in records if r.result == TestOutcome.SKIP)
        duration = sum(r.duration_seconds for r in records) if records else None

        return cls(
            framework=framework,
            language=language,
            tests_run=len(records),
            tests_failed=len(failed),
            tests_skipped=skipped,
            test_duration_seconds=duration,
            failed_tests=failed,
        )


class FrameworkParser(ABC):
    """Base class for framework-specific log parsers."""

    name: str  # e.g., "gotest"
    language: str  # e.g., "go"

    @abstractmethod
    def parse(self, text: str) -> Optional[ParsedLog]:
        """
        Try to parse the log text.

        Returns ParsedLog if this framework's output is detected, None otherwise.
        """
        pass
