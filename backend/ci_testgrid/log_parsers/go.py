"""
Go test framework log parsers.

Supports:
- go test -v (standard library testing)
- gotestsum (result-first lines followed by the test's output)
"""

from __future__ import annotations

import re
from datetime import timedelta
from typing import Dict, Iterable, List, Optional

from ci_testgrid.entities import TestFramework, TestOutcome, TestRecord
from ci_testgrid.exceptions import InvalidDurationError

from .base import FrameworkParser, ParsedLog
from .duration import parse_duration

# + set -x traces and {"Action": ...} json events
NOISE_PREFIXES = ("+", "{")
# FAIL    github.com/user/pkg    0.456s
PACKAGE_FAIL_PREFIX = "FAIL"
INDENT_PREFIXES = (" ", "\t")
BOUNDARY_PREFIXES = ("---", "===")

# === RUN   TestFoo
# === CONT  TestFoo
# === NAME  TestFoo
START_PATTERN = re.compile(r"^\s*===\s+(?:RUN|CONT|NAME)\s+(?P<name>\S+)")

# --- PASS: TestFoo (0.00s)
RESULT_PATTERN = re.compile(
    r"^\s*---\s+(?P<outcome>PASS|FAIL|SKIP):\s+(?P<name>\S+) \((?P<duration>[^)]+)\)"
)

# === FAIL: . TestFoo (0.00s)
TRAILING_RESULT_PATTERN = re.compile(
    r"^\s*===\s+(?P<outcome>PASS|FAIL|SKIP): \. (?P<name>\S+) \((?P<duration>[^)]+)\)"
)


def _strip_line_terminator(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith(("\n", "\r")):
        return line[:-1]
    return line


class GoTestLogState:
    """
    Line-at-a-time state machine over a go test log.

    Holds the tests seen so far, keyed by name, and the test that indented
    output lines are currently attributed to.
    """

    def __init__(self) -> None:
        self._tests: Dict[str, TestRecord] = {}
        self._current: Optional[TestRecord] = None

    @property
    def current_test(self) -> Optional[str]:
        return self._current.name if self._current is not None else None

    def feed(self, line: str) -> None:
        line = _strip_line_terminator(line)

        if line.startswith(NOISE_PREFIXES) or line.startswith(PACKAGE_FAIL_PREFIX):
            return

        if START_PATTERN.match(line):
            # RUN does not own the lines that follow it
            self._current = None
            return

        match = RESULT_PATTERN.match(line)
        if match:
            self._record_result(match)
            self._current = None
            return

        match = TRAILING_RESULT_PATTERN.match(line)
        if match:
            self._current = self._record_result(match)
            return

        if self._current is not None and line.startswith(INDENT_PREFIXES):
            if not line.strip().startswith(BOUNDARY_PREFIXES):
                self._current.logs.append(line)

    def records(self) -> List[TestRecord]:
        return [self._tests[name] for name in sorted(self._tests)]

    def _record_result(self, match: re.Match) -> TestRecord:
        name = match.group("name")
        outcome = TestOutcome(match.group("outcome").lower())
        try:
            duration = parse_duration(match.group("duration"))
        except InvalidDurationError:
            duration = timedelta(0)

        record = self._tests.get(name)
        if record is None:
            record = TestRecord(name=name, result=outcome, duration=duration)
            self._tests[name] = record
        else:
            record.merge_result(outcome, duration)
        return record


class GoTestParser(FrameworkParser):
    """Parser for go test / gotestsum per-test output."""

    name = TestFramework.GOTEST.value
    language = "go"

    def parse_records(self, lines: Iterable[str]) -> List[TestRecord]:
        """
        Parse log lines into one record per test, sorted by test name.

        Malformed lines are skipped; errors raised while iterating ``lines``
        propagate and no records are returned.
        """
        state = GoTestLogState()
        for line in lines:
            state.feed(line)
        return state.records()

    def parse(self, text: str) -> Optional[ParsedLog]:
        records = self.parse_records(text.split("\n"))

        # If no individual tests found, not a go test output
        if not records:
            return None

        return ParsedLog.from_records(records, framework=self.name, language=self.language)

