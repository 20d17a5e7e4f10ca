"""
Log Parsers - CI log parsers producing per-test records.

Structure:
- base.py: Base classes (ParsedLog, FrameworkParser)
- duration.py: Go duration strings ("0.42s", "1m30s")
- go.py: Go frameworks (go test -v, gotestsum)

Usage:
    from ci_testgrid.log_parsers import GoTestParser

    parser = GoTestParser()
    with open("build-log.txt") as f:
        records = parser.parse_records(f)
    print(f"Tests: {len(records)}")
"""

from .base import FrameworkParser, ParsedLog
from .duration import parse_duration
from .go import GoTestLogState, GoTestParser

__all__ = [
    "FrameworkParser",
    "GoTestLogState",
    "GoTestParser",
    "ParsedLog",
    "parse_duration",
]
