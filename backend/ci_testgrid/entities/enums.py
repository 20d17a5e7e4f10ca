"""
Shared enums for entities.

This module contains enums that are used across multiple entity files.
"""

from enum import Enum


class TestOutcome(str, Enum):
    """Normalized per-test result vocabulary."""

    PASS = "pass"
    FAIL = "fail"
    SKIP = "skip"


class TestFramework(str, Enum):
    """Supported test frameworks for log parsing."""

    # Go
    GOTEST = "gotest"
