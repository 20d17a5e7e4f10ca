from .enums import TestFramework, TestOutcome
from .test_record import TestRecord

__all__ = [
    "TestFramework",
    "TestOutcome",
    "TestRecord",
]
