"""
Go duration strings, as printed by the testing package: "0.42s", "1m30.5s", "250ms".
"""

from __future__ import annotations

import re
from datetime import timedelta
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation

from ci_testgrid.exceptions import InvalidDurationError

_UNIT_MICROSECONDS = {
    "ns": Decimal("0.001"),
    "us": Decimal(1),
    "µs": Decimal(1),  # micro sign
    "μs": Decimal(1),  # greek mu
    "ms": Decimal(1_000),
    "s": Decimal(1_000_000),
    "m": Decimal(60_000_000),
    "h": Decimal(3_600_000_000),
}

# Longer units first so "ms" is not read as "m" followed by garbage.
_UNIT = "ns|us|µs|μs|ms|s|m|h"
_NUMBER = r"(?:\d+(?:\.\d*)?|\.\d+)"

DURATION_PATTERN = re.compile(rf"\+?(?:{_NUMBER}(?:{_UNIT}))+")
COMPONENT_PATTERN = re.compile(rf"(?P<value>{_NUMBER})(?P<unit>{_UNIT})")


def parse_duration(text: str) -> timedelta:
    """
    Parse a Go duration string into a timedelta.

    Negative durations are rejected. Nanosecond remainders are rounded to
    the nearest microsecond.

    Raises:
        InvalidDurationError: if the text is not a valid non-negative duration
    """
    value = text.strip()
    if value in ("0", "+0"):
        return timedelta(0)
    if not DURATION_PATTERN.fullmatch(value):
        raise InvalidDurationError(f"invalid duration {text!r}")

    try:
        total = sum(
            (
                Decimal(m.group("value")) * _UNIT_MICROSECONDS[m.group("unit")]
                for m in COMPONENT_PATTERN.finditer(value)
            ),
            Decimal(0),
        )
        micros = int(total.quantize(Decimal(1), rounding=ROUND_HALF_EVEN))
        return timedelta(microseconds=micros)
    except (InvalidOperation, OverflowError) as e:
        raise InvalidDurationError(f"duration out of range {text!r}") from e
