"""Coarse "X ago" ages for task listings."""

from typing import List, Tuple

YEAR = 31_557_600  # 365.25 days
MONTH = 2_630_016  # 30.44 days
DAY = 86_400
HOUR = 3_600
MINUTE = 60

_UNITS: List[Tuple[int, str, str]] = [
    (YEAR, "year", "years"),
    (MONTH, "month", "months"),
    (DAY, "day", "days"),
    (HOUR, "h", "h"),
    (MINUTE, "m", "m"),
    (1, "s", "s"),
]


def largest_unit(seconds: int) -> str:
    """Render only the most significant unit of ``seconds``: ``3days``, ``1year``, ``5m``."""
    seconds = max(0, int(seconds))
    for size, singular, plural in _UNITS:
        count = seconds // size
        if count:
            return f"{count}{singular if count == 1 else plural}"
    return "0s"


def format_age(seconds: int) -> str:
    return f"{largest_unit(seconds)} ago"
