"""Wall clock used for creation/completion stamps and age display."""

import time
from typing import Callable

Clock = Callable[[], int]


def now() -> int:
    """Seconds since the UNIX epoch."""
    return int(time.time())


__all__ = ["Clock", "now"]
