"""
Core Utilities.

Shared utility functions used across the package.
All modules should import utilities from this module.
"""

import time
from collections.abc import Callable
from datetime import datetime

Clock = Callable[[], int]
"""Zero-argument callable returning epoch milliseconds."""


def now_ms() -> int:
    """
    Return the current time as integer milliseconds since the epoch.

    This is the default clock. Components take a Clock so tests can
    substitute a controllable one.
    """
    return time.time_ns() // 1_000_000


def format_timestamp(ms: int | None) -> str:
    """
    Format an epoch-milliseconds timestamp for display in local time.

    Returns "—" when the value cannot be represented as a date.
    """
    if ms is None:
        return "—"
    try:
        moment = datetime.fromtimestamp(ms / 1000)
    except (OverflowError, OSError, ValueError):
        return "—"
    return moment.strftime("%b %d, %Y, %I:%M %p")
