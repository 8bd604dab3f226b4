"""
src/Core/time_utils.py
======================
Epoch-millisecond clock access and duration helpers.

All instants handled by the reservation engine are integers counting
milliseconds since the Unix epoch, the same unit used on the wire.

The clock is injectable: request handlers receive a Clock through the
get_clock() dependency, so tests can freeze "now" instead of racing the
wall clock.
"""

import time
from typing import Any, Optional


MS_PER_MINUTE = 60_000
MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR

# Largest instant a BIGINT column can hold
MAX_EPOCH_MS = 2**63 - 1


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class Clock:
    """Time source returning epoch milliseconds. Subclass to control time."""

    def now_ms(self) -> int:
        return now_ms()


system_clock = Clock()


def _as_number(value: Optional[Any]) -> float:
    # Missing, null and empty values count as zero
    if value is None or value == "":
        return 0.0
    return float(value)


def duration_to_ms(days: Any = 0, hours: Any = 0, minutes: Any = 0) -> int:
    """
    Convert a user-supplied day/hour/minute triple to milliseconds.

    Args:
        days: Number of days (numeric or numeric string, None means 0)
        hours: Number of hours
        minutes: Number of minutes

    Returns:
        int: ((days * 24 + hours) * 60 + minutes) * 60000, truncated to an int

    Raises:
        ValueError: If a component is not numeric

    Example:
        duration_to_ms(days=1)             # 86_400_000
        duration_to_ms(hours=1, minutes=30)  # 5_400_000
    """
    total_minutes = (
        (_as_number(days) * 24 + _as_number(hours)) * 60 + _as_number(minutes)
    )
    return int(total_minutes * MS_PER_MINUTE)


def format_duration(delta_ms: float) -> str:
    """
    Render a millisecond delta as a compact "{d}d {h}h {m}m" string.

    Components are truncated (never rounded), seconds are dropped and zero
    components are omitted. Non-positive deltas, and deltas shorter than a
    minute, render as "Now".

    Examples:
        format_duration(90 * 60_000)      # "1h 30m"
        format_duration(24 * 3_600_000)   # "1d"
        format_duration(0)                # "Now"
    """
    if delta_ms <= 0:
        return "Now"

    total_minutes = int(delta_ms // MS_PER_MINUTE)
    days = total_minutes // MINUTES_PER_DAY
    hours = (total_minutes % MINUTES_PER_DAY) // MINUTES_PER_HOUR
    minutes = total_minutes % MINUTES_PER_HOUR

    parts = []
    if days:
        parts.append(f"{days}d")
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")

    return " ".join(parts) or "Now"
