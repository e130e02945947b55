"""Human-readable durations for practice displays."""

from __future__ import annotations


def format_clock(seconds: int) -> str:
    """Countdown clock. e.g. 75 -> '1:15', 5 -> '0:05'."""
    seconds = max(int(seconds), 0)
    return f"{seconds // 60}:{seconds % 60:02d}"


def format_hold(seconds: int) -> str:
    """Compact hold length. e.g. 90 -> '1m 30s', 45 -> '45s', 120 -> '2m'."""
    seconds = max(int(seconds), 0)
    m, s = divmod(seconds, 60)
    if m and s:
        return f"{m}m {s}s"
    if m:
        return f"{m}m"
    return f"{s}s"


def format_total(seconds: int) -> str:
    """Total practice length. e.g. 3900 -> '1h 5m', 1800 -> '30m'."""
    minutes = max(int(seconds), 0) // 60
    if minutes <= 0:
        return "0m"
    h, m = divmod(minutes, 60)
    if h and m:
        return f"{h}h {m}m"
    if h:
        return f"{h}h"
    return f"{m}m"
