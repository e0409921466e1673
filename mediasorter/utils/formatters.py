"""
Formatting utilities for Media Sorter.

Provides human-readable formatting for counts, progress, time estimates, and
file sizes used in status messages and CLI reports.
"""

from __future__ import annotations

# Re-export format_size from models for convenience
from ..models import format_size


def format_number(n: int) -> str:
    """
    Format large numbers with commas for readability.

    Examples:
        >>> format_number(1000)
        '1,000'
    """
    return f"{n:,}"


def format_progress(done: int, total: int) -> str:
    """
    Format a progress counter as 'done/total (pct%)'.

    Examples:
        >>> format_progress(5, 20)
        '5/20 (25%)'
        >>> format_progress(0, 0)
        '0/0 (100%)'
    """
    percent = 100 if total == 0 else int(done / total * 100)
    return f"{format_number(done)}/{format_number(total)} ({percent}%)"


def format_time_estimate(seconds: float) -> str:
    """
    Format seconds into human-readable time estimate.

    Examples:
        >>> format_time_estimate(45)
        '45s'
        >>> format_time_estimate(150)
        '2m 30s'
        >>> format_time_estimate(3665)
        '1h 1m'
    """
    if seconds < 60:
        return f"{int(seconds)}s"
    elif seconds < 3600:
        return f"{int(seconds / 60)}m {int(seconds % 60)}s"
    hours = int(seconds / 3600)
    minutes = int((seconds % 3600) / 60)
    return f"{hours}h {minutes}m"


__all__ = ['format_number', 'format_progress', 'format_time_estimate', 'format_size']
