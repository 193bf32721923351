"""
Duration formatting and aggregate statistics over a task snapshot.

Everything here is a pure function of its arguments: statistics are always
re-derived from the full list, never maintained incrementally.
"""
from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Iterable, Optional

from tasktimer.domain.tasks.models import ProductivityTier, Task, TaskStatistics

ONGOING_LABEL = "Ongoing..."

_ONE_MS = timedelta(milliseconds=1)


def format_duration(start: datetime, end: Optional[datetime]) -> str:
    """
    Compact label for the time between ``start`` and ``end``.

    Examples: "2d 3h", "45m", "1h 5m", "30s". Seconds only appear for
    sub-minute durations; clock skew (end before start) yields "0s".
    """
    if end is None:
        return ONGOING_LABEL

    delta = math.floor((end - start).total_seconds())
    if delta <= 0:
        return "0s"

    days = delta // 86400
    hours = delta // 3600 % 24
    minutes = delta // 60 % 60
    seconds = delta % 60

    parts = []
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if (delta < 60 and seconds > 0) or not parts:
        parts.append(f"{seconds}s")
    return " ".join(parts)


def duration_ms(task: Task) -> Optional[float]:
    """Signed end - start in milliseconds, or None for tasks without an end."""
    if not task.completed or task.end_time is None:
        return None
    return (task.end_time - task.start_time) / _ONE_MS


def compute_statistics(tasks: Iterable[Task]) -> TaskStatistics:
    tasks = list(tasks)
    total = len(tasks)
    completed = sum(1 for t in tasks if t.completed)

    durations = [d for d in (duration_ms(t) for t in tasks) if d is not None]
    total_duration = float(sum(durations))
    average_duration = total_duration / len(durations) if durations else 0.0

    return TaskStatistics(
        total=total,
        completed=completed,
        ongoing=total - completed,
        completion_rate=completed / total * 100 if total else 0.0,
        total_duration=total_duration,
        average_duration=average_duration,
    )


def productivity_tier(completion_rate: float) -> ProductivityTier:
    if completion_rate >= 80:
        return ProductivityTier.EXCELLENT
    if completion_rate >= 50:
        return ProductivityTier.GOOD
    return ProductivityTier.NEEDS_IMPROVEMENT


def format_compact_duration(milliseconds: float) -> str:
    """Coarse label for aggregate durations: "{h}h {m}m", "{m}m" or "{s}s"."""
    total_seconds = max(math.floor(milliseconds / 1000), 0)
    hours = total_seconds // 3600
    minutes = total_seconds % 3600 // 60
    seconds = total_seconds % 60

    if hours > 0:
        return f"{hours}h {minutes}m"
    if minutes > 0:
        return f"{minutes}m"
    return f"{seconds}s"
