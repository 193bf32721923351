"""
Unit tests for duration formatting and aggregate task statistics.

Run with: python -m pytest tests/test_analytics.py -v
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from tasktimer.domain.tasks.analytics import (
    compute_statistics,
    format_compact_duration,
    format_duration,
    productivity_tier,
)
from tasktimer.domain.tasks.models import ProductivityTier, Task, TaskStatistics

T0 = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def _task(n: int, completed: bool = False, duration: timedelta | None = None) -> Task:
    end = T0 + duration if completed and duration is not None else None
    return Task(
        task_id=f"t{n}",
        owner_id="u1",
        text=f"Task {n}",
        completed=completed,
        created_at=T0,
        start_time=T0,
        end_time=end,
    )


# ----- format_duration -----


def test_format_duration_ongoing_without_end():
    assert format_duration(T0, None) == "Ongoing..."


def test_format_duration_zero_width_interval():
    assert format_duration(T0, T0) == "0s"


def test_format_duration_clock_skew_is_zero_not_negative():
    """End before start (clock skew) is clamped to 0s."""
    assert format_duration(T0, T0 - timedelta(minutes=5)) == "0s"


def test_format_duration_sub_second_is_zero():
    assert format_duration(T0, T0 + timedelta(milliseconds=999)) == "0s"


def test_format_duration_pure_seconds():
    assert format_duration(T0, T0 + timedelta(seconds=45)) == "45s"


def test_format_duration_ninety_seconds_drops_seconds():
    """Once a minute is shown, the remaining seconds are suppressed."""
    assert format_duration(T0, T0 + timedelta(seconds=90)) == "1m"


@pytest.mark.parametrize(
    "delta, expected",
    [
        (timedelta(days=2, hours=3), "2d 3h"),
        (timedelta(minutes=45), "45m"),
        (timedelta(hours=1, minutes=5), "1h 5m"),
        (timedelta(hours=1, minutes=5, seconds=59), "1h 5m"),
        (timedelta(days=1, minutes=1), "1d 1m"),
        (timedelta(days=3), "3d"),
        (timedelta(seconds=59, milliseconds=900), "59s"),
        (timedelta(seconds=60), "1m"),
    ],
)
def test_format_duration_units(delta, expected):
    assert format_duration(T0, T0 + delta) == expected


# ----- compute_statistics -----


def test_compute_statistics_empty():
    stats = compute_statistics([])
    assert stats == TaskStatistics(
        total=0,
        completed=0,
        ongoing=0,
        completion_rate=0,
        total_duration=0,
        average_duration=0,
    )


def test_compute_statistics_three_of_four_completed():
    tasks = [
        _task(1, completed=True, duration=timedelta(minutes=10)),
        _task(2, completed=True, duration=timedelta(minutes=20)),
        _task(3, completed=True, duration=timedelta(minutes=30)),
        _task(4),
    ]
    stats = compute_statistics(tasks)
    assert stats.total == 4
    assert stats.completed == 3
    assert stats.ongoing == 1
    assert stats.completion_rate == 75
    assert stats.total_duration == 60 * 60 * 1000
    assert stats.average_duration == 20 * 60 * 1000


def test_compute_statistics_keeps_sub_second_precision():
    tasks = [_task(1, completed=True, duration=timedelta(milliseconds=1500))]
    stats = compute_statistics(tasks)
    assert stats.total_duration == 1500
    assert stats.average_duration == 1500


def test_compute_statistics_sums_negative_durations_as_is():
    """Clock-skewed tasks are not clamped in aggregates."""
    tasks = [
        _task(1, completed=True, duration=timedelta(seconds=10)),
        _task(2, completed=True, duration=timedelta(seconds=-4)),
    ]
    stats = compute_statistics(tasks)
    assert stats.total_duration == 6000
    assert stats.average_duration == 3000


def test_compute_statistics_ignores_completed_without_end_time():
    broken = Task(
        task_id="x",
        owner_id="u1",
        text="no end",
        completed=True,
        created_at=T0,
        start_time=T0,
        end_time=None,
    )
    stats = compute_statistics([broken, _task(2, completed=True, duration=timedelta(seconds=8))])
    assert stats.completed == 2
    assert stats.total_duration == 8000
    assert stats.average_duration == 8000


def test_compute_statistics_no_completed_has_zero_average():
    stats = compute_statistics([_task(1), _task(2)])
    assert stats.completion_rate == 0
    assert stats.average_duration == 0
    assert stats.ongoing == 2


# ----- productivity_tier -----


@pytest.mark.parametrize(
    "rate, tier",
    [
        (100, ProductivityTier.EXCELLENT),
        (80, ProductivityTier.EXCELLENT),
        (79.9, ProductivityTier.GOOD),
        (50, ProductivityTier.GOOD),
        (49.99, ProductivityTier.NEEDS_IMPROVEMENT),
        (0, ProductivityTier.NEEDS_IMPROVEMENT),
    ],
)
def test_productivity_tier_boundaries(rate, tier):
    assert productivity_tier(rate) is tier


def test_productivity_tier_labels():
    assert ProductivityTier.NEEDS_IMPROVEMENT.value == "needs improvement"


# ----- format_compact_duration -----


@pytest.mark.parametrize(
    "ms, expected",
    [
        (0, "0s"),
        (999, "0s"),
        (42_000, "42s"),
        (90_000, "1m"),
        (3_600_000, "1h 0m"),
        (3_900_000, "1h 5m"),
        # days are folded into hours
        (2 * 86_400_000 + 3_600_000, "49h 0m"),
        (-5_000, "0s"),
    ],
)
def test_format_compact_duration(ms, expected):
    assert format_compact_duration(ms) == expected
