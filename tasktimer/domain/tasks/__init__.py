"""Task lifecycle, duration analytics and per-user session state."""

from tasktimer.domain.tasks.analytics import (
    compute_statistics,
    format_compact_duration,
    format_duration,
    productivity_tier,
)
from tasktimer.domain.tasks.models import Principal, ProductivityTier, Task, TaskStatistics
from tasktimer.domain.tasks.service import TaskService
from tasktimer.domain.tasks.session import IdentityHub, TaskSession

__all__ = [
    "Principal",
    "ProductivityTier",
    "Task",
    "TaskStatistics",
    "TaskService",
    "TaskSession",
    "IdentityHub",
    "compute_statistics",
    "format_compact_duration",
    "format_duration",
    "productivity_tier",
]
