from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class Task:
    task_id: str
    owner_id: str
    text: str
    completed: bool
    created_at: datetime
    start_time: datetime
    end_time: Optional[datetime]


@dataclass(frozen=True)
class Principal:
    user_id: str
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None

    @property
    def greeting_name(self) -> str:
        return self.display_name or "User"


class ProductivityTier(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    NEEDS_IMPROVEMENT = "needs improvement"


@dataclass(frozen=True)
class TaskStatistics:
    total: int = 0
    completed: int = 0
    ongoing: int = 0
    completion_rate: float = 0.0
    # milliseconds
    total_duration: float = 0.0
    average_duration: float = 0.0
