from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Sequence

from tasktimer.domain.tasks.models import Principal, Task


class Clock(ABC):
    @abstractmethod
    def now(self) -> datetime: ...


class IdGenerator(ABC):
    @abstractmethod
    def new_id(self) -> str: ...


class TaskRepository(ABC):
    @abstractmethod
    async def insert(self, task: Task) -> None: ...

    @abstractmethod
    async def list_by_owner(self, owner_id: str) -> Sequence[Task]: ...

    @abstractmethod
    async def mark_completed(self, task_id: str, end_time_iso: str) -> bool:
        """Return False when no record has ``task_id``."""

    @abstractmethod
    async def delete(self, task_id: str) -> bool:
        """Return False when no record has ``task_id``."""


class PrincipalListener(ABC):
    @abstractmethod
    async def on_principal_changed(self, principal: Optional[Principal]) -> None: ...
