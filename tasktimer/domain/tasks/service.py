from __future__ import annotations

import logging
from typing import Optional

from tasktimer.domain.common.time import to_iso
from tasktimer.domain.common.errors import NotFoundError
from tasktimer.domain.tasks.models import Task
from tasktimer.domain.tasks.ports import Clock, IdGenerator, TaskRepository
from tasktimer.domain.tasks.rules import clean_text, validate_owner

logger = logging.getLogger(__name__)


class TaskService:
    """
    Task lifecycle: add, list, complete, remove. No aiogram. No sqlite.

    complete/remove are addressed by task id only; ownership is enforced
    solely through the owner filter of list_tasks.
    """

    def __init__(self, repo: TaskRepository, clock: Clock, ids: IdGenerator) -> None:
        self._repo = repo
        self._clock = clock
        self._ids = ids

    async def add_task(self, owner_id: Optional[str], text: Optional[str]) -> str:
        owner_id = validate_owner(owner_id)
        text = clean_text(text)

        now = self._clock.now()
        task = Task(
            task_id=self._ids.new_id(),
            owner_id=owner_id,
            text=text,
            completed=False,
            created_at=now,
            start_time=now,
            end_time=None,
        )
        await self._repo.insert(task)
        logger.info("Task %s added for owner %s", task.task_id, owner_id)
        return task.task_id

    async def list_tasks(self, owner_id: Optional[str]) -> list[Task]:
        if owner_id is None or not str(owner_id).strip():
            return []
        return list(await self._repo.list_by_owner(str(owner_id)))

    async def complete_task(self, task_id: str) -> None:
        # re-completing simply moves end_time to the new "now"
        found = await self._repo.mark_completed(task_id, to_iso(self._clock.now()))
        if not found:
            raise NotFoundError(f"Task {task_id} not found.")
        logger.info("Task %s completed", task_id)

    async def remove_task(self, task_id: str) -> None:
        found = await self._repo.delete(task_id)
        if not found:
            raise NotFoundError(f"Task {task_id} not found.")
        logger.info("Task %s removed", task_id)
