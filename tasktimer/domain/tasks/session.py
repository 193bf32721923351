"""
Per-user view state: the signed-in principal, the task snapshot on display
and the statistics derived from it.

Store failures never escape this module. They are logged and the previous
snapshot stays on display, so a failed add shows no new task and a failed
remove leaves the task in place. Operations of one session run one at a
time, so a slow re-read can never overwrite the result of a later action.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional, Sequence

from tasktimer.domain.common.errors import (
    InvalidInputError,
    NotFoundError,
    StoreUnavailableError,
    TaskError,
)
from tasktimer.domain.tasks.analytics import compute_statistics
from tasktimer.domain.tasks.models import Principal, Task, TaskStatistics
from tasktimer.domain.tasks.ports import PrincipalListener
from tasktimer.domain.tasks.service import TaskService

logger = logging.getLogger(__name__)


class IdentityHub:
    """Fans principal changes out to the subscribed listeners."""

    def __init__(self) -> None:
        self._listeners: list[PrincipalListener] = []
        self._current: Optional[Principal] = None

    @property
    def current(self) -> Optional[Principal]:
        return self._current

    def subscribe(self, listener: PrincipalListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: PrincipalListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    async def publish(self, principal: Optional[Principal]) -> None:
        self._current = principal
        for listener in list(self._listeners):
            await listener.on_principal_changed(principal)


class TaskSession(PrincipalListener):
    def __init__(self, service: TaskService) -> None:
        self._service = service
        self._principal: Optional[Principal] = None
        self._tasks: tuple[Task, ...] = ()
        self._stats = TaskStatistics()
        # bumped on every principal change; stale refresh results are dropped
        self._generation = 0
        # one operation (mutate, then re-read) at a time per session
        self._lock = asyncio.Lock()

    @property
    def principal(self) -> Optional[Principal]:
        return self._principal

    @property
    def tasks(self) -> Sequence[Task]:
        return self._tasks

    @property
    def statistics(self) -> TaskStatistics:
        return self._stats

    def find(self, task_id: str) -> Optional[Task]:
        for task in self._tasks:
            if task.task_id == task_id:
                return task
        return None

    async def on_principal_changed(self, principal: Optional[Principal]) -> None:
        self._generation += 1
        self._principal = principal
        if principal is None:
            self._show([])
            return
        await self.refresh()

    async def refresh(self) -> bool:
        async with self._lock:
            return await self._refresh()

    async def _refresh(self) -> bool:
        principal = self._principal
        if principal is None:
            self._show([])
            return True

        generation = self._generation
        try:
            tasks = await self._service.list_tasks(principal.user_id)
        except TaskError:
            logger.exception("Refreshing tasks for %s failed", principal.user_id)
            return False

        if generation != self._generation:
            logger.debug("Discarding task list fetched for %s: principal changed", principal.user_id)
            return False
        self._show(tasks)
        return True

    async def add(self, text: str) -> bool:
        """
        Return True once the task is stored, even if the re-read that follows
        fails; in that case the previous snapshot stays on display.
        """
        async with self._lock:
            owner_id = self._principal.user_id if self._principal else None
            try:
                await self._service.add_task(owner_id, text)
            except InvalidInputError as e:
                logger.warning("Add task rejected: %s", e)
                return False
            except StoreUnavailableError:
                logger.exception("Add task failed for %s", owner_id)
                return False
            await self._refresh()
            return True

    async def complete(self, task_id: str) -> bool:
        async with self._lock:
            try:
                await self._service.complete_task(task_id)
            except NotFoundError as e:
                logger.warning("Complete rejected: %s", e)
                return False
            except StoreUnavailableError:
                logger.exception("Completing task %s failed", task_id)
                return False
            await self._refresh()
            return True

    async def remove(self, task_id: str) -> bool:
        async with self._lock:
            try:
                await self._service.remove_task(task_id)
            except NotFoundError as e:
                logger.warning("Remove rejected: %s", e)
                return False
            except StoreUnavailableError:
                logger.exception("Removing task %s failed", task_id)
                return False
            await self._refresh()
            return True

    def _show(self, tasks: Sequence[Task]) -> None:
        self._tasks = tuple(tasks)
        self._stats = compute_statistics(self._tasks)
