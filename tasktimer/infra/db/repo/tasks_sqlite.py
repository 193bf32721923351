from __future__ import annotations

from typing import Sequence

from tasktimer.domain.common.time import from_iso, to_iso
from tasktimer.domain.tasks.models import Task
from tasktimer.domain.tasks.ports import TaskRepository
from tasktimer.infra.db.connection import Database


class TasksSqliteRepo(TaskRepository):
    def __init__(self, db: Database) -> None:
        self._db = db

    async def insert(self, task: Task) -> None:
        await self._db.execute(
            """
            INSERT INTO tasks(task_id, owner_id, text, completed, created_at, start_time, end_time)
            VALUES (?, ?, ?, ?, ?, ?, ?);
            """,
            (
                task.task_id,
                task.owner_id,
                task.text,
                1 if task.completed else 0,
                to_iso(task.created_at),
                to_iso(task.start_time),
                to_iso(task.end_time) if task.end_time else None,
            ),
        )

    async def list_by_owner(self, owner_id: str) -> Sequence[Task]:
        rows = await self._db.fetchall(
            """
            SELECT *
            FROM tasks
            WHERE owner_id = ?
            ORDER BY created_at DESC, rowid DESC;
            """,
            (owner_id,),
        )
        return [self._row_to_task(r) for r in rows]

    async def mark_completed(self, task_id: str, end_time_iso: str) -> bool:
        changed = await self._db.execute(
            "UPDATE tasks SET completed = 1, end_time = ? WHERE task_id = ?;",
            (end_time_iso, task_id),
        )
        return changed > 0

    async def delete(self, task_id: str) -> bool:
        changed = await self._db.execute("DELETE FROM tasks WHERE task_id = ?;", (task_id,))
        return changed > 0

    def _row_to_task(self, row) -> Task:
        return Task(
            task_id=row["task_id"],
            owner_id=row["owner_id"],
            text=row["text"],
            completed=bool(row["completed"]),
            created_at=from_iso(row["created_at"]),
            start_time=from_iso(row["start_time"]),
            end_time=from_iso(row["end_time"]) if row["end_time"] else None,
        )
