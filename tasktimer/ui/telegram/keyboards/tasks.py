from __future__ import annotations

from typing import Optional, Sequence

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup
from aiogram.utils.keyboard import InlineKeyboardBuilder

from tasktimer.domain.tasks.models import Task
from tasktimer.ui.telegram.texts.tasks import HOME_LIMIT, short_label

CB_DONE = "task:done:"
CB_DELETE = "task:del:"


def tasks_list_kb(tasks: Sequence[Task], limit: int = HOME_LIMIT) -> Optional[InlineKeyboardMarkup]:
    """One row per listed task: "Done" while it is ongoing, always "Delete"."""
    if not tasks:
        return None

    kb = InlineKeyboardBuilder()
    for task in tasks[:limit]:
        row = []
        if not task.completed:
            row.append(
                InlineKeyboardButton(
                    text=f"✅ {short_label(task.text)}",
                    callback_data=f"{CB_DONE}{task.task_id}",
                )
            )
        row.append(
            InlineKeyboardButton(
                text="🗑️" if not task.completed else f"🗑️ {short_label(task.text)}",
                callback_data=f"{CB_DELETE}{task.task_id}",
            )
        )
        kb.row(*row)

    return kb.as_markup()
