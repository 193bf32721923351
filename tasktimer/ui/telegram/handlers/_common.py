from __future__ import annotations

import logging
from datetime import tzinfo

from aiogram.exceptions import TelegramBadRequest
from aiogram.types import Message

from tasktimer.domain.tasks.session import TaskSession
from tasktimer.ui.telegram.keyboards.mainmenu import main_menu_kb
from tasktimer.ui.telegram.keyboards.tasks import tasks_list_kb
from tasktimer.ui.telegram.texts.tasks import render_home, split_message

logger = logging.getLogger(__name__)


async def send_long(message: Message, text: str) -> None:
    for chunk in split_message(text):
        await message.answer(chunk, reply_markup=main_menu_kb())


async def show_task_list(*, target_message: Message, session: TaskSession, tz: tzinfo, prefer_edit: bool) -> None:
    """
    prefer_edit=True: edit target_message in place (callback UX).
    prefer_edit=False: send a new list message (command / add UX).
    """
    tasks = session.tasks
    chunks = split_message(render_home(tasks, tz))
    markup = tasks_list_kb(tasks)

    if prefer_edit and len(chunks) == 1:
        try:
            await target_message.edit_text(chunks[0], reply_markup=markup)
            return
        except TelegramBadRequest as e:
            # old message or identical content: fall back to a fresh message
            logger.debug("Editing task list failed: %s", e)

    # the inline buttons ride on the last chunk
    for chunk in chunks[:-1]:
        await target_message.answer(chunk)
    await target_message.answer(chunks[-1], reply_markup=markup or main_menu_kb())
