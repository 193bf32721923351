from __future__ import annotations

from datetime import tzinfo

from aiogram import F, Router
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext
from aiogram.types import Message

from tasktimer.domain.tasks.session import TaskSession
from tasktimer.ui.telegram.handlers._common import send_long
from tasktimer.ui.telegram.keyboards.mainmenu import BTN_SUMMARY
from tasktimer.ui.telegram.texts import tasks as texts

router = Router()


@router.message(Command("summary"))
@router.message(F.text == BTN_SUMMARY)
async def summary(message: Message, state: FSMContext, session: TaskSession, tz: tzinfo):
    await state.clear()
    if session.principal is None:
        await message.answer(texts.SUMMARY_SIGN_IN_PROMPT)
        return

    # a failed refresh keeps the previous snapshot on display
    await session.refresh()
    await send_long(message, texts.render_summary(session.tasks, session.statistics, tz))
