from __future__ import annotations

from datetime import tzinfo

from aiogram import F, Router
from aiogram.filters import Command, CommandObject
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, Message

from tasktimer.domain.tasks.session import TaskSession
from tasktimer.ui.telegram.handlers._common import show_task_list
from tasktimer.ui.telegram.keyboards.mainmenu import BTN_ADD, BTN_TASKS, main_menu_kb
from tasktimer.ui.telegram.keyboards.tasks import CB_DELETE, CB_DONE
from tasktimer.ui.telegram.states.tasks import TasksFlow
from tasktimer.ui.telegram.texts import tasks as texts

router = Router()


async def _add_and_show(message: Message, session: TaskSession, tz: tzinfo, text: str) -> None:
    if not await session.add(text):
        await message.answer(texts.ADD_FAILED, reply_markup=main_menu_kb())
        return
    await show_task_list(target_message=message, session=session, tz=tz, prefer_edit=False)


@router.message(Command("tasks"))
@router.message(F.text == BTN_TASKS)
async def tasks_list(message: Message, state: FSMContext, session: TaskSession, tz: tzinfo):
    await state.clear()
    if session.principal is None:
        await message.answer(texts.SIGN_IN_PROMPT)
        return
    await session.refresh()
    await show_task_list(target_message=message, session=session, tz=tz, prefer_edit=False)


@router.message(Command("add"))
async def add_cmd(message: Message, command: CommandObject, state: FSMContext, session: TaskSession, tz: tzinfo):
    await state.clear()
    if session.principal is None:
        await message.answer(texts.SIGN_IN_PROMPT)
        return

    if command.args and command.args.strip():
        await _add_and_show(message, session, tz, command.args)
        return

    await state.set_state(TasksFlow.add_text)
    await message.answer(texts.ASK_TASK_TEXT)


@router.message(F.text == BTN_ADD)
async def add_button(message: Message, state: FSMContext, session: TaskSession):
    await state.clear()
    if session.principal is None:
        await message.answer(texts.SIGN_IN_PROMPT)
        return
    await state.set_state(TasksFlow.add_text)
    await message.answer(texts.ASK_TASK_TEXT)


@router.message(TasksFlow.add_text)
async def add_text(message: Message, state: FSMContext, session: TaskSession, tz: tzinfo):
    await state.clear()
    await _add_and_show(message, session, tz, message.text or "")


@router.callback_query(F.data.startswith(CB_DONE))
async def task_done_cb(cb: CallbackQuery, session: TaskSession, tz: tzinfo):
    if session.principal is None:
        await cb.answer(texts.SIGN_IN_PROMPT, show_alert=True)
        return
    task_id = cb.data[len(CB_DONE):]
    ok = await session.complete(task_id)
    await cb.answer(None if ok else texts.ACTION_FAILED)
    if ok and cb.message:
        await show_task_list(target_message=cb.message, session=session, tz=tz, prefer_edit=True)


@router.callback_query(F.data.startswith(CB_DELETE))
async def task_delete_cb(cb: CallbackQuery, session: TaskSession, tz: tzinfo):
    if session.principal is None:
        await cb.answer(texts.SIGN_IN_PROMPT, show_alert=True)
        return
    task_id = cb.data[len(CB_DELETE):]
    ok = await session.remove(task_id)
    await cb.answer(None if ok else texts.ACTION_FAILED)
    if ok and cb.message:
        await show_task_list(target_message=cb.message, session=session, tz=tz, prefer_edit=True)
