from __future__ import annotations

from datetime import tzinfo

from aiogram import Router
from aiogram.filters import Command, CommandStart
from aiogram.fsm.context import FSMContext
from aiogram.types import Message

from tasktimer.domain.tasks.session import IdentityHub, TaskSession
from tasktimer.ui.telegram.handlers._common import show_task_list
from tasktimer.ui.telegram.keyboards.mainmenu import main_menu_kb
from tasktimer.ui.telegram.sessions import principal_from_user
from tasktimer.ui.telegram.texts import tasks as texts

router = Router()


@router.message(CommandStart())
async def start_cmd(message: Message, state: FSMContext, hub: IdentityHub, session: TaskSession, tz: tzinfo):
    await state.clear()
    principal = principal_from_user(message.from_user)
    await hub.publish(principal)
    await message.answer(texts.render_greeting(principal), reply_markup=main_menu_kb())
    await show_task_list(target_message=message, session=session, tz=tz, prefer_edit=False)


@router.message(Command("logout"))
async def logout_cmd(message: Message, state: FSMContext, hub: IdentityHub):
    await state.clear()
    await hub.publish(None)
    await message.answer(texts.SIGNED_OUT)


@router.message(Command("cancel"))
async def cancel_cmd(message: Message, state: FSMContext):
    await state.clear()
    await message.answer(texts.CANCELLED, reply_markup=main_menu_kb())
