from __future__ import annotations

from aiogram.types import ReplyKeyboardMarkup
from aiogram.utils.keyboard import ReplyKeyboardBuilder

BTN_TASKS = "Tasks"
BTN_ADD = "Add task"
BTN_SUMMARY = "Summary"


def main_menu_kb() -> ReplyKeyboardMarkup:
    kb = ReplyKeyboardBuilder()

    kb.button(text=BTN_TASKS)
    kb.button(text=BTN_ADD)
    kb.button(text=BTN_SUMMARY)

    kb.adjust(2, 1)

    return kb.as_markup(resize_keyboard=True, one_time_keyboard=False)
