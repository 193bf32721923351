from aiogram.fsm.state import State, StatesGroup


class TasksFlow(StatesGroup):
    add_text = State()
