from aiogram.fsm.state import StatesGroup, State


class NewTaskFlow(StatesGroup):
    title = State()
    body = State()
    estimate = State()
    tags = State()
