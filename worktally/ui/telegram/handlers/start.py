from __future__ import annotations

from aiogram import Router
from aiogram.filters import CommandStart, Command
from aiogram.fsm.context import FSMContext
from aiogram.types import Message

from worktally.ui.telegram.texts import tasks as texts

router = Router()


@router.message(CommandStart())
async def start_cmd(message: Message, state: FSMContext):
    await state.clear()
    await message.answer(texts.HELP)


@router.message(Command("help"))
async def help_cmd(message: Message):
    await message.answer(texts.HELP)
