from __future__ import annotations

from aiogram import Router, F
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext
from aiogram.types import Message, CallbackQuery

from worktally.ui.telegram.texts import tasks as texts

router = Router()

# "stop" is left out: it is a plausible task title
CANCEL_WORDS = {"cancel"}


def is_cancel_text(text: str) -> bool:
    return (text or "").strip().casefold() in CANCEL_WORDS


@router.message(Command("cancel"))
async def cancel_cmd(message: Message, state: FSMContext):
    await state.clear()
    await message.answer(texts.CANCELLED)


@router.message(F.text.func(is_cancel_text))
async def cancel_text(message: Message, state: FSMContext):
    await state.clear()
    await message.answer(texts.CANCELLED)


@router.callback_query(F.data == "cancel")
async def cancel_cb(cb: CallbackQuery, state: FSMContext):
    await cb.answer()
    await state.clear()
    await cb.message.answer(texts.CANCELLED)
