from __future__ import annotations

from html import escape

from aiogram import Router
from aiogram.filters import Command
from aiogram.types import Message

from worktally.domain.tasks.service import TaskService
from worktally.ui.telegram.render import render_statistics, stats_payload

router = Router()

# Telegram rejects messages over 4096 chars
MAX_MESSAGE_LEN = 4000


@router.message(Command("stats"))
async def stats_cmd(message: Message, task_service: TaskService):
    stats = await task_service.statistics(message.from_user.id)
    await message.answer(render_statistics(stats))


@router.message(Command("stats_json"))
async def stats_json_cmd(message: Message, task_service: TaskService):
    owner_id = message.from_user.id
    stats = await task_service.statistics(owner_id)
    series = [
        await task_service.estimation_series(owner_id),
        await task_service.completion_series(owner_id),
        *await task_service.tag_series(owner_id),
    ]
    payload = stats_payload(stats, series)
    # chunk before escaping so no entity is split
    for start in range(0, len(payload), MAX_MESSAGE_LEN):
        await message.answer(f"<pre>{escape(payload[start:start + MAX_MESSAGE_LEN])}</pre>")
