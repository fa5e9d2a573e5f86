from __future__ import annotations

from html import escape

from aiogram import Router
from aiogram.filters import Command, CommandObject
from aiogram.types import Message

from worktally.domain.common.errors import DomainError
from worktally.domain.tasks.ports import Clock
from worktally.domain.tasks.service import TaskService
from worktally.ui.telegram.handlers._common import parse_minutes, split_id_and_rest
from worktally.ui.telegram.keyboards.tasks import task_actions_kb
from worktally.ui.telegram.render import render_task_card
from worktally.ui.telegram.texts import tasks as texts

router = Router()

# command -> (TaskService.edit_task keyword, value is minutes)
_FIELDS = {
    "title": ("title", False),
    "body": ("body", False),
    "estimate": ("exp_duration", True),
    "worked": ("worked_time", True),
}


@router.message(Command(*_FIELDS))
async def edit_field(message: Message, command: CommandObject, task_service: TaskService, clock: Clock):
    field, in_minutes = _FIELDS[command.command]
    task_id, value = split_id_and_rest(command.args or "")
    if not task_id or not value:
        hint = "&lt;minutes&gt;" if in_minutes else "&lt;text&gt;"
        await message.answer(f"Usage: /{command.command} &lt;id&gt; {hint}")
        return

    if in_minutes:
        try:
            value = parse_minutes(value)
        except ValueError:
            await message.answer(texts.INVALID_MINUTES)
            return

    try:
        task = await task_service.edit_task(message.from_user.id, task_id, **{field: value})
    except DomainError as e:
        await message.answer(escape(str(e)))
        return
    await message.answer(render_task_card(task, clock.now()), reply_markup=task_actions_kb(task))


@router.message(Command("tag", "untag"))
async def edit_tags(message: Message, command: CommandObject, task_service: TaskService, clock: Clock):
    task_id, tag = split_id_and_rest(command.args or "")
    if not task_id or not tag:
        await message.answer(f"Usage: /{command.command} &lt;id&gt; &lt;tag&gt;")
        return

    owner_id = message.from_user.id
    try:
        if command.command == "tag":
            task = await task_service.add_tag(owner_id, task_id, tag)
        else:
            task = await task_service.remove_tag(owner_id, task_id, tag)
    except DomainError as e:
        await message.answer(escape(str(e)))
        return
    await message.answer(render_task_card(task, clock.now()), reply_markup=task_actions_kb(task))
