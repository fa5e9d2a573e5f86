from __future__ import annotations

import logging
from html import escape

from aiogram import Router, F
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext
from aiogram.types import Message, CallbackQuery

from worktally.domain.common.errors import DomainError, ValidationError
from worktally.domain.tasks.models import NewTaskRequest
from worktally.domain.tasks.ports import Clock
from worktally.domain.tasks.rules import validate_body, validate_title
from worktally.domain.tasks.service import TaskService
from worktally.ui.telegram.handlers._common import command_args, parse_minutes, parse_tags
from worktally.ui.telegram.keyboards.tasks import TASK_CB, cancel_kb, task_actions_kb, tasks_list_kb
from worktally.ui.telegram.render import render_task_card, render_task_list
from worktally.ui.telegram.states.tasks import NewTaskFlow
from worktally.ui.telegram.texts import tasks as texts

logger = logging.getLogger(__name__)

router = Router()


# ----- create -----


@router.message(Command("new"))
async def new_task(message: Message, state: FSMContext):
    await state.clear()
    await state.set_state(NewTaskFlow.title)
    await message.answer(texts.ASK_TITLE, reply_markup=cancel_kb())


@router.message(NewTaskFlow.title)
async def new_task_title(message: Message, state: FSMContext):
    title = (message.text or "").strip()
    try:
        validate_title(title)
    except ValidationError as e:
        # stay on this step, the draft is kept
        await message.answer(escape(str(e)), reply_markup=cancel_kb())
        return
    await state.update_data(title=title)
    await state.set_state(NewTaskFlow.body)
    await message.answer(texts.ASK_BODY, reply_markup=cancel_kb())


@router.message(NewTaskFlow.body)
async def new_task_body(message: Message, state: FSMContext):
    body = (message.text or "").strip()
    try:
        validate_body(body)
    except ValidationError as e:
        await message.answer(escape(str(e)), reply_markup=cancel_kb())
        return
    await state.update_data(body=body)
    await state.set_state(NewTaskFlow.estimate)
    await message.answer(texts.ASK_ESTIMATE, reply_markup=cancel_kb())


@router.message(NewTaskFlow.estimate)
async def new_task_estimate(message: Message, state: FSMContext):
    try:
        seconds = parse_minutes(message.text or "")
    except ValueError:
        await message.answer(texts.INVALID_MINUTES)
        return
    await state.update_data(exp_duration=seconds)
    await state.set_state(NewTaskFlow.tags)
    await message.answer(texts.ASK_TAGS, reply_markup=cancel_kb())


@router.message(NewTaskFlow.tags)
async def new_task_tags(message: Message, state: FSMContext, task_service: TaskService, clock: Clock):
    data = await state.get_data()
    await state.clear()

    req = NewTaskRequest(
        owner_id=message.from_user.id,
        title=data.get("title", ""),
        body=data.get("body", ""),
        exp_duration=data.get("exp_duration", 0),
        tags=parse_tags(message.text or ""),
    )
    try:
        task = await task_service.create_task(req)
    except DomainError as e:
        await message.answer(escape(str(e)))
        return

    await message.answer(render_task_card(task, clock.now()), reply_markup=task_actions_kb(task))


# ----- list / show -----


@router.message(Command("tasks"))
async def list_open(message: Message, task_service: TaskService):
    tag = command_args(message) or None
    tasks = await task_service.list_tasks(message.from_user.id, finished=False, tag=tag)
    if not tasks:
        await message.answer(texts.NO_TASKS)
        return
    title = f"Open tasks #{tag}" if tag else "Open tasks"
    await message.answer(render_task_list(title, tasks), reply_markup=tasks_list_kb(tasks))


@router.message(Command("done"))
async def list_finished(message: Message, task_service: TaskService):
    tasks = await task_service.list_tasks(message.from_user.id, finished=True)
    if not tasks:
        await message.answer(texts.NO_FINISHED)
        return
    await message.answer(render_task_list("Finished tasks", tasks))


@router.message(Command("task"))
async def show_task(message: Message, task_service: TaskService, clock: Clock):
    task_id = command_args(message)
    if not task_id:
        await message.answer("Usage: /task &lt;id&gt;")
        return
    try:
        task = await task_service.get_task(message.from_user.id, task_id)
    except DomainError as e:
        await message.answer(escape(str(e)))
        return
    await message.answer(render_task_card(task, clock.now()), reply_markup=task_actions_kb(task))


@router.message(Command("delete"))
async def delete_task(message: Message, task_service: TaskService):
    task_id = command_args(message)
    if not task_id:
        await message.answer("Usage: /delete &lt;id&gt;")
        return
    try:
        await task_service.delete_task(message.from_user.id, task_id)
    except DomainError as e:
        await message.answer(escape(str(e)))
        return
    await message.answer(texts.DELETED)


# ----- inline actions -----


@router.callback_query(F.data.startswith(f"{TASK_CB}:"))
async def task_action(cb: CallbackQuery, task_service: TaskService, clock: Clock):
    parts = (cb.data or "").split(":", 2)
    if len(parts) != 3:
        await cb.answer()
        return
    _, action, task_id = parts
    owner_id = cb.from_user.id

    actions = {
        "start": task_service.start_task,
        "stop": task_service.stop_task,
        "finish": task_service.finish_task,
        "show": task_service.get_task,
    }

    try:
        if action == "delete":
            await task_service.delete_task(owner_id, task_id)
            await cb.answer(texts.DELETED)
            if cb.message:
                await cb.message.edit_text(texts.DELETED)
            return
        if action not in actions:
            logger.warning("Unknown task action %r", action)
            await cb.answer()
            return
        task = await actions[action](owner_id, task_id)
    except DomainError as e:
        await cb.answer(str(e), show_alert=True)
        return

    await cb.answer()
    if cb.message is None:
        return
    text = render_task_card(task, clock.now())
    if action == "show":
        await cb.message.answer(text, reply_markup=task_actions_kb(task))
    else:
        await cb.message.edit_text(text, reply_markup=task_actions_kb(task))
