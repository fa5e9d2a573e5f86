from __future__ import annotations

from typing import Sequence

from aiogram.types import InlineKeyboardMarkup
from aiogram.utils.keyboard import InlineKeyboardBuilder

from worktally.domain.tasks.models import Task, TaskState

# callback_data: f"{TASK_CB}:{action}:{task_id}" (uuid keeps it under 64 bytes)
TASK_CB = "task"


def task_actions_kb(task: Task) -> InlineKeyboardMarkup:
    kb = InlineKeyboardBuilder()
    if task.state is TaskState.IDLE:
        kb.button(text="▶️ Start", callback_data=f"{TASK_CB}:start:{task.task_id}")
    elif task.state is TaskState.ACTIVE:
        kb.button(text="⏸ Stop", callback_data=f"{TASK_CB}:stop:{task.task_id}")
    if task.state is not TaskState.FINISHED:
        kb.button(text="✅ Finish", callback_data=f"{TASK_CB}:finish:{task.task_id}")
    kb.button(text="🗑️", callback_data=f"{TASK_CB}:delete:{task.task_id}")
    kb.adjust(3)
    return kb.as_markup()


def tasks_list_kb(tasks: Sequence[Task]) -> InlineKeyboardMarkup:
    kb = InlineKeyboardBuilder()
    for t in tasks:
        mark = "⏱ " if t.state is TaskState.ACTIVE else ""
        kb.button(text=f"{mark}{t.title}"[:60], callback_data=f"{TASK_CB}:show:{t.task_id}")
    kb.adjust(1)
    return kb.as_markup()


def cancel_kb(prefix: str = "cancel") -> InlineKeyboardMarkup:
    kb = InlineKeyboardBuilder()
    kb.button(text="Cancel", callback_data=prefix)
    kb.adjust(1)
    return kb.as_markup()
