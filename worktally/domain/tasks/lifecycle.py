# -*- coding: utf-8 -*-
"""
Task lifecycle: Idle -> Active -> Idle ... -> Finished.

Every operation is pure. It takes the current Task and the current instant
and returns a Transition carrying either the updated Task or an ErrorKind.
A failed Transition always carries the input Task object untouched.

`now` must be timezone-aware (the Clock contract). A naive datetime is a
programming error and raises ValueError instead of producing a Transition.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from worktally.domain.common.errors import ErrorKind, ValidationError, error_for
from worktally.domain.common.time import ensure_aware
from worktally.domain.tasks.models import Task, TaskState
from worktally.domain.tasks import rules


@dataclass(frozen=True)
class Transition:
    task: Task
    error: Optional[ErrorKind] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Task:
        if self.error is not None:
            raise error_for(self.error, self.message)
        return self.task


def _ok(task: Task) -> Transition:
    return Transition(task=task)


def _fail(task: Task, kind: ErrorKind, message: str) -> Transition:
    return Transition(task=task, error=kind, message=message)


def _touched(task: Task, now: datetime) -> datetime:
    ensure_aware(now)
    # updated_at never goes before created_at, even on a skewed clock
    return max(now, task.created_at)


def session_seconds(started_at: datetime, now: datetime) -> int:
    """Whole seconds between start and now, clamped at zero."""
    delta = (ensure_aware(now) - ensure_aware(started_at)).total_seconds()
    return max(0, math.floor(delta))


def start(task: Task, now: datetime) -> Transition:
    if task.is_finished:
        return _fail(task, ErrorKind.ALREADY_FINISHED, "Task is already finished.")
    if task.last_work_start_at is not None:
        return _fail(task, ErrorKind.ALREADY_ACTIVE, "Task is already in progress.")
    return _ok(replace(task, last_work_start_at=now, updated_at=_touched(task, now)))


def stop(task: Task, now: datetime) -> Transition:
    if task.is_finished:
        return _fail(task, ErrorKind.ALREADY_FINISHED, "Task is already finished.")
    if task.last_work_start_at is None:
        return _fail(task, ErrorKind.NOT_ACTIVE, "Task is not in progress.")
    worked = task.worked_time + session_seconds(task.last_work_start_at, now)
    return _ok(
        replace(
            task,
            worked_time=worked,
            last_work_start_at=None,
            updated_at=_touched(task, now),
        )
    )


def finish(task: Task, now: datetime) -> Transition:
    if task.is_finished:
        return _fail(task, ErrorKind.ALREADY_FINISHED, "Task is already finished.")
    current = task
    if current.state is TaskState.ACTIVE:
        stopped = stop(current, now)
        if not stopped.ok:
            return _fail(task, stopped.error, stopped.message)
        current = stopped.task
    return _ok(replace(current, is_finished=True, updated_at=_touched(task, now)))


def _finished_edit(task: Task) -> Transition:
    return _fail(task, ErrorKind.ALREADY_FINISHED, "Finished tasks cannot be edited.")


def _edit(task: Task, now: datetime, **changes) -> Transition:
    return _ok(replace(task, updated_at=_touched(task, now), **changes))


def set_title(task: Task, title: str, now: datetime) -> Transition:
    if task.is_finished:
        return _finished_edit(task)
    try:
        rules.validate_title(title)
    except ValidationError as e:
        return _fail(task, ErrorKind.INVALID_INPUT, str(e))
    return _edit(task, now, title=title.strip())


def set_body(task: Task, body: str, now: datetime) -> Transition:
    if task.is_finished:
        return _finished_edit(task)
    try:
        rules.validate_body(body)
    except ValidationError as e:
        return _fail(task, ErrorKind.INVALID_INPUT, str(e))
    return _edit(task, now, body=body.strip())


def set_exp_duration(task: Task, seconds: int, now: datetime) -> Transition:
    if task.is_finished:
        return _finished_edit(task)
    try:
        rules.validate_seconds(seconds, "Estimated duration")
    except ValidationError as e:
        return _fail(task, ErrorKind.INVALID_INPUT, str(e))
    return _edit(task, now, exp_duration=seconds)


def set_worked_time(task: Task, seconds: int, now: datetime) -> Transition:
    if task.is_finished:
        return _finished_edit(task)
    try:
        rules.validate_seconds(seconds, "Worked time")
    except ValidationError as e:
        return _fail(task, ErrorKind.INVALID_INPUT, str(e))
    return _edit(task, now, worked_time=seconds)


def add_tag(task: Task, tag: str, now: datetime) -> Transition:
    if task.is_finished:
        return _finished_edit(task)
    try:
        cleaned = rules.validate_tag(tag)
    except ValidationError as e:
        return _fail(task, ErrorKind.INVALID_INPUT, str(e))
    return _edit(task, now, tags=task.tags + (cleaned,))


def remove_tag(task: Task, tag: str, now: datetime) -> Transition:
    """Remove the first tag equal to `tag` (trimmed); absent tags are a no-op edit."""
    if task.is_finished:
        return _finished_edit(task)
    try:
        cleaned = rules.validate_tag(tag)
    except ValidationError as e:
        return _fail(task, ErrorKind.INVALID_INPUT, str(e))
    tags = list(task.tags)
    if cleaned in tags:
        tags.remove(cleaned)
    return _edit(task, now, tags=tuple(tags))
