from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional, Sequence

from worktally.domain.common.errors import NotFoundError, ValidationError
from worktally.domain.common.time import to_iso
from worktally.domain.stats.engine import Statistics, compute_statistics
from worktally.domain.stats import timeseries
from worktally.domain.stats.timeseries import Series
from worktally.domain.tasks import lifecycle
from worktally.domain.tasks.lifecycle import Transition
from worktally.domain.tasks.models import NewTaskRequest, Task, TaskOrder
from worktally.domain.tasks.ports import Clock, IdGenerator, TaskRepository
from worktally.domain.tasks.rules import (
    clean_tags,
    validate_body,
    validate_seconds,
    validate_title,
)

logger = logging.getLogger(__name__)


class TaskService:
    """
    Task business logic. No aiogram. No sqlite.

    Loads a task snapshot, runs one lifecycle transition on it and persists
    the result with an optimistic check on the stored version.
    """

    def __init__(self, repo: TaskRepository, clock: Clock, ids: IdGenerator) -> None:
        self._repo = repo
        self._clock = clock
        self._ids = ids

    async def create_task(self, req: NewTaskRequest) -> Task:
        validate_title(req.title)
        validate_body(req.body)
        validate_seconds(req.exp_duration, "Estimated duration")

        now = self._clock.now()
        await self._repo.ensure_user(req.owner_id, to_iso(now))

        task = Task(
            task_id=self._ids.new_id(),
            owner_id=req.owner_id,
            title=req.title.strip(),
            body=req.body.strip(),
            created_at=now,
            updated_at=now,
            exp_duration=req.exp_duration,
            tags=clean_tags(req.tags),
        )
        await self._repo.add(task)
        logger.info("Task %s created for user %s", task.task_id, task.owner_id)
        return task

    async def get_task(self, owner_id: int, task_id: str) -> Task:
        task = await self._repo.get(task_id)
        # other users' tasks are reported as missing
        if task is None or task.owner_id != owner_id:
            raise NotFoundError(f"Task {task_id} not found.")
        return task

    async def list_tasks(
        self,
        owner_id: int,
        finished: Optional[bool] = False,
        tag: Optional[str] = None,
    ) -> Sequence[Task]:
        tag = tag.strip() if tag else None
        return await self._repo.list_by_owner(owner_id, finished=finished, tag=tag)

    async def start_task(self, owner_id: int, task_id: str) -> Task:
        task = await self.get_task(owner_id, task_id)
        return await self._commit("start", task, lifecycle.start(task, self._clock.now()))

    async def stop_task(self, owner_id: int, task_id: str) -> Task:
        task = await self.get_task(owner_id, task_id)
        return await self._commit("stop", task, lifecycle.stop(task, self._clock.now()))

    async def finish_task(self, owner_id: int, task_id: str) -> Task:
        task = await self.get_task(owner_id, task_id)
        return await self._commit("finish", task, lifecycle.finish(task, self._clock.now()))

    async def edit_task(
        self,
        owner_id: int,
        task_id: str,
        title: Optional[str] = None,
        body: Optional[str] = None,
        exp_duration: Optional[int] = None,
        worked_time: Optional[int] = None,
    ) -> Task:
        """Apply the given field edits as one change; all or nothing."""
        if all(v is None for v in (title, body, exp_duration, worked_time)):
            raise ValidationError("Nothing to change.")
        task = await self.get_task(owner_id, task_id)
        now = self._clock.now()

        edits = (
            (lifecycle.set_title, title),
            (lifecycle.set_body, body),
            (lifecycle.set_exp_duration, exp_duration),
            (lifecycle.set_worked_time, worked_time),
        )
        result = Transition(task=task)
        for apply, value in edits:
            if value is None:
                continue
            result = apply(result.task, value, now)
            if not result.ok:
                result = Transition(task=task, error=result.error, message=result.message)
                break
        return await self._commit("edit", task, result)

    async def add_tag(self, owner_id: int, task_id: str, tag: str) -> Task:
        task = await self.get_task(owner_id, task_id)
        return await self._commit("tag", task, lifecycle.add_tag(task, tag, self._clock.now()))

    async def remove_tag(self, owner_id: int, task_id: str, tag: str) -> Task:
        task = await self.get_task(owner_id, task_id)
        return await self._commit("untag", task, lifecycle.remove_tag(task, tag, self._clock.now()))

    async def delete_task(self, owner_id: int, task_id: str) -> None:
        task = await self.get_task(owner_id, task_id)
        deleted = await self._repo.delete(task.task_id)
        if not deleted:
            raise NotFoundError(f"Task {task_id} not found.")
        logger.info("Task %s deleted by user %s", task_id, owner_id)

    async def _commit(self, action: str, before: Task, result: Transition) -> Task:
        if not result.ok:
            logger.warning(
                "Rejected %s on task %s: %s", action, before.task_id, result.error.value
            )
        updated = replace(result.unwrap(), version=before.version + 1)
        await self._repo.update(updated, expected_version=before.version)
        logger.info("Task %s %s -> %s", updated.task_id, action, updated.state.value)
        return updated

    # ----- statistics -----

    async def finished_tasks(self, owner_id: int) -> Sequence[Task]:
        return await self._repo.list_by_owner(
            owner_id, finished=True, order=TaskOrder.UPDATED_ASC
        )

    async def statistics(self, owner_id: int) -> Statistics:
        tasks = await self.finished_tasks(owner_id)
        return compute_statistics(tasks, self._clock.now())

    async def estimation_series(self, owner_id: int) -> Series:
        return timeseries.estimation_series(await self.finished_tasks(owner_id))

    async def completion_series(self, owner_id: int) -> Series:
        return timeseries.completion_series(await self.finished_tasks(owner_id))

    async def tag_series(self, owner_id: int) -> List[Series]:
        return timeseries.tag_series(await self.finished_tasks(owner_id))
