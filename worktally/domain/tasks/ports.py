from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Sequence

from worktally.domain.tasks.models import Task, TaskOrder


class Clock(ABC):
    @abstractmethod
    def now(self) -> datetime: ...


class IdGenerator(ABC):
    @abstractmethod
    def new_id(self) -> str: ...


class TaskRepository(ABC):
    @abstractmethod
    async def ensure_user(self, owner_id: int, now_iso: str) -> None: ...

    @abstractmethod
    async def get(self, task_id: str) -> Optional[Task]: ...

    @abstractmethod
    async def list_by_owner(
        self,
        owner_id: int,
        finished: Optional[bool] = None,
        tag: Optional[str] = None,
        order: TaskOrder = TaskOrder.CREATED_DESC,
    ) -> Sequence[Task]: ...

    @abstractmethod
    async def add(self, task: Task) -> None: ...

    @abstractmethod
    async def update(self, task: Task, expected_version: int) -> None:
        """Persist `task` only if the stored row is still at `expected_version`.

        The stored version is bumped by one. Raises StaleTaskError otherwise.
        """

    @abstractmethod
    async def delete(self, task_id: str) -> bool: ...
