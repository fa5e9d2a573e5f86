# -*- coding: utf-8 -*-
"""Task entity and the request/enum types around it."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


class TaskState(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"
    FINISHED = "finished"


class TaskOrder(str, Enum):
    CREATED_DESC = "created_desc"
    UPDATED_ASC = "updated_asc"


@dataclass(frozen=True)
class Task:
    task_id: str
    owner_id: int
    title: str
    body: str
    created_at: datetime
    updated_at: datetime
    exp_duration: int
    worked_time: int = 0
    last_work_start_at: Optional[datetime] = None
    is_finished: bool = False
    tags: Tuple[str, ...] = ()
    # bumped by the repository on every stored change
    version: int = 0

    @property
    def state(self) -> TaskState:
        if self.is_finished:
            return TaskState.FINISHED
        if self.last_work_start_at is not None:
            return TaskState.ACTIVE
        return TaskState.IDLE

    @property
    def est_factor(self) -> Optional[float]:
        """worked_time / exp_duration, or None when there is no estimate."""
        if self.exp_duration <= 0:
            return None
        return self.worked_time / self.exp_duration


@dataclass(frozen=True)
class NewTaskRequest:
    owner_id: int
    title: str
    body: str
    exp_duration: int
    tags: Tuple[str, ...] = field(default_factory=tuple)
