# -*- coding: utf-8 -*-
"""
Aggregate productivity metrics over a user's finished tasks.

Empty-input and zero-estimate rules:
- a task with exp_duration == 0 has no estimation factor and is left out of
  every estimation-factor mean; it still counts everywhere else
- a mean over nothing is 0.0, a count or sum over nothing is 0
"""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, Iterable, Sequence

from worktally.domain.common.time import utc_date
from worktally.domain.tasks.models import Task


@dataclass(frozen=True)
class Statistics:
    total_tasks: int
    total_over: int
    total_under: int
    avg_task_completion_time: float
    avg_est_factor: float
    avg_daily_work_time: float
    todays_est_factor: float
    todays_worked_time: int

    def as_dict(self) -> Dict[str, float]:
        return {
            "totalTasks": self.total_tasks,
            "totalOver": self.total_over,
            "totalUnder": self.total_under,
            "avgTaskCompletionTime": self.avg_task_completion_time,
            "avgEstFactor": self.avg_est_factor,
            "avgDailyWorkTime": self.avg_daily_work_time,
            "todaysEstFactor": self.todays_est_factor,
            "todaysWorkedTime": self.todays_worked_time,
        }


def mean(values: Iterable[float]) -> float:
    total = 0.0
    n = 0
    for v in values:
        total += v
        n += 1
    return total / n if n else 0.0


def total_over(tasks: Sequence[Task]) -> int:
    return sum(1 for t in tasks if t.worked_time > t.exp_duration)


def total_under(tasks: Sequence[Task]) -> int:
    return sum(1 for t in tasks if t.worked_time < t.exp_duration)


def avg_task_completion_time(tasks: Sequence[Task]) -> float:
    return mean(t.worked_time for t in tasks)


def avg_est_factor(tasks: Sequence[Task]) -> float:
    return mean(t.est_factor for t in tasks if t.est_factor is not None)


def worked_time_by_day(tasks: Sequence[Task]) -> Dict[date, int]:
    per_day: Dict[date, int] = defaultdict(int)
    for t in tasks:
        per_day[utc_date(t.updated_at)] += t.worked_time
    return dict(sorted(per_day.items()))


def avg_daily_work_time(tasks: Sequence[Task]) -> float:
    """Mean worked seconds per day that has at least one task."""
    return mean(worked_time_by_day(tasks).values())


def tasks_on_day(tasks: Sequence[Task], day: date) -> list[Task]:
    return [t for t in tasks if utc_date(t.updated_at) == day]


def compute_statistics(tasks: Sequence[Task], now: datetime) -> Statistics:
    today = tasks_on_day(tasks, utc_date(now))
    return Statistics(
        total_tasks=len(tasks),
        total_over=total_over(tasks),
        total_under=total_under(tasks),
        avg_task_completion_time=avg_task_completion_time(tasks),
        avg_est_factor=avg_est_factor(tasks),
        avg_daily_work_time=avg_daily_work_time(tasks),
        todays_est_factor=avg_est_factor(today),
        todays_worked_time=sum(t.worked_time for t in today),
    )
