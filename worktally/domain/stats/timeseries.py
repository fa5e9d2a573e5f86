# -*- coding: utf-8 -*-
"""
Time series over finished tasks.

Input must already be ordered by updated_at ascending. Labels are rendered
from updated_at in UTC with a caller-supplied strftime pattern.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from worktally.domain.common.time import utc_date, utc_label
from worktally.domain.stats.tags import shared_tags, tasks_with_tag
from worktally.domain.tasks.models import Task

HOUR_LABEL = "%Y-%m-%dT%H"
DAY_LABEL = "%m-%d-%Y"

EST_FACTOR_SERIES = "est. factor"
COMPLETED_SERIES = "tasks completed"


@dataclass(frozen=True)
class Point:
    name: str
    value: float

    def as_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value}


@dataclass(frozen=True)
class Series:
    name: str
    series: List[Point]

    def as_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "series": [p.as_dict() for p in self.series]}


def est_factor_points(tasks: Sequence[Task], label_format: str = HOUR_LABEL) -> List[Point]:
    """Cumulative mean estimation factor after each task, in input order.

    Tasks without an estimate emit the running mean unchanged.
    """
    points: List[Point] = []
    current = 0.0
    n = 0
    for task in tasks:
        factor = task.est_factor
        if factor is not None:
            current = (current * n + factor) / (n + 1)
            n += 1
        points.append(Point(name=utc_label(task.updated_at, label_format), value=current))
    return points


def completion_points(tasks: Sequence[Task]) -> List[Point]:
    per_day = Counter(utc_date(t.updated_at) for t in tasks)
    return [Point(name=day.isoformat(), value=per_day[day]) for day in sorted(per_day)]


def estimation_series(tasks: Sequence[Task], label_format: str = HOUR_LABEL) -> Series:
    return Series(name=EST_FACTOR_SERIES, series=est_factor_points(tasks, label_format))


def completion_series(tasks: Sequence[Task]) -> Series:
    return Series(name=COMPLETED_SERIES, series=completion_points(tasks))


def tag_series(tasks: Sequence[Task], label_format: str = DAY_LABEL) -> List[Series]:
    """One estimation-factor series per tag that appears on more than one task."""
    return [
        Series(name=tag, series=est_factor_points(tasks_with_tag(tasks, tag), label_format))
        for tag in shared_tags(tasks)
    ]
