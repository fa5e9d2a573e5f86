# -*- coding: utf-8 -*-
"""Message text for tasks and statistics (HTML parse mode)."""
from __future__ import annotations

import json
from datetime import datetime
from html import escape
from typing import List, Sequence

from worktally.domain.stats.engine import Statistics
from worktally.domain.stats.timeseries import Series
from worktally.domain.tasks.lifecycle import session_seconds
from worktally.domain.tasks.models import Task, TaskState

_STATE_LABEL = {
    TaskState.IDLE: "idle",
    TaskState.ACTIVE: "in progress",
    TaskState.FINISHED: "finished",
}


def format_duration(seconds: float) -> str:
    """3725 -> '1h 02m 05s'; 65 -> '1m 05s'; 7 -> '7s'."""
    total = max(0, int(round(seconds)))
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}h {minutes:02d}m {secs:02d}s"
    if minutes:
        return f"{minutes}m {secs:02d}s"
    return f"{secs}s"


def render_task_card(task: Task, now: datetime) -> str:
    worked = task.worked_time
    lines = [f"<b>{escape(task.title)}</b>", escape(task.body), ""]
    lines.append(f"State: {_STATE_LABEL[task.state]}")
    if task.last_work_start_at is not None:
        running = session_seconds(task.last_work_start_at, now)
        lines.append(f"Session: {format_duration(running)} (since {task.last_work_start_at:%H:%M} UTC)")
    lines.append(f"Worked: {format_duration(worked)} / estimate {format_duration(task.exp_duration)}")
    if task.tags:
        lines.append("Tags: " + ", ".join(escape(t) for t in task.tags))
    lines.append(f"<code>{task.task_id}</code>")
    return "\n".join(lines)


def render_task_list(title: str, tasks: Sequence[Task]) -> str:
    lines = [f"<b>{escape(title)}</b> ({len(tasks)})"]
    for t in tasks:
        lines.append(f"• {escape(t.title)} - {format_duration(t.worked_time)} <code>{t.task_id}</code>")
    return "\n".join(lines)


def render_statistics(stats: Statistics) -> str:
    if stats.total_tasks == 0:
        return "No finished tasks yet."
    return "\n".join(
        [
            "<b>Statistics</b>",
            f"Finished tasks: {stats.total_tasks}",
            f"Over estimate: {stats.total_over}",
            f"Under estimate: {stats.total_under}",
            f"Avg time per task: {format_duration(stats.avg_task_completion_time)}",
            f"Avg estimation factor: {stats.avg_est_factor:.2f}",
            f"Avg work per active day: {format_duration(stats.avg_daily_work_time)}",
            "",
            "<b>Today</b>",
            f"Estimation factor: {stats.todays_est_factor:.2f}",
            f"Worked: {format_duration(stats.todays_worked_time)}",
        ]
    )


def stats_payload(stats: Statistics, series: List[Series]) -> str:
    return json.dumps(
        {"stats": stats.as_dict(), "timeseries": [s.as_dict() for s in series]},
        ensure_ascii=False,
        indent=2,
    )
