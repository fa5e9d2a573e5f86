"""
Unit tests for aggregate statistics over finished tasks.
"""
from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone

import pytest

from worktally.domain.stats.engine import (
    avg_daily_work_time,
    compute_statistics,
    mean,
    worked_time_by_day,
)

from .fakes import T0, make_task


def _finished(worked, exp, at=T0, **kw):
    return make_task(worked, exp, updated_at=at, finished=True, **kw)


def test_basic_aggregates():
    tasks = [_finished(10, 5), _finished(2, 10)]

    stats = compute_statistics(tasks, T0)

    assert stats.total_tasks == 2
    assert stats.total_over == 1
    assert stats.total_under == 1
    assert stats.avg_task_completion_time == 6
    assert stats.avg_est_factor == pytest.approx(1.1)


def test_exact_estimate_is_neither_over_nor_under():
    stats = compute_statistics([_finished(60, 60)], T0)

    assert (stats.total_over, stats.total_under) == (0, 0)
    assert stats.avg_est_factor == 1.0


def test_empty_input_returns_zero_for_every_metric():
    stats = compute_statistics([], T0)

    for name, value in stats.as_dict().items():
        assert value == 0, name
        assert not math.isnan(value), name


def test_zero_estimate_is_skipped_from_est_factor():
    """A task with exp_duration == 0 counts everywhere except the factor means."""
    tasks = [_finished(30, 0), _finished(20, 10)]

    stats = compute_statistics(tasks, T0)

    assert stats.total_tasks == 2
    assert stats.total_over == 2
    assert stats.avg_task_completion_time == 25
    assert stats.avg_est_factor == 2.0
    assert math.isfinite(stats.todays_est_factor)


def test_only_zero_estimates_give_zero_factor():
    stats = compute_statistics([_finished(0, 0), _finished(5, 0)], T0)

    assert stats.avg_est_factor == 0.0
    assert stats.todays_est_factor == 0.0


def test_avg_daily_work_time_is_per_active_day():
    day1 = datetime(2024, 3, 1, 8, tzinfo=timezone.utc)
    day3 = datetime(2024, 3, 3, 8, tzinfo=timezone.utc)
    tasks = [
        _finished(100, 50, at=day1),
        _finished(200, 50, at=day1 + timedelta(hours=5)),
        _finished(600, 50, at=day3),
    ]

    # (300 + 600) / 2 days with activity, the empty 2nd of March does not count
    assert avg_daily_work_time(tasks) == 450


def test_days_are_grouped_by_utc_date():
    helsinki = timezone(timedelta(hours=2))
    # 01:30 in Helsinki on the 2nd is still the 1st in UTC
    late = datetime(2024, 3, 2, 1, 30, tzinfo=helsinki)
    early = datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc)

    per_day = worked_time_by_day([_finished(10, 5, at=early), _finished(20, 5, at=late)])

    assert list(per_day.values()) == [30]
    assert [d.isoformat() for d in per_day] == ["2024-03-01"]


def test_today_metrics_use_the_given_now():
    yesterday = T0 - timedelta(days=1)
    tasks = [
        _finished(100, 100, at=yesterday),
        _finished(30, 10, at=T0),
        _finished(10, 10, at=T0 + timedelta(hours=2)),
    ]

    stats = compute_statistics(tasks, T0 + timedelta(hours=3))

    assert stats.todays_worked_time == 40
    assert stats.todays_est_factor == pytest.approx(2.0)


def test_nothing_today():
    tasks = [_finished(30, 10, at=T0 - timedelta(days=2))]

    stats = compute_statistics(tasks, T0)

    assert stats.todays_worked_time == 0
    assert stats.todays_est_factor == 0.0


def test_serialized_field_names():
    stats = compute_statistics([_finished(10, 5)], T0)

    assert list(stats.as_dict()) == [
        "totalTasks",
        "totalOver",
        "totalUnder",
        "avgTaskCompletionTime",
        "avgEstFactor",
        "avgDailyWorkTime",
        "todaysEstFactor",
        "todaysWorkedTime",
    ]


def test_mean_of_nothing_is_zero():
    assert mean([]) == 0.0
    assert mean(iter([1, 2, 3])) == 2.0
