"""
Unit tests for the estimation-factor, completion and per-tag series.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from worktally.domain.stats.timeseries import (
    COMPLETED_SERIES,
    DAY_LABEL,
    EST_FACTOR_SERIES,
    completion_series,
    est_factor_points,
    estimation_series,
    tag_series,
)

from .fakes import T0, make_task


def _at(hours: float):
    return T0 + timedelta(hours=hours)


def _finished(worked, exp, hours=0.0, tags=(), task_id="t"):
    return make_task(worked, exp, updated_at=_at(hours), finished=True, tags=tags, task_id=task_id)


def test_running_mean_is_cumulative():
    """Factors 2.0, 0.0, 1.0 -> running means 2.0, 1.0, 1.0."""
    tasks = [_finished(20, 10, 0), _finished(0, 10, 1), _finished(10, 10, 2)]

    values = [p.value for p in est_factor_points(tasks)]

    assert values == pytest.approx([2.0, 1.0, 1.0])


def test_running_mean_follows_input_order():
    tasks = [_finished(10, 10, 0), _finished(30, 10, 1)]

    forward = [p.value for p in est_factor_points(tasks)]
    backward = [p.value for p in est_factor_points(list(reversed(tasks)))]

    assert forward == pytest.approx([1.0, 2.0])
    assert backward == pytest.approx([3.0, 2.0])


def test_points_are_labelled_by_hour_by_default():
    tasks = [_finished(10, 10, 0), _finished(10, 10, 1.5)]

    labels = [p.name for p in est_factor_points(tasks)]

    assert labels == ["2024-03-10T09", "2024-03-10T10"]


def test_label_format_is_caller_supplied():
    tasks = [_finished(10, 10, 0)]

    assert est_factor_points(tasks, DAY_LABEL)[0].name == "03-10-2024"
    assert est_factor_points(tasks, "%Y/%m/%d")[0].name == "2024/03/10"


def test_zero_estimate_repeats_running_mean():
    tasks = [_finished(5, 0, 0), _finished(20, 10, 1), _finished(7, 0, 2)]

    values = [p.value for p in est_factor_points(tasks)]

    assert values == [0.0, 2.0, 2.0]


def test_estimation_series_shape():
    series = estimation_series([_finished(15, 10, 0)])

    assert series.as_dict() == {
        "name": EST_FACTOR_SERIES,
        "series": [{"name": "2024-03-10T09", "value": 1.5}],
    }


def test_completion_counts_per_utc_day_ascending():
    d1 = datetime(2024, 1, 2, 23, 59, tzinfo=timezone.utc)
    d2 = datetime(2024, 1, 3, 0, 1, tzinfo=timezone.utc)
    tasks = [
        make_task(updated_at=d2, finished=True),
        make_task(updated_at=d1, finished=True),
        make_task(updated_at=d2 + timedelta(hours=3), finished=True),
    ]

    series = completion_series(tasks)

    assert series.name == COMPLETED_SERIES
    assert [(p.name, p.value) for p in series.series] == [("2024-01-02", 1), ("2024-01-03", 2)]


def test_empty_input_gives_empty_series():
    assert estimation_series([]).series == []
    assert completion_series([]).series == []
    assert tag_series([]) == []


def test_tag_series_only_for_tags_on_more_than_one_task():
    tasks = [
        _finished(10, 10, 0, tags=["work", "solo"], task_id="a"),
        _finished(30, 10, 1, tags=["work"], task_id="b"),
        _finished(5, 10, 2, tags=["home"], task_id="c"),
    ]

    result = tag_series(tasks)

    assert [s.name for s in result] == ["work"]
    work = result[0]
    assert [p.value for p in work.series] == pytest.approx([1.0, 2.0])
    assert [p.name for p in work.series] == ["03-10-2024", "03-10-2024"]


def test_tag_repeated_on_one_task_is_not_shared():
    tasks = [
        _finished(10, 10, 0, tags=["x", "x"], task_id="a"),
        _finished(10, 10, 1, tags=["y"], task_id="b"),
    ]

    assert tag_series(tasks) == []


def test_tag_matching_is_exact_after_trimming():
    tasks = [
        _finished(10, 10, 0, tags=[" ops "], task_id="a"),
        _finished(20, 10, 1, tags=["ops"], task_id="b"),
        _finished(40, 10, 2, tags=["devops"], task_id="c"),
    ]

    result = {s.name: s for s in tag_series(tasks)}

    assert list(result) == ["ops"]
    assert len(result["ops"].series) == 2
