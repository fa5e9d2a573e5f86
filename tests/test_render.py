"""
Tests for message rendering and command-argument parsing (no Telegram).
"""
from __future__ import annotations

import json
from dataclasses import replace
from datetime import timedelta

import pytest

from worktally.domain.stats.engine import compute_statistics
from worktally.domain.stats.timeseries import completion_series, estimation_series
from worktally.ui.telegram.handlers._common import parse_minutes, parse_tags, split_id_and_rest
from worktally.ui.telegram.render import (
    format_duration,
    render_statistics,
    render_task_card,
    stats_payload,
)

from .fakes import T0, make_task


@pytest.mark.parametrize(
    "seconds, expected",
    [(0, "0s"), (7, "7s"), (65, "1m 05s"), (3725, "1h 02m 05s"), (-3, "0s"), (59.6, "1m 00s")],
)
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected


def test_task_card_escapes_html_and_shows_session():
    task = replace(make_task(300, 600, started_at=T0, tags=["<b>"]), title="a < b")

    text = render_task_card(task, T0 + timedelta(seconds=75))

    assert "a &lt; b" in text
    assert "&lt;b&gt;" in text
    assert "in progress" in text
    assert "Session: 1m 15s" in text
    assert "Worked: 5m 00s / estimate 10m 00s" in text


def test_statistics_text():
    tasks = [make_task(10, 5, finished=True), make_task(2, 10, finished=True)]

    text = render_statistics(compute_statistics(tasks, T0))

    assert "Finished tasks: 2" in text
    assert "Avg estimation factor: 1.10" in text
    assert render_statistics(compute_statistics([], T0)) == "No finished tasks yet."


def test_stats_payload_is_json():
    tasks = [make_task(15, 10, finished=True)]
    stats = compute_statistics(tasks, T0)

    payload = json.loads(stats_payload(stats, [estimation_series(tasks), completion_series(tasks)]))

    assert payload["stats"]["avgEstFactor"] == 1.5
    assert [s["name"] for s in payload["timeseries"]] == ["est. factor", "tasks completed"]
    assert payload["timeseries"][1]["series"] == [{"name": "2024-03-10", "value": 1}]


def test_parse_minutes():
    assert parse_minutes("15") == 900
    assert parse_minutes(" 0 ") == 0
    for bad in ("", "-5", "1.5", "abc"):
        with pytest.raises(ValueError):
            parse_minutes(bad)


def test_parse_tags_and_ids():
    assert parse_tags("work, deep ,, x") == ("work", "deep", "x")
    assert parse_tags("-") == ()
    assert split_id_and_rest("abc some new title") == ("abc", "some new title")
    assert split_id_and_rest("abc") == ("abc", "")
    assert split_id_and_rest("") == (None, "")
