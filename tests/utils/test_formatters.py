"""Tests for output formatters."""

from __future__ import annotations

import json
from datetime import datetime, timedelta

import pytest
import yaml

from dailytodo_cli.models import MonthlyRepeat, TodaySyncResult
from dailytodo_cli.utils.ui.formatters import (
    calculate_unique_prefixes,
    format_due_date,
    format_error,
    format_output,
    format_relative_time,
    format_success,
    is_overdue,
    to_serializable,
)


class TestUniquePrefixes:
    def test_minimum_length(self):
        assert calculate_unique_prefixes(["abcdef", "zzzzzz"]) == {"abcdef": 4, "zzzzzz": 4}

    def test_grows_until_unique(self):
        result = calculate_unique_prefixes(["abcdef12", "abcdef34"])
        assert result == {"abcdef12": 7, "abcdef34": 7}

    def test_id_that_prefixes_another(self):
        result = calculate_unique_prefixes(["abcd", "abcdef"])
        assert result["abcd"] == 4
        assert result["abcdef"] == 5


class TestSerializable:
    def test_task_is_json_ready(self, task_factory):
        task = task_factory(due_date=datetime(2024, 6, 5), repeat=MonthlyRepeat(days=[5]))
        data = to_serializable([task])

        assert data[0]["due_date"] == "2024-06-05T00:00:00"
        assert data[0]["repeat"] == {"type": "monthly", "days": [5]}


class TestFormatOutput:
    def test_json(self, capsys, task_factory):
        format_output([task_factory()], "json")
        data = json.loads(capsys.readouterr().out)
        assert data[0]["title"] == "Water the plants"

    def test_yaml(self, capsys):
        format_output(TodaySyncResult(cleared_count=2, set_count=3), "yaml")
        assert yaml.safe_load(capsys.readouterr().out) == {
            "cleared_count": 2,
            "set_count": 3,
            "skipped": False,
        }

    def test_pretty_empty_list(self, capsys):
        format_output([], "pretty")
        assert "No tasks found" in capsys.readouterr().out

    def test_pretty_list_groups_completed(self, capsys, task_factory, step_factory):
        tasks = [
            task_factory(
                id="aaaa1111",
                title="Open one",
                is_today=True,
                repeat=MonthlyRepeat(days=[1]),
                steps=[step_factory("s", 0, is_completed=True), step_factory("t", 1)],
            ),
            task_factory(id="bbbb2222", title="Closed one", is_completed=True),
        ]
        format_output(tasks, "pretty", view="today")
        out = capsys.readouterr().out

        assert "Today" in out
        assert "1 active, 1 completed" in out
        assert out.index("Open one") < out.index("COMPLETED") < out.index("Closed one")
        assert "monthly: day 1" in out
        assert "1/2 steps" in out
        assert "#aaaa" in out

    def test_pretty_task_detail(self, capsys, task_factory, step_factory):
        task = task_factory(memo="use rain water", steps=[step_factory("fill can", 0)])
        format_output(task, "pretty")
        out = capsys.readouterr().out

        assert "use rain water" in out
        assert "1." in out
        assert "fill can" in out

    def test_pretty_plain_model(self, capsys):
        format_output(TodaySyncResult(set_count=4), "pretty")
        out = capsys.readouterr().out
        assert "Set Count" in out
        assert "4" in out


class TestMessages:
    def test_error_and_success(self, capsys):
        format_error("boom")
        format_success("done")
        out = capsys.readouterr().out
        assert "Error: boom" in out
        assert "Success: done" in out


class TestDates:
    def test_overdue(self):
        assert is_overdue(datetime.now() - timedelta(minutes=1))
        assert not is_overdue(datetime.now() + timedelta(days=1))
        assert not is_overdue(None)

    def test_due_date_at_midnight_omits_time(self):
        date = datetime(datetime.now().year, 3, 15)
        assert format_due_date(date) == f"15/03 {date.strftime('%a')}"

    def test_due_date_with_time_and_other_year(self):
        date = datetime(2001, 3, 15, 8, 5)
        assert format_due_date(date) == "08:05 15/03/2001 Thu"

    @pytest.mark.parametrize(
        ("delta", "expected"),
        [
            (timedelta(seconds=5), "just now"),
            (timedelta(minutes=5), "5m ago"),
            (timedelta(hours=1, minutes=5), "1h ago"),
            (timedelta(days=3), "3d ago"),
        ],
    )
    def test_relative_time(self, delta, expected):
        assert format_relative_time(datetime.now() - delta) == expected

    def test_relative_time_none(self):
        assert format_relative_time(None) == ""
