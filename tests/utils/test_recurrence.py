"""Unit tests for dailytodo_cli.utils.recurrence.

Covers next-occurrence resolution for weekly and monthly rules (including
short-month clamping and weekday wraparound), inert rules, rule parsing and
the repeat presets.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from dailytodo_cli.models import InvalidRuleError, MonthlyRepeat, Weekday, WeeklyRepeat
from dailytodo_cli.utils.dates import days_in_month, weekday_of
from dailytodo_cli.utils.recurrence import (
    NO_OCCURRENCE,
    NoOccurrence,
    build_repeat_rule,
    describe_repeat,
    is_repeat_everyday,
    is_repeat_weekdays,
    parse_repeat_rule,
    parse_weekdays,
    resolve_next_occurrence,
)

WEDNESDAY = datetime(2024, 6, 5, 9, 30)


def _weekly(*days: Weekday) -> WeeklyRepeat:
    return WeeklyRepeat(weekdays=list(days))


# ---------------------------------------------------------------------------
# Weekly resolution
# ---------------------------------------------------------------------------


class TestWeeklyResolution:
    def test_wednesday_with_monday_and_friday_gives_friday(self):
        rule = _weekly(Weekday.MONDAY, Weekday.FRIDAY)
        assert resolve_next_occurrence(rule, WEDNESDAY) == datetime(2024, 6, 7, 9, 30)

    def test_wraps_to_earliest_weekday_next_week(self):
        rule = _weekly(Weekday.MONDAY, Weekday.TUESDAY)
        assert resolve_next_occurrence(rule, WEDNESDAY) == datetime(2024, 6, 10, 9, 30)

    def test_base_weekday_in_set_is_skipped_for_a_later_one(self):
        rule = _weekly(Weekday.WEDNESDAY, Weekday.THURSDAY)
        assert resolve_next_occurrence(rule, WEDNESDAY) == datetime(2024, 6, 6, 9, 30)

    def test_only_base_weekday_yields_no_occurrence(self):
        rule = _weekly(Weekday.WEDNESDAY)
        assert resolve_next_occurrence(rule, WEDNESDAY) is NO_OCCURRENCE

    def test_everyday_gives_next_day(self):
        rule = build_repeat_rule("everyday")
        assert resolve_next_occurrence(rule, WEDNESDAY) == WEDNESDAY + timedelta(days=1)

    def test_weekdays_from_friday_gives_monday(self):
        friday = datetime(2024, 6, 7)
        rule = build_repeat_rule("weekdays")
        assert resolve_next_occurrence(rule, friday) == datetime(2024, 6, 10)

    @pytest.mark.parametrize(
        "weekdays",
        [
            [Weekday.SUNDAY],
            [Weekday.MONDAY, Weekday.FRIDAY],
            [Weekday.SATURDAY, Weekday.SUNDAY],
            [Weekday.TUESDAY, Weekday.THURSDAY, Weekday.SATURDAY],
            list(Weekday),
        ],
    )
    def test_result_is_earliest_matching_date_strictly_after_base(self, weekdays):
        rule = WeeklyRepeat(weekdays=weekdays)
        allowed = {int(day) for day in weekdays}
        for offset in range(14):
            base = WEDNESDAY + timedelta(days=offset)
            if allowed == {weekday_of(base)}:
                continue
            expected = min(
                base + timedelta(days=k)
                for k in range(1, 8)
                if weekday_of(base + timedelta(days=k)) in allowed
            )
            assert resolve_next_occurrence(rule, base) == expected


# ---------------------------------------------------------------------------
# Monthly resolution
# ---------------------------------------------------------------------------


class TestMonthlyResolution:
    def test_january_10_gives_february_10(self):
        rule = MonthlyRepeat(days=[10])
        assert resolve_next_occurrence(rule, datetime(2024, 1, 10)) == datetime(2024, 2, 10)

    def test_day_31_clamps_to_30_day_month(self):
        rule = MonthlyRepeat(days=[31])
        assert resolve_next_occurrence(rule, datetime(2024, 5, 31, 8, 0)) == datetime(
            2024, 6, 30, 8, 0
        )

    def test_day_31_clamps_to_leap_february(self):
        rule = MonthlyRepeat(days=[31])
        assert resolve_next_occurrence(rule, datetime(2024, 1, 31)) == datetime(2024, 2, 29)

    def test_december_rolls_into_january(self):
        rule = MonthlyRepeat(days=[5])
        assert resolve_next_occurrence(rule, datetime(2024, 12, 20)) == datetime(2025, 1, 5)

    def test_only_first_day_is_used(self):
        rule = MonthlyRepeat(days=[3, 20])
        assert resolve_next_occurrence(rule, datetime(2024, 6, 1)) == datetime(2024, 7, 3)

    @pytest.mark.parametrize("target", [1, 15, 28, 29, 30, 31])
    def test_lands_in_following_month_on_clamped_day(self, target):
        rule = MonthlyRepeat(days=[target])
        for month in range(1, 13):
            base = datetime(2023, month, 15)
            result = resolve_next_occurrence(rule, base)
            following = date(2023 + month // 12, month % 12 + 1, 1)
            assert (result.year, result.month) == (following.year, following.month)
            assert result.day == min(target, days_in_month(following))


# ---------------------------------------------------------------------------
# Inert and invalid rules
# ---------------------------------------------------------------------------


class TestInertRules:
    def test_empty_weekday_set(self):
        assert resolve_next_occurrence(WeeklyRepeat(weekdays=[]), WEDNESDAY) is NO_OCCURRENCE

    def test_empty_day_list(self):
        assert resolve_next_occurrence(MonthlyRepeat(days=[]), WEDNESDAY) is NO_OCCURRENCE

    def test_no_occurrence_is_falsy_singleton(self):
        assert not NO_OCCURRENCE
        assert NoOccurrence() is NO_OCCURRENCE
        assert repr(NO_OCCURRENCE) == "NO_OCCURRENCE"

    def test_unknown_rule_object_raises(self):
        with pytest.raises(InvalidRuleError):
            resolve_next_occurrence({"type": "yearly"}, WEDNESDAY)


class TestParseRepeatRule:
    def test_weekly(self):
        rule = parse_repeat_rule({"type": "weekly", "weekdays": [5, 1, 5]})
        assert rule == WeeklyRepeat(weekdays=[Weekday.MONDAY, Weekday.FRIDAY])

    def test_monthly(self):
        assert parse_repeat_rule({"type": "monthly", "days": [31]}) == MonthlyRepeat(days=[31])

    def test_unknown_tag_is_rejected(self):
        with pytest.raises(InvalidRuleError):
            parse_repeat_rule({"type": "yearly", "days": [1]})

    def test_out_of_range_day_is_rejected(self):
        with pytest.raises(InvalidRuleError):
            parse_repeat_rule({"type": "monthly", "days": [32]})

    def test_out_of_range_weekday_is_rejected(self):
        with pytest.raises(InvalidRuleError):
            parse_repeat_rule({"type": "weekly", "weekdays": [7]})


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------


class TestParseWeekdays:
    def test_abbreviations_and_full_names(self):
        assert parse_weekdays("mon, Friday") == [Weekday.MONDAY, Weekday.FRIDAY]

    def test_ignores_empty_parts(self):
        assert parse_weekdays("sun,,") == [Weekday.SUNDAY]

    def test_unknown_name(self):
        with pytest.raises(InvalidRuleError, match="Unknown weekday"):
            parse_weekdays("mon,funday")


class TestBuildRepeatRule:
    def test_none(self):
        assert build_repeat_rule("none") is None

    def test_everyday(self):
        assert is_repeat_everyday(build_repeat_rule("everyday"))

    def test_weekdays(self):
        assert is_repeat_weekdays(build_repeat_rule("Weekdays"))

    def test_weekly_with_explicit_days(self):
        rule = build_repeat_rule("weekly", weekdays=[Weekday.FRIDAY, Weekday.MONDAY])
        assert rule.weekdays == [Weekday.MONDAY, Weekday.FRIDAY]

    def test_weekly_requires_weekdays_even_with_a_base_date(self):
        with pytest.raises(InvalidRuleError, match="needs weekdays"):
            build_repeat_rule("weekly", base=WEDNESDAY)

    def test_weekly_without_days_or_base(self):
        with pytest.raises(InvalidRuleError):
            build_repeat_rule("weekly")

    @pytest.mark.parametrize(
        ("preset", "options", "expected"),
        [
            ("everyday", {}, datetime(2024, 6, 6, 9, 30)),
            ("weekdays", {}, datetime(2024, 6, 6, 9, 30)),
            ("weekly", {"weekdays": [Weekday.WEDNESDAY]}, NO_OCCURRENCE),
            ("weekly", {"weekdays": [Weekday.MONDAY]}, datetime(2024, 6, 10, 9, 30)),
            ("monthly", {}, datetime(2024, 7, 5, 9, 30)),
        ],
    )
    def test_preset_rules_resolved_from_their_base_date(self, preset, options, expected):
        rule = build_repeat_rule(preset, base=WEDNESDAY, **options)
        assert resolve_next_occurrence(rule, WEDNESDAY) == expected

    def test_monthly_defaults_to_base_day(self):
        assert build_repeat_rule("monthly", base=WEDNESDAY) == MonthlyRepeat(days=[5])

    def test_monthly_with_explicit_day(self):
        assert build_repeat_rule("monthly", day=31) == MonthlyRepeat(days=[31])

    def test_monthly_invalid_day(self):
        with pytest.raises(InvalidRuleError):
            build_repeat_rule("monthly", day=40)

    def test_unknown_preset(self):
        with pytest.raises(InvalidRuleError, match="Unknown repeat preset"):
            build_repeat_rule("hourly")


class TestDescribeRepeat:
    @pytest.mark.parametrize(
        ("rule", "expected"),
        [
            (None, ""),
            (WeeklyRepeat(weekdays=list(Weekday)), "everyday"),
            (
                _weekly(
                    Weekday.MONDAY,
                    Weekday.TUESDAY,
                    Weekday.WEDNESDAY,
                    Weekday.THURSDAY,
                    Weekday.FRIDAY,
                ),
                "weekdays",
            ),
            (_weekly(Weekday.FRIDAY, Weekday.MONDAY), "weekly: mon, fri"),
            (MonthlyRepeat(days=[10]), "monthly: day 10"),
        ],
    )
    def test_descriptions(self, rule, expected):
        assert describe_repeat(rule) == expected
