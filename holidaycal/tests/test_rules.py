"""Tests for rule resolution."""

from datetime import date

import pytest

from holidaycal.src.errors import InvalidDateError, InvalidRuleError
from holidaycal.src.holiday import Holiday
from holidaycal.src.rules import (
    EasterOffset,
    Fixed,
    HolidayDefinition,
    NthWeekday,
    RuleSet,
    nth_weekday,
    resolve,
    resolve_definition,
)

SUNDAY = 6
MONDAY = 0
THURSDAY = 3


def make_rule_set():
    return RuleSet(
        country_id="xx",
        country_name="Testland",
        regions=["North", "South"],
        definitions=[
            HolidayDefinition("new_year", "New Year", Fixed(1, 1)),
            HolidayDefinition("good_friday", "Good Friday", EasterOffset(-2)),
            HolidayDefinition("mothers_day", "Mother's Day", NthWeekday(5, SUNDAY, 2), frozenset({1})),
            HolidayDefinition("last_sunday", "Year End Sunday", NthWeekday(12, SUNDAY, -1)),
        ],
    )


class TestFixed:
    def test_plain_date(self):
        h = resolve_definition(HolidayDefinition("x", "X", Fixed(12, 25)), 2024)
        assert h.date == date(2024, 12, 25)

    def test_leap_day_in_leap_year(self):
        h = resolve_definition(HolidayDefinition("x", "X", Fixed(2, 29)), 2024)
        assert h.date == date(2024, 2, 29)

    def test_leap_day_in_common_year_fails(self):
        with pytest.raises(InvalidDateError):
            resolve_definition(HolidayDefinition("x", "X", Fixed(2, 29)), 2023)

    def test_invalid_date_is_value_error(self):
        with pytest.raises(ValueError):
            resolve_definition(HolidayDefinition("x", "X", Fixed(4, 31)), 2024)


class TestEasterOffset:
    def test_good_friday_2024(self):
        h = resolve_definition(HolidayDefinition("a", "Good Friday", EasterOffset(-2)), 2024)
        assert h.date == date(2024, 3, 29)

    def test_crosses_month(self):
        """Easter 2024 = March 31, so Easter Monday = April 1."""
        h = resolve_definition(HolidayDefinition("x", "X", EasterOffset(1)), 2024)
        assert h.date == date(2024, 4, 1)

    def test_corpus_christi(self):
        h = resolve_definition(HolidayDefinition("x", "X", EasterOffset(60)), 2024)
        assert h.date == date(2024, 5, 30)

    def test_crosses_year(self):
        h = resolve_definition(HolidayDefinition("x", "X", EasterOffset(-100)), 2024)
        assert h.date == date(2023, 12, 22)


class TestNthWeekday:
    def test_second_sunday_of_may_2024(self):
        assert nth_weekday(2024, 5, SUNDAY, 2) == date(2024, 5, 12)

    def test_last_sunday_of_december(self):
        assert nth_weekday(2024, 12, SUNDAY, -1) == date(2024, 12, 29)
        # Dec 31, 2023 is itself a Sunday
        assert nth_weekday(2023, 12, SUNDAY, -1) == date(2023, 12, 31)

    def test_first_day_of_month_counts(self):
        # Feb 1, 2024 is a Thursday
        assert nth_weekday(2024, 2, THURSDAY, 1) == date(2024, 2, 1)

    def test_fifth_occurrence_when_present(self):
        assert nth_weekday(2024, 2, THURSDAY, 5) == date(2024, 2, 29)
        assert nth_weekday(2024, 2, THURSDAY, -5) == date(2024, 2, 1)

    def test_fifth_occurrence_missing(self):
        """February 2024 has only four Mondays."""
        with pytest.raises(InvalidRuleError):
            nth_weekday(2024, 2, MONDAY, 5)
        with pytest.raises(InvalidRuleError):
            nth_weekday(2024, 2, MONDAY, -5)

    def test_thanksgiving_2024(self):
        assert nth_weekday(2024, 11, THURSDAY, 4) == date(2024, 11, 28)

    def test_memorial_day_2024(self):
        assert nth_weekday(2024, 5, MONDAY, -1) == date(2024, 5, 27)

    def test_zero_occurrence(self):
        with pytest.raises(InvalidRuleError):
            nth_weekday(2024, 5, MONDAY, 0)

    def test_bad_weekday_and_month(self):
        with pytest.raises(InvalidRuleError):
            nth_weekday(2024, 5, 7, 1)
        with pytest.raises(InvalidRuleError):
            nth_weekday(2024, 13, MONDAY, 1)

    def test_always_lands_on_weekday(self):
        for month in range(1, 13):
            for weekday in range(7):
                for occurrence in (1, 2, 3, 4, -1, -2, -3, -4):
                    d = nth_weekday(2025, month, weekday, occurrence)
                    assert d.month == month
                    assert d.weekday() == weekday


class TestResolve:
    def test_order_and_count(self):
        holidays = resolve(make_rule_set(), 2024)
        assert [h.identifier for h in holidays] == ["new_year", "good_friday", "mothers_day", "last_sunday"]
        assert all(isinstance(h, Holiday) for h in holidays)

    def test_dates(self):
        dates = {h.identifier: h.date for h in resolve(make_rule_set(), 2024)}
        assert dates == {
            "new_year": date(2024, 1, 1),
            "good_friday": date(2024, 3, 29),
            "mothers_day": date(2024, 5, 12),
            "last_sunday": date(2024, 12, 29),
        }

    def test_deterministic(self):
        rule_set = make_rule_set()
        assert resolve(rule_set, 2025) == resolve(rule_set, 2025)

    def test_carries_name_and_regions(self):
        holidays = {h.identifier: h for h in resolve(make_rule_set(), 2024)}
        assert holidays["mothers_day"].name == "Mother's Day"
        assert holidays["mothers_day"].regions == frozenset({1})
        assert holidays["new_year"].regions is None

    def test_error_aborts_resolution(self):
        rule_set = make_rule_set()
        rule_set.definitions.append(HolidayDefinition("leap", "Leap Day", Fixed(2, 29)))
        with pytest.raises(InvalidDateError):
            resolve(rule_set, 2025)

    def test_unknown_kind(self):
        with pytest.raises(InvalidRuleError):
            resolve_definition(HolidayDefinition("x", "X", "bogus"), 2024)

    def test_empty_rule_set(self):
        assert resolve(RuleSet("xx", "Testland"), 2024) == []
