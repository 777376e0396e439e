"""Holiday rules and their resolution into concrete dates for one year."""

import calendar
from dataclasses import dataclass, field
from datetime import date, timedelta

from .easter import easter_sunday
from .errors import InvalidDateError, InvalidRuleError
from .holiday import Holiday


@dataclass(frozen=True)
class Fixed:
    """Same month and day every year."""

    month: int
    day: int


@dataclass(frozen=True)
class EasterOffset:
    """Signed number of days from Easter Sunday (Good Friday = -2)."""

    days: int


@dataclass(frozen=True)
class NthWeekday:
    """The n-th weekday of a month; negative occurrence counts from the end.

    weekday uses Python numbering: 0 = Monday ... 6 = Sunday.
    """

    month: int
    weekday: int
    occurrence: int


@dataclass(frozen=True)
class HolidayDefinition:
    identifier: str
    name: str
    kind: Fixed | EasterOffset | NthWeekday
    regions: frozenset[int] | None = None


@dataclass
class RuleSet:
    """Year-independent holiday rules of one country."""

    country_id: str
    country_name: str
    regions: list[str] = field(default_factory=list)
    definitions: list[HolidayDefinition] = field(default_factory=list)


def fixed_date(year: int, month: int, day: int) -> date:
    """Build a calendar date, raising InvalidDateError if it does not exist."""
    try:
        return date(year, month, day)
    except ValueError as e:
        raise InvalidDateError(f"{year:04d}-{month:02d}-{day:02d} is not a valid date: {e}") from e


def nth_weekday(year: int, month: int, weekday: int, occurrence: int) -> date:
    """Return the occurrence-th weekday of month (1 = first, -1 = last)."""
    if not 1 <= month <= 12:
        raise InvalidRuleError(f"Month {month} is out of range")
    if not 0 <= weekday <= 6:
        raise InvalidRuleError(f"Weekday {weekday} is out of range (0 = Monday .. 6 = Sunday)")
    if occurrence == 0:
        raise InvalidRuleError("Occurrence 0 is undefined; use 1 for first or -1 for last")

    first_weekday, last_day = calendar.monthrange(year, month)
    if occurrence > 0:
        first = 1 + (weekday - first_weekday) % 7
        day = first + 7 * (occurrence - 1)
    else:
        last_weekday = date(year, month, last_day).weekday()
        last = last_day - (last_weekday - weekday) % 7
        day = last + 7 * (occurrence + 1)

    if not 1 <= day <= last_day:
        raise InvalidRuleError(
            f"{calendar.month_name[month]} {year} has no occurrence {occurrence} "
            f"of {calendar.day_name[weekday]}"
        )
    return date(year, month, day)


def resolve_definition(definition: HolidayDefinition, year: int) -> Holiday:
    """Resolve a single definition for year."""
    kind = definition.kind
    if isinstance(kind, Fixed):
        day = fixed_date(year, kind.month, kind.day)
    elif isinstance(kind, EasterOffset):
        day = easter_sunday(year) + timedelta(days=kind.days)
    elif isinstance(kind, NthWeekday):
        day = nth_weekday(year, kind.month, kind.weekday, kind.occurrence)
    else:
        raise InvalidRuleError(f"Unknown rule kind for {definition.identifier!r}: {kind!r}")

    return Holiday(
        identifier=definition.identifier,
        name=definition.name,
        date=day,
        regions=definition.regions,
    )


def resolve(rule_set: RuleSet, year: int) -> list[Holiday]:
    """Resolve every definition of rule_set for year, in definition order.

    Any failing rule aborts the whole resolution.
    """
    return [resolve_definition(d, year) for d in rule_set.definitions]
