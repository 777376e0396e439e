"""Keyed container of the holidays one country observes in one year."""

from datetime import date, datetime
from typing import Iterable, Iterator

import numpy as np
import pandas as pd

from .errors import TypeMismatchError
from .holiday import Holiday
from .rules import fixed_date

ALL_REGIONS = -1


class HolidayCollection:
    """Holidays of one (year, country), keyed by identifier, plus a region registry.

    Region indices are positions in the registry and are referenced by
    Holiday.regions, so the registry is only ever replaced as a whole.
    """

    def __init__(self, year: int, country_name: str, country_id: str):
        self._year = year
        self._country_name = country_name
        self._country_id = country_id
        self._holidays: dict[str, Holiday] = {}
        self._regions: list[str] = []

    @classmethod
    def create(cls, year: int, country_name: str, country_id: str) -> "HolidayCollection":
        return cls(year, country_name, country_id)

    def __repr__(self):
        return (
            f"HolidayCollection(year={self._year}, country_id={self._country_id!r}, "
            f"holidays={len(self._holidays)}, regions={len(self._regions)})"
        )

    def __len__(self) -> int:
        return len(self._holidays)

    def __iter__(self) -> Iterator[Holiday]:
        return iter(list(self._holidays.values()))

    def __contains__(self, identifier) -> bool:
        return identifier in self._holidays

    # Getters

    def get_year(self) -> int:
        return self._year

    def get_country_id(self) -> str:
        return self._country_id

    def get_country_name(self) -> str:
        return self._country_name

    def get_regions(self) -> list[str]:
        return list(self._regions)

    def get_holidays(self) -> dict[str, Holiday]:
        return dict(self._holidays)

    def get_identifiers(self) -> list[str]:
        return list(self._holidays)

    def count(self) -> int:
        return len(self._holidays)

    def has(self, identifier: str) -> bool:
        return identifier in self._holidays

    def get(self, identifier: str) -> Holiday | None:
        return self._holidays.get(identifier)

    # Mutation

    def add(self, holiday: Holiday) -> "HolidayCollection":
        """Insert holiday, replacing any holiday with the same identifier."""
        if not isinstance(holiday, Holiday):
            raise TypeMismatchError(
                f"Can not add {type(holiday).__name__} to a HolidayCollection, expected Holiday"
            )
        self._holidays[holiday.identifier] = holiday
        return self

    def add_range(self, *holidays: Holiday) -> "HolidayCollection":
        for holiday in holidays:
            self.add(holiday)
        return self

    def remove(self, identifier: str) -> "HolidayCollection":
        self._holidays.pop(identifier, None)
        return self

    def set_regions(self, regions: Iterable[str]) -> "HolidayCollection":
        """Replace the region registry. Existing region masks are not checked."""
        self._regions = list(regions)
        return self

    # Regions

    def has_regions(self) -> bool:
        return len(self._regions) > 0

    def has_region(self, region: str | int) -> bool:
        """Check a region by index (registry bounds) or by name."""
        if isinstance(region, bool):
            return False
        if isinstance(region, int):
            return 0 <= region < len(self._regions)
        return region in self._regions

    def index_of_region(self, region: str) -> int | None:
        """Return the index of the named region, or None if it is unknown."""
        try:
            return self._regions.index(region)
        except ValueError:
            return None

    def extract_region_names(self, indexes: list[int]) -> dict[int, str]:
        """Map the requested region indices to names.

        An empty list, or one starting with ALL_REGIONS (-1), selects the whole
        registry. Unknown indices are skipped.
        """
        if len(indexes) < 1 or indexes[0] == ALL_REGIONS:
            return dict(enumerate(self._regions))
        return {i: self._regions[i] for i in indexes if self.has_region(i)}

    # Date queries

    def contains_date(self, value) -> tuple[bool, str | None]:
        """Check whether the month/day of value is a holiday of this collection.

        value may be a date, datetime, pandas Timestamp or a parseable string.
        The year of value is ignored: month and day are matched against this
        collection's year. Unparseable input is simply not a holiday.
        Returns (found, identifier of the first matching holiday).
        """
        parsed = _parse_date(value)
        if parsed is None:
            return False, None
        return self._find(f"{self._year:04d}-{parsed.month:02d}-{parsed.day:02d}")

    def contains_day(self, month: int, day: int) -> tuple[bool, str | None]:
        """Check whether month/day of this collection's year is a holiday."""
        return self._find(fixed_date(self._year, month, day).isoformat())

    def _find(self, key: str) -> tuple[bool, str | None]:
        for holiday in self._holidays.values():
            if holiday.date.isoformat() == key:
                return True, holiday.identifier
        return False, None

    def starts_at(self, month: int = 1, day: int = 1) -> "HolidayCollection":
        """Return a new collection without the holidays before month/day."""
        cutoff = fixed_date(self._year, month, day)
        result = HolidayCollection(self._year, self._country_name, self._country_id)
        result.set_regions(self._regions)
        for identifier, holiday in self._holidays.items():
            if holiday.date < cutoff:
                continue
            result._holidays[identifier] = holiday
        return result


def _parse_date(value) -> date | None:
    """Parse a date-like value, returning None when it is not one."""
    if value is None or value is pd.NaT or isinstance(value, bool):
        return None
    # bare numbers would be read as epoch nanoseconds
    if isinstance(value, (int, float, np.number)):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        ts = pd.to_datetime(value, errors="coerce")
    except (TypeError, ValueError, OverflowError):
        return None
    if not isinstance(ts, pd.Timestamp) or pd.isna(ts):
        return None
    return ts.date()
