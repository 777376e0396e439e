"""Country holidays end to end: load rules, resolve a year, query and export."""

from datetime import date
from pathlib import Path

import numpy as np
import pandas as pd

from .collection import ALL_REGIONS, HolidayCollection
from .definitions import load_rule_set
from .holiday import Holiday
from .rules import resolve


def build_collection(
    country_id: str,
    year: int,
    folder: Path | str | None = None,
) -> HolidayCollection:
    """Resolve all holidays of a country for one year into a collection."""
    rule_set = load_rule_set(country_id, folder)
    collection = HolidayCollection(year, rule_set.country_name, rule_set.country_id)
    collection.set_regions(rule_set.regions)
    collection.add_range(*resolve(rule_set, year))
    return collection


def _region_index(collection: HolidayCollection, region: str | int | None) -> int | None:
    """Turn a region name or index into an index."""
    if region is None or region == ALL_REGIONS:
        return region
    if isinstance(region, int) and not isinstance(region, bool):
        if not collection.has_region(region):
            raise ValueError(f"Unknown region index {region} for country '{collection.get_country_id()}'")
        return region
    index = collection.index_of_region(region)
    if index is None:
        raise ValueError(
            f"Unknown region '{region}' for country '{collection.get_country_id()}'. "
            f"Available: {collection.get_regions()}"
        )
    return index


def _observed_in(holiday: Holiday, region_index: int | None) -> bool:
    if holiday.regions is None or region_index == ALL_REGIONS:
        return True
    return region_index is not None and region_index in holiday.regions


def for_region(collection: HolidayCollection, region: str | int | None) -> list[Holiday]:
    """Holidays observed in region, by name or index.

    Every function taking a region reads it the same way:
    None selects the holidays observed country-wide only, ALL_REGIONS (-1)
    selects every holiday whatever its region mask.
    """
    index = _region_index(collection, region)
    return [h for h in collection if _observed_in(h, index)]


def is_holiday(
    day: date,
    country_id: str,
    region: str | int | None = None,
    folder: Path | str | None = None,
) -> bool:
    """Check if a date is a public holiday in a country (and region)."""
    collection = build_collection(country_id, day.year, folder)
    return any(h.date == day for h in for_region(collection, region))


def to_frame(collection: HolidayCollection, region: str | int | None = ALL_REGIONS) -> pd.DataFrame:
    """Export holidays as a DataFrame sorted by date.

    Columns: identifier, name, date (datetime64), regions (list of names,
    empty for country-wide holidays). Rows are selected as in for_region;
    the default lists every holiday.
    """
    holidays = for_region(collection, region)
    rows = [
        {
            "identifier": h.identifier,
            "name": h.name,
            "date": pd.Timestamp(h.date),
            "regions": []
            if h.regions is None
            else list(collection.extract_region_names(sorted(h.regions)).values()),
        }
        for h in holidays
    ]
    if not rows:
        return pd.DataFrame(columns=["identifier", "name", "date", "regions"])

    df = pd.DataFrame(rows)
    return df.sort_values("date", kind="stable").reset_index(drop=True)


def holiday_flags(
    timestamps: pd.DatetimeIndex,
    country_id: str,
    region: str | int | None = None,
    folder: Path | str | None = None,
) -> pd.Series:
    """Return a 0/1 is_holiday feature for each timestamp.

    Timestamps are compared by their calendar date as given (convert to local
    time first for tz-aware data).
    """
    days = pd.DatetimeIndex(timestamps).normalize()
    if days.tz is not None:
        days = days.tz_localize(None)

    holiday_days = []
    for year in sorted(set(days.year)):
        collection = build_collection(country_id, int(year), folder)
        holiday_days.extend(pd.Timestamp(h.date) for h in for_region(collection, region))

    flags = np.where(days.isin(holiday_days), 1, 0)
    return pd.Series(flags, index=timestamps, name="is_holiday")
