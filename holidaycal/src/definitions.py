"""Load per-country holiday rule-sets from YAML files.

One file per country, named after its lower-case ISO 3166-1 alpha-2 code
(de.yaml, pl.yaml, ...). Layout:

    country_id: pl
    country_name: Polska
    regions: [North, South]          # optional, index = region id
    holidays:
      - id: new_year
        name: Nowy Rok
        fixed: {month: 1, day: 1}
      - id: easter_monday
        name: Poniedziałek Wielkanocny
        easter_offset: 1
      - id: mothers_day
        name: Dzień Matki
        nth_weekday: {month: 5, weekday: sunday, occurrence: 2}
        regions: [1]                 # optional, default = whole country

Files are validated up front; every problem found is reported in a single
InvalidFormatError.
"""

import re
from pathlib import Path
from typing import Any

import yaml

from .config import definitions_folder
from .errors import CountryNotFoundError, InvalidFormatError
from .rules import EasterOffset, Fixed, HolidayDefinition, NthWeekday, RuleSet

COUNTRY_ID_PATTERN = re.compile(r"^[a-z]{2}$")
SUFFIXES = (".yaml", ".yml")
KIND_KEYS = ("fixed", "easter_offset", "nth_weekday")
WEEKDAYS = {
    "monday": 0,
    "tuesday": 1,
    "wednesday": 2,
    "thursday": 3,
    "friday": 4,
    "saturday": 5,
    "sunday": 6,
}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_int(value: Any, low: int, high: int, path: str) -> list[str]:
    if not _is_int(value):
        return [f"{path}: expected integer, got {type(value).__name__}"]
    if not low <= value <= high:
        return [f"{path}: {value} out of range {low}..{high}"]
    return []


def _check_mapping(obj: Any, required: tuple[str, ...], path: str) -> list[str]:
    if not isinstance(obj, dict):
        return [f"{path}: expected mapping, got {type(obj).__name__}"]
    return [f"{path}: missing required field '{key}'" for key in required if key not in obj]


def _weekday(value: Any) -> int | None:
    if isinstance(value, str):
        return WEEKDAYS.get(value.strip().lower())
    if _is_int(value) and 0 <= value <= 6:
        return value
    return None


def _validate_kind(entry: dict, path: str) -> list[str]:
    present = [key for key in KIND_KEYS if key in entry]
    if len(present) != 1:
        return [f"{path}: needs exactly one of {', '.join(KIND_KEYS)} (got {present or 'none'})"]

    key = present[0]
    value = entry[key]
    if key == "easter_offset":
        return _check_int(value, -366, 366, f"{path}.easter_offset")

    if key == "fixed":
        errors = _check_mapping(value, ("month", "day"), f"{path}.fixed")
        if errors:
            return errors
        errors += _check_int(value["month"], 1, 12, f"{path}.fixed.month")
        errors += _check_int(value["day"], 1, 31, f"{path}.fixed.day")
        return errors

    errors = _check_mapping(value, ("month", "weekday", "occurrence"), f"{path}.nth_weekday")
    if errors:
        return errors
    errors += _check_int(value["month"], 1, 12, f"{path}.nth_weekday.month")
    if _weekday(value["weekday"]) is None:
        errors.append(f"{path}.nth_weekday.weekday: unknown weekday {value['weekday']!r}")
    errors += _check_int(value["occurrence"], -5, 5, f"{path}.nth_weekday.occurrence")
    if value["occurrence"] == 0:
        errors.append(f"{path}.nth_weekday.occurrence: must not be 0")
    return errors


def validate_rule_set(data: dict, country_id: str) -> None:
    """Check a parsed rule-set document.

    Raises:
        InvalidFormatError: listing every problem found.
    """
    errors = _check_mapping(data, ("country_id", "country_name", "holidays"), "root")
    if errors:
        raise InvalidFormatError(f"Invalid holiday definitions for country '{country_id}'", errors)

    if data["country_id"] != country_id:
        errors.append(f"country_id: '{data['country_id']}' does not match file code '{country_id}'")
    if not isinstance(data["country_name"], str) or not data["country_name"]:
        errors.append("country_name: expected non-empty string")

    regions = data.get("regions") or []
    if not isinstance(regions, list) or not all(isinstance(r, str) for r in regions):
        errors.append("regions: expected list of strings")
        regions = []

    holidays = data["holidays"]
    if not isinstance(holidays, list):
        errors.append(f"holidays: expected list, got {type(holidays).__name__}")
        holidays = []

    seen = set()
    for i, entry in enumerate(holidays):
        path = f"holidays[{i}]"
        entry_errors = _check_mapping(entry, ("id", "name"), path)
        if entry_errors:
            errors.extend(entry_errors)
            continue

        identifier = entry["id"]
        if not isinstance(identifier, str) or not identifier:
            errors.append(f"{path}.id: expected non-empty string")
        elif identifier in seen:
            errors.append(f"{path}.id: duplicate identifier '{identifier}'")
        else:
            seen.add(identifier)
        if not isinstance(entry["name"], str):
            errors.append(f"{path}.name: expected string")

        if "regions" in entry:
            mask = entry["regions"]
            if not isinstance(mask, list) or not mask:
                errors.append(f"{path}.regions: expected non-empty list of region indices")
            else:
                for j, index in enumerate(mask):
                    errors.extend(_check_int(index, 0, len(regions) - 1, f"{path}.regions[{j}]"))

        errors.extend(_validate_kind(entry, path))

    if errors:
        raise InvalidFormatError(f"Invalid holiday definitions for country '{country_id}'", errors)


def _build_kind(entry: dict) -> Fixed | EasterOffset | NthWeekday:
    if "fixed" in entry:
        return Fixed(month=entry["fixed"]["month"], day=entry["fixed"]["day"])
    if "easter_offset" in entry:
        return EasterOffset(days=entry["easter_offset"])
    rule = entry["nth_weekday"]
    return NthWeekday(
        month=rule["month"],
        weekday=_weekday(rule["weekday"]),
        occurrence=rule["occurrence"],
    )


def compile_rule_set(data: dict, country_id: str) -> RuleSet:
    """Validate a parsed document and turn it into a RuleSet."""
    validate_rule_set(data, country_id)
    definitions = [
        HolidayDefinition(
            identifier=entry["id"],
            name=entry["name"],
            kind=_build_kind(entry),
            regions=frozenset(entry["regions"]) if "regions" in entry else None,
        )
        for entry in data["holidays"]
    ]
    return RuleSet(
        country_id=data["country_id"],
        country_name=data["country_name"],
        regions=list(data.get("regions") or []),
        definitions=definitions,
    )


def _find_source(country_id: str, folder: Path) -> Path | None:
    for suffix in SUFFIXES:
        path = folder / f"{country_id}{suffix}"
        if path.is_file():
            return path
    return None


def load_rule_set(country_id: str, folder: Path | str | None = None) -> RuleSet:
    """Load the holiday rule-set of a country.

    Args:
        country_id: lower-case ISO 3166-1 alpha-2 code, e.g. 'de'.
        folder: folder holding <country_id>.yaml. Defaults to
            the folder from config.yaml (built-in data when unset).

    Raises:
        CountryNotFoundError: no rule-set file for country_id.
        InvalidFormatError: the file is not valid YAML or not a valid rule-set.
    """
    folder = definitions_folder() if folder is None else Path(folder)

    path = _find_source(country_id, folder) if COUNTRY_ID_PATTERN.fullmatch(country_id) else None
    if path is None:
        raise CountryNotFoundError(
            f"Can not get holidays for country '{country_id}': no rule-set in {folder}"
        )

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (yaml.YAMLError, UnicodeDecodeError) as e:
        raise InvalidFormatError(f"Invalid YAML in holiday definitions file {path}: {e}") from e

    if not isinstance(data, dict):
        raise InvalidFormatError(f"Holiday definitions file {path} must contain a YAML mapping")

    return compile_rule_set(data, country_id)


def list_supported_countries(folder: Path | str | None = None) -> list[str]:
    """Return the sorted country codes that have a rule-set file in the folder."""
    folder = definitions_folder() if folder is None else Path(folder)
    if not folder.is_dir():
        return []

    country_ids = set()
    for path in folder.iterdir():
        if not path.is_file() or path.suffix not in SUFFIXES:
            continue
        if COUNTRY_ID_PATTERN.fullmatch(path.stem):
            country_ids.add(path.stem)
    return sorted(country_ids)
