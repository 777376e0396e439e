"""CLI entry point: list countries, print a year's holidays, check a date.

Usage:
    python -m holidaycal.src.cli countries
    python -m holidaycal.src.cli list --country de --year 2025 --region Bayern
    python -m holidaycal.src.cli check 2025-12-26 --country pl
"""

import argparse
import sys
from datetime import date

from .collection import ALL_REGIONS
from .config import definitions_folder, load_config
from .definitions import list_supported_countries
from .errors import HolidayError
from .holidays import build_collection, for_region, to_frame


def _month_day(value: str) -> tuple[int, int]:
    month, day = value.split("-")
    return int(month), int(day)


def cmd_countries(args, folder) -> int:
    countries = list_supported_countries(folder)
    if not countries:
        print(f"Warning: no rule-sets found in {folder}")
        return 0
    print(f"Supported countries ({len(countries)}): {', '.join(countries)}")
    return 0


def cmd_list(args, folder) -> int:
    collection = build_collection(args.country, args.year, folder)
    if args.start:
        collection = collection.starts_at(*args.start)

    print(f"=== {collection.get_country_name()} ({collection.get_country_id()}) {collection.get_year()} ===")
    region = ALL_REGIONS if args.all_regions else args.region
    if args.all_regions:
        print("  Region: all")
    elif args.region is not None:
        print(f"  Region: {args.region}")
    else:
        print("  Region: country-wide only")

    df = to_frame(collection, region)
    if df.empty:
        print("  No holidays")
        return 0
    for row in df.itertuples(index=False):
        scope = ", ".join(row.regions) if row.regions else "all regions"
        print(f"  {row.date:%Y-%m-%d %a}  {row.name:<40} [{scope}]")
    print(f"  Total: {len(df)}")
    return 0


def cmd_check(args, folder) -> int:
    collection = build_collection(args.country, args.date.year, folder)
    matches = [h for h in for_region(collection, args.region) if h.date == args.date]
    if not matches:
        print(f"{args.date} is not a holiday in {collection.get_country_name()}")
        return 0
    for holiday in matches:
        print(f"{args.date} is {holiday.name} ({holiday.identifier})")
    return 0


def main(argv: list[str] | None = None) -> int:
    cfg = load_config()
    defaults = cfg["defaults"]

    parser = argparse.ArgumentParser(description="Public holidays by country and region")
    parser.add_argument(
        "--definitions", default=None,
        help="Folder with <country>.yaml rule-sets (default: from config.yaml)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("countries", help="List countries with holiday rules")

    p_list = sub.add_parser("list", help="Print all holidays of a year")
    p_list.add_argument("--country", default=defaults["country"], help="ISO 3166-1 alpha-2 code, lower case")
    p_list.add_argument("--year", type=int, default=date.today().year)
    p_list.add_argument("--region", default=defaults["region"], help="Region name")
    p_list.add_argument("--all-regions", action="store_true", help="Include every regional holiday")
    p_list.add_argument("--from", dest="start", type=_month_day, default=None, help="Skip holidays before MM-DD")

    p_check = sub.add_parser("check", help="Check whether a date is a holiday")
    p_check.add_argument("date", type=date.fromisoformat, help="Date (YYYY-MM-DD)")
    p_check.add_argument("--country", default=defaults["country"])
    p_check.add_argument("--region", default=defaults["region"])

    args = parser.parse_args(argv)
    folder = args.definitions or definitions_folder(cfg)

    commands = {"countries": cmd_countries, "list": cmd_list, "check": cmd_check}
    try:
        return commands[args.command](args, folder)
    except (HolidayError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
