from __future__ import annotations

"""
Plethonian year layout check script.

Prints, per Plethonian year, its first day, length and month lengths.
"""

import argparse
from typing import List, Optional

from plethon.core.calendar import PlethonianCalendar

from tools.common import calendar_config, dump_json, resolve_data_dir, skip


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Plethonian year layout check")
    parser.add_argument("--from-year", type=int, default=None, help="first Gregorian year to list")
    parser.add_argument("--to-year", type=int, default=None, help="last Gregorian year to list")
    parser.add_argument("--data-dir", default="")
    parser.add_argument("--json", action="store_true")
    args = parser.parse_args(argv)

    data = resolve_data_dir(args.data_dir)
    if data.skip_reason:
        skip(data.skip_reason)

    cal = PlethonianCalendar.from_config(calendar_config(data))

    rows = []
    for y in cal.years:
        if args.from_year is not None and y.first_day.year < args.from_year:
            continue
        if args.to_year is not None and y.first_day.year > args.to_year:
            continue
        lengths = [m.length for m in y.months]
        if args.json:
            rows.append(
                {
                    "first_day": y.first_day.isoformat(),
                    "last_day": y.last_day.isoformat(),
                    "days": y.days,
                    "months": lengths,
                    "intercalary": y.is_intercalary,
                }
            )
        else:
            mark = " *" if y.is_intercalary else ""
            print(f"{y.first_day.isoformat()}..{y.last_day.isoformat()}  days={y.days}  months={len(lengths)}{mark}  {lengths}")

    if args.json:
        dump_json({"years": rows})
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
