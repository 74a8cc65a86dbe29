from __future__ import annotations

"""
Plethonian calendar check script.

Uses:
- plethon.core.calendar.PlethonianCalendar.get_day
- plethon.features.config (display names)
"""

import argparse
from typing import List, Optional

from plethon.core.calendar import PlethonianCalendar
from plethon.core.errors import PlethonError
from plethon.features.config import festivity_display_name, month_display_name

from tools.common import (
    add_common_args,
    calendar_config,
    dump_json,
    iter_dates,
    resolve_data_dir,
    resolve_date_range,
    skip,
)


def _format_label(month: int, day: int) -> str:
    return f"{month:02d}/{day:02d}"


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Plethonian calendar check")
    add_common_args(parser)
    args = parser.parse_args(argv)

    start, end = resolve_date_range(args)
    if start is None or end is None:
        parser.error("--date or --start/--end required")

    data = resolve_data_dir(args.data_dir)
    if data.skip_reason:
        skip(data.skip_reason)

    cal = PlethonianCalendar.from_config(calendar_config(data))

    rows = []
    for cur in iter_dates(start, end):
        try:
            d = cal.get_day(cur)
        except PlethonError as e:
            print(f"{cur.isoformat()}  ERROR {e}")
            return 1

        month = int(d.month)
        festivity = festivity_display_name(d.festivity)

        if args.json:
            rows.append(
                {
                    "date": cur.isoformat(),
                    "month": month,
                    "day": d.day_of_month,
                    "day_of_year": d.day_of_year,
                    "week": int(d.week),
                    "label": d.label,
                    "festivity": d.festivity.name if d.festivity is not None else None,
                    "remembrance": d.remembrance,
                }
            )
        else:
            sep = "\n" if (cur != start and d.day_of_month == 1) else ""
            line = f"{sep}{cur.isoformat()}  P={_format_label(month, d.day_of_month)}  label={d.label}"
            if args.verbose:
                line += f"  month_name={month_display_name(month)} doy={d.day_of_year}"
            if festivity:
                line += f"  [{festivity}]"
            if d.remembrance:
                line += "  (remembrance)"
            print(line)

    if args.json:
        dump_json({"rows": rows})
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
