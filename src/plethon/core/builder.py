# src/plethon/core/builder.py
from __future__ import annotations

import logging
import sys
from bisect import bisect_left
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Dict, Generic, Iterable, List, Optional, Sequence, Tuple, TypeVar

from .config import CalendarConfig, DEBUG_BUILD_ENV, TableConfig, env_truthy
from .errors import CalendarBuildError, FormatError
from .festivity import FestivityResolver, MonthName, Week, week_number
from .model import Day, Month, Year
from .records import LunarMonthRecord, SolsticeRecord, parse_lunar_month, parse_solstice
from .table import read_table
from .timeutil import civil_date, days_between, require_utc

log = logging.getLogger("plethon.core.builder")

MIN_MONTH_DAYS = 29
MAX_MONTH_DAYS = 30
MIN_YEAR_DAYS = 354
MAX_YEAR_DAYS = 385


def _debug_enabled() -> bool:
    return env_truthy(DEBUG_BUILD_ENV)


def _debug_print(msg: str) -> None:
    print(msg, file=sys.stderr, flush=True)


# ============================================================
# Table -> records
# ============================================================

R = TypeVar("R")


@dataclass(frozen=True)
class ParsedTable(Generic[R]):
    """Accepted records plus the rejected rows of one table."""
    records: List[R]
    rejected: List[FormatError]


def parse_lunar_rows(rows: Iterable[Sequence[str]], *, zone_suffix: str = "GMT") -> ParsedTable[LunarMonthRecord]:
    records: List[LunarMonthRecord] = []
    rejected: List[FormatError] = []
    for fields in rows:
        res = parse_lunar_month(fields, zone_suffix=zone_suffix)
        if isinstance(res, FormatError):
            log.debug("lunar row rejected: %s", res)
            rejected.append(res)
        else:
            records.append(res)
    return ParsedTable(records=records, rejected=rejected)


def parse_solstice_rows(rows: Iterable[Sequence[str]], *, zone_suffix: str = "GMT") -> ParsedTable[SolsticeRecord]:
    records: List[SolsticeRecord] = []
    rejected: List[FormatError] = []
    for fields in rows:
        res = parse_solstice(fields, zone_suffix=zone_suffix)
        if isinstance(res, FormatError):
            log.debug("solstice row rejected: %s", res)
            rejected.append(res)
        else:
            records.append(res)
    return ParsedTable(records=records, rejected=rejected)


def new_moon_map(records: Iterable[LunarMonthRecord]) -> Dict[datetime, LunarMonthRecord]:
    """Records keyed by new-moon instant, in ascending key order."""
    by_key = {require_utc(r.new_moon, "new_moon"): r for r in records}
    return {k: by_key[k] for k in sorted(by_key)}


def solstice_list(records: Iterable[SolsticeRecord]) -> List[datetime]:
    """Distinct winter-solstice instants, ascending."""
    return sorted({require_utc(r.winter_solstice, "winter_solstice") for r in records})


# ============================================================
# Timeline -> hierarchy
# ============================================================

def year_timelines(
    solstices: Sequence[datetime],
    new_moons: Sequence[datetime],
) -> List[List[datetime]]:
    """
    Month-start markers for each year.

    For each adjacent solstice pair (first, last): the new moons in
    [first, last), then the first new moon at or after `last`, which
    closes the year. Pairs with no closing moon are dropped.
    """
    moons = sorted(new_moons)
    sols = sorted(solstices)
    out: List[List[datetime]] = []
    for first, last in zip(sols, sols[1:]):
        a = bisect_left(moons, first)
        b = bisect_left(moons, last)
        if b >= len(moons):
            log.warning("no new moon at or after solstice %s; stopping", last.isoformat())
            break
        inside = moons[a:b]
        if not inside:
            raise CalendarBuildError(
                f"no new moon between solstices {first.isoformat()} and {last.isoformat()}"
            )
        out.append(inside + [moons[b]])
    return out


class CalendarBuilder:
    """
    Assemble Years -> Months -> Days from solstice and new-moon events.

    Month and year lengths come from the spacing of consecutive events;
    every event counts from the civil (UTC) date after it.
    """

    def __init__(
        self,
        config: Optional[CalendarConfig] = None,
        *,
        resolver: Optional[FestivityResolver] = None,
    ) -> None:
        self.config = config or CalendarConfig()
        self.resolver = resolver or FestivityResolver()

    # ---- inputs ----

    def _read(self, table: TableConfig) -> Tuple[Path, List[List[str]]]:
        path = self.config.table_path(table)
        try:
            return path, read_table(path, table.offsets)
        except UnicodeDecodeError as e:
            raise CalendarBuildError(f"table {path} is not valid UTF-8: {e.reason} at byte {e.start}") from e

    def read_lunar_table(self) -> Dict[datetime, LunarMonthRecord]:
        cfg = self.config
        path, rows = self._read(cfg.lunar_table)
        parsed = parse_lunar_rows(rows, zone_suffix=cfg.zone_suffix)
        log.info("lunar table %s: accepted=%d rejected=%d", path.name, len(parsed.records), len(parsed.rejected))
        return new_moon_map(parsed.records)

    def read_solstice_table(self) -> List[datetime]:
        cfg = self.config
        path, rows = self._read(cfg.solstice_table)
        parsed = parse_solstice_rows(rows, zone_suffix=cfg.zone_suffix)
        log.info("solstice table %s: accepted=%d rejected=%d", path.name, len(parsed.records), len(parsed.rejected))
        return solstice_list(parsed.records)

    # ---- construction ----

    def month_count_for(self, year_days: int) -> int:
        return 13 if year_days > self.config.intercalary_threshold_days else 12

    def build_days(
        self,
        *,
        month_no: int,
        first_day: date,
        length: int,
        first_day_of_year: int,
        num_months: int,
    ) -> Tuple[Day, ...]:
        days: List[Day] = []
        g = first_day
        for d in range(1, length + 1):
            res = self.resolver.resolve(month_no, d, num_months, length)
            days.append(
                Day(
                    day_of_month=d,
                    day_of_year=first_day_of_year + d - 1,
                    month=MonthName(month_no),
                    week=Week(week_number(d)),
                    gregorian_date=g,
                    festivity=res.dominant,
                    label=res.label,
                    remembrance=res.remembrance,
                )
            )
            g = g + timedelta(days=1)
        return tuple(days)

    def build_year(self, markers: Sequence[datetime]) -> Year:
        """
        markers: month-start new moons of the year followed by the
        closing (boundary) new moon.
        """
        if len(markers) < 2:
            raise CalendarBuildError("a year needs at least one month")

        starts = [civil_date(m) + timedelta(days=1) for m in markers]
        first_day = starts[0]
        year_days = days_between(first_day, starts[-1])
        num_months = self.month_count_for(year_days)
        if num_months != len(starts) - 1:
            raise CalendarBuildError(
                f"year {first_day.isoformat()}: {year_days} days implies {num_months} months, "
                f"timeline has {len(starts) - 1}"
            )

        months: List[Month] = []
        day_of_year = 1
        for i, (a, b) in enumerate(zip(starts, starts[1:]), start=1):
            length = days_between(a, b)
            months.append(
                Month(
                    month=MonthName(i),
                    first_day=a,
                    days=self.build_days(
                        month_no=i,
                        first_day=a,
                        length=length,
                        first_day_of_year=day_of_year,
                        num_months=num_months,
                    ),
                )
            )
            day_of_year += length

        year = Year(first_day=first_day, days=year_days, months=tuple(months))
        if _debug_enabled():
            _debug_print(
                f"[{DEBUG_BUILD_ENV}] year first_day={year.first_day.isoformat()} "
                f"days={year.days} months={year.month_count} "
                f"lengths={[m.length for m in year.months]}"
            )
        return year

    def build_years(
        self,
        solstices: Sequence[datetime],
        new_moons: Sequence[datetime],
    ) -> List[Year]:
        years = [self.build_year(markers) for markers in year_timelines(solstices, new_moons)]
        validate_years(years)
        return years

    def build(self) -> List[Year]:
        """Read both tables and build the validated list of years."""
        solstices = self.read_solstice_table()
        moons = self.read_lunar_table()
        years = self.build_years(solstices, list(moons))
        log.info(
            "built %d years: %s .. %s",
            len(years),
            years[0].first_day.isoformat(),
            years[-1].last_day.isoformat(),
        )
        return years


# ============================================================
# Validation (all-or-nothing)
# ============================================================

def validate_years(years: Sequence[Year]) -> None:
    """
    Check the hierarchy is complete and gap-free.

    Raises
    ------
    CalendarBuildError
        On the first broken invariant.
    """
    if not years:
        raise CalendarBuildError("no years could be built from the tables")

    prev: Optional[Year] = None
    for y in years:
        if prev is not None and y.first_day != prev.last_day + timedelta(days=1):
            raise CalendarBuildError(
                f"years not contiguous: {prev.last_day.isoformat()} -> {y.first_day.isoformat()}"
            )
        if y.month_count not in (12, 13):
            raise CalendarBuildError(f"year {y.first_day.isoformat()} has {y.month_count} months")
        if not (MIN_YEAR_DAYS <= y.days <= MAX_YEAR_DAYS):
            raise CalendarBuildError(f"year {y.first_day.isoformat()} has {y.days} days")
        if sum(m.length for m in y.months) != y.days:
            raise CalendarBuildError(f"year {y.first_day.isoformat()}: month lengths do not sum to {y.days}")

        expected = y.first_day
        for m in y.months:
            if m.first_day != expected:
                raise CalendarBuildError(f"month gap at {expected.isoformat()}")
            if not (MIN_MONTH_DAYS <= m.length <= MAX_MONTH_DAYS):
                raise CalendarBuildError(f"month {m.first_day.isoformat()} has {m.length} days")
            expected = m.last_day + timedelta(days=1)
        prev = y
