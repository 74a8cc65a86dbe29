# src/plethon/core/calendar.py
from __future__ import annotations

import logging
import threading
from datetime import date, datetime
from functools import lru_cache
from typing import Dict, Optional, Sequence, Tuple

from .builder import CalendarBuilder, validate_years
from .config import CalendarConfig
from .errors import DateRangeError, NotFoundError
from .lookup import FloorIndex
from .model import Day, Month, Year

log = logging.getLogger("plethon.core.calendar")


class PlethonianCalendar:
    """
    Immutable, queryable Plethonian calendar.

    All three queries are ordered floor lookups by Gregorian date:
    year -> month within that year -> day within that month.
    """

    def __init__(self, years: Sequence[Year], *, min_year: int = 2001, max_year: int = 2100) -> None:
        validate_years(years)
        self._years: Tuple[Year, ...] = tuple(years)
        self.min_year = int(min_year)
        self.max_year = int(max_year)

        self._year_index: FloorIndex[Year] = FloorIndex.of(self._years, "year")
        self._month_index: Dict[date, FloorIndex[Month]] = {
            y.first_day: FloorIndex.of(y.months, "month") for y in self._years
        }
        self._day_index: Dict[date, FloorIndex[Day]] = {
            m.first_day: FloorIndex.of(m.days, "day") for y in self._years for m in y.months
        }

    @classmethod
    def from_config(cls, config: Optional[CalendarConfig] = None) -> "PlethonianCalendar":
        cfg = config or CalendarConfig()
        years = CalendarBuilder(cfg).build()
        return cls(years, min_year=cfg.min_year, max_year=cfg.max_year)

    @property
    def years(self) -> Tuple[Year, ...]:
        return self._years

    @property
    def first_day(self) -> date:
        return self._years[0].first_day

    @property
    def last_day(self) -> date:
        return self._years[-1].last_day

    @staticmethod
    def _as_date(d: date) -> date:
        # datetime is a date subclass but does not compare with date keys
        if isinstance(d, datetime):
            return d.date()
        return d

    def _check_range(self, d: date) -> None:
        if d.year < self.min_year or d.year > self.max_year:
            raise DateRangeError(f"The year {d.year} is not in the valid range")

    def get_year(self, d: date) -> Year:
        """
        Plethonian year containing the Gregorian date d.

        Raises
        ------
        DateRangeError
            If d.year is outside [min_year, max_year].
        NotFoundError
            If no built year contains d.
        """
        d = self._as_date(d)
        self._check_range(d)
        year = self._year_index.floor(d)
        if d > year.last_day:
            raise NotFoundError(f"Cannot find a Plethonian year for {d.isoformat()}")
        return year

    def get_month(self, d: date) -> Month:
        d = self._as_date(d)
        year = self.get_year(d)
        return self._month_index[year.first_day].floor(d)

    def get_day(self, d: date) -> Day:
        d = self._as_date(d)
        month = self.get_month(d)
        return self._day_index[month.first_day].floor(d)


_default_lock = threading.Lock()


@lru_cache(maxsize=1)
def _build_default_calendar() -> PlethonianCalendar:
    log.info("building the default Plethonian calendar")
    return PlethonianCalendar.from_config()


def default_calendar() -> PlethonianCalendar:
    """
    Process-wide calendar, built once on first use.
    """
    with _default_lock:
        return _build_default_calendar()
