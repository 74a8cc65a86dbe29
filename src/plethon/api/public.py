from __future__ import annotations

import logging
import time
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field

from plethon.core.calendar import PlethonianCalendar, default_calendar
from plethon.core.errors import DateRangeError, NotFoundError
from plethon.core.model import Day, Month, Year
from plethon.features.config import (
    festivity_display_name,
    month_display_name,
    week_display_name,
)
from plethon.features.month_grid import month_grid

router = APIRouter(prefix="/api/v1", tags=["public"])

log = logging.getLogger("plethon.api.public")


# ============================================================
# Response Models
# ============================================================
class FestivityInfo(BaseModel):
    key: str
    name: str
    consecrated: bool


class DayResponse(BaseModel):
    gregorian_date: date
    day_of_month: int
    day_of_year: int
    month: int
    month_name: str
    week: int
    week_name: str
    label: str
    festivity: Optional[FestivityInfo] = None
    remembrance: bool = Field(default=False, description="remembrance day of the year")


class MonthResponse(BaseModel):
    month: int
    month_name: str
    first_day: date
    last_day: date
    length: int
    weeks: List[List[DayResponse]] = Field(default_factory=list, description="days grouped by week")


class MonthSummary(BaseModel):
    month: int
    month_name: str
    first_day: date
    length: int


class YearResponse(BaseModel):
    first_day: date
    last_day: date
    days: int
    month_count: int
    intercalary: bool
    months: List[MonthSummary]


# ============================================================
# Model builders
# ============================================================
def _day_response(d: Day) -> DayResponse:
    festivity = None
    if d.festivity is not None:
        festivity = FestivityInfo(
            key=d.festivity.name,
            name=festivity_display_name(d.festivity),
            consecrated=d.festivity.consecrated,
        )
    return DayResponse(
        gregorian_date=d.gregorian_date,
        day_of_month=d.day_of_month,
        day_of_year=d.day_of_year,
        month=int(d.month),
        month_name=month_display_name(int(d.month)),
        week=int(d.week),
        week_name=week_display_name(int(d.week)),
        label=d.label,
        festivity=festivity,
        remembrance=d.remembrance,
    )


def _month_response(m: Month) -> MonthResponse:
    return MonthResponse(
        month=int(m.month),
        month_name=month_display_name(int(m.month)),
        first_day=m.first_day,
        last_day=m.last_day,
        length=m.length,
        weeks=[[_day_response(d) for d in row.days] for row in month_grid(m)],
    )


def _year_response(y: Year) -> YearResponse:
    return YearResponse(
        first_day=y.first_day,
        last_day=y.last_day,
        days=y.days,
        month_count=y.month_count,
        intercalary=y.is_intercalary,
        months=[
            MonthSummary(
                month=int(m.month),
                month_name=month_display_name(int(m.month)),
                first_day=m.first_day,
                length=m.length,
            )
            for m in y.months
        ],
    )


# ============================================================
# Helpers: parsing & calendar
# ============================================================
def _parse_iso_date(s: str) -> date:
    try:
        return date.fromisoformat(s)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=f"Invalid date format: {s} (expected YYYY-MM-DD)") from e


def _parse_date_any(x: str | date) -> date:
    if isinstance(x, datetime):
        return x.date()
    if isinstance(x, date):
        return x
    return _parse_iso_date(str(x))


def _calendar(calendar: Optional[PlethonianCalendar]) -> PlethonianCalendar:
    return calendar if calendar is not None else default_calendar()


def _meta(cal: PlethonianCalendar) -> Dict[str, Any]:
    return {
        "supported_years": [cal.min_year, cal.max_year],
        "first_day": cal.first_day.isoformat(),
        "last_day": cal.last_day.isoformat(),
    }


# =========================================================
# Public JSON API (function-style, HTTP-ready)
# =========================================================
def get_calendar_day(date_: str | date, *, calendar: Optional[PlethonianCalendar] = None) -> dict:
    cal = _calendar(calendar)
    d = _parse_date_any(date_)
    day = cal.get_day(d)
    return {
        "meta": _meta(cal),
        "date": d.isoformat(),
        "day": _day_response(day).model_dump(mode="json"),
    }


def get_calendar_month(date_: str | date, *, calendar: Optional[PlethonianCalendar] = None) -> dict:
    cal = _calendar(calendar)
    d = _parse_date_any(date_)
    month = cal.get_month(d)
    return {
        "meta": _meta(cal),
        "date": d.isoformat(),
        "month": _month_response(month).model_dump(mode="json"),
    }


def get_calendar_year(date_: str | date, *, calendar: Optional[PlethonianCalendar] = None) -> dict:
    cal = _calendar(calendar)
    d = _parse_date_any(date_)
    year = cal.get_year(d)
    return {
        "meta": _meta(cal),
        "date": d.isoformat(),
        "year": _year_response(year).model_dump(mode="json"),
    }


def _http_error(e: Exception) -> HTTPException:
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=404, detail=str(e))
    return HTTPException(status_code=422, detail=str(e))


# ============================================================
# Endpoints
# ============================================================
@router.get("/day", response_model=DayResponse)
def get_day(
    date_str: str = Query(..., alias="date", description="YYYY-MM-DD"),
) -> DayResponse:
    d = _parse_iso_date(date_str)
    try:
        day = default_calendar().get_day(d)
    except (DateRangeError, NotFoundError) as e:
        raise _http_error(e) from e
    return _day_response(day)


@router.get("/month", response_model=MonthResponse)
def get_month(
    date_str: str = Query(..., alias="date", description="YYYY-MM-DD"),
) -> MonthResponse:
    d = _parse_iso_date(date_str)
    try:
        month = default_calendar().get_month(d)
    except (DateRangeError, NotFoundError) as e:
        raise _http_error(e) from e
    return _month_response(month)


@router.get("/year", response_model=YearResponse)
def get_year(
    date_str: str = Query(..., alias="date", description="YYYY-MM-DD"),
    timing: bool = Query(False, description="log timing"),
) -> YearResponse:
    d = _parse_iso_date(date_str)

    t0 = time.perf_counter()
    try:
        year = default_calendar().get_year(d)
    except (DateRangeError, NotFoundError) as e:
        raise _http_error(e) from e
    t1 = time.perf_counter()
    out = _year_response(year)
    t2 = time.perf_counter()

    if timing:
        log.warning("timing /year date=%s lookup=%.3fs render=%.3fs total=%.3fs", d, t1 - t0, t2 - t1, t2 - t0)

    return out
