# src/plethon/core/timeutil.py
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

UTC = timezone.utc

_UTC_ALIASES = ("GMT", "UTC", "UT", "Z")


def require_utc(dt: datetime, name: str = "dt") -> datetime:
    """
    Ensure a datetime is timezone-aware and UTC.

    Raises
    ------
    ValueError
        If dt is naive or not UTC.
    """
    if dt.tzinfo is None:
        raise ValueError(f"{name} must be timezone-aware UTC datetime (got naive datetime)")
    off = dt.utcoffset()
    if off is None:
        raise ValueError(f"{name} has invalid tzinfo (utcoffset is None): {dt.tzinfo!r}")
    if off != timedelta(0):
        raise ValueError(f"{name} must be UTC (utcoffset=0). Got: {dt.tzinfo!r}")
    return dt


def zone_for_suffix(suffix: str) -> tzinfo:
    """
    Map the zone suffix appended to table timestamps to a tzinfo.
    """
    s = suffix.strip()
    if s.upper() in _UTC_ALIASES:
        return UTC
    try:
        return ZoneInfo(s)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown zone suffix: {suffix!r}") from e


def civil_date(dt: datetime) -> date:
    """Civil date of an event in its own zone, irrespective of time-of-day."""
    if dt.tzinfo is None:
        raise ValueError("datetime must be timezone-aware")
    return dt.date()


def days_between(a: date, b: date) -> int:
    return (b - a).days
