# src/plethon/core/records.py
from __future__ import annotations

"""
Typed records for the two astronomical tables.

- lunar-phases: one row per new moon
    new moon (UT)        "yyyy MMM dd  HH:mm"
    synodic month        "DDd HHh MMm"
    diff from mean       "(+|-)HHh MMm"
    moon anomaly         "ddd.d°"
    notes (optional)
- solstices-equinoxes: one row per Gregorian year; only the December
  solstice (field 4, "MMM dd  HH:mm") is kept.

Parsers return either a record or a FormatError carrying the raw text.
A failure only invalidates its own row.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from typing import Dict, Optional, Sequence, Union

from .errors import FormatError
from .timeutil import UTC, zone_for_suffix

MONTH_ABBR: Dict[str, int] = {
    "Jan": 1, "Feb": 2, "Mar": 3, "Apr": 4, "May": 5, "Jun": 6,
    "Jul": 7, "Aug": 8, "Sep": 9, "Oct": 10, "Nov": 11, "Dec": 12,
}

# "2001 Jan 24  13:07 GMT"
_DATETIME_RE = re.compile(r"(\d{4})\s(\w{3})\s(\d{2})\s\s(\d{2}):(\d{2})\s(\S+)")
_MONTH_LENGTH_RE = re.compile(r"(\d{2})d\s(\d{2})h\s(\d{2})m")
_DIFF_FROM_MEAN_RE = re.compile(r"([+-])(\d{2})h\s(\d{2})m")
_ANOMALY_RE = re.compile(r"(\d{1,3}\.\d)°")


def parse_table_datetime(s: str) -> Union[datetime, FormatError]:
    """
    Parse "yyyy MMM dd  HH:mm ZONE" into an aware datetime.
    """
    m = _DATETIME_RE.fullmatch(s.strip())
    if m is None:
        return FormatError(s, "Wrong date-time format")
    year, mon, day, hh, mm, zone = m.groups()
    month = MONTH_ABBR.get(mon)
    if month is None:
        return FormatError(s, "Unknown month abbreviation")
    try:
        tz: tzinfo = zone_for_suffix(zone)
        return datetime(int(year), month, int(day), int(hh), int(mm), tzinfo=tz)
    except ValueError:
        return FormatError(s, "Invalid date-time")


def parse_month_length(s: str) -> Union[timedelta, FormatError]:
    m = _MONTH_LENGTH_RE.fullmatch(s.strip())
    if m is None:
        return FormatError(s, "Wrong month length format")
    days, hours, minutes = (int(x) for x in m.groups())
    return timedelta(days=days, hours=hours, minutes=minutes)


def parse_diff_from_mean(s: str) -> Union[timedelta, FormatError]:
    m = _DIFF_FROM_MEAN_RE.fullmatch(s.strip())
    if m is None:
        return FormatError(s, "Wrong difference format")
    sign, hours, minutes = m.groups()
    total = 60 * int(hours) + int(minutes)
    return timedelta(minutes=total if sign == "+" else -total)


def parse_anomaly(s: str) -> Union[float, FormatError]:
    m = _ANOMALY_RE.fullmatch(s.strip())
    if m is None:
        return FormatError(s, "Wrong anomaly format")
    return float(m.group(1))


@dataclass(frozen=True)
class LunarMonthRecord:
    """
    One row of the lunar-phases table.

    new_moon is the authoritative key (timezone-aware UTC).
    """
    new_moon: datetime
    month_length: timedelta
    diff_from_mean: timedelta
    anomaly: float
    annotation: Optional[str] = None

    @classmethod
    def from_fields(cls, fields: Sequence[str], *, zone_suffix: str = "GMT") -> "LunarMonthRecord":
        res = parse_lunar_month(fields, zone_suffix=zone_suffix)
        if isinstance(res, FormatError):
            res.raise_()
        return res


@dataclass(frozen=True)
class SolsticeRecord:
    """December (winter) solstice of one Gregorian year."""
    winter_solstice: datetime

    @property
    def year(self) -> int:
        return self.winter_solstice.year

    @classmethod
    def from_fields(cls, fields: Sequence[str], *, zone_suffix: str = "GMT") -> "SolsticeRecord":
        res = parse_solstice(fields, zone_suffix=zone_suffix)
        if isinstance(res, FormatError):
            res.raise_()
        return res


def parse_lunar_month(
    fields: Sequence[str],
    *,
    zone_suffix: str = "GMT",
) -> Union[LunarMonthRecord, FormatError]:
    """
    Build a LunarMonthRecord from 4 or 5 fields.
    """
    if len(fields) not in (4, 5):
        return FormatError(" | ".join(fields), f"Unexpected row size: {len(fields)}")

    new_moon = parse_table_datetime(f"{fields[0]} {zone_suffix}")
    if isinstance(new_moon, FormatError):
        return FormatError(fields[0], new_moon.reason)
    length = parse_month_length(fields[1])
    if isinstance(length, FormatError):
        return length
    diff = parse_diff_from_mean(fields[2])
    if isinstance(diff, FormatError):
        return diff
    anomaly = parse_anomaly(fields[3])
    if isinstance(anomaly, FormatError):
        return anomaly

    annotation = fields[4] if len(fields) == 5 else None
    return LunarMonthRecord(
        new_moon=new_moon.astimezone(UTC),
        month_length=length,
        diff_from_mean=diff,
        anomaly=anomaly,
        annotation=annotation,
    )


def parse_solstice(
    fields: Sequence[str],
    *,
    zone_suffix: str = "GMT",
) -> Union[SolsticeRecord, FormatError]:
    """
    Build a SolsticeRecord from a 5-field solstice/equinox row.

    The year comes from the first 4 characters of field 0, the December
    solstice from field 4.
    """
    if len(fields) < 5:
        return FormatError(" | ".join(fields), "Row has missing fields")
    if len(fields[0]) < 4:
        return FormatError(fields[0], "Year is not long enough")

    raw = f"{fields[0][:4]} {fields[4].strip()}"
    ws = parse_table_datetime(f"{raw} {zone_suffix}")
    if isinstance(ws, FormatError):
        return FormatError(raw, ws.reason)
    return SolsticeRecord(winter_solstice=ws.astimezone(UTC))
