from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from plethon.core.builder import parse_lunar_rows, parse_solstice_rows
from plethon.core.config import CalendarConfig
from plethon.core.errors import DataFormatError, FormatError
from plethon.core.records import (
    LunarMonthRecord,
    SolsticeRecord,
    parse_lunar_month,
    parse_solstice,
    parse_table_datetime,
)
from plethon.core.table import read_table

UTC = timezone.utc

ROW_OK5 = ["2001 Jan 24  13:07", "29d 19h 14m", "+07h 01m", "177.9°", "longest"]
ROW_OK4 = ["2001 Jan 24  13:07", "29d 19h 14m", "+07h 01m", "177.9°"]
ROW_ERR_NEW_MOON = ["2001XX", "29d 19h 14m", "+07h 01m", "177.9°", "longest"]
ROW_ERR_MONTH_LENGTH = ["2001 Jan 24  13:07", "XXX", "+07h 01m", "177.9°"]
ROW_ERR_DIFF_FROM_MEAN = ["2001 Jan 24  13:07", "29d 19h 14m", "XXX", "177.9°"]
ROW_ERR_MOON_ANOMALY = ["2001 Jan 24  13:07", "29d 19h 14m", "+07h 01m", "XXX"]

SOL_OK = ["2001", "Mar 20  13:31", "Jun 21  07:38", "Sep 22  23:05", "Dec 21  19:22"]
SOL_ERR_YEAR = ["XXX", "Mar 20  13:31", "Jun 21  07:38", "Sep 22  23:05", "Dec 21  19:22"]
SOL_ERR_FORMAT = ["2001", "Mar 20  13:31", "Jun 21  07:38", "Sep 22  23:05", "Dec 21  19:XX"]


def test_lunar_month_fields():
    r = LunarMonthRecord.from_fields(ROW_OK5)
    assert r.new_moon == datetime(2001, 1, 24, 13, 7, tzinfo=UTC)
    assert r.new_moon.utcoffset() == timedelta(0)
    assert r.month_length == timedelta(days=29, hours=19, minutes=14)
    assert r.diff_from_mean == timedelta(hours=7, minutes=1)
    assert r.anomaly == pytest.approx(177.9)
    assert r.annotation == "longest"


def test_lunar_month_without_annotation():
    r = LunarMonthRecord.from_fields(ROW_OK4)
    assert r.annotation is None
    assert r.new_moon == datetime(2001, 1, 24, 13, 7, tzinfo=UTC)


def test_lunar_month_negative_diff():
    r = LunarMonthRecord.from_fields(["2003 Jun 29  18:39", "29d 12h 14m", "-00h 30m", "231.7°"])
    assert r.diff_from_mean == timedelta(minutes=-30)


@pytest.mark.parametrize(
    "row,raw",
    [
        (ROW_ERR_NEW_MOON, "2001XX"),
        (ROW_ERR_MONTH_LENGTH, "XXX"),
        (ROW_ERR_DIFF_FROM_MEAN, "XXX"),
        (ROW_ERR_MOON_ANOMALY, "XXX"),
    ],
)
def test_lunar_month_bad_field(row, raw):
    res = parse_lunar_month(row)
    assert isinstance(res, FormatError)
    assert res.raw == raw

    with pytest.raises(DataFormatError) as ei:
        LunarMonthRecord.from_fields(row)
    assert ei.value.raw == raw


@pytest.mark.parametrize("n", [0, 3, 6])
def test_lunar_month_wrong_field_count(n):
    row = (ROW_OK5 + ["extra"])[:n]
    res = parse_lunar_month(row)
    assert isinstance(res, FormatError)
    assert "row size" in res.reason


def test_solstice_record():
    r = SolsticeRecord.from_fields(SOL_OK)
    assert r.winter_solstice == datetime(2001, 12, 21, 19, 22, tzinfo=UTC)
    assert r.year == 2001


def test_solstice_year_taken_from_first_four_chars():
    r = SolsticeRecord.from_fields(["2001 extra"] + SOL_OK[1:])
    assert r.winter_solstice == datetime(2001, 12, 21, 19, 22, tzinfo=UTC)


@pytest.mark.parametrize("row", [SOL_ERR_YEAR, SOL_ERR_FORMAT, SOL_OK[:4], []])
def test_solstice_bad_rows(row):
    assert isinstance(parse_solstice(row), FormatError)
    with pytest.raises(DataFormatError):
        SolsticeRecord.from_fields(row)


def test_datetime_rejects_impossible_dates():
    assert isinstance(parse_table_datetime("2003 Feb 30  10:00 GMT"), FormatError)
    assert isinstance(parse_table_datetime("2003 Foo 10  10:00 GMT"), FormatError)
    assert isinstance(parse_table_datetime("2003 Feb 10  10:00 Nowhere/Zone"), FormatError)


def test_datetime_zone_suffix():
    dt = parse_table_datetime("2003 Feb 10  10:00 UTC")
    assert dt == datetime(2003, 2, 10, 10, 0, tzinfo=UTC)


def test_bad_rows_are_isolated():
    rows = [ROW_OK5, ROW_ERR_MONTH_LENGTH, ["2001 Feb 23  08:21", "29d 17h 03m", "+04h 19m", "203.0°"], []]
    parsed = parse_lunar_rows(rows)
    assert [r.new_moon.month for r in parsed.records] == [1, 2]
    assert len(parsed.rejected) == 2
    assert parsed.rejected[0].raw == "XXX"

    parsed = parse_solstice_rows([SOL_ERR_YEAR, SOL_OK, SOL_ERR_FORMAT])
    assert [r.year for r in parsed.records] == [2001]
    assert len(parsed.rejected) == 2


def test_packaged_table_row_matches_published_values():
    cfg = CalendarConfig()
    rows = read_table(cfg.table_path(cfg.lunar_table), cfg.lunar_table.offsets)
    records = {r.new_moon: r for r in parse_lunar_rows(rows).records}

    r = records[datetime(2001, 1, 24, 13, 7, tzinfo=UTC)]
    assert r.month_length == timedelta(days=29, hours=19, minutes=14)
    assert r.diff_from_mean == timedelta(hours=7, minutes=1)
    assert r.anomaly == pytest.approx(177.9)
    assert r.annotation == "longest"

    assert datetime(2001, 12, 14, 20, 47, tzinfo=UTC) in records


def test_packaged_solstice_row():
    cfg = CalendarConfig()
    rows = read_table(cfg.table_path(cfg.solstice_table), cfg.solstice_table.offsets)
    assert SOL_OK in rows
    years = {r.year: r.winter_solstice for r in parse_solstice_rows(rows).records}
    assert years[2001] == datetime(2001, 12, 21, 19, 22, tzinfo=UTC)
