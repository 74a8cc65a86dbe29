from __future__ import annotations

import json

import pytest

from tools import calendar_check, year_check
from tools.common import resolve_data_dir


def test_calendar_check_json(capsys):
    assert calendar_check.main(["--date", "2003-03-03", "--json"]) == 0
    rows = json.loads(capsys.readouterr().out)["rows"]
    assert rows == [
        {
            "date": "2003-03-03",
            "month": 2,
            "day": 30,
            "day_of_year": 60,
            "week": 5,
            "label": "oldnew",
            "festivity": "INTROSPECTION",
            "remembrance": False,
        }
    ]


def test_calendar_check_text(capsys):
    assert calendar_check.main(["--start", "2003-12-22", "--end", "2003-12-24", "--verbose"]) == 0
    out = capsys.readouterr().out
    assert "2003-12-22  P=12/29" in out
    assert "(remembrance)" in out
    assert "2003-12-24  P=01/01" in out
    assert "month_name=First month" in out


def test_calendar_check_out_of_range(capsys):
    assert calendar_check.main(["--date", "2101-01-01"]) == 1
    assert "ERROR" in capsys.readouterr().out


def test_calendar_check_requires_dates():
    with pytest.raises(SystemExit):
        calendar_check.main([])


def test_year_check_json(capsys):
    assert year_check.main(["--from-year", "2003", "--to-year", "2003", "--json"]) == 0
    years = json.loads(capsys.readouterr().out)["years"]
    assert [y["first_day"] for y in years] == ["2003-01-03", "2003-12-24"]
    assert years[0]["days"] == 355
    assert years[0]["intercalary"] is False


def test_missing_data_dir_skips(tmp_path, capsys):
    missing = tmp_path / "nope"
    assert resolve_data_dir(str(missing)).skip_reason is not None
    with pytest.raises(SystemExit) as ei:
        year_check.main(["--data-dir", str(missing)])
    assert ei.value.code == 0
    assert "SKIP" in capsys.readouterr().out
