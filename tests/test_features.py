from __future__ import annotations

from datetime import date

import pytest

from plethon.core.calendar import PlethonianCalendar
from plethon.core.errors import NotFoundError
from plethon.core.festivity import Festivity, Week
from plethon.core.lookup import FloorIndex
from plethon.features.config import (
    festivity_display_name,
    month_display_name,
    week_display_name,
)
from plethon.features.month_grid import month_grid


@pytest.fixture(scope="module")
def cal() -> PlethonianCalendar:
    return PlethonianCalendar.from_config()


def test_display_names():
    assert month_display_name(1) == "First month"
    assert month_display_name(13) == "Thirteenth month"
    assert week_display_name(5) == "Month turn"
    assert festivity_display_name(Festivity.PLUTO) == "Consecrated to Pluto"
    assert festivity_display_name(None) is None
    for f in Festivity:
        assert festivity_display_name(f)


@pytest.mark.parametrize("n", [0, 14])
def test_invalid_month_name(n):
    with pytest.raises(ValueError):
        month_display_name(n)


def test_invalid_week_name():
    with pytest.raises(ValueError):
        week_display_name(6)


def test_month_grid_full_month(cal):
    grid = month_grid(cal.get_month(date(2003, 3, 3)))
    assert [row.week for row in grid] == list(Week)
    assert [len(row.days) for row in grid] == [7, 7, 7, 7, 2]
    assert grid[4].days[-1].gregorian_date == date(2003, 3, 3)


def test_month_grid_hollow_month(cal):
    grid = month_grid(cal.get_month(date(2003, 3, 4)))
    assert [len(row.days) for row in grid] == [7, 7, 7, 7, 1]


def test_floor_index(cal):
    idx = FloorIndex.of(cal.years, "year")
    y = idx.floor(date(2003, 3, 3))
    assert y.first_day == date(2003, 1, 3)
    assert idx.floor(date(2003, 1, 3)) is y
    with pytest.raises(NotFoundError):
        idx.floor(date(1990, 1, 1))


def test_floor_index_requires_order(cal):
    with pytest.raises(ValueError):
        FloorIndex.of(list(reversed(cal.years[:3])), "year")
