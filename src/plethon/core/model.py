# src/plethon/core/model.py
from __future__ import annotations

"""
Year / Month / Day hierarchy.

Identity and ordering are defined by the Gregorian date alone
(Year.first_day, Month.first_day, Day.gregorian_date). Use date_key() and
same_date() for that; the dataclasses keep default identity equality so
that two different days are never merged by accident.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, Tuple, Union

from .festivity import Festivity, MonthName, Week


@dataclass(frozen=True, eq=False)
class Day:
    day_of_month: int
    day_of_year: int
    month: MonthName
    week: Week
    gregorian_date: date
    festivity: Optional[Festivity]
    label: str
    remembrance: bool = False

    @property
    def is_consecrated(self) -> bool:
        return self.festivity is not None and self.festivity.consecrated

    def __repr__(self) -> str:
        return (
            f"Day({self.gregorian_date.isoformat()} "
            f"m={int(self.month)} d={self.day_of_month} doy={self.day_of_year})"
        )


@dataclass(frozen=True, eq=False)
class Month:
    month: MonthName
    first_day: date
    days: Tuple[Day, ...]

    @property
    def length(self) -> int:
        return len(self.days)

    @property
    def last_day(self) -> date:
        return self.first_day + timedelta(days=len(self.days) - 1)

    def __repr__(self) -> str:
        return f"Month({int(self.month)} first_day={self.first_day.isoformat()} days={self.length})"


@dataclass(frozen=True, eq=False)
class Year:
    first_day: date
    days: int
    months: Tuple[Month, ...]

    @property
    def last_day(self) -> date:
        return self.first_day + timedelta(days=self.days - 1)

    @property
    def month_count(self) -> int:
        return len(self.months)

    @property
    def is_intercalary(self) -> bool:
        return len(self.months) == 13

    def __repr__(self) -> str:
        return f"Year(first_day={self.first_day.isoformat()} days={self.days} months={self.month_count})"


Dated = Union[Year, Month, Day]


def date_key(x: Dated) -> date:
    """The Gregorian date that identifies a Year, Month or Day."""
    if isinstance(x, Day):
        return x.gregorian_date
    return x.first_day


def same_date(a: Dated, b: Dated) -> bool:
    """Equality by date identity; other attributes are ignored."""
    return type(a) is type(b) and date_key(a) == date_key(b)
