# src/plethon/core/festivity.py
from __future__ import annotations

"""
Festivity catalog and per-day resolution.

Two universes share one catalog:
  - monthly festivities (month == 0), keyed by day-of-month
  - yearly festivities, keyed by (month, day)

A negative day counts from the end of the month, a negative month from
the end of the year, both with a zero/negative index scheme:
  neg_day   = (day - 1) - days_in_month      # last day   -> -1
  neg_month = (month - 1) - months_in_year   # last month -> -1

Declaration order is the priority: when several festivities match, the
one declared last wins.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict, FrozenSet, List, Mapping, Optional, Tuple


class Festivity(Enum):
    # repeated monthly
    JUPITER = (0, 1, True)
    FIRST_QUARTER = (0, 8, False)
    FULL_MOON = (0, 15, False)
    LAST_QUARTER = (0, 22, False)
    PLUTO = (0, 29, True)
    INTROSPECTION = (0, -1, False)

    # repeated yearly
    SECOND_DAY = (1, 2, False)
    THIRD_DAY = (1, 3, False)
    EIGHTH_DAY_FOURTH_MONTH = (4, 8, False)
    HALF_SEVENTH_MONTH = (7, 15, False)
    EIGHTH_FROM_END_TENTH_MONTH = (10, -8, False)

    def __init__(self, month: int, day: int, consecrated: bool) -> None:
        self.month = month
        self.day = day
        self.consecrated = consecrated

    @property
    def is_monthly(self) -> bool:
        return self.month == 0

    @property
    def priority(self) -> int:
        return _PRIORITY[self]


_PRIORITY: Dict[Festivity, int] = {f: i for i, f in enumerate(Festivity)}


class MonthName(IntEnum):
    FIRST = 1
    SECOND = 2
    THIRD = 3
    FOURTH = 4
    FIFTH = 5
    SIXTH = 6
    SEVENTH = 7
    EIGHTH = 8
    NINTH = 9
    TENTH = 10
    ELEVENTH = 11
    TWELFTH = 12
    THIRTEENTH = 13


class Week(IntEnum):
    FIRST = 1
    SECOND = 2
    THIRD = 3
    FOURTH = 4
    FIFTH = 5


def week_number(day_of_month: int) -> int:
    return (day_of_month - 1) // 7 + 1


# Labels by day-of-month (index day - 1); the last entry is reserved for
# the last day of the month.
DAY_LABELS: Tuple[str, ...] = (
    "new", "2", "3", "4", "5", "6", "7", "8", "7", "6", "5", "4", "3", "2", "half",
    "2", "3", "4", "5", "6", "7", "8", "7", "6", "5", "4", "3", "2", "old", "oldnew",
)
MONTH_TURN_LABEL = DAY_LABELS[-1]

# The remembrance day is the PLUTO day of the last month of the year.
REMEMBRANCE_FESTIVITY = Festivity.PLUTO


@dataclass(frozen=True)
class Resolution:
    """Everything the resolver attaches to one day."""
    festivities: FrozenSet[Festivity]
    dominant: Optional[Festivity]
    label: str
    remembrance: bool


class FestivityResolver:
    """
    Resolve festivities and labels from a day's position.

    The lookup tables are built once per instance from the catalog.
    """

    def __init__(
        self,
        catalog: Tuple[Festivity, ...] = tuple(Festivity),
        *,
        labels: Tuple[str, ...] = DAY_LABELS,
        remembrance: Festivity = REMEMBRANCE_FESTIVITY,
    ) -> None:
        monthly: Dict[int, Festivity] = {}
        yearly: Dict[Tuple[int, int], Festivity] = {}
        for f in catalog:
            if f.is_monthly:
                monthly[f.day] = f
            else:
                yearly[(f.month, f.day)] = f
        self._monthly: Mapping[int, Festivity] = monthly
        self._yearly: Mapping[Tuple[int, int], Festivity] = yearly
        self._labels = tuple(labels)
        self._remembrance = remembrance

    def festivities(self, month: int, day: int, num_months: int, num_days: int) -> FrozenSet[Festivity]:
        """
        All festivities matching the day, looked up forward and backward.
        """
        neg_day = (day - 1) - num_days
        neg_month = (month - 1) - num_months

        found: List[Festivity] = []
        for key in (day, neg_day):
            f = self._monthly.get(key)
            if f is not None:
                found.append(f)
        for key in ((month, day), (month, neg_day), (neg_month, day), (neg_month, neg_day)):
            f = self._yearly.get(key)
            if f is not None:
                found.append(f)
        return frozenset(found)

    def dominant(self, month: int, day: int, num_months: int, num_days: int) -> Optional[Festivity]:
        return self.resolve(month, day, num_months, num_days).dominant

    def label(self, day: int, num_days: int) -> str:
        if day == num_days:
            return self._labels[-1]
        return self._labels[day - 1]

    def is_remembrance(self, month: int, day: int, num_months: int) -> bool:
        return month == num_months and day == self._remembrance.day

    def resolve(self, month: int, day: int, num_months: int, num_days: int) -> Resolution:
        found = self.festivities(month, day, num_months, num_days)
        dominant = max(found, key=lambda f: f.priority) if found else None
        return Resolution(
            festivities=found,
            dominant=dominant,
            label=self.label(day, num_days),
            remembrance=self.is_remembrance(month, day, num_months),
        )
