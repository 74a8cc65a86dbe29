# src/plethon/features/month_grid.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from plethon.core.festivity import Week
from plethon.core.model import Day, Month


@dataclass(frozen=True)
class WeekRow:
    week: Week
    days: Tuple[Day, ...]


def month_grid(month: Month) -> List[WeekRow]:
    """
    Days of a month grouped by week, one row per Week (the fifth row
    holds day 29 and, in full months, day 30).
    """
    rows: Dict[Week, List[Day]] = {w: [] for w in Week}
    for d in month.days:
        rows[d.week].append(d)
    return [WeekRow(week=w, days=tuple(rows[w])) for w in Week]
