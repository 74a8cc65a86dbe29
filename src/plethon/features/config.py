# src/plethon/features/config.py
from __future__ import annotations

"""
Display-oriented names for months, weeks and festivities.

Keys are the core identifiers (MonthName, Week, Festivity) so the
mapping stays stable when the catalog order changes.
"""

from typing import Dict, Optional

from plethon.core.festivity import Festivity, MonthName, Week

MONTH_DISPLAY_NAME: Dict[MonthName, str] = {
    MonthName.FIRST: "First month",
    MonthName.SECOND: "Second month",
    MonthName.THIRD: "Third month",
    MonthName.FOURTH: "Fourth month",
    MonthName.FIFTH: "Fifth month",
    MonthName.SIXTH: "Sixth month",
    MonthName.SEVENTH: "Seventh month",
    MonthName.EIGHTH: "Eighth month",
    MonthName.NINTH: "Ninth month",
    MonthName.TENTH: "Tenth month",
    MonthName.ELEVENTH: "Eleventh month",
    MonthName.TWELFTH: "Twelfth month",
    MonthName.THIRTEENTH: "Thirteenth month",
}

WEEK_DISPLAY_NAME: Dict[Week, str] = {
    Week.FIRST: "Starting period",
    Week.SECOND: "Median period",
    Week.THIRD: "Declining period",
    Week.FOURTH: "Conclusive period",
    Week.FIFTH: "Month turn",
}

FESTIVITY_DISPLAY_NAME: Dict[Festivity, str] = {
    Festivity.JUPITER: "New moon, consecrated to Jupiter",
    Festivity.FIRST_QUARTER: "First quarter",
    Festivity.FULL_MOON: "Full moon",
    Festivity.LAST_QUARTER: "Last quarter",
    Festivity.PLUTO: "Consecrated to Pluto",
    Festivity.INTROSPECTION: "Day of introspection",
    Festivity.SECOND_DAY: "Second day of the year",
    Festivity.THIRD_DAY: "Third day of the year",
    Festivity.EIGHTH_DAY_FOURTH_MONTH: "Eighth day of the fourth month",
    Festivity.HALF_SEVENTH_MONTH: "Half of the seventh month",
    Festivity.EIGHTH_FROM_END_TENTH_MONTH: "Eighth day from the end of the tenth month",
}


def month_display_name(month_no: int) -> str:
    try:
        return MONTH_DISPLAY_NAME[MonthName(int(month_no))]
    except ValueError as e:
        raise ValueError(f"invalid Plethonian month_no: {month_no}") from e


def week_display_name(week_no: int) -> str:
    try:
        return WEEK_DISPLAY_NAME[Week(int(week_no))]
    except ValueError as e:
        raise ValueError(f"invalid Plethonian week_no: {week_no}") from e


def festivity_display_name(f: Optional[Festivity]) -> Optional[str]:
    if f is None:
        return None
    return FESTIVITY_DISPLAY_NAME[f]
