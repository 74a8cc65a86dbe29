# src/plethon/core/errors.py
from __future__ import annotations

from dataclasses import dataclass
from typing import NoReturn


class PlethonError(Exception):
    """Base error."""


class DataFormatError(PlethonError, ValueError):
    """A table field does not match its expected textual pattern."""

    def __init__(self, raw: str, reason: str) -> None:
        super().__init__(f"{reason}: {raw!r}")
        self.raw = raw
        self.reason = reason


class DateRangeError(PlethonError, ValueError):
    """The requested Gregorian date lies outside the supported years."""


class NotFoundError(PlethonError, LookupError):
    """A floor lookup found no candidate."""


class CalendarBuildError(PlethonError, RuntimeError):
    """The parsed tables cannot produce a complete, gap-free calendar."""


@dataclass(frozen=True)
class FormatError:
    """
    Failure value returned by the record parsers.

    raw keeps the offending text as read from the table.
    """
    raw: str
    reason: str

    def raise_(self) -> NoReturn:
        raise DataFormatError(self.raw, self.reason)

    def __str__(self) -> str:
        return f"{self.reason}: {self.raw!r}"
