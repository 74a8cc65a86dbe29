# src/plethon/core/lookup.py
from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from datetime import date
from typing import Generic, List, Sequence, TypeVar

from .errors import NotFoundError
from .model import date_key

T = TypeVar("T")


@dataclass(frozen=True)
class FloorIndex(Generic[T]):
    """
    Sorted items plus their date keys, for O(log N) floor queries.

    items must already be sorted by date key with no duplicates.
    """
    items: Sequence[T]
    keys: List[date]
    what: str = "entry"

    @classmethod
    def of(cls, items: Sequence[T], what: str = "entry") -> "FloorIndex[T]":
        keys = [date_key(x) for x in items]
        for a, b in zip(keys, keys[1:]):
            if not a < b:
                raise ValueError(f"{what} keys must be strictly increasing: {a} !< {b}")
        return cls(items=items, keys=keys, what=what)

    def floor(self, target: date) -> T:
        """
        Greatest item whose key is <= target.

        Raises
        ------
        NotFoundError
            If there are no items or target precedes the first key.
        """
        i = bisect_right(self.keys, target) - 1
        if i < 0:
            raise NotFoundError(f"Cannot find a Plethonian {self.what} for {target.isoformat()}")
        return self.items[i]
