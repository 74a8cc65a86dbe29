# src/plethon/core/table.py
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Sequence


def split_fixed_columns(line: str, offsets: Sequence[int]) -> List[str]:
    """
    Split one table line into trimmed fields at fixed column offsets.

    Each field runs from its offset to the next offset (or the end of the
    line). Parsing stops at the first offset lying at or beyond the end of
    the line, so short rows yield fewer fields instead of failing.
    """
    line = line.rstrip("\r\n")
    n = len(line)
    fields: List[str] = []
    for i, start in enumerate(offsets):
        if start >= n:
            break
        end = offsets[i + 1] if i + 1 < len(offsets) else n
        fields.append(line[start:min(end, n)].strip())
    return fields


def split_lines(lines: Iterable[str], offsets: Sequence[int]) -> List[List[str]]:
    return [split_fixed_columns(line, offsets) for line in lines]


def read_table(path: Path, offsets: Sequence[int]) -> List[List[str]]:
    """
    Read a whole fixed-column table into memory (one field list per line).
    """
    with Path(path).open("r", encoding="utf-8") as f:
        return split_lines(f, offsets)
