# src/plethon/core/config.py
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

DATA_DIR_ENV = "PLETHON_DATA_DIR"
DEBUG_BUILD_ENV = "PLETHON_DEBUG_BUILD"

DEFAULT_DATA_DIR = Path(__file__).resolve().parents[1] / "data"


def env_truthy(name: str) -> bool:
    v = os.environ.get(name, "")
    return v.strip().lower() in ("1", "true", "yes", "y", "on")


@dataclass(frozen=True)
class TableConfig:
    """
    One fixed-column text table.

    offsets are the column-start character positions; a field ends where
    the next one starts (or at the end of the line).
    """
    filename: str
    offsets: Tuple[int, ...]


@dataclass(frozen=True)
class CalendarConfig:
    """
    Build configuration for the Plethonian calendar.

    All timestamps in the tables are UTC; the raw rows omit the zone, so
    zone_suffix is appended before parsing.
    """
    lunar_table: TableConfig = field(
        default_factory=lambda: TableConfig("lunar-phases.txt", (0, 24, 42, 58, 69))
    )
    solstice_table: TableConfig = field(
        default_factory=lambda: TableConfig("solstices-equinoxes.txt", (1, 11, 29, 47, 65))
    )

    # None => PLETHON_DATA_DIR, then the packaged data directory
    data_dir: Optional[Path] = None

    zone_suffix: str = "GMT"

    # Supported Gregorian years (inclusive)
    min_year: int = 2001
    max_year: int = 2100

    # A year longer than this has 13 months
    intercalary_threshold_days: int = 360

    def resolve_data_dir(self) -> Path:
        if self.data_dir is not None:
            return Path(self.data_dir).expanduser()
        raw = os.environ.get(DATA_DIR_ENV, "").strip()
        if raw:
            return Path(raw).expanduser()
        return DEFAULT_DATA_DIR

    def table_path(self, table: TableConfig) -> Path:
        return self.resolve_data_dir() / table.filename
