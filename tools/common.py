from __future__ import annotations

import argparse
import json
import os
import sys
from dataclasses import dataclass
from datetime import date, timedelta
from pathlib import Path
from typing import Iterable, Optional, Tuple

from plethon.core.config import CalendarConfig, DATA_DIR_ENV


@dataclass(frozen=True)
class DataDirConfig:
    path: Optional[Path]
    skip_reason: Optional[str]


def add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--date", help="YYYY-MM-DD")
    parser.add_argument("--start", help="YYYY-MM-DD")
    parser.add_argument("--end", help="YYYY-MM-DD")
    parser.add_argument("--data-dir", default="")
    parser.add_argument("--json", action="store_true")
    parser.add_argument("--verbose", action="store_true")


def parse_date(s: str) -> date:
    return date.fromisoformat(s)


def iter_dates(start: date, end: date) -> Iterable[date]:
    cur = start
    while cur <= end:
        yield cur
        cur = cur + timedelta(days=1)


def resolve_data_dir(path_arg: str) -> DataDirConfig:
    path_raw = (path_arg or "").strip() or os.environ.get(DATA_DIR_ENV, "").strip()
    if not path_raw:
        return DataDirConfig(path=None, skip_reason=None)

    p = Path(path_raw).expanduser()
    if p.is_dir():
        return DataDirConfig(path=p, skip_reason=None)
    return DataDirConfig(path=None, skip_reason=f"data dir not found: {p}")


def calendar_config(data: DataDirConfig) -> CalendarConfig:
    return CalendarConfig(data_dir=data.path)


def resolve_date_range(args: argparse.Namespace) -> Tuple[Optional[date], Optional[date]]:
    if args.start and args.end:
        return parse_date(args.start), parse_date(args.end)
    if args.date:
        d = parse_date(args.date)
        return d, d
    return None, None


def dump_json(obj: object) -> None:
    print(json.dumps(obj, ensure_ascii=False, indent=2))


def skip(msg: str) -> None:
    print(f"SKIP: {msg}")
    sys.exit(0)
