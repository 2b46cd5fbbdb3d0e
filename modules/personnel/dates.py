# modules/personnel/dates.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

import pandas as pd

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# ค่าที่ฝั่ง API ใช้แทน "ไม่มีวันที่"
_NULL_DATES = {"", "0000-00-00", "null", "none", "undefined"}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_date(value) -> Optional[datetime]:
    """
    Lenient date parsing for record fields and filter bounds.

    Naive values are read as UTC so every comparison is between aware
    datetimes. Anything pandas cannot parse gives None, never an exception.
    """
    if value is None:
        return None
    if isinstance(value, str) and value.strip().lower() in _NULL_DATES:
        return None
    try:
        ts = pd.to_datetime(value.strip() if isinstance(value, str) else value,
                            errors="coerce", utc=True)
    except (TypeError, ValueError, OverflowError):
        return None
    if ts is None or pd.isna(ts):
        return None
    return ts.to_pydatetime()


def is_provided(value) -> bool:
    return value is not None and str(value).strip() != ""


def in_range(value, start=None, end=None) -> bool:
    """
    Closed-interval test: start <= value <= end.
    - absent bound = เปิดด้านนั้น
    - value parse ไม่ได้ -> False
    - bound ที่ส่งมาแต่ parse ไม่ได้ -> False (fail closed)
    """
    d = parse_date(value)
    if d is None:
        return False
    if is_provided(start):
        f = parse_date(start)
        if f is None or d < f:
            return False
    if is_provided(end):
        t = parse_date(end)
        if t is None or d > t:
            return False
    return True
