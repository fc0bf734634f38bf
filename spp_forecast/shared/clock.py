"""Calendar helpers working in the market's local timezone."""

from __future__ import annotations

import re
from datetime import date, datetime, time, tzinfo
from typing import Optional

_YMD_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def parse_ymd(value: Optional[str]) -> Optional[date]:
    """Parse ``YYYY-MM-DD``; returns None for anything else, including 2026-02-30."""
    if not value:
        return None
    match = _YMD_PATTERN.match(value.strip())
    if not match:
        return None
    try:
        return date(*(int(part) for part in match.groups()))
    except ValueError:
        return None


def day_start(day: date, tz: tzinfo) -> datetime:
    """Local midnight of ``day``."""
    return datetime.combine(day, time.min, tzinfo=tz)


def market_today(tz: tzinfo, now: Optional[datetime] = None) -> date:
    """Current calendar day in ``tz``."""
    current = now or datetime.now(tz)
    return current.astimezone(tz).date()
