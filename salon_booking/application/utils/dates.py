from __future__ import annotations

import re
from datetime import date, datetime
from zoneinfo import ZoneInfo

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_PATTERN = re.compile(r"^([0-1][0-9]|2[0-3]):[0-5][0-9]$")


def safe_timezone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except Exception:
        return ZoneInfo("UTC")


def today_in(tz: ZoneInfo, now: datetime | None = None) -> date:
    """Calendar day in the business timezone. Naive ``now`` values are taken as already local."""
    if now is None:
        return datetime.now(tz).date()
    if now.tzinfo is None:
        return now.date()
    return now.astimezone(tz).date()


def parse_day(value: str | date | datetime) -> date:
    """
    Truncate a date-ish value to its calendar day.
    Accepts ``YYYY-MM-DD`` or an ISO datetime string such as ``2026-01-28T00:00:00.000Z``.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    head = text[:10]
    if not DATE_PATTERN.match(head) or (len(text) > 10 and text[10] not in "T "):
        raise ValueError("Invalid date format. Use YYYY-MM-DD")
    return date.fromisoformat(head)


def is_valid_time(value: str) -> bool:
    return bool(TIME_PATTERN.match(value))


def format_for_message(day: date) -> str:
    """Format like ``Wed Jan 28 2026``."""
    return f"{day.strftime('%a %b')} {day.day} {day.year}"


def day_to_storage(day: date) -> datetime:
    """MongoDB has no date type; days are stored as naive UTC midnight."""
    return datetime(day.year, day.month, day.day)
