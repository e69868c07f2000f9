# src/dayflow/planner/calendar_math.py

"""
Pure calendar helpers.

Conventions used everywhere in dayflow:
- days of the week follow date.weekday(): Monday=0 ... Sunday=6;
- a "date key" is the canonical YYYY-MM-DD string, the only value used for
  grouping and equality;
- time-of-day never takes part in a comparison.
"""

from __future__ import annotations

import calendar
import re
from datetime import date, datetime, timedelta

from dateutil.relativedelta import relativedelta

DateLike = date | datetime | str

_WEEKDAYS_LONG = {
    "en": ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"),
    "ja": ("月曜日", "火曜日", "水曜日", "木曜日", "金曜日", "土曜日", "日曜日"),
}
_WEEKDAYS_SHORT = {
    "en": ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"),
    "ja": ("月", "火", "水", "木", "金", "土", "日"),
}
_MONTHS_LONG = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
_MONTHS_SHORT = tuple(m[:3] for m in _MONTHS_LONG)

SUPPORTED_LOCALES = ("en", "ja")

DATE_KEY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _locale(locale: str | None) -> str:
    loc = (locale or "en").strip().lower()
    return loc if loc in SUPPORTED_LOCALES else "en"


def as_date(value: DateLike) -> date:
    """Normalize a date, datetime or date key to a plain calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_date_key(value)


def parse_date_key(key: str) -> date:
    """Parse a YYYY-MM-DD key. Raises ValueError on anything else."""
    raw = (key or "").strip()
    if not DATE_KEY_RE.match(raw):
        raise ValueError(f"Malformed date key: {key!r}")
    return date.fromisoformat(raw)


def to_date_key(value: DateLike) -> str:
    # Local calendar day; datetimes are never shifted to UTC first.
    return as_date(value).isoformat()


def is_date_key(value: str | None) -> bool:
    if not value:
        return False
    try:
        parse_date_key(value)
    except ValueError:
        return False
    return True


def add_days(value: DateLike, n: int) -> date:
    return as_date(value) + timedelta(days=int(n))


def week_start(value: DateLike, week_start_day: int = 0) -> date:
    """
    First day of the 7-day window containing `value`.

    `week_start_day` is a weekday() number (Monday=0).
    """
    d = as_date(value)
    return d - timedelta(days=(d.weekday() - week_start_day) % 7)


def month_start(value: DateLike) -> date:
    return as_date(value).replace(day=1)


def shift_month(value: DateLike, n: int) -> date:
    return month_start(value) + relativedelta(months=int(n))


def days_in_month(value: DateLike) -> int:
    d = as_date(value)
    return calendar.monthrange(d.year, d.month)[1]


def weekday_labels(week_start_day: int = 0, locale: str | None = "en") -> list[str]:
    """Short weekday names in grid order, starting at `week_start_day`."""
    names = _WEEKDAYS_SHORT[_locale(locale)]
    return [names[(week_start_day + i) % 7] for i in range(7)]


def format_long(value: DateLike, locale: str | None = "en") -> str:
    d = as_date(value)
    loc = _locale(locale)
    weekday = _WEEKDAYS_LONG[loc][d.weekday()]
    if loc == "ja":
        return f"{d.year}年{d.month}月{d.day}日{weekday}"
    return f"{weekday}, {_MONTHS_LONG[d.month - 1]} {d.day}, {d.year}"


def format_short(value: DateLike, locale: str | None = "en") -> str:
    d = as_date(value)
    loc = _locale(locale)
    weekday = _WEEKDAYS_SHORT[loc][d.weekday()]
    if loc == "ja":
        return f"{d.month}月{d.day}日({weekday})"
    return f"{weekday}, {_MONTHS_SHORT[d.month - 1]} {d.day}"


def format_month(value: DateLike, locale: str | None = "en") -> str:
    d = as_date(value)
    if _locale(locale) == "ja":
        return f"{d.year}年{d.month}月"
    return f"{_MONTHS_LONG[d.month - 1]} {d.year}"


def format_range(start: DateLike, end: DateLike, locale: str | None = "en") -> str:
    sep = " 〜 " if _locale(locale) == "ja" else " - "
    return f"{format_short(start, locale)}{sep}{format_short(end, locale)}"
