# src/dayflow/planner/relative.py

"""
Relative labeling: today / tomorrow / this week / next week / other.

The same boundaries drive two things:
- classify(): badge for an existing item;
- date_for_bucket(): the inverse, turning a quick-pick choice into a concrete date.
"""

from __future__ import annotations

from datetime import date

from .calendar_math import DateLike, add_days, as_date, format_short, to_date_key, week_start
from .models import RelativeBucket

_LABELS = {
    "en": {
        RelativeBucket.TODAY: "Today",
        RelativeBucket.TOMORROW: "Tomorrow",
        RelativeBucket.THIS_WEEK: "This week",
        RelativeBucket.NEXT_WEEK: "Next week",
        RelativeBucket.NONE: "No due date",
    },
    "ja": {
        RelativeBucket.TODAY: "今日",
        RelativeBucket.TOMORROW: "明日",
        RelativeBucket.THIS_WEEK: "今週",
        RelativeBucket.NEXT_WEEK: "来週",
        RelativeBucket.NONE: "期限なし",
    },
}

_ALIASES = {
    "today": RelativeBucket.TODAY,
    "tomorrow": RelativeBucket.TOMORROW,
    "this_week": RelativeBucket.THIS_WEEK,
    "thisweek": RelativeBucket.THIS_WEEK,
    "next_week": RelativeBucket.NEXT_WEEK,
    "nextweek": RelativeBucket.NEXT_WEEK,
    "none": RelativeBucket.NONE,
    "nodate": RelativeBucket.NONE,
    "someday": RelativeBucket.NONE,
}


def bucket_label(bucket: RelativeBucket, locale: str | None = "en") -> str:
    labels = _LABELS.get((locale or "en").lower(), _LABELS["en"])
    return labels.get(bucket, bucket.value)


def parse_bucket(text: str | None) -> RelativeBucket | None:
    """Parse a quick-pick word (this-week, next_week, none, ...). Unknown -> None."""
    if not text:
        return None
    key = text.strip().lower().replace("-", "_")
    return _ALIASES.get(key) or _ALIASES.get(key.replace("_", ""))


def classify(value: DateLike | None, now: DateLike, week_start_day: int = 0) -> RelativeBucket:
    if not value:
        return RelativeBucket.OTHER
    try:
        target = as_date(value)
    except ValueError:
        return RelativeBucket.OTHER
    today = as_date(now)

    diff = (target - today).days
    if diff == 0:
        return RelativeBucket.TODAY
    if diff == 1:
        return RelativeBucket.TOMORROW

    start = week_start(today, week_start_day)
    if start <= target <= add_days(start, 6):
        return RelativeBucket.THIS_WEEK
    if add_days(start, 7) <= target <= add_days(start, 13):
        return RelativeBucket.NEXT_WEEK
    return RelativeBucket.OTHER


def date_for_bucket(bucket: RelativeBucket, now: DateLike, week_start_day: int = 0) -> date | None:
    """Concrete due date for a quick-pick choice; None means "no due date"."""
    today = as_date(now)
    if bucket == RelativeBucket.TODAY:
        return today
    if bucket == RelativeBucket.TOMORROW:
        return add_days(today, 1)
    if bucket == RelativeBucket.THIS_WEEK:
        # midweek of the current window
        return add_days(week_start(today, week_start_day), 4)
    if bucket == RelativeBucket.NEXT_WEEK:
        return add_days(week_start(today, week_start_day), 7)
    return None


def quick_pick_for(value: DateLike | None, now: DateLike, week_start_day: int = 0) -> RelativeBucket:
    """Quick-pick choice to pre-select for a form targeting `value`."""
    if not value:
        return RelativeBucket.NONE
    bucket = classify(value, now, week_start_day)
    return RelativeBucket.NONE if bucket == RelativeBucket.OTHER else bucket


def badge_label(
    value: str | None,
    now: DateLike,
    week_start_day: int = 0,
    locale: str | None = "en",
) -> str:
    if not value:
        return bucket_label(RelativeBucket.NONE, locale)
    bucket = classify(value, now, week_start_day)
    if bucket == RelativeBucket.OTHER:
        try:
            return format_short(value, locale)
        except ValueError:
            return str(value)
    return bucket_label(bucket, locale)


def date_key_for_bucket(bucket: RelativeBucket, now: DateLike, week_start_day: int = 0) -> str | None:
    d = date_for_bucket(bucket, now, week_start_day)
    return to_date_key(d) if d is not None else None
