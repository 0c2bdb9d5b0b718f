"""Period keys, display labels, and date-range helpers for time-series rollups."""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from enum import StrEnum
from typing import Protocol, TypeVar

ONE_MILLISECOND = timedelta(milliseconds=1)
END_OF_DAY = time(23, 59, 59, 999000)


class Granularity(StrEnum):
    """Bucket width for time-series aggregation."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


class _Dated(Protocol):
    date_stamp: date


DatedT = TypeVar("DatedT", bound=_Dated)


@dataclass(frozen=True)
class DateRange:
    """An inclusive datetime range."""

    start: datetime
    end: datetime

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def to_dict(self) -> dict[str, str]:
        return {"from": self.start.isoformat(), "to": self.end.isoformat()}


def sunday_weekday(day: date) -> int:
    """Day of week with Sunday as 0 and Saturday as 6."""

    return (day.weekday() + 1) % 7


def week_key(day: date) -> str:
    """Return a `YYYY-W##` week key.

    Week numbers are `ceil((day_of_year + jan1_weekday + 1) / 7)` with a zero-based
    day of year and Sunday-first weekdays. This is not ISO-8601 week numbering:
    weeks never cross a year boundary.
    """

    jan1 = date(day.year, 1, 1)
    day_of_year = (day - jan1).days
    week_number = math.ceil((day_of_year + sunday_weekday(jan1) + 1) / 7)
    return f"{day.year}-W{week_number:02d}"


def quarter_key(day: date) -> str:
    return f"{day.year}-Q{(day.month - 1) // 3 + 1}"


def period_key(day: date, granularity: Granularity, raw: str | None = None) -> str:
    """Return the sortable bucket key for `day`.

    `raw` is the original `YYYY-MM-DD` stamp where one exists; daily, monthly and
    yearly keys are sliced from it.
    """

    stamp = raw or day.isoformat()
    granularity = Granularity(granularity)
    if granularity is Granularity.DAILY:
        return stamp
    if granularity is Granularity.WEEKLY:
        return week_key(day)
    if granularity is Granularity.MONTHLY:
        return stamp[:7]
    if granularity is Granularity.QUARTERLY:
        return quarter_key(day)
    return stamp[:4]


def start_of_week(day: date) -> date:
    """Roll `day` back to the preceding Sunday."""

    return day - timedelta(days=sunday_weekday(day))


def _short_day_label(day: date, *, include_year: bool) -> str:
    label = f"{day:%b} {day.day}"
    if include_year:
        label = f"{label}, {day.year}"
    return label


def period_display(
    granularity: Granularity,
    key: str,
    anchor: date,
    *,
    include_year: bool = True,
) -> str:
    """Human-readable label for a bucket.

    `anchor` is the first day grouped into the bucket; weekly labels show the
    Sunday on or before it.
    """

    granularity = Granularity(granularity)
    if granularity is Granularity.DAILY:
        return _short_day_label(anchor, include_year=include_year)
    if granularity is Granularity.WEEKLY:
        return f"Week of {_short_day_label(start_of_week(anchor), include_year=include_year)}"
    if granularity is Granularity.MONTHLY:
        return f"{anchor:%B} {anchor.year}"
    if granularity is Granularity.QUARTERLY:
        return key.replace("-", " ")
    return key


def iter_days(first: date, last: date) -> Iterator[date]:
    current = first
    while current <= last:
        yield current
        current += timedelta(days=1)


def period_anchors(first: date, last: date, granularity: Granularity) -> dict[str, date]:
    """Map every period key between `first` and `last` to its earliest day."""

    anchors: dict[str, date] = {}
    for day in iter_days(first, last):
        anchors.setdefault(period_key(day, granularity), day)
    return anchors


def to_utc_date(value: datetime) -> date:
    """Calendar date of `value`, using UTC for timezone-aware datetimes."""

    if value.tzinfo is not None:
        value = value.astimezone(UTC)
    return value.date()


def _as_datetime(value: date) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def day_start(value: date) -> datetime:
    return _as_datetime(value).replace(hour=0, minute=0, second=0, microsecond=0)


def day_end(value: date) -> datetime:
    return _as_datetime(value).replace(
        hour=END_OF_DAY.hour,
        minute=END_OF_DAY.minute,
        second=END_OF_DAY.second,
        microsecond=END_OF_DAY.microsecond,
    )


def filter_by_date_range(records: Sequence[DatedT], start: date, end: date) -> list[DatedT]:
    """Keep records dated within `[start 00:00:00.000, end 23:59:59.999]`.

    Bounds are normalised to calendar-day boundaries whatever their time of day.
    """

    lower = day_start(start)
    upper = day_end(end)
    kept: list[DatedT] = []
    for record in records:
        stamp = datetime.combine(record.date_stamp, time.min)
        if lower <= stamp.replace(tzinfo=lower.tzinfo) and stamp.replace(
            tzinfo=upper.tzinfo
        ) <= upper:
            kept.append(record)
    return kept


def calculate_previous_period(start: date, end: date) -> DateRange:
    """Return the range of equal duration ending 1ms before `start`."""

    current_start = _as_datetime(start)
    current_end = _as_datetime(end)
    duration = current_end - current_start

    previous_end = current_start - ONE_MILLISECOND
    previous_start = previous_end - duration
    return DateRange(start=previous_start, end=previous_end)
