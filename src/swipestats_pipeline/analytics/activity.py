"""Day-of-week activity patterns over daily usage."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from swipestats_pipeline.analytics.periods import sunday_weekday
from swipestats_pipeline.schemas import DailyUsageRecord

DAYS_OF_WEEK = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)
WEEKEND_DAYS = ("Saturday", "Sunday")


@dataclass(frozen=True)
class ActivityPatterns:
    peak_day: str
    weekend_multiplier: float
    daily_activity: dict[str, int]


def group_by_day_of_week(records: Sequence[DailyUsageRecord]) -> dict[str, int]:
    """Sum combined swipes per weekday name."""

    grouped = dict.fromkeys(DAYS_OF_WEEK, 0)
    for record in records:
        grouped[DAYS_OF_WEEK[sunday_weekday(record.date_stamp)]] += record.swipes_combined
    return grouped


def most_active_day(records: Sequence[DailyUsageRecord]) -> str:
    """Weekday with the most combined swipes; Sunday when there is no activity."""

    peak_day = DAYS_OF_WEEK[0]
    peak_activity = 0
    for day, activity in group_by_day_of_week(records).items():
        if activity > peak_activity:
            peak_day, peak_activity = day, activity
    return peak_day


def weekend_multiplier(records: Sequence[DailyUsageRecord]) -> float:
    """Average weekend-day activity over average weekday activity.

    1.5 means 50% more active on weekends. Returns 1.0 with no weekday activity.
    """

    grouped = group_by_day_of_week(records)
    weekend_total = sum(grouped[day] for day in WEEKEND_DAYS)
    weekday_total = sum(count for day, count in grouped.items() if day not in WEEKEND_DAYS)

    weekday_avg = weekday_total / 5
    if weekday_avg == 0:
        return 1.0
    return (weekend_total / 2) / weekday_avg


def analyze_activity_patterns(records: Sequence[DailyUsageRecord]) -> ActivityPatterns:
    return ActivityPatterns(
        peak_day=most_active_day(records),
        weekend_multiplier=weekend_multiplier(records),
        daily_activity=group_by_day_of_week(records),
    )
