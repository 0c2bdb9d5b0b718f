"""Time-series aggregation and period comparison."""

from swipestats_pipeline.analytics.activity import (
    ActivityPatterns,
    analyze_activity_patterns,
    group_by_day_of_week,
    most_active_day,
    weekend_multiplier,
)
from swipestats_pipeline.analytics.hinge import (
    HingeEvent,
    HingeEventType,
    aggregate_hinge_data,
    aggregate_hinge_events,
    build_hinge_match_records,
    flatten_hinge_events,
)
from swipestats_pipeline.analytics.periods import (
    DateRange,
    Granularity,
    calculate_previous_period,
    filter_by_date_range,
    period_display,
    period_key,
    week_key,
)
from swipestats_pipeline.analytics.usage import (
    aggregate_usage,
    build_daily_usage_records,
    like_ratio,
    match_rate,
)

__all__ = [
    "ActivityPatterns",
    "DateRange",
    "Granularity",
    "HingeEvent",
    "HingeEventType",
    "aggregate_hinge_data",
    "aggregate_hinge_events",
    "aggregate_usage",
    "analyze_activity_patterns",
    "build_daily_usage_records",
    "build_hinge_match_records",
    "calculate_previous_period",
    "filter_by_date_range",
    "flatten_hinge_events",
    "group_by_day_of_week",
    "like_ratio",
    "match_rate",
    "most_active_day",
    "period_display",
    "period_key",
    "week_key",
    "weekend_multiplier",
]
