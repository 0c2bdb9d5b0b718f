"""Daily Tinder usage records and their time-series rollups."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Sequence
from datetime import date
from typing import Any

from swipestats_pipeline.analytics.periods import (
    Granularity,
    period_anchors,
    period_display,
    period_key,
)
from swipestats_pipeline.schemas import AggregatedUsageBucket, DailyUsageRecord

logger = logging.getLogger(__name__)

USAGE_SUM_FIELDS = (
    "matches",
    "swipe_likes",
    "swipe_passes",
    "app_opens",
    "messages_sent",
    "messages_received",
    "swipes_combined",
)

# Usage section key -> DailyUsageRecord field
_USAGE_SECTION_FIELDS = {
    "app_opens": "app_opens",
    "swipes_likes": "swipe_likes",
    "swipes_passes": "swipe_passes",
    "superlikes": "swipe_super_likes",
    "matches": "matches",
    "messages_sent": "messages_sent",
    "messages_received": "messages_received",
}


def _safe_int(value: Any, default: int = 0) -> int:
    """Best-effort non-negative integer coercion."""

    try:
        return max(int(value), 0)
    except (TypeError, ValueError):
        return default


def build_daily_usage_records(usage: dict[str, Any]) -> list[DailyUsageRecord]:
    """Build one record per date key found in a Tinder `Usage` section."""

    date_keys: set[str] = set()
    for section_key in _USAGE_SECTION_FIELDS:
        values = usage.get(section_key)
        if isinstance(values, dict):
            date_keys.update(values)

    records: list[DailyUsageRecord] = []
    for raw in sorted(date_keys):
        try:
            day = date.fromisoformat(raw[:10])
        except ValueError:
            logger.warning("Skipping usage entry with unparseable date key %r", raw)
            continue

        counts = {
            field: _safe_int((usage.get(section_key) or {}).get(raw))
            for section_key, field in _USAGE_SECTION_FIELDS.items()
        }
        records.append(
            DailyUsageRecord(
                date_stamp=day,
                date_stamp_raw=raw,
                swipes_combined=counts["swipe_likes"] + counts["swipe_passes"],
                **counts,
            )
        )
    return records


def match_rate(matches: int, swipe_likes: int) -> float:
    return matches / swipe_likes if swipe_likes > 0 else 0.0


def like_ratio(swipe_likes: int, swipe_passes: int) -> float:
    total_swipes = swipe_likes + swipe_passes
    return swipe_likes / total_swipes if total_swipes > 0 else 0.0


def _build_bucket(
    key: str,
    display: str,
    records: Sequence[DailyUsageRecord],
) -> AggregatedUsageBucket:
    totals = {
        field: sum(getattr(record, field) for record in records) for field in USAGE_SUM_FIELDS
    }
    return AggregatedUsageBucket(
        period=key,
        period_display=display,
        match_rate=match_rate(totals["matches"], totals["swipe_likes"]),
        like_ratio=like_ratio(totals["swipe_likes"], totals["swipe_passes"]),
        **totals,
    )


def aggregate_usage(
    records: Sequence[DailyUsageRecord],
    granularity: Granularity | str,
    *,
    fill_gaps: bool = False,
) -> list[AggregatedUsageBucket]:
    """Roll daily usage into buckets sorted by period key.

    With `fill_gaps`, periods between the first and last bucket that have no
    records are emitted with zero counts.
    """

    granularity = Granularity(granularity)
    if not records:
        return []

    groups: dict[str, list[DailyUsageRecord]] = defaultdict(list)
    for record in records:
        groups[period_key(record.date_stamp, granularity, record.date_stamp_raw)].append(record)

    buckets = {
        key: _build_bucket(
            key,
            period_display(granularity, key, members[0].date_stamp),
            members,
        )
        for key, members in groups.items()
    }

    if fill_gaps:
        days = [record.date_stamp for record in records]
        for key, anchor in period_anchors(min(days), max(days), granularity).items():
            if key not in buckets:
                buckets[key] = _build_bucket(key, period_display(granularity, key, anchor), [])

    return [buckets[key] for key in sorted(buckets)]
