"""Tests for daily usage records and their rollups."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from swipestats_pipeline.analytics.periods import Granularity
from swipestats_pipeline.analytics.usage import (
    USAGE_SUM_FIELDS,
    aggregate_usage,
    build_daily_usage_records,
)
from swipestats_pipeline.schemas import DailyUsageRecord


def _record(day: date, **counts) -> DailyUsageRecord:
    likes = counts.get("swipe_likes", 0)
    passes = counts.get("swipe_passes", 0)
    return DailyUsageRecord(
        date_stamp=day,
        date_stamp_raw=day.isoformat(),
        swipes_combined=likes + passes,
        **counts,
    )


def _history() -> list[DailyUsageRecord]:
    start = date(2023, 11, 20)
    records = []
    for offset in range(0, 120, 3):
        records.append(
            _record(
                start + timedelta(days=offset),
                app_opens=offset % 7 + 1,
                swipe_likes=offset % 11,
                swipe_passes=offset % 5,
                matches=offset % 3,
                messages_sent=offset % 4,
                messages_received=offset % 2,
            )
        )
    return records


class TestAggregateUsage:
    def test_two_days_in_one_week(self):
        records = [
            _record(date(2024, 1, 1), matches=2, swipe_likes=10, swipe_passes=5),
            _record(date(2024, 1, 2), matches=1, swipe_likes=5, swipe_passes=5),
        ]
        buckets = aggregate_usage(records, Granularity.WEEKLY)

        assert len(buckets) == 1
        bucket = buckets[0]
        assert bucket.period == "2024-W01"
        assert bucket.period_display == "Week of Dec 31, 2023"
        assert bucket.matches == 3
        assert bucket.swipe_likes == 15
        assert bucket.swipe_passes == 10
        assert bucket.swipes_combined == 25
        assert bucket.match_rate == pytest.approx(0.2)
        assert bucket.like_ratio == pytest.approx(0.6)

    def test_empty_input(self):
        assert aggregate_usage([], Granularity.MONTHLY) == []
        assert aggregate_usage([], Granularity.MONTHLY, fill_gaps=True) == []

    def test_single_record(self):
        buckets = aggregate_usage([_record(date(2024, 2, 29), app_opens=4)], "daily")
        assert [(bucket.period, bucket.app_opens) for bucket in buckets] == [("2024-02-29", 4)]
        assert buckets[0].period_display == "Feb 29, 2024"

    @pytest.mark.parametrize("granularity", list(Granularity))
    def test_sums_are_preserved(self, granularity):
        records = _history()
        buckets = aggregate_usage(records, granularity)
        for field in USAGE_SUM_FIELDS:
            assert sum(getattr(bucket, field) for bucket in buckets) == sum(
                getattr(record, field) for record in records
            )

    @pytest.mark.parametrize("granularity", list(Granularity))
    def test_buckets_are_sorted(self, granularity):
        records = list(reversed(_history()))
        periods = [bucket.period for bucket in aggregate_usage(records, granularity)]
        assert periods == sorted(periods)
        assert len(periods) == len(set(periods))

    def test_zero_likes_give_zero_rates(self):
        bucket = aggregate_usage([_record(date(2024, 1, 1), matches=3)], "yearly")[0]
        assert bucket.match_rate == 0
        assert bucket.like_ratio == 0

    def test_passes_only(self):
        bucket = aggregate_usage([_record(date(2024, 1, 1), swipe_passes=8)], "yearly")[0]
        assert bucket.match_rate == 0
        assert bucket.like_ratio == 0

    def test_quarterly_and_yearly_labels(self):
        records = [_record(date(2023, 12, 31)), _record(date(2024, 1, 1))]
        quarters = aggregate_usage(records, Granularity.QUARTERLY)
        assert [(b.period, b.period_display) for b in quarters] == [
            ("2023-Q4", "2023 Q4"),
            ("2024-Q1", "2024 Q1"),
        ]
        years = aggregate_usage(records, Granularity.YEARLY)
        assert [(b.period, b.period_display) for b in years] == [("2023", "2023"), ("2024", "2024")]

    def test_monthly_label(self):
        bucket = aggregate_usage([_record(date(2024, 1, 15))], Granularity.MONTHLY)[0]
        assert bucket.period == "2024-01"
        assert bucket.period_display == "January 2024"

    def test_fill_gaps_adds_zero_buckets(self):
        records = [
            _record(date(2024, 1, 10), matches=1, swipe_likes=2),
            _record(date(2024, 4, 2), matches=2, swipe_likes=4),
        ]
        buckets = aggregate_usage(records, Granularity.MONTHLY, fill_gaps=True)

        assert [bucket.period for bucket in buckets] == ["2024-01", "2024-02", "2024-03", "2024-04"]
        assert buckets[1].matches == 0
        assert buckets[1].period_display == "February 2024"
        assert sum(bucket.matches for bucket in buckets) == 3

    def test_fill_gaps_daily(self):
        records = [_record(date(2024, 1, 30)), _record(date(2024, 2, 2))]
        buckets = aggregate_usage(records, Granularity.DAILY, fill_gaps=True)
        assert [bucket.period for bucket in buckets] == [
            "2024-01-30",
            "2024-01-31",
            "2024-02-01",
            "2024-02-02",
        ]


class TestBuildDailyUsageRecords:
    def test_one_record_per_date_key(self):
        usage = {
            "app_opens": {"2023-01-05": 3, "2023-01-03": 1},
            "swipes_likes": {"2023-01-03": 10, "2023-01-04": 2},
            "swipes_passes": {"2023-01-03": 5},
            "superlikes": {"2023-01-04": 1},
            "matches": {"2023-01-03": 1},
            "messages_sent": {},
            "advertising_id": {"2023-01-03": "ad-id"},
        }
        records = build_daily_usage_records(usage)

        assert [record.date_stamp_raw for record in records] == [
            "2023-01-03",
            "2023-01-04",
            "2023-01-05",
        ]
        first = records[0]
        assert first.app_opens == 1
        assert first.swipe_likes == 10
        assert first.swipe_passes == 5
        assert first.swipes_combined == 15
        assert first.matches == 1
        assert first.messages_sent == 0
        assert records[1].swipe_super_likes == 1
        assert records[2].app_opens == 3

    def test_unparseable_date_keys_are_skipped(self):
        records = build_daily_usage_records({"app_opens": {"not-a-date": 1, "2023-01-03": 2}})
        assert [record.date_stamp for record in records] == [date(2023, 1, 3)]

    def test_empty_usage(self):
        assert build_daily_usage_records({}) == []
