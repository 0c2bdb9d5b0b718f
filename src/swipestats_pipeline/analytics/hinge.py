"""Hinge match/message event flattening and time-series rollups."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum
from typing import Any

from pydantic import ValidationError

from swipestats_pipeline.analytics.periods import (
    Granularity,
    period_display,
    period_key,
    to_utc_date,
)
from swipestats_pipeline.schemas import (
    AggregatedHingeBucket,
    HingeMatchRecord,
    HingeMessageRecord,
)

logger = logging.getLogger(__name__)

SENT_BY_OWNER = 0


class HingeEventType(StrEnum):
    MATCH = "match"
    LIKE = "like"
    MESSAGE_SENT = "messageSent"
    MESSAGE_RECEIVED = "messageReceived"


@dataclass(frozen=True)
class HingeEvent:
    """A single dated Hinge activity event."""

    date: datetime
    type: HingeEventType
    match_id: str | None = None

    @property
    def day(self) -> date:
        return to_utc_date(self.date)


def flatten_hinge_events(matches: Sequence[HingeMatchRecord]) -> list[HingeEvent]:
    """Turn matches and their nested messages into discrete dated events."""

    events: list[HingeEvent] = []
    for match in matches:
        if match.matched_at:
            events.append(
                HingeEvent(date=match.matched_at, type=HingeEventType.MATCH, match_id=match.id)
            )
        if match.liked_at:
            events.append(HingeEvent(date=match.liked_at, type=HingeEventType.LIKE))
        for message in match.messages:
            event_type = (
                HingeEventType.MESSAGE_SENT
                if message.to == SENT_BY_OWNER
                else HingeEventType.MESSAGE_RECEIVED
            )
            events.append(HingeEvent(date=message.sent_date, type=event_type))
    return events


def _build_bucket(key: str, display: str, events: Sequence[HingeEvent]) -> AggregatedHingeBucket:
    counts = {event_type: 0 for event_type in HingeEventType}
    match_ids: set[str] = set()
    for event in events:
        counts[event.type] += 1
        if event.type is HingeEventType.MATCH and event.match_id:
            match_ids.add(event.match_id)

    sent = counts[HingeEventType.MESSAGE_SENT]
    received = counts[HingeEventType.MESSAGE_RECEIVED]
    return AggregatedHingeBucket(
        period=key,
        period_display=display,
        matches=counts[HingeEventType.MATCH],
        likes=counts[HingeEventType.LIKE],
        messages_sent=sent,
        messages_received=received,
        total_messages=sent + received,
        # Distinct matches whose match event falls in this bucket.
        conversations_started=len(match_ids),
    )


def aggregate_hinge_events(
    events: Sequence[HingeEvent],
    granularity: Granularity | str,
) -> list[AggregatedHingeBucket]:
    granularity = Granularity(granularity)
    groups: dict[str, list[HingeEvent]] = defaultdict(list)
    for event in events:
        groups[period_key(event.day, granularity)].append(event)

    return [
        _build_bucket(
            key,
            period_display(granularity, key, groups[key][0].day, include_year=False),
            groups[key],
        )
        for key in sorted(groups)
    ]


def aggregate_hinge_data(
    matches: Sequence[HingeMatchRecord],
    granularity: Granularity | str,
) -> list[AggregatedHingeBucket]:
    """Roll Hinge matches and messages into buckets sorted by period key."""

    return aggregate_hinge_events(flatten_hinge_events(matches), granularity)


def _first_timestamp(entries: Any) -> str | None:
    if isinstance(entries, list) and entries and isinstance(entries[0], dict):
        return entries[0].get("timestamp")
    return None


def build_hinge_match_records(threads: Sequence[dict[str, Any]]) -> list[HingeMatchRecord]:
    """Build match records from raw Hinge `Matches` threads.

    Only threads with a `match` entry become matches. Every chat in a Hinge
    export was sent by the profile owner. Threads that are not objects or carry
    unparseable timestamps are skipped with a warning.
    """

    records: list[HingeMatchRecord] = []
    for index, thread in enumerate(threads):
        if not isinstance(thread, dict):
            logger.warning("Skipping Hinge thread %d of type %s", index, type(thread).__name__)
            continue
        matched_at = _first_timestamp(thread.get("match"))
        if not matched_at:
            continue
        chats = thread.get("chats") if isinstance(thread.get("chats"), list) else []
        try:
            messages = [
                HingeMessageRecord(sent_date=chat["timestamp"], to=SENT_BY_OWNER)
                for chat in chats
                if isinstance(chat, dict) and chat.get("timestamp")
            ]
            record = HingeMatchRecord(
                id=f"match-{index}",
                matched_at=matched_at,
                liked_at=_first_timestamp(thread.get("like")),
                messages=messages,
            )
        except ValidationError as exc:
            logger.warning(
                "Skipping Hinge thread %d with invalid timestamps: %d errors",
                index,
                exc.error_count(),
            )
            continue
        records.append(record)
    logger.info("Built %d Hinge match records from %d threads", len(records), len(threads))
    return records
