"""Core data schemas for the swipestats pipeline."""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TinderProfilePayload(BaseModel):
    """Anonymized Tinder export plus its derived profile id."""

    model_config = ConfigDict(populate_by_name=True)

    tinder_id: str = Field(alias="tinderId")
    anonymized_tinder_json: dict[str, Any] = Field(alias="anonymizedTinderJson")


class HingeProfilePayload(BaseModel):
    """Anonymized, merged Hinge export plus its derived profile id."""

    model_config = ConfigDict(populate_by_name=True)

    hinge_id: str = Field(alias="hingeId")
    anonymized_hinge_json: dict[str, Any] = Field(alias="anonymizedHingeJson")


class DailyUsageRecord(BaseModel):
    """One calendar day of Tinder usage for a single profile."""

    model_config = ConfigDict(frozen=True)

    date_stamp: date
    date_stamp_raw: str
    app_opens: int = Field(default=0, ge=0)
    swipe_likes: int = Field(default=0, ge=0)
    swipe_passes: int = Field(default=0, ge=0)
    swipe_super_likes: int = Field(default=0, ge=0)
    matches: int = Field(default=0, ge=0)
    messages_sent: int = Field(default=0, ge=0)
    messages_received: int = Field(default=0, ge=0)
    swipes_combined: int = Field(default=0, ge=0)


class AggregatedUsageBucket(BaseModel):
    """Summed Tinder usage for one period, with derived rates."""

    period: str
    period_display: str
    matches: int = 0
    swipe_likes: int = 0
    swipe_passes: int = 0
    app_opens: int = 0
    messages_sent: int = 0
    messages_received: int = 0
    swipes_combined: int = 0
    match_rate: float = 0.0
    like_ratio: float = 0.0


class HingeMessageRecord(BaseModel):
    """A single Hinge message; `to == 0` marks a message the profile owner sent."""

    sent_date: datetime
    to: int = 0


class HingeMatchRecord(BaseModel):
    """A persisted Hinge match with its nested messages."""

    id: str
    matched_at: datetime | None = None
    liked_at: datetime | None = None
    messages: list[HingeMessageRecord] = Field(default_factory=list)


class AggregatedHingeBucket(BaseModel):
    """Hinge match and message activity counted for one period."""

    period: str
    period_display: str
    matches: int = 0
    likes: int = 0
    messages_sent: int = 0
    messages_received: int = 0
    total_messages: int = 0
    conversations_started: int = 0
