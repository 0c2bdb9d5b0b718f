"""Consent-based filtering of anonymized payloads before they are shared."""

from __future__ import annotations

from pydantic import BaseModel

from swipestats_pipeline.schemas import HingeProfilePayload, TinderProfilePayload


class TinderConsent(BaseModel):
    """What a Tinder uploader agreed to share. Education is always shared."""

    photos: bool = True
    work: bool = True


class HingeConsent(BaseModel):
    """What a Hinge uploader agreed to share."""

    share_photos: bool = True
    share_work_info: bool = True
    share_matches: bool = True
    share_messages: bool = True
    share_prompts: bool = True


def filter_tinder_payload_by_consent(
    payload: TinderProfilePayload,
    consent: TinderConsent,
) -> TinderProfilePayload:
    """Return a new payload with non-consented sections removed."""

    document = {
        **payload.anonymized_tinder_json,
        "User": {**payload.anonymized_tinder_json.get("User", {})},
    }
    if not consent.photos:
        document["Photos"] = []
    if not consent.work:
        document["User"].pop("jobs", None)

    return payload.model_copy(update={"anonymized_tinder_json": document})


def filter_hinge_payload_by_consent(
    payload: HingeProfilePayload,
    consent: HingeConsent,
) -> HingeProfilePayload:
    """Return a new payload with non-consented sections removed."""

    document = dict(payload.anonymized_hinge_json)

    if not consent.share_photos:
        document["Media"] = []

    if not consent.share_work_info:
        user = document.get("User") or {}
        document["User"] = {
            **user,
            "profile": {
                **(user.get("profile") or {}),
                "job_title": "",
                "job_title_displayed": False,
                "workplaces": "",
                "workplaces_displayed": False,
            },
        }

    if not consent.share_matches:
        document["Matches"] = []

    if not consent.share_messages:
        document["Matches"] = [
            {**match, "chats": []} for match in document.get("Matches") or []
        ]

    if not consent.share_prompts:
        document["Prompts"] = []

    return payload.model_copy(update={"anonymized_hinge_json": document})
