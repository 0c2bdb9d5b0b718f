"""Shape-based classification and merging of multi-file Hinge exports."""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)

_USER_KEYS = ("preferences", "identity", "account", "profile")
_MATCH_KEYS = ("chats", "like", "match", "block", "we_met")


class HingeFilePart(StrEnum):
    """Recognized Hinge export file shapes, in classification order."""

    USER = "User"
    MATCHES = "Matches"
    PROMPTS = "Prompts"
    MEDIA = "Media"
    SUBSCRIPTIONS = "Subscriptions"
    UNRECOGNIZED = "unrecognized"


def _first_object(data: Any) -> dict[str, Any] | None:
    if isinstance(data, list) and data and isinstance(data[0], dict):
        return data[0]
    return None


def is_user_file(data: Any) -> bool:
    return isinstance(data, dict) and any(key in data for key in _USER_KEYS)


def is_matches_file(data: Any) -> bool:
    # An empty list is treated as an empty matches file.
    if not isinstance(data, list):
        return False
    if not data:
        return True
    first = _first_object(data)
    return first is not None and any(key in first for key in _MATCH_KEYS)


def is_prompts_file(data: Any) -> bool:
    if not isinstance(data, list):
        return False
    first = _first_object(data)
    return (
        first is not None
        and "prompt" in first
        and ("text" in first or "options" in first)
        and "type" in first
    )


def is_media_file(data: Any) -> bool:
    first = _first_object(data)
    return first is not None and ("url" in first or "media" in first)


def is_subscriptions_file(data: Any) -> bool:
    first = _first_object(data)
    return first is not None and ("subscription" in first or "plan" in first)


def classify_hinge_part(data: Any) -> HingeFilePart:
    """Return the first file shape `data` matches."""

    if is_user_file(data):
        return HingeFilePart.USER
    if is_matches_file(data):
        return HingeFilePart.MATCHES
    if is_prompts_file(data):
        return HingeFilePart.PROMPTS
    if is_media_file(data):
        return HingeFilePart.MEDIA
    if is_subscriptions_file(data):
        return HingeFilePart.SUBSCRIPTIONS
    return HingeFilePart.UNRECOGNIZED


def combine_hinge_parts(data_parts: list[Any]) -> dict[str, Any]:
    """Merge parsed Hinge export files into one document.

    Recognized parts replace their section. Unrecognized objects are merged
    key by key without overwriting anything already set.
    """

    combined: dict[str, Any] = {
        HingeFilePart.USER.value: {},
        HingeFilePart.MATCHES.value: [],
        HingeFilePart.PROMPTS.value: [],
        HingeFilePart.MEDIA.value: [],
        HingeFilePart.SUBSCRIPTIONS.value: [],
    }

    for index, part in enumerate(data_parts):
        kind = classify_hinge_part(part)
        logger.debug("Hinge file part %d classified as %s", index, kind.value)
        if kind is not HingeFilePart.UNRECOGNIZED:
            combined[kind.value] = part
            continue

        if not isinstance(part, dict):
            logger.warning(
                "Skipping unrecognized Hinge file part %d of type %s",
                index,
                type(part).__name__,
            )
            continue
        for key, value in part.items():
            if combined.get(key) is None:
                combined[key] = value

    return combined
