"""Extraction entry points: raw export text to anonymized profile payload."""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Sequence
from typing import Any

from swipestats_pipeline.config import DEFAULT_TINDER_OPTIONAL_SECTIONS
from swipestats_pipeline.extraction.anonymize import (
    anonymize_hinge_export,
    anonymize_tinder_export,
)
from swipestats_pipeline.extraction.classification import combine_hinge_parts
from swipestats_pipeline.extraction.profile_id import Hasher, derive_profile_id_async
from swipestats_pipeline.extraction.validation import (
    ExportValidationError,
    ValidationResult,
    validate_hinge_export,
    validate_tinder_export,
)
from swipestats_pipeline.schemas import HingeProfilePayload, TinderProfilePayload

logger = logging.getLogger(__name__)


class ExtractionError(RuntimeError):
    """Raised when extraction fails for a reason other than validation."""


def _log_tinder_summary(
    tinder_json: dict[str, Any],
    result: ValidationResult,
    optional_sections: Sequence[str],
) -> None:
    vintage = result.vintage.value if result.vintage else "unknown"
    logger.info("Tinder data format: %s", vintage)

    photos = tinder_json.get("Photos")
    logger.info(
        "Data quality summary: usage_days=%d matches=%d photos=%s",
        len(tinder_json["Usage"].get("app_opens") or {}),
        len(tinder_json.get("Messages") or []),
        len(photos) if isinstance(photos, list) else "unknown",
    )

    present = [section for section in optional_sections if section in tinder_json]
    if present:
        logger.info("Optional sections present: %s", ", ".join(present))

    spotify_section = tinder_json.get("Spotify")
    if spotify_section:
        connected = isinstance(spotify_section, dict) and bool(
            spotify_section.get("spotify_connected")
        )
        logger.info("Spotify connected: %s", "yes" if connected else "no")


def prepare_tinder_export(
    tinder_json: dict[str, Any],
    result: ValidationResult,
) -> dict[str, Any]:
    """Return a copy of `tinder_json` with inferred fields filled in."""

    if not result.inferred:
        return tinder_json
    prepared = copy.deepcopy(tinder_json)
    prepared["User"].update(result.inferred)
    return prepared


async def extract_tinder_data(
    json_string: str,
    *,
    hasher: Hasher | None = None,
    optional_sections: Sequence[str] = DEFAULT_TINDER_OPTIONAL_SECTIONS,
) -> TinderProfilePayload:
    """Validate, anonymize, and id-stamp a Tinder export.

    Validation failures raise `ExportValidationError` with the full result
    attached. Anything else is re-raised as `ExtractionError`.
    """

    try:
        tinder_json = json.loads(json_string)
        if not isinstance(tinder_json, dict):
            raise ExtractionError(
                f"Expected a JSON object for a Tinder export, got {type(tinder_json).__name__}."
            )

        result = validate_tinder_export(tinder_json)
        if not result.is_valid:
            logger.error("Tinder data is invalid: %s", result.errors_by_key())
            raise ExportValidationError(
                f"Tinder data validation failed: {result.describe_errors()}",
                result,
            )

        _log_tinder_summary(tinder_json, result, optional_sections)

        anonymized = anonymize_tinder_export(prepare_tinder_export(tinder_json, result))
        tinder_id = await derive_profile_id_async(
            str(anonymized["User"]["birth_date"]),
            str(anonymized["User"]["create_date"]),
            hasher=hasher,
        )
    except ExportValidationError:
        raise
    except Exception as exc:
        logger.exception("Tinder data extraction failed")
        raise ExtractionError("Something went wrong with profile extraction") from exc

    return TinderProfilePayload(tinder_id=tinder_id, anonymized_tinder_json=anonymized)


async def extract_hinge_data(
    json_strings: Sequence[str],
    *,
    hasher: Hasher | None = None,
) -> HingeProfilePayload:
    """Classify, merge, validate, anonymize, and id-stamp a Hinge export."""

    try:
        parts = [json.loads(json_string) for json_string in json_strings]
        hinge_json = combine_hinge_parts(parts)

        result = validate_hinge_export(hinge_json)
        if not result.is_valid:
            logger.error("Hinge data is invalid: %s", result.errors_by_key())
            raise ExportValidationError(
                f"Hinge data json is invalid: {result.describe_errors()}",
                result,
            )

        logger.info(
            "Hinge data summary: files=%d matches=%d prompts=%d media=%d",
            len(parts),
            len(hinge_json.get("Matches") or []),
            len(hinge_json.get("Prompts") or []),
            len(hinge_json.get("Media") or []),
        )

        anonymized = anonymize_hinge_export(hinge_json)
        hinge_id = await derive_profile_id_async(
            str(anonymized["User"]["profile"]["age"]),
            str(anonymized["User"]["account"]["signup_time"]),
            hasher=hasher,
        )
    except ExportValidationError:
        raise
    except Exception as exc:
        logger.exception("Hinge data extraction failed")
        raise ExtractionError("Something went wrong with Hinge profile extraction") from exc

    return HingeProfilePayload(hinge_id=hinge_id, anonymized_hinge_json=anonymized)
