"""Export validation, anonymization, and extraction."""

from swipestats_pipeline.extraction.anonymize import (
    SpotifyShape,
    anonymize_hinge_export,
    anonymize_tinder_export,
    spotify_connection_status,
)
from swipestats_pipeline.extraction.classification import (
    HingeFilePart,
    classify_hinge_part,
    combine_hinge_parts,
)
from swipestats_pipeline.extraction.consent import (
    HingeConsent,
    TinderConsent,
    filter_hinge_payload_by_consent,
    filter_tinder_payload_by_consent,
)
from swipestats_pipeline.extraction.extract import (
    ExtractionError,
    extract_hinge_data,
    extract_tinder_data,
)
from swipestats_pipeline.extraction.profile_id import derive_profile_id, derive_profile_id_async
from swipestats_pipeline.extraction.validation import (
    ExportValidationError,
    HingeValidationData,
    TinderExportVintage,
    ValidationErrorKind,
    ValidationIssue,
    ValidationResult,
    detect_tinder_vintage,
    validate_hinge_export,
    validate_tinder_export,
)

__all__ = [
    "ExportValidationError",
    "ExtractionError",
    "HingeConsent",
    "HingeFilePart",
    "HingeValidationData",
    "SpotifyShape",
    "TinderConsent",
    "TinderExportVintage",
    "ValidationErrorKind",
    "ValidationIssue",
    "ValidationResult",
    "anonymize_hinge_export",
    "anonymize_tinder_export",
    "classify_hinge_part",
    "combine_hinge_parts",
    "derive_profile_id",
    "derive_profile_id_async",
    "detect_tinder_vintage",
    "extract_hinge_data",
    "extract_tinder_data",
    "filter_hinge_payload_by_consent",
    "filter_tinder_payload_by_consent",
    "spotify_connection_status",
    "validate_hinge_export",
    "validate_tinder_export",
]
