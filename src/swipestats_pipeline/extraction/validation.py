"""Format detection and validation for raw Tinder and Hinge exports."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)

TINDER_USAGE_METRICS = (
    "app_opens",
    "swipes_likes",
    "swipes_passes",
    "matches",
    "messages_sent",
    "messages_received",
)

TINDER_CRITICAL_USER_FIELDS = (
    "birth_date",
    "gender",
    "gender_filter",
    "interested_in",
    "age_filter_min",
    "age_filter_max",
)


class ValidationErrorKind(StrEnum):
    """Stable keys for hard validation failures."""

    USAGE_MISSING = "usage_missing"
    APP_OPENS = "app_opens"
    MESSAGES_INVALID = "messages_invalid"
    USER_MISSING = "user_missing"
    USER_BIRTH_DATE = "user_birth_date"
    USER_CREATE_DATE = "user_create_date"
    BIRTH_DATE = "birth_date"
    CREATE_DATE = "create_date"
    NO_DATA = "no_data"


class TinderExportVintage(StrEnum):
    """Which generation of the Tinder export schema a document follows."""

    LEGACY = "legacy"
    CURRENT = "current"


@dataclass(frozen=True)
class ValidationIssue:
    """One hard validation failure with its diagnostic context."""

    kind: ValidationErrorKind
    message: str
    context: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one export document."""

    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    vintage: TinderExportVintage | None = None
    inferred: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def error_kinds(self) -> list[ValidationErrorKind]:
        return [issue.kind for issue in self.errors]

    def errors_by_key(self) -> dict[str, dict[str, Any]]:
        """Render errors as `{key: {"message": ..., **context}}`."""

        return {
            issue.kind.value: {"message": issue.message, **issue.context}
            for issue in self.errors
        }

    def describe_errors(self) -> str:
        return ", ".join(f"{issue.kind.value}: {issue.message}" for issue in self.errors)

    def to_dict(self) -> dict[str, Any]:
        """Render result as a JSON-serializable dictionary."""

        return {
            "is_valid": self.is_valid,
            "vintage": self.vintage.value if self.vintage else None,
            "errors": self.errors_by_key(),
            "warnings": list(self.warnings),
            "inferred": dict(self.inferred),
        }


class ExportValidationError(ValueError):
    """Raised when an export is missing fields required for extraction."""

    def __init__(self, message: str, result: ValidationResult) -> None:
        super().__init__(message)
        self.result = result


@dataclass(frozen=True)
class HingeValidationData:
    """Identity fields used to validate a Hinge export.

    Hinge exports carry no literal birth or create date; `age` and
    `signup_time` stand in for them.
    """

    birth_date: str | None = None
    create_date: str | None = None
    signup_time: str | None = None
    age: int | None = None


def detect_tinder_vintage(photos: Any) -> TinderExportVintage:
    """Detect the export generation from the shape of the `Photos` array.

    Current exports list photo objects with `id` and `url`; older ones list URLs.
    """

    if (
        isinstance(photos, list)
        and photos
        and isinstance(photos[0], dict)
        and "id" in photos[0]
        and "url" in photos[0]
    ):
        return TinderExportVintage.CURRENT
    return TinderExportVintage.LEGACY


def _sum_numeric(values: dict[str, Any]) -> int | float:
    return sum(value for value in values.values() if isinstance(value, int | float))


def validate_tinder_export(tinder_json: dict[str, Any]) -> ValidationResult:
    """Validate a parsed Tinder export.

    Missing optional fields only produce warnings. The caller's document is never
    modified; a recoverable `create_date` is reported in `inferred`.
    """

    errors: list[ValidationIssue] = []
    warnings: list[str] = []
    inferred: dict[str, str] = {}

    def _warn(message: str) -> None:
        logger.warning(message)
        warnings.append(message)

    usage = tinder_json.get("Usage")
    if not isinstance(usage, dict):
        errors.append(
            ValidationIssue(
                kind=ValidationErrorKind.USAGE_MISSING,
                message="Usage object is missing or invalid",
                context={
                    "available_fields": ", ".join(list(tinder_json)[:20]),
                    "has_usage_field": "Usage" in tinder_json,
                    "usage_type": type(usage).__name__,
                },
            )
        )
        return ValidationResult(errors=errors, warnings=warnings)

    for metric in TINDER_USAGE_METRICS:
        if not usage.get(metric):
            _warn(f"Usage.{metric} is missing")

    app_opens = usage.get("app_opens")
    if not isinstance(app_opens, dict):
        app_opens = {}
    if not app_opens:
        errors.append(
            ValidationIssue(
                kind=ValidationErrorKind.APP_OPENS,
                message="No app opens detected",
                context={"app_opens": usage.get("app_opens")},
            )
        )

    messages = tinder_json.get("Messages")
    if not isinstance(messages, list):
        logger.warning("Messages array is missing or invalid")
        errors.append(
            ValidationIssue(
                kind=ValidationErrorKind.MESSAGES_INVALID,
                message="Messages array is missing or invalid",
            )
        )
    else:
        logger.info("Found %d matches", len(messages))

    vintage = detect_tinder_vintage(tinder_json.get("Photos"))

    user = tinder_json.get("User")
    if not isinstance(user, dict):
        errors.append(
            ValidationIssue(
                kind=ValidationErrorKind.USER_MISSING,
                message="User object is missing or invalid",
            )
        )
        return ValidationResult(errors=errors, warnings=warnings, vintage=vintage)

    for user_field in TINDER_CRITICAL_USER_FIELDS:
        if not user.get(user_field):
            _warn(f"User.{user_field} is missing")

    if not user.get("birth_date"):
        errors.append(
            ValidationIssue(
                kind=ValidationErrorKind.USER_BIRTH_DATE,
                message="No birth_date detected in User object",
                context={"user_fields": sorted(user)},
            )
        )

    if not user.get("create_date"):
        usage_days = sorted(app_opens)
        if usage_days:
            inferred["create_date"] = usage_days[0]
            _warn(f"create_date was missing, inferred from earliest app open: {usage_days[0]}")
        else:
            errors.append(
                ValidationIssue(
                    kind=ValidationErrorKind.USER_CREATE_DATE,
                    message="No create_date detected",
                    context={
                        "user_fields": sorted(user),
                        "usage_day_count": len(app_opens),
                        "app_opens": _sum_numeric(app_opens),
                    },
                )
            )

    return ValidationResult(
        errors=errors,
        warnings=warnings,
        vintage=vintage,
        inferred=inferred,
    )


def hinge_validation_data(hinge_json: dict[str, Any]) -> HingeValidationData:
    user = hinge_json.get("User") or {}
    account = user.get("account") or {}
    profile = user.get("profile") or {}
    return HingeValidationData(
        signup_time=account.get("signup_time"),
        age=profile.get("age"),
    )


def validate_hinge_export(hinge_json: dict[str, Any]) -> ValidationResult:
    """Validate a merged Hinge export."""

    errors: list[ValidationIssue] = []
    data = hinge_validation_data(hinge_json)
    user_fields = sorted(hinge_json.get("User") or {})

    if not data.age and not data.birth_date:
        errors.append(
            ValidationIssue(
                kind=ValidationErrorKind.BIRTH_DATE,
                message="No birth date or age detected",
                context={"user_fields": user_fields},
            )
        )

    if not data.signup_time:
        errors.append(
            ValidationIssue(
                kind=ValidationErrorKind.CREATE_DATE,
                message="No signup time detected",
                context={"user_fields": user_fields},
            )
        )

    matches = hinge_json.get("Matches") or []
    prompts = hinge_json.get("Prompts") or []
    if not matches and not prompts:
        errors.append(
            ValidationIssue(
                kind=ValidationErrorKind.NO_DATA,
                message="No meaningful data detected (no matches or prompts)",
                context={"matches_count": len(matches), "prompts_count": len(prompts)},
            )
        )

    for issue in errors:
        logger.warning("Hinge validation failed [%s]: %s", issue.kind.value, issue.message)

    return ValidationResult(errors=errors)
