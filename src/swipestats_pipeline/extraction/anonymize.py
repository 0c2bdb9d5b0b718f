"""Field-level PII redaction for Tinder and Hinge exports."""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum
from typing import Any

TINDER_USER_PII_FIELDS = (
    "email",
    "full_name",
    "name",
    "username",
    "phone_id",
    "authIds",
)

HINGE_IDENTITY_KEPT_FIELDS = (
    "fbid",
    "phone_country_code",
    "phone_country_calling_code",
    "instagram_authorized",
)
HINGE_INSTALL_PII_FIELDS = ("ip_address", "idfa", "idfv", "adid", "user_agent")
HINGE_DEVICE_PII_FIELDS = ("device_id", "user_agent")
HINGE_PROFILE_NAME_FIELDS = ("first_name", "last_name")


class SpotifyShape(StrEnum):
    """Shapes the `User.spotify` field has taken across Tinder export versions."""

    ABSENT = "absent"
    EMPTY = "empty"
    LEGACY_FLAG = "legacy_flag"
    UNKNOWN = "unknown"


def omit(obj: dict[str, Any], keys: Iterable[str]) -> dict[str, Any]:
    """Return a shallow copy of `obj` without `keys`."""

    dropped = set(keys)
    return {key: value for key, value in obj.items() if key not in dropped}


def spotify_shape(spotify: Any) -> SpotifyShape:
    if not spotify:
        return SpotifyShape.EMPTY if isinstance(spotify, dict) else SpotifyShape.ABSENT
    if isinstance(spotify, dict) and "spotify_connected" in spotify:
        return SpotifyShape.LEGACY_FLAG
    return SpotifyShape.UNKNOWN


def spotify_connection_status(spotify: Any) -> bool:
    """Return whether Spotify was connected.

    Newer exports keep `spotify` as an empty object with no flag, so only the
    legacy `spotify_connected` key can report a connection.
    """

    if spotify_shape(spotify) is SpotifyShape.LEGACY_FLAG:
        return bool(spotify["spotify_connected"])
    return False


def anonymize_tinder_export(tinder_json: dict[str, Any]) -> dict[str, Any]:
    """Strip PII from `User` and pass every other section through."""

    user = tinder_json.get("User") or {}
    anonymized_user = omit(user, TINDER_USER_PII_FIELDS)
    anonymized_user["instagram"] = bool(user.get("instagram"))
    anonymized_user["spotify"] = spotify_connection_status(user.get("spotify"))
    return {**tinder_json, "User": anonymized_user}


def _anonymize_hinge_identity(identity: dict[str, Any]) -> dict[str, Any]:
    kept = {key: identity.get(key) for key in HINGE_IDENTITY_KEPT_FIELDS}
    kept["has_email"] = bool(identity.get("email"))
    kept["has_phone"] = bool(identity.get("phone_number"))
    kept["has_phone_carrier"] = bool(identity.get("phone_carrier"))
    return kept


def anonymize_hinge_user(user: dict[str, Any]) -> dict[str, Any]:
    identity = user.get("identity") or {}
    profile = user.get("profile") or {}

    anonymized: dict[str, Any] = {
        "preferences": user.get("preferences"),
        "identity": _anonymize_hinge_identity(identity),
        "account": user.get("account"),
        "installs": [
            omit(install, HINGE_INSTALL_PII_FIELDS) for install in user.get("installs") or []
        ],
    }
    if user.get("devices") is not None:
        anonymized["devices"] = [
            omit(device, HINGE_DEVICE_PII_FIELDS) for device in user["devices"]
        ]
    location = user.get("location")
    if location:
        country = location.get("country") if isinstance(location, dict) else None
        anonymized["location"] = {"country": country}
    anonymized["profile"] = {
        **omit(profile, HINGE_PROFILE_NAME_FIELDS),
        "has_first_name": bool(profile.get("first_name")),
        "has_last_name": bool(profile.get("last_name")),
    }
    return anonymized


def anonymize_hinge_export(hinge_json: dict[str, Any]) -> dict[str, Any]:
    """Strip PII from the merged Hinge `User`; other sections pass through."""

    return {**hinge_json, "User": anonymize_hinge_user(hinge_json.get("User") or {})}
