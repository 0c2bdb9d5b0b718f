"""Deterministic profile-id derivation."""

from __future__ import annotations

import hashlib
import inspect
from collections.abc import Awaitable, Callable

Hasher = Callable[[str], str | Awaitable[str]]


def sha256_hex(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def profile_id_source(first: str, second: str) -> str:
    return f"{first}-{second}"


def derive_profile_id(first: str, second: str) -> str:
    """Hash `first` and `second` into a stable profile id.

    Tinder passes `birth_date` and `create_date`; Hinge passes `age` and
    `signup_time`.
    """

    return sha256_hex(profile_id_source(first, second))


async def derive_profile_id_async(
    first: str,
    second: str,
    *,
    hasher: Hasher | None = None,
) -> str:
    """Derive a profile id with a pluggable sync or async SHA-256 hasher."""

    digest = (hasher or sha256_hex)(profile_id_source(first, second))
    if inspect.isawaitable(digest):
        digest = await digest
    return digest
