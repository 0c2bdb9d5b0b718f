"""Utilities for writing extraction and aggregation outputs."""

from __future__ import annotations

import json
import logging
import os
import uuid
from contextlib import suppress
from pathlib import Path
from typing import Any

from pydantic import BaseModel

logger = logging.getLogger(__name__)


def ensure_directory(path: str | Path) -> Path:
    """Create a directory if it does not exist and return it."""

    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def to_jsonable(payload: Any) -> Any:
    """Dump pydantic models (with camelCase aliases) inside `payload`."""

    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json", by_alias=True)
    if isinstance(payload, list | tuple):
        return [to_jsonable(item) for item in payload]
    if isinstance(payload, dict):
        return {key: to_jsonable(value) for key, value in payload.items()}
    return payload


def _atomic_write_text(path: Path, content: str) -> None:
    """Atomically replace file contents via temp-write + rename."""

    ensure_directory(path.parent)
    temp_path = path.parent / f".{path.name}.{uuid.uuid4().hex}.tmp"
    try:
        with temp_path.open("w", encoding="utf-8") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(temp_path, path)
    finally:
        if temp_path.exists():
            with suppress(OSError):
                temp_path.unlink()
    logger.debug("Wrote %d bytes to %s", len(content), path)


def save_json(path: str | Path, payload: Any) -> Path:
    """Save a JSON document to disk."""

    file_path = Path(path)
    content = json.dumps(to_jsonable(payload), ensure_ascii=False, indent=2) + "\n"
    _atomic_write_text(file_path, content)
    return file_path


def save_jsonl(path: str | Path, rows: list[dict[str, Any] | BaseModel]) -> Path:
    """Save records as JSONL."""

    file_path = Path(path)
    content = "".join(
        json.dumps(to_jsonable(row), ensure_ascii=False) + "\n" for row in rows
    )
    _atomic_write_text(file_path, content)
    return file_path
