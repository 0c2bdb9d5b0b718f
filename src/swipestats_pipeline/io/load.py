"""Loaders for raw export files and persisted analytics records."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from swipestats_pipeline.schemas import DailyUsageRecord, HingeMatchRecord


class ExportFileError(ValueError):
    """Raised when an export or record file cannot be read or parsed."""


def read_export_text(path: str | Path) -> str:
    """Read one export file as UTF-8 text."""

    file_path = Path(path)
    if not file_path.is_file():
        raise ExportFileError(f"Export file does not exist: {file_path}")
    try:
        return file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ExportFileError(f"Could not read export file {file_path}: {exc}") from exc


def load_tinder_export_text(path: str | Path) -> str:
    """Read a single-file Tinder export (`data.json`)."""

    return read_export_text(path)


def resolve_hinge_export_paths(paths: Sequence[str | Path]) -> list[Path]:
    """Expand directories into their `*.json` files, sorted by name."""

    resolved: list[Path] = []
    for path in paths:
        candidate = Path(path)
        if candidate.is_dir():
            resolved.extend(sorted(candidate.glob("*.json")))
        else:
            resolved.append(candidate)
    if not resolved:
        raise ExportFileError("No Hinge export files found.")
    return resolved


def load_hinge_export_texts(paths: Sequence[str | Path]) -> list[str]:
    """Read every file of a multi-file Hinge export."""

    return [read_export_text(path) for path in resolve_hinge_export_paths(paths)]


def _load_rows(path: str | Path) -> list[dict[str, Any]]:
    """Load a JSON array or JSONL file of objects."""

    file_path = Path(path)
    text = read_export_text(file_path)
    stripped = text.strip()
    if not stripped:
        return []

    if stripped.startswith("["):
        try:
            payload = json.loads(stripped)
        except json.JSONDecodeError as exc:
            raise ExportFileError(f"Invalid JSON in {file_path}: {exc.msg}") from exc
        rows = payload
    else:
        rows = []
        for line_number, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                rows.append(json.loads(line))
            except json.JSONDecodeError as exc:
                raise ExportFileError(
                    f"Invalid JSON on line {line_number} of {file_path}: {exc.msg}"
                ) from exc

    for index, row in enumerate(rows, start=1):
        if not isinstance(row, dict):
            raise ExportFileError(
                f"Expected object for row {index} of {file_path}, got {type(row).__name__}."
            )
    return rows


def _validate_rows(
    path: str | Path,
    rows: list[dict[str, Any]],
    model: type[BaseModel],
) -> list[Any]:
    records = []
    for index, row in enumerate(rows, start=1):
        try:
            records.append(model.model_validate(row))
        except Exception as exc:
            raise ExportFileError(
                f"{model.__name__} schema validation failed on row {index} of {path}: {exc}"
            ) from exc
    return records


def load_daily_usage_records(path: str | Path) -> list[DailyUsageRecord]:
    """Load persisted daily usage rows."""

    return _validate_rows(path, _load_rows(path), DailyUsageRecord)


def load_hinge_match_records(path: str | Path) -> list[HingeMatchRecord]:
    """Load persisted Hinge matches with nested messages."""

    return _validate_rows(path, _load_rows(path), HingeMatchRecord)
