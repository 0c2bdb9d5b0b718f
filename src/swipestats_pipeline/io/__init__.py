"""I/O utilities for reading exports and writing pipeline outputs."""

from swipestats_pipeline.io.load import (
    ExportFileError,
    load_daily_usage_records,
    load_hinge_export_texts,
    load_hinge_match_records,
    load_tinder_export_text,
    read_export_text,
    resolve_hinge_export_paths,
)
from swipestats_pipeline.io.save import (
    ensure_directory,
    save_json,
    save_jsonl,
    to_jsonable,
)

__all__ = [
    "ExportFileError",
    "ensure_directory",
    "load_daily_usage_records",
    "load_hinge_export_texts",
    "load_hinge_match_records",
    "load_tinder_export_text",
    "read_export_text",
    "resolve_hinge_export_paths",
    "save_json",
    "save_jsonl",
    "to_jsonable",
]
