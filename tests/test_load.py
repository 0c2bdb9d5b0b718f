"""Tests for export and record loading utilities."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import pytest

from swipestats_pipeline.io import (
    ExportFileError,
    load_daily_usage_records,
    load_hinge_export_texts,
    load_hinge_match_records,
    load_tinder_export_text,
    resolve_hinge_export_paths,
)


class TestExportFiles:
    def test_raises_for_missing_file(self, tmp_path: Path):
        with pytest.raises(ExportFileError, match="does not exist"):
            load_tinder_export_text(tmp_path / "data.json")

    def test_reads_tinder_export(self, tmp_path: Path):
        path = tmp_path / "data.json"
        path.write_text('{"Usage": {}}', encoding="utf-8")
        assert json.loads(load_tinder_export_text(path)) == {"Usage": {}}

    def test_hinge_directory_expands_to_sorted_json_files(self, tmp_path: Path):
        (tmp_path / "matches.json").write_text("[]", encoding="utf-8")
        (tmp_path / "user.json").write_text("{}", encoding="utf-8")
        (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")

        paths = resolve_hinge_export_paths([tmp_path])
        assert [path.name for path in paths] == ["matches.json", "user.json"]
        assert load_hinge_export_texts([tmp_path]) == ["[]", "{}"]

    def test_empty_hinge_directory_is_rejected(self, tmp_path: Path):
        with pytest.raises(ExportFileError, match="No Hinge export files"):
            resolve_hinge_export_paths([tmp_path])


class TestRecordFiles:
    def test_loads_usage_from_json_array(self, tmp_path: Path):
        path = tmp_path / "usage.json"
        rows = [
            {"date_stamp": "2024-01-01", "date_stamp_raw": "2024-01-01", "matches": 2},
            {"date_stamp": "2024-01-02", "date_stamp_raw": "2024-01-02"},
        ]
        path.write_text(json.dumps(rows), encoding="utf-8")

        records = load_daily_usage_records(path)
        assert [record.date_stamp for record in records] == [date(2024, 1, 1), date(2024, 1, 2)]
        assert records[0].matches == 2
        assert records[1].swipe_likes == 0

    def test_loads_matches_from_jsonl(self, tmp_path: Path):
        path = tmp_path / "matches.jsonl"
        lines = [
            {
                "id": "m1",
                "matched_at": "2024-01-15T10:00:00",
                "messages": [{"sent_date": "2024-01-15T11:00:00", "to": 1}],
            },
            {"id": "m2"},
        ]
        path.write_text(
            "\n".join(json.dumps(line) for line in lines) + "\n\n", encoding="utf-8"
        )

        records = load_hinge_match_records(path)
        assert [record.id for record in records] == ["m1", "m2"]
        assert records[0].messages[0].to == 1
        assert records[1].matched_at is None

    def test_empty_file_gives_no_records(self, tmp_path: Path):
        path = tmp_path / "usage.jsonl"
        path.write_text("\n", encoding="utf-8")
        assert load_daily_usage_records(path) == []

    def test_raises_for_invalid_jsonl_line(self, tmp_path: Path):
        path = tmp_path / "usage.jsonl"
        path.write_text('{"date_stamp": "2024-01-01", "date_stamp_raw": "2024-01-01"}\n{oops\n')
        with pytest.raises(ExportFileError, match="line 2"):
            load_daily_usage_records(path)

    def test_raises_for_non_object_rows(self, tmp_path: Path):
        path = tmp_path / "usage.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ExportFileError, match="Expected object for row 1"):
            load_daily_usage_records(path)

    def test_raises_for_negative_counts(self, tmp_path: Path):
        path = tmp_path / "usage.json"
        rows = [{"date_stamp": "2024-01-01", "date_stamp_raw": "2024-01-01", "matches": -1}]
        path.write_text(json.dumps(rows), encoding="utf-8")
        with pytest.raises(ExportFileError, match="schema validation failed on row 1"):
            load_daily_usage_records(path)
