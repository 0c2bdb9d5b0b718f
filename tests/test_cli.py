"""Tests for CLI parser options and command handlers."""

import json
from datetime import date

import pytest

from swipestats_pipeline.cli import (
    build_parser,
    cmd_aggregate_hinge,
    cmd_aggregate_usage,
    cmd_extract_tinder,
    cmd_validate_tinder,
)
from swipestats_pipeline.config import Settings


def _tinder_export() -> dict:
    return {
        "Usage": {
            "app_opens": {"2024-01-01": 2, "2024-01-02": 1},
            "swipes_likes": {"2024-01-01": 10, "2024-01-02": 5},
            "swipes_passes": {"2024-01-01": 5, "2024-01-02": 5},
            "matches": {"2024-01-01": 2, "2024-01-02": 1},
            "messages_sent": {"2024-01-01": 1},
            "messages_received": {"2024-01-02": 1},
        },
        "Messages": [],
        "Photos": [],
        "User": {
            "birth_date": "1995-06-01",
            "create_date": "2023-12-30",
            "gender": "F",
            "gender_filter": "M",
            "interested_in": "M",
            "age_filter_min": 25,
            "age_filter_max": 35,
            "email": "person@example.test",
        },
    }


def test_validate_parser_accepts_report_path():
    args = build_parser().parse_args(["validate-tinder", "data.json", "--report-json", "r.json"])
    assert args.command == "validate-tinder"
    assert args.input == "data.json"
    assert args.report_json == "r.json"


def test_extract_hinge_parser_accepts_many_inputs():
    args = build_parser().parse_args(["extract-hinge", "user.json", "matches.json"])
    assert args.command == "extract-hinge"
    assert args.inputs == ["user.json", "matches.json"]
    assert args.output is None


def test_aggregate_usage_parser_accepts_range_flags():
    args = build_parser().parse_args(
        [
            "aggregate-usage",
            "usage.jsonl",
            "--granularity",
            "monthly",
            "--from",
            "2024-02-01",
            "--to",
            "2024-02-10",
            "--compare-previous",
            "--fill-gaps",
            "--with-activity",
        ]
    )
    assert args.command == "aggregate-usage"
    assert args.granularity == "monthly"
    assert args.date_from == date(2024, 2, 1)
    assert args.date_to == date(2024, 2, 10)
    assert args.compare_previous is True
    assert args.fill_gaps is True
    assert args.with_activity is True
    assert args.from_export is False


def test_aggregate_parser_rejects_unknown_granularity():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["aggregate-hinge", "m.jsonl", "--granularity", "hourly"])


def test_validate_tinder_writes_report(tmp_path, capsys):
    export_path = tmp_path / "data.json"
    export_path.write_text(json.dumps(_tinder_export()), encoding="utf-8")
    report_path = tmp_path / "report.json"

    args = build_parser().parse_args(
        ["validate-tinder", str(export_path), "--report-json", str(report_path)]
    )
    cmd_validate_tinder(Settings(), args)

    assert "Tinder validation passed." in capsys.readouterr().out
    report = json.loads(report_path.read_text(encoding="utf-8"))
    assert report["is_valid"] is True


def test_validate_tinder_exits_on_invalid_export(tmp_path, capsys):
    export = _tinder_export()
    del export["Usage"]
    export_path = tmp_path / "data.json"
    export_path.write_text(json.dumps(export), encoding="utf-8")

    args = build_parser().parse_args(["validate-tinder", str(export_path)])
    with pytest.raises(SystemExit) as excinfo:
        cmd_validate_tinder(Settings(), args)

    assert excinfo.value.code == 1
    assert "[usage_missing]" in capsys.readouterr().out


def test_extract_tinder_writes_payload(tmp_path):
    export_path = tmp_path / "data.json"
    export_path.write_text(json.dumps(_tinder_export()), encoding="utf-8")
    output_path = tmp_path / "out" / "payload.json"

    args = build_parser().parse_args(
        ["extract-tinder", str(export_path), "--output", str(output_path)]
    )
    cmd_extract_tinder(Settings(), args)

    payload = json.loads(output_path.read_text(encoding="utf-8"))
    assert set(payload) == {"tinderId", "anonymizedTinderJson"}
    assert "email" not in payload["anonymizedTinderJson"]["User"]


def test_aggregate_usage_from_export(tmp_path):
    export_path = tmp_path / "data.json"
    export_path.write_text(json.dumps(_tinder_export()), encoding="utf-8")
    output_path = tmp_path / "weekly.json"

    args = build_parser().parse_args(
        [
            "aggregate-usage",
            str(export_path),
            "--from-export",
            "--granularity",
            "weekly",
            "--with-activity",
            "--output",
            str(output_path),
        ]
    )
    cmd_aggregate_usage(Settings(), args)

    result = json.loads(output_path.read_text(encoding="utf-8"))
    assert result["granularity"] == "weekly"
    assert result["record_count"] == 2
    [bucket] = result["buckets"]
    assert bucket["period"] == "2024-W01"
    assert bucket["matches"] == 3
    assert bucket["match_rate"] == pytest.approx(0.2)
    assert result["activity"]["peak_day"] == "Monday"


def test_aggregate_usage_compare_previous_requires_range(tmp_path, capsys):
    path = tmp_path / "usage.json"
    path.write_text("[]", encoding="utf-8")
    args = build_parser().parse_args(["aggregate-usage", str(path), "--compare-previous"])

    with pytest.raises(SystemExit):
        cmd_aggregate_usage(Settings(), args)
    assert "requires both --from and --to" in capsys.readouterr().out


def test_aggregate_usage_compare_previous(tmp_path):
    path = tmp_path / "usage.jsonl"
    rows = [
        {"date_stamp": f"2024-01-{day:02d}", "date_stamp_raw": f"2024-01-{day:02d}", "matches": 1}
        for day in range(1, 21)
    ]
    path.write_text("\n".join(json.dumps(row) for row in rows), encoding="utf-8")
    output_path = tmp_path / "out.json"

    args = build_parser().parse_args(
        [
            "aggregate-usage",
            str(path),
            "--granularity",
            "daily",
            "--from",
            "2024-01-11",
            "--to",
            "2024-01-20",
            "--compare-previous",
            "--output",
            str(output_path),
        ]
    )
    cmd_aggregate_usage(Settings(), args)

    result = json.loads(output_path.read_text(encoding="utf-8"))
    assert result["record_count"] == 10
    assert result["previous_period"]["record_count"] == 10
    assert result["previous_period"]["buckets"][0]["period"] == "2024-01-01"


def test_aggregate_hinge_from_export(tmp_path, capsys):
    (tmp_path / "matches.json").write_text(
        json.dumps(
            [
                {
                    "match": [{"timestamp": "2024-01-15 10:00:00"}],
                    "chats": [{"body": "hi", "timestamp": "2024-01-15 10:05:00"}],
                }
            ]
        ),
        encoding="utf-8",
    )
    args = build_parser().parse_args(
        ["aggregate-hinge", str(tmp_path), "--from-export", "--granularity", "monthly"]
    )
    cmd_aggregate_hinge(Settings(), args)

    result = json.loads(capsys.readouterr().out)
    assert result["match_count"] == 1
    assert result["buckets"][0]["period_display"] == "January 2024"
    assert result["buckets"][0]["messages_sent"] == 1


def test_aggregate_hinge_from_export_skips_malformed_threads(tmp_path, capsys):
    (tmp_path / "matches.json").write_text(
        json.dumps([{"match": [{"timestamp": "not-a-date"}], "chats": []}, "oops"]),
        encoding="utf-8",
    )
    args = build_parser().parse_args(["aggregate-hinge", str(tmp_path), "--from-export"])
    cmd_aggregate_hinge(Settings(), args)

    result = json.loads(capsys.readouterr().out)
    assert result["match_count"] == 0
    assert result["buckets"] == []
