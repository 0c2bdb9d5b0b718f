"""CLI entrypoint for the swipestats pipeline."""

import argparse
import asyncio
import json
import logging
import sys
from datetime import date
from pathlib import Path

from swipestats_pipeline import __version__
from swipestats_pipeline.analytics import (
    Granularity,
    aggregate_hinge_data,
    aggregate_usage,
    analyze_activity_patterns,
    build_daily_usage_records,
    build_hinge_match_records,
    calculate_previous_period,
    filter_by_date_range,
)
from swipestats_pipeline.config import Settings
from swipestats_pipeline.extraction import (
    ExportValidationError,
    ExtractionError,
    ValidationResult,
    combine_hinge_parts,
    extract_hinge_data,
    extract_tinder_data,
    validate_hinge_export,
    validate_tinder_export,
)
from swipestats_pipeline.io import (
    ExportFileError,
    load_daily_usage_records,
    load_hinge_export_texts,
    load_hinge_match_records,
    load_tinder_export_text,
    save_json,
    to_jsonable,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="swipestats",
        description="Validate, anonymize, and aggregate Tinder and Hinge data exports",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config",
        type=str,
        default="configs/default.yaml",
        help="Path to YAML config file (default: configs/default.yaml)",
    )

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("info", help="Show current configuration")

    validate_tinder = sub.add_parser(
        "validate-tinder",
        help="Validate a Tinder data.json export without extracting it.",
    )
    validate_tinder.add_argument("input", type=str, help="Path to Tinder data.json.")
    validate_tinder.add_argument(
        "--report-json",
        type=str,
        default=None,
        help="Optional path to write the validation result as JSON.",
    )

    validate_hinge = sub.add_parser(
        "validate-hinge",
        help="Classify and validate Hinge export files without extracting them.",
    )
    validate_hinge.add_argument(
        "inputs",
        nargs="+",
        help="Hinge export JSON files, or a directory containing them.",
    )
    validate_hinge.add_argument(
        "--report-json",
        type=str,
        default=None,
        help="Optional path to write the validation result as JSON.",
    )

    extract_tinder = sub.add_parser(
        "extract-tinder",
        help="Anonymize a Tinder export and derive its profile id.",
    )
    extract_tinder.add_argument("input", type=str, help="Path to Tinder data.json.")
    extract_tinder.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output JSON path (default: <output_dir>/tinder-<id>.json).",
    )

    extract_hinge = sub.add_parser(
        "extract-hinge",
        help="Merge, anonymize a Hinge export and derive its profile id.",
    )
    extract_hinge.add_argument(
        "inputs",
        nargs="+",
        help="Hinge export JSON files, or a directory containing them.",
    )
    extract_hinge.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output JSON path (default: <output_dir>/hinge-<id>.json).",
    )

    usage_parser = sub.add_parser(
        "aggregate-usage",
        help="Roll daily Tinder usage records into time buckets.",
    )
    usage_parser.add_argument(
        "input",
        type=str,
        help="Daily usage records (JSON array or JSONL), or a Tinder export with --from-export.",
    )
    usage_parser.add_argument(
        "--from-export",
        action="store_true",
        help="Treat input as a Tinder data.json and build daily records from its Usage section.",
    )
    usage_parser.add_argument(
        "--granularity",
        choices=[item.value for item in Granularity],
        default=None,
        help="Bucket width (default: configured default_granularity).",
    )
    usage_parser.add_argument("--from", dest="date_from", type=date.fromisoformat, default=None)
    usage_parser.add_argument("--to", dest="date_to", type=date.fromisoformat, default=None)
    usage_parser.add_argument(
        "--fill-gaps",
        action="store_true",
        help="Emit zero-valued buckets for periods with no records.",
    )
    usage_parser.add_argument(
        "--compare-previous",
        action="store_true",
        help="Also aggregate the preceding period of equal length (requires --from and --to).",
    )
    usage_parser.add_argument(
        "--with-activity",
        action="store_true",
        help="Include day-of-week activity patterns.",
    )
    usage_parser.add_argument("--output", type=str, default=None, help="Optional output JSON path.")

    hinge_parser = sub.add_parser(
        "aggregate-hinge",
        help="Roll Hinge matches and messages into time buckets.",
    )
    hinge_parser.add_argument(
        "inputs",
        nargs="+",
        help="Match records (JSON array or JSONL), or Hinge export files with --from-export.",
    )
    hinge_parser.add_argument(
        "--from-export",
        action="store_true",
        help="Treat inputs as raw Hinge export files and build match records from Matches.",
    )
    hinge_parser.add_argument(
        "--granularity",
        choices=[item.value for item in Granularity],
        default=None,
        help="Bucket width (default: configured default_granularity).",
    )
    hinge_parser.add_argument("--output", type=str, default=None, help="Optional output JSON path.")

    return parser


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.resolved_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def cmd_info(settings: Settings) -> None:
    print(f"swipestats v{__version__}")
    print(f"  Default granularity: {settings.default_granularity}")
    print(f"  Fill gaps:           {settings.fill_gaps}")
    print(f"  Optional sections:   {', '.join(settings.tinder_optional_sections)}")
    print(f"  Warning sample size: {settings.warning_sample_size}")
    print(f"  Log level:           {settings.resolved_log_level()}")
    print(f"  Output dir:          {settings.output_dir}")


def _print_json(payload: object) -> None:
    print(json.dumps(to_jsonable(payload), indent=2, ensure_ascii=False))


def _render_validation_result(
    label: str,
    result: ValidationResult,
    *,
    warning_sample_size: int,
) -> None:
    status = "passed" if result.is_valid else "failed"
    print(f"{label} validation {status}.")
    if result.vintage:
        print(f"  Export format:  {result.vintage.value}")
    for key, value in result.inferred.items():
        print(f"  Inferred {key}: {value}")
    if result.warnings:
        print(f"  Warnings:       {len(result.warnings)}")
        for warning in result.warnings[:warning_sample_size]:
            print(f"    - {warning}")
    for issue in result.errors:
        print(f"    - [{issue.kind.value}] {issue.message}")


def _parse_json_text(text: str, *, source: str) -> object:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        print(f"Invalid JSON in {source}: {exc.msg}")
        sys.exit(1)


def cmd_validate_tinder(settings: Settings, args: argparse.Namespace) -> None:
    try:
        text = load_tinder_export_text(args.input)
    except ExportFileError as exc:
        print(f"Tinder validation failed: {exc}")
        sys.exit(1)

    document = _parse_json_text(text, source=args.input)
    if not isinstance(document, dict):
        print(f"Tinder validation failed: expected a JSON object in {args.input}.")
        sys.exit(1)

    result = validate_tinder_export(document)
    _render_validation_result(
        "Tinder", result, warning_sample_size=settings.warning_sample_size
    )
    if args.report_json:
        print(f"  Report JSON:    {save_json(args.report_json, result.to_dict())}")
    if not result.is_valid:
        sys.exit(1)


def cmd_validate_hinge(settings: Settings, args: argparse.Namespace) -> None:
    try:
        texts = load_hinge_export_texts(args.inputs)
    except ExportFileError as exc:
        print(f"Hinge validation failed: {exc}")
        sys.exit(1)

    parts = [_parse_json_text(text, source="Hinge export file") for text in texts]
    result = validate_hinge_export(combine_hinge_parts(parts))
    _render_validation_result(
        "Hinge", result, warning_sample_size=settings.warning_sample_size
    )
    if args.report_json:
        print(f"  Report JSON:    {save_json(args.report_json, result.to_dict())}")
    if not result.is_valid:
        sys.exit(1)


def _render_extraction_failure(label: str, exc: Exception) -> None:
    if isinstance(exc, ExportValidationError):
        print(f"{label} extraction failed: the export is missing required data.")
        for issue in exc.result.errors:
            print(f"    - [{issue.kind.value}] {issue.message}")
    else:
        print(f"{label} extraction failed: something went wrong, please try again.")


def cmd_extract_tinder(settings: Settings, args: argparse.Namespace) -> None:
    try:
        text = load_tinder_export_text(args.input)
        payload = asyncio.run(
            extract_tinder_data(text, optional_sections=settings.tinder_optional_sections)
        )
    except ExportFileError as exc:
        print(f"Tinder extraction failed: {exc}")
        sys.exit(1)
    except (ExportValidationError, ExtractionError) as exc:
        _render_extraction_failure("Tinder", exc)
        sys.exit(1)

    default_output = settings.output_dir / f"tinder-{payload.tinder_id}.json"
    output = Path(args.output) if args.output else default_output
    save_json(output, payload)
    print("Tinder extraction complete.")
    print(f"  Tinder id: {payload.tinder_id}")
    print(f"  Output:    {output}")


def cmd_extract_hinge(settings: Settings, args: argparse.Namespace) -> None:
    try:
        texts = load_hinge_export_texts(args.inputs)
        payload = asyncio.run(extract_hinge_data(texts))
    except ExportFileError as exc:
        print(f"Hinge extraction failed: {exc}")
        sys.exit(1)
    except (ExportValidationError, ExtractionError) as exc:
        _render_extraction_failure("Hinge", exc)
        sys.exit(1)

    default_output = settings.output_dir / f"hinge-{payload.hinge_id}.json"
    output = Path(args.output) if args.output else default_output
    save_json(output, payload)
    print("Hinge extraction complete.")
    print(f"  Hinge id: {payload.hinge_id}")
    print(f"  Output:   {output}")


def _resolve_granularity(settings: Settings, args: argparse.Namespace) -> Granularity:
    try:
        return Granularity(args.granularity or settings.default_granularity)
    except ValueError:
        print(f"Unknown granularity: {args.granularity or settings.default_granularity!r}")
        sys.exit(1)


def _emit(payload: dict, output: str | None) -> None:
    if output:
        print(f"Wrote {save_json(output, payload)}")
        return
    _print_json(payload)


def cmd_aggregate_usage(settings: Settings, args: argparse.Namespace) -> None:
    granularity = _resolve_granularity(settings, args)
    try:
        if args.from_export:
            document = _parse_json_text(load_tinder_export_text(args.input), source=args.input)
            usage = document.get("Usage") if isinstance(document, dict) else None
            records = build_daily_usage_records(usage if isinstance(usage, dict) else {})
        else:
            records = load_daily_usage_records(args.input)
    except ExportFileError as exc:
        print(f"Usage aggregation failed: {exc}")
        sys.exit(1)

    if args.compare_previous and not (args.date_from and args.date_to):
        print("--compare-previous requires both --from and --to.")
        sys.exit(1)

    fill_gaps = args.fill_gaps or settings.fill_gaps
    current = records
    if args.date_from and args.date_to:
        current = filter_by_date_range(records, args.date_from, args.date_to)

    result: dict = {
        "granularity": granularity.value,
        "record_count": len(current),
        "buckets": aggregate_usage(current, granularity, fill_gaps=fill_gaps),
    }

    if args.compare_previous:
        previous_range = calculate_previous_period(args.date_from, args.date_to)
        previous = filter_by_date_range(records, previous_range.start, previous_range.end)
        result["previous_period"] = {
            **previous_range.to_dict(),
            "record_count": len(previous),
            "buckets": aggregate_usage(previous, granularity, fill_gaps=fill_gaps),
        }

    if args.with_activity:
        patterns = analyze_activity_patterns(current)
        result["activity"] = {
            "peak_day": patterns.peak_day,
            "weekend_multiplier": patterns.weekend_multiplier,
            "daily_activity": patterns.daily_activity,
        }

    _emit(result, args.output)


def cmd_aggregate_hinge(settings: Settings, args: argparse.Namespace) -> None:
    granularity = _resolve_granularity(settings, args)
    try:
        if args.from_export:
            texts = load_hinge_export_texts(args.inputs)
            parts = [_parse_json_text(text, source="Hinge export file") for text in texts]
            matches = build_hinge_match_records(combine_hinge_parts(parts)["Matches"])
        else:
            matches = [
                match for path in args.inputs for match in load_hinge_match_records(path)
            ]
    except ExportFileError as exc:
        print(f"Hinge aggregation failed: {exc}")
        sys.exit(1)

    _emit(
        {
            "granularity": granularity.value,
            "match_count": len(matches),
            "buckets": aggregate_hinge_data(matches, granularity),
        },
        args.output,
    )


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()

    settings = Settings.from_yaml(args.config)
    configure_logging(settings)

    if args.command == "info":
        cmd_info(settings)
    elif args.command == "validate-tinder":
        cmd_validate_tinder(settings, args)
    elif args.command == "validate-hinge":
        cmd_validate_hinge(settings, args)
    elif args.command == "extract-tinder":
        cmd_extract_tinder(settings, args)
    elif args.command == "extract-hinge":
        cmd_extract_hinge(settings, args)
    elif args.command == "aggregate-usage":
        cmd_aggregate_usage(settings, args)
    elif args.command == "aggregate-hinge":
        cmd_aggregate_hinge(settings, args)
    else:
        parser.print_help()
        sys.exit(0)


if __name__ == "__main__":
    main()
