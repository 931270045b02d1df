"""Load dashboard CSV exports from a folder and print the insight report."""

import argparse
import logging

from commerce_insights.discovery.engine import InsightsEngine
from commerce_insights.discovery.report_formatter import format_feed_report
from commerce_insights.ingestion.csv_loader import load_bundle
from commerce_insights.ingestion.record_normalizer import MalformedFieldError, normalize_bundle
from config.settings import settings


def validate(bundle: dict) -> int:
    """Normalize every dataset without analyzing; report the first bad field."""
    try:
        records = normalize_bundle(bundle)
    except MalformedFieldError as exc:
        print(f"[run_insights] invalid data: {exc}")
        return 1
    for key, rows in records.items():
        print(f"{key}: {len(rows)} record(s)")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("directory", nargs="?", default=settings.data_directory)
    parser.add_argument("--top", type=int, default=settings.default_top_n)
    parser.add_argument("--title", default="Business Insights")
    parser.add_argument("--validate", action="store_true", help="Only check that the CSVs parse")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    bundle = load_bundle(args.directory)
    if args.validate:
        return validate(bundle)

    engine = InsightsEngine(bundle)
    insights = engine.run_full_analysis()
    report = format_feed_report(insights, title=args.title, top_n=args.top)
    print(report.markdown)

    failed = [d for d in engine.diagnostics if d["status"] == "failed"]
    for entry in failed:
        print(f"[run_insights] {entry['pass']} pass failed: {entry['error'] or ''}")
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
