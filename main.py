import argparse
import logging
from pathlib import Path

from stock_analytics import settings
from stock_analytics.logger import setup_logger
from stock_analytics.pipelines.analytics import AnalyticsPipeline
from stock_analytics.sources import ApiRecordSource, FileRecordSource, RecordSource


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compute inventory analytics (valuation, alerts, ABC classes)."
    )
    parser.add_argument(
        "--items",
        type=Path,
        default=settings.INPUT_DIR / settings.ITEMS_FILENAME,
        help="Items export (.csv or .json).",
    )
    parser.add_argument(
        "--movements",
        type=Path,
        default=settings.INPUT_DIR / settings.MOVEMENTS_FILENAME,
        help="Movements export (.csv or .json).",
    )
    parser.add_argument(
        "--api-url",
        default=settings.INVENTORY_API_URL,
        help="Inventory API base URL. Takes precedence over the export files.",
    )
    parser.add_argument("--top-n", type=_non_negative_int, default=settings.DEFAULT_TOP_N)
    parser.add_argument(
        "--test", action="store_true", help="Test mode: do not post to the webhook."
    )
    parser.add_argument("--verbose", action="store_true", help="Log debug messages.")
    return parser


def select_source(args: argparse.Namespace) -> RecordSource:
    if args.api_url:
        return ApiRecordSource(args.api_url)
    return FileRecordSource(args.items, args.movements)


def run_process(argv=None) -> int:
    """Main orchestration function to run the analytics report."""
    args = build_parser().parse_args(argv)
    setup_logger(log_level=logging.DEBUG if args.verbose else logging.INFO)

    pipeline = AnalyticsPipeline(select_source(args), top_n=args.top_n, test_mode=args.test)
    snapshot = pipeline.run()
    return 0 if snapshot is not None else 1


if __name__ == "__main__":
    raise SystemExit(run_process())
