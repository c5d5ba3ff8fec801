# main.py

"""Entry point for the listing reconciler batch CLI."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from src.config.logging_config import setup_logging
from src.config.settings import Settings

logger = logging.getLogger("reconcile.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="reconcile",
        description="Match retail listings to catalogue products.",
    )
    parser.add_argument(
        "-p",
        "--products",
        type=Path,
        default=Settings.PRODUCTS_PATH,
        help="JSON-lines product file (default: products.txt).",
    )
    parser.add_argument(
        "-l",
        "--listings",
        type=Path,
        default=Settings.LISTINGS_PATH,
        help="JSON-lines listing file (default: listings.txt).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Settings.RESULTS_PATH,
        help="Destination JSON-lines file (default: results.txt).",
    )
    parser.add_argument(
        "--no-disambiguation",
        action="store_false",
        default=Settings.DISAMBIGUATE,
        dest="disambiguate",
        help="Keep listings that also match a more specific model.",
    )
    parser.add_argument(
        "--no-outlier-filter",
        action="store_false",
        default=Settings.FILTER_OUTLIERS,
        dest="filter_outliers",
        help="Skip price-based outlier pruning.",
    )
    parser.add_argument(
        "--no-title-normalization",
        action="store_false",
        default=Settings.NORMALIZE_TITLES,
        dest="normalize_titles",
        help="Match against raw titles, bundle suffixes included.",
    )
    parser.add_argument(
        "--allow-dot",
        action="store_true",
        default=Settings.LABEL_ALLOW_DOT,
        dest="allow_dot",
        help="Treat '.' as part of model and family labels.",
    )
    parser.add_argument(
        "--strict-currency",
        action="store_true",
        default=Settings.STRICT_CURRENCY,
        dest="strict_currency",
        help="Abort the batch on an unknown listing currency.",
    )
    parser.add_argument(
        "--sync",
        action="store_true",
        default=False,
        help="Match products sequentially instead of concurrently.",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        default=False,
        help="Print a per-product table of listing counts.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Echo INFO log messages to stderr.",
    )
    return parser


def main() -> None:
    """Parse arguments and run one reconciliation batch."""
    from src.cli.runner import run_reconcile
    from src.services.reconciler import MatchPolicy

    args = _build_parser().parse_args()

    log_file = setup_logging(
        console_level=logging.INFO if args.verbose else None
    )
    logger.info("reconcile starting, log file: %s", log_file)

    policy = MatchPolicy(
        disambiguate=args.disambiguate,
        filter_outliers=args.filter_outliers,
        normalize_titles=args.normalize_titles,
        allow_dot=args.allow_dot,
        strict_currency=args.strict_currency,
    )

    try:
        exit_code = asyncio.run(
            run_reconcile(
                products_path=args.products,
                listings_path=args.listings,
                output_path=args.output,
                policy=policy,
                concurrent=not args.sync,
                show_summary=args.summary,
            )
        )
    except Exception:
        logger.critical("Fatal error during reconciliation", exc_info=True)
        raise
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
