# src/cli/runner.py

"""Headless batch runner: read inputs, reconcile, write results."""

import logging
from pathlib import Path

from rich.console import Console
from rich.table import Table

from src.filters.listing_validator import ListingValidator
from src.models.errors import MalformedRecordError
from src.services.reconciler import MatchPolicy, ReconcileReport, Reconciler
from src.storage.file_manager import FileManager

logger = logging.getLogger("reconcile.cli")

# Stderr console for status messages so stdout stays free for the table
_err = Console(stderr=True)


def _print_summary(report: ReconcileReport) -> None:
    """Render a Rich table of listing counts per product to stdout."""
    table = Table(
        title="Reconciliation Results",
        show_lines=False,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=5)
    table.add_column("Product", max_width=60)
    table.add_column("Listings", justify="right", style="green")

    for idx, result in enumerate(report.results, 1):
        count = len(result.listings)
        table.add_row(
            str(idx),
            result.product_name,
            str(count) if count else "[dim]0[/dim]",
        )

    Console().print(table)


async def run_reconcile(
    products_path: Path,
    listings_path: Path,
    output_path: Path,
    policy: MatchPolicy,
    concurrent: bool = True,
    show_summary: bool = False,
) -> int:
    """Run one batch and return an exit code (0=ok, 1=fail)."""
    file_manager = FileManager()

    try:
        products = file_manager.read_products(products_path)
        listings = file_manager.read_listings(listings_path)
    except FileNotFoundError as exc:
        logger.error("Input file missing: %s", exc.filename)
        _err.print(f"[red]Input file not found: {exc.filename}[/red]")
        return 1
    except MalformedRecordError as exc:
        logger.error("Malformed input: %s", exc)
        _err.print(f"[red]Malformed record: {exc}[/red]")
        return 1

    listings, dropped = ListingValidator.validate(listings)

    _err.print(
        f"[bold]Reconciling:[/bold] {len(products)} products, "
        f"{len(listings)} listings"
        + (f" [dim]({dropped} invalid dropped)[/dim]" if dropped else "")
    )

    reconciler = Reconciler(products, listings, policy)
    if concurrent:
        report = await reconciler.reconcile_async()
    else:
        report = reconciler.reconcile()

    for error_msg in report.errors:
        _err.print(f"[yellow]Warning: {error_msg}[/yellow]")

    file_manager.write_results(output_path, report.results)

    parts: list[str] = []
    if report.ambiguous_count:
        parts.append(f"{report.ambiguous_count} ambiguous")
    if report.outlier_count:
        parts.append(f"{report.outlier_count} outliers")
    detail = f" ({', '.join(parts)} removed)" if parts else ""
    _err.print(
        f"[green]✓ {report.matched_listing_count} listings attributed"
        f" to {len(report.results)} products{detail}[/green]"
    )
    _err.print(f"[dim]Saved → {output_path}[/dim]")

    if show_summary:
        _print_summary(report)

    return 0
