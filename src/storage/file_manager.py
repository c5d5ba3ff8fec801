# src/storage/file_manager.py

"""Reads line-delimited JSON inputs and writes line-delimited results."""

import json
import logging
import math
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any, TypeVar

from src.models.errors import MalformedRecordError
from src.models.listing import Listing
from src.models.product import Product
from src.models.result import Result

logger = logging.getLogger("reconcile.storage")

T = TypeVar("T")


def _require_str(record: dict[str, Any], key: str) -> str:
    """Return a mandatory string field or raise ``ValueError``."""
    value = record.get(key)
    if not isinstance(value, str):
        msg = f"missing or non-string field '{key}'"
        raise ValueError(msg)
    return value


def _optional_str(record: dict[str, Any], key: str) -> str | None:
    """Return an optional string field, ``None`` when absent."""
    value = record.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        msg = f"non-string field '{key}'"
        raise ValueError(msg)
    return value


def parse_product(record: dict[str, Any]) -> Product:
    """Build a :class:`Product` from one decoded JSON object."""
    return Product(
        product_name=_require_str(record, "product_name"),
        manufacturer=_require_str(record, "manufacturer"),
        model=_require_str(record, "model"),
        family=_optional_str(record, "family"),
        announced_date=_optional_str(record, "announced-date"),
    )


def parse_listing(record: dict[str, Any]) -> Listing:
    """Build a :class:`Listing` from one decoded JSON object.

    Retail feeds publish prices as strings (``"35.99"``) as often as
    numbers; both are accepted.  The record itself is kept on the
    listing so results echo it unchanged.
    """
    raw_price = record.get("price")
    if isinstance(raw_price, bool) or raw_price is None:
        msg = "missing or invalid field 'price'"
        raise ValueError(msg)
    try:
        price = float(raw_price)
    except (TypeError, ValueError):
        msg = f"unparseable price {raw_price!r}"
        raise ValueError(msg) from None
    # float() accepts "NaN" and "inf"; neither can be averaged
    if not math.isfinite(price):
        msg = f"non-finite price {raw_price!r}"
        raise ValueError(msg)

    return Listing(
        title=_require_str(record, "title"),
        manufacturer=_optional_str(record, "manufacturer") or "",
        currency=_require_str(record, "currency").strip().upper(),
        price=price,
        source=record,
    )


class FileManager:
    """Handles reading batch inputs from and writing results to disk."""

    @staticmethod
    def _iter_records(
        path: Path, parse: Callable[[dict[str, Any]], T]
    ) -> Iterator[T]:
        """Yield one parsed record per non-blank line of *path*."""
        with open(path, encoding="utf-8") as f:
            for line_no, line in enumerate(f, 1):
                if not line.strip():
                    continue
                try:
                    record = json.loads(line)
                except json.JSONDecodeError as exc:
                    raise MalformedRecordError(
                        path, line_no, f"invalid JSON ({exc.msg})"
                    ) from exc
                if not isinstance(record, dict):
                    raise MalformedRecordError(
                        path, line_no, "expected a JSON object"
                    )
                try:
                    item = parse(record)
                except ValueError as exc:
                    raise MalformedRecordError(
                        path, line_no, str(exc)
                    ) from exc
                yield item

    def read_products(self, path: Path) -> list[Product]:
        """Read every product from a JSON-lines file."""
        products = list(self._iter_records(path, parse_product))
        logger.info("Read %d products from %s", len(products), path)
        return products

    def read_listings(self, path: Path) -> list[Listing]:
        """Read every listing from a JSON-lines file."""
        listings = list(self._iter_records(path, parse_listing))
        logger.info("Read %d listings from %s", len(listings), path)
        return listings

    def write_results(self, path: Path, results: list[Result]) -> Path:
        """Write one JSON object per result, in order."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            for result in results:
                f.write(json.dumps(result.to_dict(), ensure_ascii=False))
                f.write("\n")

        logger.info("Saved %d results to %s", len(results), path)
        return path
