# src/filters/listing_validator.py

"""Listing validation: drop listings the matcher or price filter cannot use."""

import logging
import math

from src.models.listing import Listing

logger = logging.getLogger("reconcile.filters")


def rejection_reason(listing: Listing) -> str | None:
    """Return why *listing* is unusable, or ``None`` when it is valid.

    A single NaN or infinite price would poison the mean in
    :class:`~src.filters.outlier_filter.OutlierFilter` and drop every
    other listing of the product, so non-finite prices are rejected
    along with negative ones.
    """
    if not listing.title.strip():
        return "empty title"
    if not listing.manufacturer.strip():
        return "empty manufacturer"
    if not math.isfinite(listing.price):
        return "non-finite price"
    if listing.price < 0:
        return "negative price"
    return None


class ListingValidator:
    """Validate listings before they reach the reconciler."""

    @staticmethod
    def validate(
        listings: list[Listing],
    ) -> tuple[list[Listing], int]:
        """Drop unusable listings, keeping the rest in input order.

        Returns the valid listings and the count of dropped items.
        """
        valid: list[Listing] = []
        reasons: dict[str, int] = {}

        for listing in listings:
            reason = rejection_reason(listing)
            if reason is None:
                valid.append(listing)
                continue
            logger.debug("Dropped listing (%s): %r", reason, listing.title)
            reasons[reason] = reasons.get(reason, 0) + 1

        dropped = len(listings) - len(valid)
        if dropped:
            logger.info(
                "Validation dropped %d invalid listings: %s",
                dropped,
                ", ".join(f"{n} {r}" for r, n in sorted(reasons.items())),
            )

        return valid, dropped
