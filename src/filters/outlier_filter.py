# src/filters/outlier_filter.py

"""Price-based pruning of mismatched listings."""

import logging
from collections.abc import Callable, Mapping, Sequence
from statistics import fmean

from src.config.settings import Settings
from src.models.errors import UnknownCurrencyError
from src.models.listing import Listing

logger = logging.getLogger("reconcile.filters")

# Called with the listing index and the error for each unconvertible price
UnknownCurrencyHandler = Callable[[int, UnknownCurrencyError], None]


class OutlierFilter:
    """Drop listings priced far below the mean of their matched group.

    Accessories (lens caps, batteries, cases) routinely slip past the
    textual rules because their titles name the product they fit.
    Such listings cost a small fraction of the product itself, so any
    listing whose normalised price is not above ``mean / divisor`` is
    removed.
    """

    def __init__(
        self,
        rates: Mapping[str, float] | None = None,
        divisor: float | None = None,
    ) -> None:
        self.rates: Mapping[str, float] = (
            rates if rates is not None else Settings.CURRENCY_RATES
        )
        self.divisor: float = (
            divisor if divisor is not None else Settings.OUTLIER_PRICE_DIVISOR
        )

    def normalised_price(self, listing: Listing) -> float:
        """Convert a listing price to reference-currency units.

        Raises:
            UnknownCurrencyError: if the currency is not in the table.
        """
        try:
            rate = self.rates[listing.currency]
        except KeyError:
            raise UnknownCurrencyError(listing.currency) from None
        return listing.price * rate

    def prune_indices(
        self,
        listings: Sequence[Listing],
        indices: Sequence[int],
        on_unknown: UnknownCurrencyHandler | None = None,
    ) -> tuple[list[int], int]:
        """Filter listing *indices* by price.

        Without *on_unknown* an unconvertible currency raises.  With it,
        the handler is told about each such listing, which is then left
        out of the mean and kept unfiltered; the convertible listings
        are still pruned.

        Returns the kept indices, in the order given, and the count removed.
        An empty index list is returned unchanged.
        """
        if not indices:
            return [], 0

        prices: dict[int, float] = {}
        for index in indices:
            try:
                prices[index] = self.normalised_price(listings[index])
            except UnknownCurrencyError as exc:
                if on_unknown is None:
                    raise
                on_unknown(index, exc)

        if not prices:
            return list(indices), 0

        threshold = fmean(prices.values()) / self.divisor

        kept = [
            index
            for index in indices
            if index not in prices or prices[index] > threshold
        ]
        removed = len(indices) - len(kept)
        if removed:
            logger.debug(
                "Outlier filter removed %d of %d listings "
                "(threshold %.2f)",
                removed,
                len(indices),
                threshold,
            )
        return kept, removed

    def prune(
        self, listings: Sequence[Listing]
    ) -> tuple[list[Listing], int]:
        """Filter full listing records by price.

        Returns the kept listings and the count removed.
        """
        kept, removed = self.prune_indices(
            listings, range(len(listings))
        )
        return [listings[i] for i in kept], removed
