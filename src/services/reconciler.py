# src/services/reconciler.py

"""Orchestrates product/listing reconciliation for one batch.

Stage order per product:

1. normalise listing titles (once per batch, bundle suffixes removed)
2. naive match on manufacturer, model and family
3. drop listings that also name a similar, more specific model
4. drop price outliers among the remaining matches
5. project listing indices back to full records

Each product is processed independently against the read-only
listing sequence, so products can be matched concurrently.  Results
always come back in product input order.
"""

import asyncio
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from src.config.settings import Settings
from src.filters.outlier_filter import OutlierFilter
from src.matching.ambiguity_resolver import AmbiguityResolver
from src.matching.product_matcher import ProductMatcher, normalize_title
from src.models.errors import LabelPatternError, UnknownCurrencyError
from src.models.listing import Listing
from src.models.product import Product
from src.models.result import MatchedProduct, Result

logger = logging.getLogger("reconcile.reconciler")


@dataclass(frozen=True)
class MatchPolicy:
    """Which optional stages run, and how labels are tokenised."""

    disambiguate: bool = True
    filter_outliers: bool = True
    normalize_titles: bool = True
    allow_dot: bool = False
    strict_currency: bool = False

    @classmethod
    def from_settings(cls) -> "MatchPolicy":
        """Build a policy from the current :class:`Settings` values."""
        return cls(
            disambiguate=Settings.DISAMBIGUATE,
            filter_outliers=Settings.FILTER_OUTLIERS,
            normalize_titles=Settings.NORMALIZE_TITLES,
            allow_dot=Settings.LABEL_ALLOW_DOT,
            strict_currency=Settings.STRICT_CURRENCY,
        )


@dataclass
class ReconcileReport:
    """Container for a completed reconciliation batch."""

    results: list[Result] = field(
        default_factory=lambda: list[Result]()
    )
    naive_match_count: int = 0
    ambiguous_count: int = 0
    outlier_count: int = 0
    errors: list[str] = field(
        default_factory=lambda: list[str]()
    )

    @property
    def matched_listing_count(self) -> int:
        """Total listings attributed across all results."""
        return sum(len(r.listings) for r in self.results)


@dataclass
class _ProductOutcome:
    """Per-product work item; each worker owns exactly one."""

    matched: MatchedProduct
    naive_count: int = 0
    ambiguous_count: int = 0
    outlier_count: int = 0
    errors: list[str] = field(
        default_factory=lambda: list[str]()
    )


class Reconciler:
    """Match every product against every listing for one batch."""

    def __init__(
        self,
        products: Sequence[Product],
        listings: Sequence[Listing],
        policy: MatchPolicy | None = None,
        rates: Mapping[str, float] | None = None,
    ) -> None:
        self.products = list(products)
        self.listings = list(listings)
        self.policy = policy if policy is not None else MatchPolicy.from_settings()
        self.outlier_filter = OutlierFilter(rates)
        self._titles = self._prepare_titles()

    def _prepare_titles(self) -> list[str]:
        """Normalise every listing title once for the whole batch."""
        if not self.policy.normalize_titles:
            return [listing.title for listing in self.listings]
        return [normalize_title(listing.title) for listing in self.listings]

    # ── Per-product pipeline ─────────────────────────────

    def _match_product(self, product: Product) -> _ProductOutcome:
        """Run match → disambiguate → filter for a single product."""
        allow_dot = self.policy.allow_dot
        try:
            matcher = ProductMatcher(product, allow_dot)
            resolver = (
                AmbiguityResolver.for_catalogue(
                    self.products, product, allow_dot
                )
                if self.policy.disambiguate
                else None
            )
        except LabelPatternError as exc:
            logger.error(
                "Skipping '%s': %s", product.product_name, exc
            )
            return _ProductOutcome(
                matched=MatchedProduct(product), errors=[str(exc)]
            )

        indices: list[int] = []
        naive = 0
        ambiguous = 0
        for index, listing in enumerate(self.listings):
            title = self._titles[index]
            if not matcher.matches_title(listing.manufacturer, title):
                continue
            naive += 1
            if resolver is not None and resolver.is_excluded(title):
                ambiguous += 1
                continue
            indices.append(index)

        outcome = _ProductOutcome(
            matched=MatchedProduct(product, tuple(indices)),
            naive_count=naive,
            ambiguous_count=ambiguous,
        )

        if self.policy.filter_outliers:

            def _record_unknown(index: int, exc: UnknownCurrencyError) -> None:
                logger.warning(
                    "Listing %d of '%s' kept without price check: %s",
                    index,
                    product.product_name,
                    exc,
                )
                outcome.errors.append(
                    f"{product.product_name}: listing {index}: {exc}"
                )

            kept, removed = self.outlier_filter.prune_indices(
                self.listings,
                indices,
                on_unknown=(
                    None if self.policy.strict_currency else _record_unknown
                ),
            )
            outcome.matched = MatchedProduct(product, tuple(kept))
            outcome.outlier_count = removed

        logger.debug(
            "'%s': %d naive, %d ambiguous, %d outliers, %d kept",
            product.product_name,
            outcome.naive_count,
            outcome.ambiguous_count,
            outcome.outlier_count,
            len(outcome.matched.listing_indices),
        )
        return outcome

    def _build_report(
        self, outcomes: Sequence[_ProductOutcome]
    ) -> ReconcileReport:
        """Resolve indices to listings and tally counters."""
        report = ReconcileReport()
        for outcome in outcomes:
            matched = outcome.matched
            report.results.append(
                Result(
                    product_name=matched.product.product_name,
                    listings=[
                        self.listings[i] for i in matched.listing_indices
                    ],
                )
            )
            report.naive_match_count += outcome.naive_count
            report.ambiguous_count += outcome.ambiguous_count
            report.outlier_count += outcome.outlier_count
            report.errors.extend(outcome.errors)

        logger.info(
            "Reconciled %d products against %d listings: "
            "%d attributed, %d ambiguous, %d outliers, %d errors",
            len(self.products),
            len(self.listings),
            report.matched_listing_count,
            report.ambiguous_count,
            report.outlier_count,
            len(report.errors),
        )
        return report

    # ── Entry points ─────────────────────────────────────

    def reconcile(self) -> ReconcileReport:
        """Match all products sequentially."""
        outcomes = [self._match_product(p) for p in self.products]
        return self._build_report(outcomes)

    async def reconcile_async(self) -> ReconcileReport:
        """Match all products concurrently, one worker per product.

        ``asyncio.gather`` returns outcomes in submission order, so the
        report is identical to :meth:`reconcile`.
        """
        tasks = [
            asyncio.to_thread(self._match_product, product)
            for product in self.products
        ]
        outcomes: list[_ProductOutcome] = await asyncio.gather(*tasks)
        return self._build_report(outcomes)


def reconcile(
    products: Sequence[Product],
    listings: Sequence[Listing],
    policy: MatchPolicy | None = None,
) -> list[Result]:
    """Reconcile *products* with *listings* and return one result each."""
    return Reconciler(products, listings, policy).reconcile().results
