# src/matching/product_matcher.py

"""Naive product/listing matching on manufacturer, model and family."""

import logging
import re

from src.matching.label_matcher import build_label_pattern
from src.models.listing import Listing
from src.models.product import Product

logger = logging.getLogger("reconcile.matching")

# "+ Carrying Case and Strap": two words of 2+ chars after a plus sign
_BONUS_SUFFIX_RE = re.compile(r"\s*\+\s*\w{2,}\s+\w{2,}.*$", re.DOTALL)


def normalize_title(title: str) -> str:
    """Strip a trailing bonus/bundle suffix from a listing title.

    ``"Camera X100 + Carrying Case and Strap"`` becomes
    ``"Camera X100"``.  Titles without a bundle suffix are returned
    unchanged.
    """
    return _BONUS_SUFFIX_RE.sub("", title)


class ProductMatcher:
    """Decide whether a listing naively belongs to one product.

    Patterns are compiled once at construction so the matcher can be
    applied to every listing in the batch cheaply.
    """

    def __init__(self, product: Product, allow_dot: bool = False) -> None:
        self.product = product
        self._manufacturer = product.manufacturer.casefold()
        self._model_re = build_label_pattern(product.model, allow_dot)
        self._family_re = (
            build_label_pattern(product.family, allow_dot)
            if product.family
            else None
        )

    def matches_title(self, manufacturer: str, title: str) -> bool:
        """Apply the three naive rules to a manufacturer/title pair."""
        if manufacturer.casefold() != self._manufacturer:
            return False
        if self._model_re.fullmatch(title) is None:
            return False
        if self._family_re is not None:
            return self._family_re.fullmatch(title) is not None
        return True

    def matches(self, listing: Listing) -> bool:
        """Return True if *listing* naively matches the product."""
        return self.matches_title(listing.manufacturer, listing.title)


def is_naive_match(
    product: Product, listing: Listing, allow_dot: bool = False
) -> bool:
    """Functional form of :meth:`ProductMatcher.matches`."""
    return ProductMatcher(product, allow_dot).matches(listing)
