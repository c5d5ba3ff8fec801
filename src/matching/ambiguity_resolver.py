# src/matching/ambiguity_resolver.py

"""Keep generic models from claiming listings of more specific ones.

A short model such as ``"900"`` is a sparse subsequence of ``"9000"``
or ``"9-00X"``.  The generic product's label pattern can then match
listings that really describe the specific product.  Every listing
that also matches a *similar model* is rejected for the generic
product; nothing is scored and no tie is broken in its favour.
"""

import logging
import re
from collections.abc import Sequence

from src.matching.label_matcher import build_label_pattern, label_chars
from src.models.product import Product

logger = logging.getLogger("reconcile.matching")


def _subsequence_pattern(model: str, allow_dot: bool) -> re.Pattern[str] | None:
    """Join the model's label characters with a match-anything gap."""
    chars = label_chars(model, allow_dot)
    if not chars:
        return None
    return re.compile(
        ".*".join(re.escape(ch) for ch in chars),
        re.IGNORECASE | re.DOTALL,
    )


def find_similar_models(
    products: Sequence[Product],
    product: Product,
    allow_dot: bool = False,
) -> list[str]:
    """Return the models of other products that contain *product*'s model.

    Models are returned in catalogue order without duplicates.
    """
    pattern = _subsequence_pattern(product.model, allow_dot)
    if pattern is None:
        return []

    similar: list[str] = []
    for other in products:
        if other.model == product.model or other.model in similar:
            continue
        if pattern.search(other.model):
            similar.append(other.model)

    if similar:
        logger.debug(
            "Model %r of '%s' is similar to %s",
            product.model,
            product.product_name,
            similar,
        )
    return similar


class AmbiguityResolver:
    """Reject titles that also name one of a product's similar models."""

    def __init__(
        self,
        product: Product,
        similar_models: Sequence[str],
        allow_dot: bool = False,
    ) -> None:
        self.product = product
        self.similar_models = list(similar_models)
        self._patterns = [
            build_label_pattern(model, allow_dot)
            for model in self.similar_models
        ]

    @classmethod
    def for_catalogue(
        cls,
        products: Sequence[Product],
        product: Product,
        allow_dot: bool = False,
    ) -> "AmbiguityResolver":
        """Build a resolver from the full product catalogue."""
        return cls(
            product,
            find_similar_models(products, product, allow_dot),
            allow_dot,
        )

    def is_excluded(self, title: str) -> bool:
        """Return True when *title* matches any similar model's label."""
        return any(p.fullmatch(title) is not None for p in self._patterns)
