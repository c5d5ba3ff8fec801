# src/models/result.py

"""Reconciliation output records."""

from dataclasses import dataclass, field

from src.models.listing import Listing
from src.models.product import Product


@dataclass(frozen=True)
class MatchedProduct:
    """A product together with the indices of the listings it matched."""

    product: Product
    listing_indices: tuple[int, ...] = ()


@dataclass
class Result:
    """Final per-product output: the product name and its listings."""

    product_name: str
    listings: list[Listing] = field(
        default_factory=lambda: list[Listing]()
    )

    def to_dict(self) -> dict[str, object]:
        """Serialise to the line-delimited output shape."""
        return {
            "product_name": self.product_name,
            "listings": [listing.to_dict() for listing in self.listings],
        }
