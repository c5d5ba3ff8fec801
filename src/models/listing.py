# src/models/listing.py

"""Retail listing record."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Listing:
    """A freeform listing scraped from a retail source.

    ``source`` holds the decoded record the listing was read from, if
    any.  It does not take part in equality and is echoed verbatim on
    output so string prices and extra feed fields survive a batch.
    """

    title: str
    manufacturer: str
    currency: str
    price: float
    source: Mapping[str, Any] | None = field(
        default=None, compare=False, repr=False
    )

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the JSON shape listings are read from."""
        if self.source is not None:
            return dict(self.source)
        return {
            "title": self.title,
            "manufacturer": self.manufacturer,
            "currency": self.currency,
            "price": self.price,
        }
