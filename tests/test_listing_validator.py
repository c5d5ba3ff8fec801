# tests/test_listing_validator.py

"""Tests for ListingValidator."""

import unittest

from src.filters.listing_validator import ListingValidator, rejection_reason
from src.models.listing import Listing


def _make(title: str = "Acme X100", price: float = 10.0) -> Listing:
    """Create a minimal Listing."""
    return Listing(
        title=title, manufacturer="Acme", currency="CAD", price=price
    )


class TestValidate(unittest.TestCase):
    """ListingValidator.validate behaviour."""

    def test_empty_list(self) -> None:
        """Empty input returns empty output."""
        valid, dropped = ListingValidator.validate([])
        self.assertEqual(valid, [])
        self.assertEqual(dropped, 0)

    def test_valid_listings_kept(self) -> None:
        """Well-formed listings pass through in order."""
        listings = [_make("A"), _make("B")]
        valid, dropped = ListingValidator.validate(listings)
        self.assertEqual(valid, listings)
        self.assertEqual(dropped, 0)

    def test_blank_title_dropped(self) -> None:
        """Whitespace-only titles are dropped."""
        valid, dropped = ListingValidator.validate([_make("   "), _make()])
        self.assertEqual(len(valid), 1)
        self.assertEqual(dropped, 1)

    def test_negative_price_dropped(self) -> None:
        """Negative prices are dropped."""
        valid, dropped = ListingValidator.validate([_make(price=-1.0)])
        self.assertEqual(valid, [])
        self.assertEqual(dropped, 1)

    def test_non_finite_price_dropped(self) -> None:
        """NaN and infinite prices never reach the price filter."""
        for price in (float("nan"), float("inf"), float("-inf")):
            with self.subTest(price=price):
                valid, dropped = ListingValidator.validate(
                    [_make(price=200.0), _make(price=price)]
                )
                self.assertEqual([item.price for item in valid], [200.0])
                self.assertEqual(dropped, 1)

    def test_blank_manufacturer_dropped(self) -> None:
        """A listing without a manufacturer can never match."""
        listing = Listing(
            title="Acme X100", manufacturer=" ", currency="CAD", price=1.0
        )
        valid, dropped = ListingValidator.validate([listing])
        self.assertEqual(valid, [])
        self.assertEqual(dropped, 1)

    def test_rejection_reason(self) -> None:
        """Each failure is named; valid listings have no reason."""
        self.assertIsNone(rejection_reason(_make()))
        self.assertEqual(rejection_reason(_make("")), "empty title")
        self.assertEqual(
            rejection_reason(_make(price=float("nan"))), "non-finite price"
        )
        self.assertEqual(rejection_reason(_make(price=-2.0)), "negative price")

    def test_zero_price_kept(self) -> None:
        """Zero is a valid, non-negative price."""
        valid, dropped = ListingValidator.validate([_make(price=0.0)])
        self.assertEqual(len(valid), 1)
        self.assertEqual(dropped, 0)


if __name__ == "__main__":
    unittest.main()
