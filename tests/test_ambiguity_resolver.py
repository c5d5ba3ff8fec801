# tests/test_ambiguity_resolver.py

"""Tests for similar-model detection and exclusion."""

import unittest

from src.matching.ambiguity_resolver import (
    AmbiguityResolver,
    find_similar_models,
)
from src.models.product import Product


def _product(model: str, name: str | None = None) -> Product:
    """Create a minimal Product for a model."""
    return Product(
        product_name=name or f"Acme_{model}",
        manufacturer="Acme",
        model=model,
    )


class TestFindSimilarModels(unittest.TestCase):
    """find_similar_models behaviour."""

    def test_substring_model_is_similar(self) -> None:
        """'70' is contained in '700'."""
        products = [_product("70"), _product("700")]
        self.assertEqual(
            find_similar_models(products, products[0]), ["700"]
        )

    def test_longer_model_has_no_similar(self) -> None:
        """The relation only runs from generic to specific."""
        products = [_product("70"), _product("700")]
        self.assertEqual(find_similar_models(products, products[1]), [])

    def test_sparse_subsequence_is_similar(self) -> None:
        """Characters may be separated by anything in the other model."""
        products = [_product("900"), _product("9-0X0")]
        self.assertEqual(
            find_similar_models(products, products[0]), ["9-0X0"]
        )

    def test_punctuation_in_own_model_ignored(self) -> None:
        """'EOS 5D' is similar to 'EOS-5D Mark II'."""
        products = [_product("EOS 5D"), _product("EOS-5D Mark II")]
        self.assertEqual(
            find_similar_models(products, products[0]),
            ["EOS-5D Mark II"],
        )

    def test_case_insensitive(self) -> None:
        """Model comparison ignores case."""
        products = [_product("x10"), _product("X100")]
        self.assertEqual(
            find_similar_models(products, products[0]), ["X100"]
        )

    def test_unrelated_models(self) -> None:
        """Models without subsequence overlap are not similar."""
        products = [_product("D90"), _product("D300")]
        self.assertEqual(find_similar_models(products, products[0]), [])

    def test_catalogue_order_preserved(self) -> None:
        """Similar models come back in product order."""
        products = [
            _product("10"),
            _product("1000"),
            _product("100"),
            _product("D10"),
        ]
        self.assertEqual(
            find_similar_models(products, products[0]),
            ["1000", "100", "D10"],
        )

    def test_single_product(self) -> None:
        """A lone product has no similar models."""
        products = [_product("70")]
        self.assertEqual(find_similar_models(products, products[0]), [])


class TestAmbiguityResolver(unittest.TestCase):
    """AmbiguityResolver.is_excluded behaviour."""

    def test_excludes_title_naming_specific_model(self) -> None:
        """A title matching the similar model's label is excluded."""
        resolver = AmbiguityResolver(_product("900"), ["9-00"])
        self.assertTrue(resolver.is_excluded("Acme 900 / 9-00 kit"))

    def test_keeps_title_naming_only_generic_model(self) -> None:
        """A title for the generic model alone is not excluded."""
        resolver = AmbiguityResolver(_product("70"), ["700"])
        self.assertFalse(resolver.is_excluded("Acme 70 camera"))

    def test_no_similar_models_never_excludes(self) -> None:
        """Without similar models nothing is excluded."""
        resolver = AmbiguityResolver(_product("70"), [])
        self.assertFalse(resolver.is_excluded("Acme 700"))

    def test_for_catalogue(self) -> None:
        """for_catalogue computes similar models from the product list."""
        products = [_product("70"), _product("700")]
        resolver = AmbiguityResolver.for_catalogue(products, products[0])
        self.assertEqual(resolver.similar_models, ["700"])
        self.assertTrue(resolver.is_excluded("Camera Model 700"))


if __name__ == "__main__":
    unittest.main()
