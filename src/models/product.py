# src/models/product.py

"""Canonical product record."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Product:
    """A catalogue product that listings are reconciled against.

    ``family`` is ``None`` when the catalogue has no family for the
    product; an empty string is treated the same way by the matcher.
    """

    product_name: str
    manufacturer: str
    model: str
    family: str | None = None
    announced_date: str | None = None
