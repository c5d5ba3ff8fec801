# src/config/settings.py

"""Central configuration for the listing reconciler."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean toggle from the environment."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Settings:
    """Central configuration for the listing reconciler."""

    # --- Matching policy ---
    DISAMBIGUATE: bool = _env_flag("RECONCILE_DISAMBIGUATE", True)
    FILTER_OUTLIERS: bool = _env_flag("RECONCILE_FILTER_OUTLIERS", True)
    NORMALIZE_TITLES: bool = _env_flag("RECONCILE_NORMALIZE_TITLES", True)
    LABEL_ALLOW_DOT: bool = _env_flag("RECONCILE_ALLOW_DOT", False)
    STRICT_CURRENCY: bool = _env_flag("RECONCILE_STRICT_CURRENCY", False)

    # --- Price filtering ---
    # Multiply a price by its rate to get CAD-equivalent units
    CURRENCY_RATES: dict[str, float] = {
        "CAD": 1.0,
        "USD": 1.21,
        "GBP": 1.83,
        "EUR": 1.37,
    }
    OUTLIER_PRICE_DIVISOR: float = 5.0  # Keep prices above mean / divisor

    # --- Logging ---
    CONSOLE_LOG_LEVEL: str = os.getenv("RECONCILE_LOG_LEVEL", "WARNING").upper()

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    PRODUCTS_PATH: Path = BASE_DIR / "products.txt"
    LISTINGS_PATH: Path = BASE_DIR / "listings.txt"
    RESULTS_PATH: Path = BASE_DIR / "results.txt"
    LOGS_DIR: Path = BASE_DIR / "logs"
