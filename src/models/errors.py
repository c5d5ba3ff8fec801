# src/models/errors.py

"""Exception types raised while reading, matching and filtering records."""

from pathlib import Path


class ReconcileError(Exception):
    """Base class for reconciler errors.

    Attributes:
        code: Short machine-readable error code.
        message: Human-readable message.
    """

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)


class MalformedRecordError(ReconcileError):
    """A line of an input file is not a valid product or listing."""

    def __init__(self, path: Path | str, line_no: int, reason: str) -> None:
        self.path = Path(path)
        self.line_no = line_no
        self.reason = reason
        super().__init__(
            "MALFORMED_RECORD",
            f"{self.path.name}:{line_no}: {reason}",
        )


class LabelPatternError(ReconcileError):
    """A product label could not be compiled into a match pattern."""

    def __init__(self, label: str, reason: str) -> None:
        self.label = label
        super().__init__(
            "LABEL_PATTERN",
            f"Cannot build pattern for label {label!r}: {reason}",
        )


class UnknownCurrencyError(ReconcileError, KeyError):
    """A listing's currency has no entry in the conversion table."""

    def __init__(self, currency: str) -> None:
        self.currency = currency
        super().__init__(
            "UNKNOWN_CURRENCY",
            f"No conversion rate for currency {currency!r}",
        )

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.message
