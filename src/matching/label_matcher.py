# src/matching/label_matcher.py

"""Punctuation-tolerant, word-delimited label patterns.

A *label* is a model or family name such as ``"PowerShot"`` or
``"EOS 5D"``.  Retail titles spell labels inconsistently
(``"Power Shot"``, ``"power-shot"``, ``"EOS-5D"``), so the pattern built
here ignores punctuation inside the label while still requiring every
label character, in order, and a non-label character (or the string
edge) on either side.
"""

import logging
import re
from functools import lru_cache

from src.models.errors import LabelPatternError

logger = logging.getLogger("reconcile.matching")

NON_LABEL_CHAR = "[^a-z0-9]"
NON_LABEL_CHAR_KEEP_DOT = "[^a-z0-9.]"

_MATCH_ANYTHING = re.compile(r".*", re.DOTALL)


def non_label_char(allow_dot: bool = False) -> str:
    """Return the regex class of characters that carry no label meaning."""
    return NON_LABEL_CHAR_KEEP_DOT if allow_dot else NON_LABEL_CHAR


def label_chars(label: str, allow_dot: bool = False) -> str:
    """Strip every non-label character from *label*."""
    return re.sub(non_label_char(allow_dot), "", label, flags=re.IGNORECASE)


@lru_cache(maxsize=4096)
def build_label_pattern(label: str, allow_dot: bool = False) -> re.Pattern[str]:
    """Compile a case-insensitive pattern that finds *label* as a word.

    The returned pattern must be applied with ``fullmatch`` (or
    :func:`label_matches`); it is anchored on both ends.  A label with
    no label characters left after stripping matches every string.

    Raises:
        LabelPatternError: if the pattern fails to compile.
    """
    nl = non_label_char(allow_dot)
    chars = label_chars(label, allow_dot)
    if not chars:
        logger.debug("Label %r is empty after stripping", label)
        return _MATCH_ANYTHING

    body = f"{nl}?".join(re.escape(ch) for ch in chars)
    source = f"^(?:.*{nl})?{body}(?:{nl}.*)?$"
    try:
        return re.compile(source, re.IGNORECASE | re.DOTALL)
    except re.error as exc:
        raise LabelPatternError(label, str(exc)) from exc


def label_matches(label: str, text: str, allow_dot: bool = False) -> bool:
    """Return True when *text* contains *label* as a delimited word."""
    return build_label_pattern(label, allow_dot).fullmatch(text) is not None
