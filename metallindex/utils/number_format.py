"""
Metallindex — Locale-aware Price Normalization

Dealer pages render prices in German/Austrian format:
    1.234,56 €    1 234,56 €    99,99 €

"." and spaces are thousands separators, "," is the decimal separator.
The first number-looking run in the text is taken; currency symbols and
surrounding labels are ignored.

Known limitation: American decimals without grouping ("1234.56") lose
their decimal point, since every "." is treated as a thousands separator.
"""

from __future__ import annotations

import math
import re

import structlog

logger = structlog.get_logger(__name__)

# 1-3 digits, optional "."/space grouped thousands, optional decimal tail
PRICE_PATTERN = re.compile(r"\d{1,3}(?:[.\s]\d{3})*(?:[,.]\d+)?")

_WHITESPACE_RUN = re.compile(r"\s+")
_NARROW_NBSP = "\u202f"


def find_number(text: str) -> str | None:
    """Return the first raw numeric run in ``text``, or None."""
    match = PRICE_PATTERN.search(text)
    return match.group(0) if match else None


def normalize_number_string(text: object) -> float | None:
    """
    Convert locale-formatted price text to a float.

    Args:
        text: Raw text from the page (any type; non-strings yield None).

    Returns:
        Finite float, or None if no numeric run is found.

    Examples:
        >>> normalize_number_string("1.234,56")
        1234.56
        >>> normalize_number_string("1 234,56 €")
        1234.56
        >>> normalize_number_string("kein Preis") is None
        True
    """
    if not isinstance(text, str):
        return None

    cleaned = _WHITESPACE_RUN.sub(" ", text.replace(_NARROW_NBSP, "")).strip()

    raw = find_number(cleaned)
    if raw is None:
        return None

    digits = _WHITESPACE_RUN.sub("", raw).replace(".", "").replace(",", ".", 1)
    try:
        value = float(digits)
    except ValueError:
        logger.debug("number_parse_failed", raw=raw, source="number_format")
        return None

    if not math.isfinite(value):
        return None
    return value
