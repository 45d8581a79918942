"""
Metallindex — Structured-Data (JSON-LD) Strategy

Reads schema.org Product/Offer blocks from
<script type="application/ld+json">. Prices in structured data are
machine-formatted, so they are coerced with float() rather than the
locale normalizer.
"""

from __future__ import annotations

import json
import math
from typing import Any

import structlog

from metallindex.browser import PageRenderer
from metallindex.models import Target
from metallindex.scraper import ExtractionOutcome, Found, NotFound
from metallindex.scraper.base import PriceStrategy

logger = structlog.get_logger(__name__)

JSON_LD_SELECTOR = 'script[type="application/ld+json"]'


def _first(value: Any) -> Any:
    """Return the first element of a list, or the value itself."""
    if isinstance(value, list):
        return value[0] if value else None
    return value


def _offer_price(item: Any) -> Any:
    """Raw price of the first offer on a JSON-LD item, or None."""
    if not isinstance(item, dict) or not item.get("offers"):
        return None

    offer = _first(item["offers"])
    if not isinstance(offer, dict):
        return None

    price = offer.get("price")
    if not price:
        spec = _first(offer.get("priceSpecification"))
        if isinstance(spec, dict):
            price = spec.get("price")
    return price or None


def _coerce_price(raw: Any) -> float | None:
    """Coerce a machine-formatted price to a finite float."""
    if isinstance(raw, bool):
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def extract_json_ld_price(blocks: list[str]) -> float | None:
    """
    Find the first offer price across JSON-LD script bodies.

    Scripts are scanned in document order, items within an array in order.
    Blocks that are not valid JSON are skipped.

    Args:
        blocks: Text content of each ld+json script.

    Returns:
        The first price found, or None.
    """
    for block in blocks:
        try:
            parsed = json.loads(block)
        except (json.JSONDecodeError, ValueError):
            continue

        items = parsed if isinstance(parsed, list) else [parsed]
        for item in items:
            raw = _offer_price(item)
            if raw is None:
                continue
            value = _coerce_price(raw)
            if value is not None:
                return value
            logger.debug("json_ld_price_not_numeric", raw=str(raw), source="json_ld")
    return None


class JsonLdStrategy(PriceStrategy):
    """Use the first offer price from the page's structured product data."""

    name = "json-ld"

    async def _extract(self, page: PageRenderer, target: Target) -> ExtractionOutcome:
        scripts = await page.query_all(JSON_LD_SELECTOR)
        value = extract_json_ld_price([s.text for s in scripts])
        if value is None:
            return NotFound()
        return Found(value)
