"""
Metallindex — Metadata-Tag Strategy

Checks <meta name|property="..." content="..."> tags such as
og:price:amount or product:price:amount.
"""

from __future__ import annotations

from metallindex.browser import ElementSnapshot, PageRenderer
from metallindex.models import Target
from metallindex.scraper import ExtractionOutcome, Found, NotFound
from metallindex.scraper.base import PriceStrategy
from metallindex.utils.number_format import normalize_number_string

PRICE_META_MARKERS = ("price", "og:price", "product:price:amount")


def extract_meta_price(metas: list[ElementSnapshot]) -> float | None:
    """First normalizable content of a price-like meta tag, in document order."""
    for meta in metas:
        name = meta.attributes.get("name") or meta.attributes.get("property")
        content = meta.attributes.get("content")
        if not name or not content:
            continue

        lowered = name.lower()
        if any(marker in lowered for marker in PRICE_META_MARKERS):
            value = normalize_number_string(content)
            if value is not None:
                return value
    return None


class MetaTagStrategy(PriceStrategy):
    name = "meta"

    async def _extract(self, page: PageRenderer, target: Target) -> ExtractionOutcome:
        value = extract_meta_price(await page.query_all("meta"))
        if value is None:
            return NotFound()
        return Found(value)
