"""
Metallindex — Heuristic Text-Search Strategy (last resort)

For pages with no structured markup and no stable selector. One page
script collects the rendered text of every element under <body> in
document order; the scan itself runs here:

1. first element whose text mentions a buyback keyword and holds a number
2. otherwise, first element whose text holds a currency symbol and a number

Accuracy depends entirely on keyword coverage and is best-effort.
"""

from __future__ import annotations

from typing import Iterable, Sequence

import structlog

from metallindex.browser import PageRenderer
from metallindex.config import settings
from metallindex.models import Target
from metallindex.scraper import ExtractionOutcome, Found, NotFound
from metallindex.scraper.base import PriceStrategy
from metallindex.utils.number_format import find_number, normalize_number_string

logger = structlog.get_logger(__name__)

# Rendered text of every descendant of <body>, depth-first document order
BODY_TEXTS_JS = """
() => Array.from(document.querySelectorAll('body *'))
    .map(el => (el.innerText || '').trim())
"""


def find_price_text(
    texts: Iterable[str],
    keywords: Sequence[str],
    currency_symbols: Sequence[str],
) -> str | None:
    """
    Return the raw numeric run chosen by the keyword pass, then the currency pass.

    Args:
        texts: Element texts in document order.
        keywords: Lowercase buyback terms searched in pass 1.
        currency_symbols: Symbols searched in pass 2.

    Returns:
        Unnormalized numeric substring, or None.
    """
    candidates = [t.strip() for t in texts if isinstance(t, str) and t.strip()]

    for text in candidates:
        lowered = text.lower()
        if any(kw in lowered for kw in keywords):
            raw = find_number(text)
            if raw:
                return raw

    for text in candidates:
        if any(symbol in text for symbol in currency_symbols):
            raw = find_number(text)
            if raw:
                return raw

    return None


class HeuristicStrategy(PriceStrategy):
    """Keyword / currency-symbol scan over the rendered body text."""

    name = "heuristic"

    def __init__(
        self,
        keywords: Sequence[str] | None = None,
        currency_symbols: Sequence[str] | None = None,
    ) -> None:
        self.keywords = [k.lower() for k in (keywords if keywords is not None else settings.HEURISTIC_KEYWORDS)]
        self.currency_symbols = list(
            currency_symbols if currency_symbols is not None else settings.CURRENCY_SYMBOLS
        )

    async def _extract(self, page: PageRenderer, target: Target) -> ExtractionOutcome:
        texts = await page.evaluate(BODY_TEXTS_JS) or []

        raw = find_price_text(texts, self.keywords, self.currency_symbols)
        if raw is None:
            return NotFound()

        value = normalize_number_string(raw)
        if value is None:
            return NotFound()

        logger.debug("heuristic_match", target_id=target.id, raw=raw, source="heuristic")
        return Found(value)
