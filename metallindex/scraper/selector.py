"""
Metallindex — Explicit Selector Strategy

Most precise strategy: a hand-picked CSS selector per target pointing
at the element that shows the price. Skipped when the target has none.
"""

from __future__ import annotations

import structlog

from metallindex.browser import PageRenderer
from metallindex.config import settings
from metallindex.models import Target
from metallindex.scraper import ExtractionOutcome, Found, NotFound
from metallindex.scraper.base import PriceStrategy
from metallindex.utils.number_format import normalize_number_string

logger = structlog.get_logger(__name__)


class SelectorStrategy(PriceStrategy):
    """Wait for the target's selector, then normalize the element's text."""

    name = "selector"
    miss_note = "selector-not-found"

    def __init__(self, timeout_ms: int | None = None) -> None:
        self.timeout_ms = timeout_ms if timeout_ms is not None else settings.SELECTOR_TIMEOUT_MS

    def applies(self, target: Target) -> bool:
        return target.configured_selector is not None

    async def _extract(self, page: PageRenderer, target: Target) -> ExtractionOutcome:
        selector = target.configured_selector
        if selector is None:
            return NotFound()

        if not await page.wait_for_selector(selector, self.timeout_ms):
            logger.info(
                "selector_timeout",
                target_id=target.id,
                selector=selector,
                timeout_ms=self.timeout_ms,
                source="selector",
            )
            return NotFound()

        text = await page.query_text(selector)
        value = normalize_number_string(text)
        if value is None:
            logger.info(
                "selector_text_not_numeric",
                target_id=target.id,
                selector=selector,
                text=text,
                source="selector",
            )
            return NotFound()

        return Found(value)
