"""
Metallindex — Price Strategy Base

Every extraction strategy exposes the same capability:

    outcome = await strategy.attempt(page, target)

attempt() never raises. Unexpected errors from the page are logged and
returned as NotFound with a diagnostic, so the chain can move on and the
error still shows up in the target's notes.
"""

from __future__ import annotations

import structlog

from metallindex.browser import PageRenderer
from metallindex.models import Target
from metallindex.scraper import ExtractionOutcome, NotFound

logger = structlog.get_logger(__name__)


class PriceStrategy:
    """Base class for one way of pulling a price out of a rendered page."""

    # Note appended when this strategy produces the price
    name: str = ""
    # Note appended when this strategy was attempted and failed, if any
    miss_note: str | None = None

    def applies(self, target: Target) -> bool:
        """Whether the strategy should run for ``target`` at all."""
        return True

    async def attempt(self, page: PageRenderer, target: Target) -> ExtractionOutcome:
        try:
            return await self._extract(page, target)
        except Exception as e:
            logger.error(
                "strategy_failed",
                strategy=self.name,
                target_id=target.id,
                error=str(e),
                error_type=type(e).__name__,
                source="strategy",
            )
            return NotFound(diagnostic=f"{type(e).__name__}: {e}")

    async def _extract(self, page: PageRenderer, target: Target) -> ExtractionOutcome:
        raise NotImplementedError
