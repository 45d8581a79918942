"""
Metallindex — Strategy Chain Runner

Orchestrates the four-strategy fallback chain, most certain first:
1. Explicit selector (only when the target configures one)
2. JSON-LD structured data
3. Meta tags
4. Heuristic text search (last resort)

Stops at the first strategy that finds a price and records one note per
strategy outcome, so the report shows exactly how each price was found.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

import structlog

from metallindex.browser import PageRenderer
from metallindex.config import Settings, settings
from metallindex.models import Target
from metallindex.scraper import Found
from metallindex.scraper.base import PriceStrategy
from metallindex.scraper.heuristic import HeuristicStrategy
from metallindex.scraper.json_ld import JsonLdStrategy
from metallindex.scraper.meta_tags import MetaTagStrategy
from metallindex.scraper.selector import SelectorStrategy

logger = structlog.get_logger(__name__)

NOT_FOUND_NOTE = "not-found"


@dataclass(frozen=True)
class ChainResult:
    price: float | None
    notes: list[str] = field(default_factory=list)


def default_strategies(config: Settings | None = None) -> list[PriceStrategy]:
    """Selector, JSON-LD, meta, heuristic: most certain first."""
    config = config or settings
    return [
        SelectorStrategy(timeout_ms=config.SELECTOR_TIMEOUT_MS),
        JsonLdStrategy(),
        MetaTagStrategy(),
        HeuristicStrategy(keywords=config.HEURISTIC_KEYWORDS, currency_symbols=config.CURRENCY_SYMBOLS),
    ]


class PriceChainRunner:
    """
    Runs the extraction fallback chain against one rendered page.

    Usage:
        runner = PriceChainRunner()
        result = await runner.run(page, target)
    """

    def __init__(self, strategies: Sequence[PriceStrategy] | None = None) -> None:
        self.strategies = list(strategies) if strategies is not None else default_strategies()

    async def run(self, page: PageRenderer, target: Target) -> ChainResult:
        """
        Try each applicable strategy in order until one finds a price.

        Args:
            page: Rendered page for the target (already navigated).
            target: Target being priced.

        Returns:
            ChainResult with the price (or None) and the ordered notes.
        """
        notes: list[str] = []

        for strategy in self.strategies:
            if not strategy.applies(target):
                continue

            logger.info("chain_trying_strategy", target_id=target.id, strategy=strategy.name, source="chain_runner")
            outcome = await strategy.attempt(page, target)

            if isinstance(outcome, Found):
                notes.append(strategy.name)
                logger.info(
                    "chain_price_found",
                    target_id=target.id,
                    strategy=strategy.name,
                    price=outcome.value,
                    source="chain_runner",
                )
                return ChainResult(price=outcome.value, notes=notes)

            if outcome.diagnostic:
                notes.append(f"{strategy.name}-error: {outcome.diagnostic}")
            if strategy.miss_note:
                notes.append(strategy.miss_note)

        notes.append(NOT_FOUND_NOTE)
        logger.warning("chain_all_strategies_failed", target_id=target.id, url=target.url, source="chain_runner")
        return ChainResult(price=None, notes=notes)
