"""
Metallindex — Batch Orchestrator

Processes targets strictly one at a time on a single shared page:
navigate, run the extraction chain, pause, record the result.

A failed navigation is noted and extraction still runs against whatever
the page currently shows; no per-target failure aborts the batch.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Sequence

import structlog

from metallindex.browser import PageRenderer
from metallindex.config import settings
from metallindex.models import Report, ScrapeResult, Target
from metallindex.pipeline.pacing import Pacer
from metallindex.scraper.runner import PriceChainRunner

logger = structlog.get_logger(__name__)

PAGE_LOAD_FAILED_PREFIX = "page-load-failed: "


class BatchOrchestrator:
    """
    Scrapes a list of targets into a Report.

    Usage:
        orchestrator = BatchOrchestrator(page)
        report = await orchestrator.run(targets)
    """

    def __init__(
        self,
        page: PageRenderer,
        chain: PriceChainRunner | None = None,
        pacer: Pacer | None = None,
        source: str | None = None,
        navigation_timeout_ms: int | None = None,
    ) -> None:
        self.page = page
        self.chain = chain or PriceChainRunner()
        self.pacer = pacer or Pacer()
        self.source = source if source is not None else settings.REPORT_SOURCE
        self.navigation_timeout_ms = (
            navigation_timeout_ms if navigation_timeout_ms is not None else settings.NAVIGATION_TIMEOUT_MS
        )

    async def scrape_target(self, target: Target) -> ScrapeResult:
        """Navigate to one target and run the extraction chain on it."""
        logger.info("target_processing", target_id=target.id, name=target.name, source="batch")
        notes: list[str] = []

        try:
            await self.page.navigate(target.url, self.navigation_timeout_ms)
        except Exception as e:
            logger.warning(
                "target_page_load_failed",
                target_id=target.id,
                url=target.url,
                error=str(e),
                error_type=type(e).__name__,
                source="batch",
            )
            notes.append(f"{PAGE_LOAD_FAILED_PREFIX}{e}")

        chain_result = await self.chain.run(self.page, target)
        notes.extend(chain_result.notes)

        return ScrapeResult.from_target(target, chain_result.price, notes)

    async def run(self, targets: Sequence[Target]) -> Report:
        """
        Scrape every target in order and assemble the report.

        Args:
            targets: Targets in the order they should appear in the report.

        Returns:
            Report with one item per target, in input order.
        """
        items: list[ScrapeResult] = []

        for index, target in enumerate(targets):
            if index > 0:
                await self.pacer.wait()
            items.append(await self.scrape_target(target))

        report = Report(
            source=self.source,
            generated_at=datetime.now(timezone.utc),
            items=items,
        )
        logger.info(
            "batch_complete",
            targets=len(items),
            found=report.found_count,
            source="batch",
        )
        return report
