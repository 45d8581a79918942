"""
Tests for the batch orchestrator and pacing.

Covers:
- One ScrapeResult per target, in input order
- Navigation failure recorded as a note without aborting the batch
- Pacing between targets only
- ScrapeResult invariants (ok <-> price, finite price)
"""

from __future__ import annotations

import json
import math
import random
from unittest.mock import AsyncMock, patch

import pytest
from pydantic import ValidationError

from metallindex.models import ScrapeResult, Target
from metallindex.pipeline.batch import BatchOrchestrator
from metallindex.pipeline.pacing import Pacer
from metallindex.scraper.heuristic import HeuristicStrategy
from metallindex.scraper.json_ld import JsonLdStrategy
from metallindex.scraper.meta_tags import MetaTagStrategy
from metallindex.scraper.runner import PriceChainRunner
from metallindex.scraper.selector import SelectorStrategy
from tests.conftest import FakePage


def _chain() -> PriceChainRunner:
    return PriceChainRunner([
        SelectorStrategy(timeout_ms=10),
        JsonLdStrategy(),
        MetaTagStrategy(),
        HeuristicStrategy(keywords=["ankauf", "ankaufspreis"], currency_symbols=["€"]),
    ])


def _targets(count: int) -> list[Target]:
    return [
        Target(id=f"coin-{i}", name=f"Coin {i}", url=f"https://shop.example/coin-{i}")
        for i in range(count)
    ]


# ---------------------------------------------------------------------------
# BatchOrchestrator
# ---------------------------------------------------------------------------

class TestBatchOrchestrator:
    @pytest.mark.asyncio
    async def test_heuristic_result(self, target: Target, instant_pacer: Pacer) -> None:
        page = FakePage(body_texts=["Ankaufspreis: 1.050,00 €"])
        orchestrator = BatchOrchestrator(page, chain=_chain(), pacer=instant_pacer, source="test")

        result = await orchestrator.scrape_target(target)

        assert result.price_eur == 1050.0
        assert result.ok is True
        assert result.notes[-1] == "heuristic"
        assert result.metal == "gold"
        assert result.fine_in_grams == pytest.approx(31.103)

    @pytest.mark.asyncio
    async def test_total_failure_result(self, target: Target, empty_page: FakePage, instant_pacer: Pacer) -> None:
        orchestrator = BatchOrchestrator(empty_page, chain=_chain(), pacer=instant_pacer, source="test")

        result = await orchestrator.scrape_target(target)

        assert result.price_eur is None
        assert result.ok is False
        assert result.notes[-1] == "not-found"

    @pytest.mark.asyncio
    async def test_navigation_failure_does_not_abort(self, instant_pacer: Pacer) -> None:
        targets = _targets(3)
        page = FakePage(
            metas=[{"name": "price", "content": "10,00"}],
            failing_urls={targets[1].url},
        )
        orchestrator = BatchOrchestrator(page, chain=_chain(), pacer=instant_pacer, source="test")

        report = await orchestrator.run(targets)

        assert len(report.items) == 3
        failed = report.items[1]
        assert failed.notes[0].startswith("page-load-failed:")
        assert "Timeout 30000ms exceeded." in failed.notes[0]
        # Extraction still ran against the stale page
        assert failed.notes[1:] == ("meta",)
        assert report.items[2].ok is True
        assert page.visited == [t.url for t in targets]

    @pytest.mark.asyncio
    async def test_navigation_uses_timeout(self, target: Target, empty_page: FakePage, instant_pacer: Pacer) -> None:
        empty_page.navigate = AsyncMock()
        orchestrator = BatchOrchestrator(
            empty_page, chain=_chain(), pacer=instant_pacer, source="test", navigation_timeout_ms=1234
        )

        await orchestrator.scrape_target(target)

        empty_page.navigate.assert_awaited_once_with(target.url, 1234)

    @pytest.mark.asyncio
    async def test_report_preserves_order_and_length(self, instant_pacer: Pacer) -> None:
        targets = _targets(5)
        orchestrator = BatchOrchestrator(FakePage(), chain=_chain(), pacer=instant_pacer, source="philoro.at")

        report = await orchestrator.run(targets)

        assert [item.id for item in report.items] == [t.id for t in targets]
        assert report.source == "philoro.at"
        assert report.generated_at.tzinfo is not None
        assert report.found_count == 0

    @pytest.mark.asyncio
    async def test_empty_target_list(self, instant_pacer: Pacer) -> None:
        report = await BatchOrchestrator(FakePage(), chain=_chain(), pacer=instant_pacer, source="x").run([])
        assert report.items == []

    @pytest.mark.asyncio
    async def test_pacing_between_targets_only(self) -> None:
        pacer = Pacer(base_seconds=0, jitter_seconds=0)
        pacer.wait = AsyncMock(return_value=0.0)
        orchestrator = BatchOrchestrator(FakePage(), chain=_chain(), pacer=pacer, source="x")

        await orchestrator.run(_targets(3))

        assert pacer.wait.await_count == 2

    @pytest.mark.asyncio
    async def test_repeated_runs_identical_items(self, instant_pacer: Pacer) -> None:
        page = FakePage(json_ld=[json.dumps({"offers": {"price": "2100"}})])
        orchestrator = BatchOrchestrator(page, chain=_chain(), pacer=instant_pacer, source="x")
        targets = _targets(2)

        first = await orchestrator.run(targets)
        second = await orchestrator.run(targets)

        assert first.items == second.items


# ---------------------------------------------------------------------------
# Pacer
# ---------------------------------------------------------------------------

class TestPacer:
    def test_delay_within_bounds(self) -> None:
        pacer = Pacer(base_seconds=1.5, jitter_seconds=0.8, rng=random.Random(42))
        for _ in range(50):
            delay = pacer.next_delay()
            assert 1.5 <= delay <= 2.3

    def test_zero_jitter_is_constant(self) -> None:
        pacer = Pacer(base_seconds=2.0, jitter_seconds=0)
        assert pacer.next_delay() == 2.0

    def test_negative_values_rejected(self) -> None:
        with pytest.raises(ValueError):
            Pacer(base_seconds=-1, jitter_seconds=0)

    def test_defaults_from_settings(self) -> None:
        from metallindex.config import settings

        pacer = Pacer()
        assert pacer.base_seconds == settings.PACING_BASE_SECONDS
        assert pacer.jitter_seconds == settings.PACING_JITTER_SECONDS

    @pytest.mark.asyncio
    async def test_wait_sleeps_for_delay(self) -> None:
        pacer = Pacer(base_seconds=1.0, jitter_seconds=0)
        with patch("metallindex.pipeline.pacing.asyncio.sleep", new=AsyncMock()) as mock_sleep:
            delay = await pacer.wait()

        assert delay == 1.0
        mock_sleep.assert_awaited_once_with(1.0)


# ---------------------------------------------------------------------------
# ScrapeResult invariants
# ---------------------------------------------------------------------------

class TestScrapeResult:
    def test_ok_follows_price(self, target: Target) -> None:
        assert ScrapeResult.from_target(target, 12.5, ["meta"]).ok is True
        assert ScrapeResult.from_target(target, None, ["not-found"]).ok is False

    def test_inconsistent_ok_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ScrapeResult(id="a", name="A", url="https://x", price_eur=None, ok=True, notes=[])

    def test_non_finite_price_rejected(self, target: Target) -> None:
        with pytest.raises(ValidationError):
            ScrapeResult.from_target(target, math.inf, ["json-ld"])

    def test_empty_metal_becomes_none(self, target: Target) -> None:
        bare = target.model_copy(update={"metal": "", "fine_in_grams": None})
        result = ScrapeResult.from_target(bare, None, ["not-found"])
        assert result.metal is None
        assert result.fine_in_grams is None

    def test_notes_are_copied(self, target: Target) -> None:
        notes = ["meta"]
        result = ScrapeResult.from_target(target, 1.0, notes)
        notes.append("later")
        assert result.notes == ("meta",)

    def test_notes_cannot_be_mutated(self, target: Target) -> None:
        result = ScrapeResult.from_target(target, 1.0, ["meta"])
        assert isinstance(result.notes, tuple)
        with pytest.raises(AttributeError):
            result.notes.append("later")  # type: ignore[attr-defined]
