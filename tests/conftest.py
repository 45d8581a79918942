"""
Metallindex — Shared pytest Fixtures & Configuration

Provides common fixtures for all test modules:
- FakePage: in-memory implementation of the page renderer contract
- Sample targets
- Async test support via pytest-asyncio
"""

from __future__ import annotations

import random
from typing import Any

import pytest

from metallindex.browser import ElementSnapshot, NavigationError
from metallindex.models import Target
from metallindex.pipeline.pacing import Pacer
from metallindex.scraper.heuristic import BODY_TEXTS_JS
from metallindex.scraper.json_ld import JSON_LD_SELECTOR


# ---------------------------------------------------------------------------
# Fake page
# ---------------------------------------------------------------------------


class FakePage:
    """
    Rendered page stand-in.

    Args:
        selector_texts: selector -> visible text of the matching element.
        json_ld: bodies of ld+json scripts, document order.
        metas: attribute dicts of meta tags, document order.
        body_texts: innerText of every element under <body>, document order.
        failing_urls: navigate() raises NavigationError for these.
    """

    def __init__(
        self,
        selector_texts: dict[str, str] | None = None,
        json_ld: list[str] | None = None,
        metas: list[dict[str, str]] | None = None,
        body_texts: list[str] | None = None,
        failing_urls: set[str] | None = None,
    ) -> None:
        self.selector_texts = selector_texts or {}
        self.json_ld = json_ld or []
        self.metas = metas or []
        self.body_texts = body_texts or []
        self.failing_urls = failing_urls or set()
        self.visited: list[str] = []
        self.calls: list[str] = []

    async def navigate(self, url: str, timeout_ms: int) -> None:
        self.calls.append("navigate")
        self.visited.append(url)
        if url in self.failing_urls:
            raise NavigationError(f"Timeout {timeout_ms}ms exceeded.")

    async def wait_for_selector(self, selector: str, timeout_ms: int) -> bool:
        self.calls.append("wait_for_selector")
        return selector in self.selector_texts

    async def query_text(self, selector: str) -> str | None:
        self.calls.append("query_text")
        return self.selector_texts.get(selector)

    async def query_all(self, selector: str) -> list[ElementSnapshot]:
        self.calls.append(f"query_all:{selector}")
        if selector == JSON_LD_SELECTOR:
            return [ElementSnapshot(attributes={"type": "application/ld+json"}, text=t) for t in self.json_ld]
        if selector == "meta":
            return [ElementSnapshot(attributes=dict(m)) for m in self.metas]
        return []

    async def evaluate(self, script: str) -> Any:
        self.calls.append("evaluate")
        if script == BODY_TEXTS_JS:
            return list(self.body_texts)
        return None


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def empty_page() -> FakePage:
    """A page with nothing price-like on it."""
    return FakePage(body_texts=["Willkommen", "Impressum"])


@pytest.fixture
def target() -> Target:
    return Target(
        id="philharmoniker-1oz",
        name="Wiener Philharmoniker 1 oz Gold",
        url="https://shop.example/philharmoniker-1oz",
        metal="gold",
        fineInGrams=31.103,
    )


@pytest.fixture
def target_with_selector(target: Target) -> Target:
    return target.model_copy(update={"selector": ".buyback-price"})


@pytest.fixture
def instant_pacer() -> Pacer:
    """Pacer with zero delay."""
    return Pacer(base_seconds=0, jitter_seconds=0, rng=random.Random(0))
