"""
Metallindex — Playwright Page Adapter

Wraps a Playwright async Page behind the PageRenderer contract and
launches the single Chromium page shared by a whole run.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import structlog
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from metallindex.browser import ElementSnapshot, NavigationError
from metallindex.config import Settings, settings as default_settings

logger = structlog.get_logger(__name__)

_LAUNCH_ARGS = ["--no-sandbox", "--disable-setuid-sandbox"]

_ELEMENT_TEXT_JS = "el => (el.innerText || el.textContent || '').trim()"

_SNAPSHOT_ALL_JS = """
els => els.map(e => ({
    attributes: Object.fromEntries(Array.from(e.attributes, a => [a.name, a.value])),
    text: e.textContent || ''
}))
"""


class PlaywrightPage:
    """PageRenderer implementation over ``playwright.async_api.Page``."""

    def __init__(self, page: Page) -> None:
        self._page = page

    async def navigate(self, url: str, timeout_ms: int) -> None:
        try:
            await self._page.goto(url, wait_until="networkidle", timeout=timeout_ms)
        except PlaywrightError as e:
            # Playwright appends a multi-line "Call log:" section
            lines = (e.message or "").splitlines()
            raise NavigationError(lines[0] if lines else str(e)) from e

    async def wait_for_selector(self, selector: str, timeout_ms: int) -> bool:
        try:
            await self._page.wait_for_selector(selector, state="attached", timeout=timeout_ms)
        except PlaywrightTimeoutError:
            return False
        return True

    async def query_text(self, selector: str) -> str | None:
        element = await self._page.query_selector(selector)
        if element is None:
            return None
        return await element.evaluate(_ELEMENT_TEXT_JS)

    async def query_all(self, selector: str) -> list[ElementSnapshot]:
        raw = await self._page.eval_on_selector_all(selector, _SNAPSHOT_ALL_JS)
        return [
            ElementSnapshot(attributes=dict(item.get("attributes") or {}), text=item.get("text") or "")
            for item in raw
        ]

    async def evaluate(self, script: str) -> Any:
        return await self._page.evaluate(script)


def _proxy_config(config: Settings) -> dict[str, str] | None:
    """Return Playwright proxy settings if PROXY_URL is set."""
    if config.PROXY_URL:
        return {"server": config.PROXY_URL}
    return None


@asynccontextmanager
async def open_page(config: Settings | None = None) -> AsyncIterator[PlaywrightPage]:
    """
    Launch Chromium and yield one configured page for the whole run.

    Usage:
        async with open_page() as page:
            report = await BatchOrchestrator(page).run(targets)
    """
    config = config or default_settings

    async with async_playwright() as pw:
        logger.info("browser_launching", headless=config.HEADLESS, source="browser")
        browser = await pw.chromium.launch(
            headless=config.HEADLESS,
            args=_LAUNCH_ARGS,
            proxy=_proxy_config(config),
        )
        try:
            context = await browser.new_context(
                user_agent=config.USER_AGENT,
                viewport={"width": config.VIEWPORT_WIDTH, "height": config.VIEWPORT_HEIGHT},
            )
            page = await context.new_page()
            yield PlaywrightPage(page)
        finally:
            await browser.close()
            logger.info("browser_closed", source="browser")
