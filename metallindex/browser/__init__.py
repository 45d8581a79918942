"""
Metallindex — Page Renderer Contract

The extraction strategies only talk to a rendered page through this
protocol. PlaywrightPage is the production implementation; tests use
an in-memory fake.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol


class NavigationError(Exception):
    """Raised when a page could not be loaded within the navigation timeout."""


@dataclass(frozen=True)
class ElementSnapshot:
    """Attributes and text content of one element matched by a selector."""

    attributes: dict[str, str] = field(default_factory=dict)
    text: str = ""


class PageRenderer(Protocol):
    """Query contract for a live, rendered document."""

    async def navigate(self, url: str, timeout_ms: int) -> None:
        ...

    async def wait_for_selector(self, selector: str, timeout_ms: int) -> bool:
        ...

    async def query_text(self, selector: str) -> str | None:
        ...

    async def query_all(self, selector: str) -> list[ElementSnapshot]:
        ...

    async def evaluate(self, script: str) -> Any:
        ...
