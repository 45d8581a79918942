"""
Target model — one configured coin or bar to price.

Loaded once per run from the targets JSON file and never mutated.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Target(BaseModel):
    """
    A product page to scrape.

    JSON layout (camelCase keys as written by hand in coins.json):
        {"id": "wiener-philharmoniker-1oz", "name": "...", "url": "https://...",
         "metal": "gold", "fineInGrams": 31.1, "selector": ".buyback .price"}
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(min_length=1)
    name: str = ""
    url: str = Field(min_length=1)
    metal: str | None = None
    fine_in_grams: float | None = Field(default=None, alias="fineInGrams")
    selector: str | None = None

    @property
    def configured_selector(self) -> str | None:
        """Selector with surrounding whitespace removed, or None if blank."""
        if self.selector and self.selector.strip():
            return self.selector.strip()
        return None
