"""
ScrapeResult and Report models.

One ScrapeResult per Target, built exactly once in Target order.
One Report per run, written once after every Target has been attempted.
"""

from __future__ import annotations

import math
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from metallindex.models.target import Target


class ScrapeResult(BaseModel):
    """
    Outcome of scraping one Target.

    ``notes`` is the audit trail: one tag per strategy outcome, in the
    order the chain attempted them.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    url: str
    metal: str | None = None
    fine_in_grams: float | None = Field(default=None, alias="fineInGrams")
    price_eur: float | None = None
    ok: bool
    notes: tuple[str, ...] = ()

    @model_validator(mode="after")
    def check_price_consistency(self) -> ScrapeResult:
        if self.ok != (self.price_eur is not None):
            raise ValueError("ok must be True exactly when price_eur is set")
        if self.price_eur is not None and not math.isfinite(self.price_eur):
            raise ValueError(f"price_eur must be finite, got {self.price_eur}")
        return self

    @classmethod
    def from_target(
        cls,
        target: Target,
        price_eur: float | None,
        notes: list[str],
    ) -> ScrapeResult:
        """Build the result for ``target``; ``ok`` follows from ``price_eur``."""
        return cls(
            id=target.id,
            name=target.name,
            url=target.url,
            metal=target.metal or None,
            fine_in_grams=target.fine_in_grams or None,
            price_eur=price_eur,
            ok=price_eur is not None,
            notes=tuple(notes),
        )


class Report(BaseModel):
    """Final artifact of a scrape run."""

    model_config = ConfigDict(frozen=True)

    source: str
    generated_at: datetime
    items: list[ScrapeResult] = Field(default_factory=list)

    @property
    def found_count(self) -> int:
        return sum(1 for item in self.items if item.ok)
