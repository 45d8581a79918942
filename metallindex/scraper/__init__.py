"""Metallindex — Price Extraction Layer"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Found:
    """A strategy extracted a normalized price."""
    value: float


@dataclass(frozen=True)
class NotFound:
    """
    A strategy produced no price.

    ``diagnostic`` is set only when an unexpected error was caught at the
    strategy boundary; plain absence of data leaves it None.
    """
    diagnostic: str | None = None


ExtractionOutcome = Union[Found, NotFound]
