"""
Metallindex — Configuration & Constants

Every path, timeout, pacing interval and heuristic keyword lives here.
No hardcoded values in scraping logic.

Usage:
    from metallindex.config import settings
"""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Central configuration for the Metallindex price scraper.

    Loads from environment variables with fallback defaults.
    """

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # -----------------------------------------------------------------------
    # Input / Output
    # -----------------------------------------------------------------------
    TARGETS_FILE: str = "coins.json"
    REPORT_FILE: str = "data/prices.json"
    REPORT_SOURCE: str = "philoro.at"

    # -----------------------------------------------------------------------
    # Browser
    # -----------------------------------------------------------------------
    USER_AGENT: str = "Metallindex Preisreferenz (Kontakt: deine.email@domain.tld)"
    HEADLESS: bool = True
    VIEWPORT_WIDTH: int = 1200
    VIEWPORT_HEIGHT: int = 900
    PROXY_URL: str = ""

    # -----------------------------------------------------------------------
    # Timeouts (milliseconds, Playwright convention)
    # -----------------------------------------------------------------------
    NAVIGATION_TIMEOUT_MS: int = 30000
    SELECTOR_TIMEOUT_MS: int = 5000

    # -----------------------------------------------------------------------
    # Pacing between targets
    # delay = base + uniform(0, jitter)
    # -----------------------------------------------------------------------
    PACING_BASE_SECONDS: float = 1.5
    PACING_JITTER_SECONDS: float = 0.8

    # -----------------------------------------------------------------------
    # Heuristic text search
    # Dealer pages label their buyback price with one of these terms
    # -----------------------------------------------------------------------
    HEURISTIC_KEYWORDS: list[str] = [
        "ankauf",
        "ankaufspreis",
        "ankaufs",
        "kaufpreis",
        "ankaufswert",
    ]
    CURRENCY_SYMBOLS: list[str] = ["€"]

    # -----------------------------------------------------------------------
    # Logging
    # -----------------------------------------------------------------------
    LOG_LEVEL: str = "INFO"


# Singleton instance
settings = Settings()
