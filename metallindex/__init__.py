"""Metallindex — buyback price scraper for bullion coins and bars."""

__version__ = "0.1.0"
