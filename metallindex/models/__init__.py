"""Pydantic models for scrape targets and reports."""

from metallindex.models.report import Report, ScrapeResult
from metallindex.models.target import Target

__all__ = ["Report", "ScrapeResult", "Target"]
