"""Metallindex — Report Persistence"""

from __future__ import annotations

from pathlib import Path

import structlog

from metallindex.models import Report

logger = structlog.get_logger(__name__)


def write_report(report: Report, path: str | Path) -> Path:
    """
    Write the report as pretty-printed UTF-8 JSON, creating parent dirs.

    Keys use the published camelCase aliases (``fineInGrams``).
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(report.model_dump_json(indent=2, by_alias=True), encoding="utf-8")

    logger.info(
        "report_written",
        path=str(path),
        items=len(report.items),
        found=report.found_count,
        source="report",
    )
    return path
