"""
Metallindex — Application Entrypoint

Loads the target list, scrapes every target on one browser page and
writes the report.

Run via:
    python -m metallindex.main
"""

from __future__ import annotations

import asyncio
import logging
import sys

import structlog

from metallindex import __version__
from metallindex.browser.playwright_page import open_page
from metallindex.config import Settings, settings
from metallindex.pipeline.batch import BatchOrchestrator
from metallindex.pipeline.pacing import Pacer
from metallindex.pipeline.report import write_report
from metallindex.scraper.runner import PriceChainRunner, default_strategies
from metallindex.pipeline.targets import load_targets

EXIT_OK = 0
EXIT_FATAL = 2


# ---------------------------------------------------------------------------
# Structlog Configuration
# ---------------------------------------------------------------------------


def _configure_logging(log_level: str = "INFO") -> None:
    """
    Set up structured logging with JSON output.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
    """
    # Configure stdlib logging first (for third-party libraries)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------


async def run(config: Settings = settings) -> int:
    """
    Execute one scrape run.

    Execution order:
    1. Load targets (fatal on any error, before the browser starts)
    2. Launch the browser page
    3. Scrape all targets sequentially
    4. Write the report once

    Returns:
        Process exit code.
    """
    logger = structlog.get_logger(__name__)
    logger.info("scrape_run_begin", version=__version__, targets_file=config.TARGETS_FILE)

    try:
        targets = load_targets(config.TARGETS_FILE)

        async with open_page(config) as page:
            orchestrator = BatchOrchestrator(
                page,
                chain=PriceChainRunner(default_strategies(config)),
                pacer=Pacer(config.PACING_BASE_SECONDS, config.PACING_JITTER_SECONDS),
                source=config.REPORT_SOURCE,
                navigation_timeout_ms=config.NAVIGATION_TIMEOUT_MS,
            )
            report = await orchestrator.run(targets)

        write_report(report, config.REPORT_FILE)
    except Exception as e:
        logger.error(
            "scrape_run_fatal",
            error=str(e),
            error_type=type(e).__name__,
        )
        return EXIT_FATAL

    logger.info("scrape_run_complete", report_file=config.REPORT_FILE, found=report.found_count)
    return EXIT_OK


def main() -> None:
    _configure_logging(log_level=settings.LOG_LEVEL)
    sys.exit(asyncio.run(run()))


# ---------------------------------------------------------------------------
# CLI Entry
# ---------------------------------------------------------------------------


if __name__ == "__main__":
    main()
