"""
Scraper Engine
==============
Runs the field extractors against one freshly fetched page.

Usage:
    engine = ScraperEngine(config)
    snapshot = engine.snapshot()          # every extractor, one fetch
    hostels = engine.extract("hostel")    # one extractor, one fetch

Architecture:
    PageFetcher → raw HTML → parse_document → PageDocument →
    extractors → records → AggregateSnapshot

Fetch and parse failures abort the call (``ScraperError``); failures inside
an extractor only empty that extractor's record.
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .document import (
    DEFAULT_TIMEOUT,
    DEFAULT_URL,
    DEFAULT_USER_AGENT,
    PageDocument,
    PageFetcher,
    parse_document,
)
from .extractors import EXTRACTORS
from .models import AggregateSnapshot

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(asctime)s] %(levelname)-8s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


@dataclass
class ScraperConfig:
    """Configuration for the scraper engine."""

    # Source page
    url: str = DEFAULT_URL
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls) -> "ScraperConfig":
        """Build a config from UNIBEN_URL, SCRAPER_TIMEOUT, etc."""
        return cls(
            url=os.environ.get("UNIBEN_URL", DEFAULT_URL),
            timeout=float(os.environ.get("SCRAPER_TIMEOUT", DEFAULT_TIMEOUT)),
            user_agent=os.environ.get("SCRAPER_USER_AGENT", DEFAULT_USER_AGENT),
            log_level=os.environ.get("LOG_LEVEL", "INFO"),
            log_file=os.environ.get("LOG_FILE") or None,
        )


class ScraperEngine:
    """
    Fetch-parse-extract pipeline for the portal page.

    Build one engine per request: it holds no state between calls and
    never caches a fetched page.
    """

    def __init__(
        self,
        config: Optional[ScraperConfig] = None,
        fetcher: Optional[PageFetcher] = None,
    ):
        self.config = config or ScraperConfig()
        self.fetcher = fetcher or PageFetcher(
            url=self.config.url,
            timeout=self.config.timeout,
            user_agent=self.config.user_agent,
        )
        self._setup_logging()

    def _setup_logging(self):
        """Configure the package logger based on config."""
        log_level = getattr(logging, self.config.log_level.upper(), logging.INFO)

        package_logger = logging.getLogger("scraper")
        package_logger.setLevel(log_level)

        if not package_logger.handlers:
            console = logging.StreamHandler()
            console.setLevel(log_level)
            console.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
            package_logger.addHandler(console)

        if self.config.log_file and not any(
            isinstance(h, logging.FileHandler) for h in package_logger.handlers
        ):
            Path(self.config.log_file).parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(self.config.log_file, encoding="utf-8")
            file_handler.setLevel(log_level)
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
            package_logger.addHandler(file_handler)

    def load_document(self) -> PageDocument:
        """
        Fetch and parse the page.

        Raises:
            FetchError: If the page cannot be retrieved.
            DocumentParseError: If the HTML cannot be parsed.
        """
        raw = self.fetcher.fetch()
        return parse_document(raw)

    def extract(self, section: str):
        """
        Fetch the page and run a single extractor.

        Raises:
            KeyError: If ``section`` is not a known extractor name.
            ScraperError: If the page cannot be fetched or parsed.
        """
        extractor = EXTRACTORS[section]
        document = self.load_document()
        return extractor(document)

    def snapshot(self) -> AggregateSnapshot:
        """Fetch the page once and run every extractor against it."""
        start_time = time.time()
        document = self.load_document()

        result = AggregateSnapshot(
            undergraduate_fees=EXTRACTORS["undergraduate"](document),
            postgraduate_fees=EXTRACTORS["postgraduate"](document),
            hostel_fees=EXTRACTORS["hostel"](document),
            acceptance_fees=EXTRACTORS["acceptance"](document),
            announcements=EXTRACTORS["announcements"](document),
            requirements=EXTRACTORS["requirements"](document),
        )

        elapsed = time.time() - start_time
        logger.info(f"Snapshot complete in {elapsed:.2f}s")
        return result
