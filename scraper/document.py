"""
Page Document
=============
Fetches the portal page and turns the raw HTML into a PageDocument:
the BeautifulSoup tree, the body text (line breaks kept), its normalized
form, and the (label, value, value) triples of every table row.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import NamedTuple, Union

import requests
from bs4 import BeautifulSoup

from .text import normalize

logger = logging.getLogger(__name__)

DEFAULT_URL = "https://waeup.uniben.edu/"
DEFAULT_TIMEOUT = 10.0
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
)


# ─── Errors ───────────────────────────────────────────────────────────────────


class ScraperError(Exception):
    """Base class for failures that abort a whole scrape."""


class FetchError(ScraperError):
    """The portal page could not be retrieved."""


class DocumentParseError(ScraperError):
    """The retrieved HTML could not be turned into a document."""


# ─── Fetch ────────────────────────────────────────────────────────────────────


class PageFetcher:
    """
    Single blocking GET of the portal page.

    One instance is built per request; nothing is cached between calls
    and failures are never retried.
    """

    def __init__(
        self,
        url: str = DEFAULT_URL,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.url = url
        self.timeout = timeout
        self.user_agent = user_agent

    def fetch(self) -> bytes:
        """
        Retrieve the raw page HTML.

        Raises:
            FetchError: On timeout, connection failure or an HTTP error status.
        """
        logger.info(f"Fetching {self.url} (timeout={self.timeout}s)")
        try:
            response = requests.get(
                self.url,
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent},
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Fetch failed for {self.url}: {e}")
            raise FetchError(f"Failed to fetch UNIBEN page: {e}") from e

        logger.debug(f"Fetched {len(response.content)} bytes")
        return response.content


# ─── Tables ───────────────────────────────────────────────────────────────────


class TableRow(NamedTuple):
    """The first three cells of a table row, normalized."""
    label: str
    value_a: str
    value_b: str


def extract_table_rows(soup: BeautifulSoup) -> list[TableRow]:
    """
    Walk every table and row in document order and return the first three
    cells of each row that has at least three. Shorter rows (headers,
    spacers) are skipped.
    """
    rows: list[TableRow] = []
    for table in soup.find_all("table"):
        for tr in table.find_all("tr"):
            cells = tr.find_all("td")
            if len(cells) < 3:
                continue
            rows.append(TableRow(
                label=normalize(cells[0].get_text()),
                value_a=normalize(cells[1].get_text()),
                value_b=normalize(cells[2].get_text()),
            ))
    return rows


# ─── Document ─────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class PageDocument:
    """Everything the extractors read from one fetched page."""
    soup: BeautifulSoup
    raw_text: str
    text: str
    rows: list[TableRow] = field(default_factory=list)


def parse_document(raw: Union[bytes, str]) -> PageDocument:
    """
    Build a PageDocument from raw HTML.

    Raises:
        DocumentParseError: If the HTML cannot be parsed.
    """
    try:
        soup = BeautifulSoup(raw, "lxml")
        root = soup.body or soup
        raw_text = root.get_text()
        rows = extract_table_rows(soup)
    except Exception as e:
        logger.error(f"Failed to parse page HTML: {e}")
        raise DocumentParseError(f"Failed to parse UNIBEN page: {e}") from e

    logger.debug(
        f"Parsed document: {len(raw_text)} chars of text, {len(rows)} table rows"
    )
    return PageDocument(
        soup=soup,
        raw_text=raw_text,
        text=normalize(raw_text),
        rows=rows,
    )
