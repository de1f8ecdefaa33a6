"""
Text Helpers
============
Whitespace normalization, amount token parsing and section location.
Every extractor goes through these before and after matching.
"""

from __future__ import annotations

import re
from typing import Optional, Union

Pattern = Union[str, re.Pattern]

# ─── Patterns ─────────────────────────────────────────────────────────────────

WHITESPACE_RUN = re.compile(r"\s+")

# "12,345.00", "500.00"; comma groups must hold exactly three digits
AMOUNT_TOKEN = re.compile(r"^\d+(?:,\d{3})*\.\d{2}$")

# Loose shape used when hunting for an amount inside a table cell
AMOUNT_IN_CELL = re.compile(r"[\d,]+\.00")


def normalize(text: str) -> str:
    """Collapse whitespace runs to a single space and trim."""
    if not text:
        return ""
    return WHITESPACE_RUN.sub(" ", text).strip()


def parse_amount(token: str) -> Optional[float]:
    """
    Parse a locale-formatted amount such as "12,345.00".

    Returns None when the token does not have the amount shape; the
    "-" placeholder is left for callers to interpret.
    """
    if token is None:
        return None
    token = token.strip()
    if not AMOUNT_TOKEN.match(token):
        return None
    return float(token.replace(",", ""))


def find_amount(text: str) -> Optional[float]:
    """Parse the first amount-shaped token found in a cell's text."""
    match = AMOUNT_IN_CELL.search(text or "")
    if not match:
        return None
    return parse_amount(match.group(0))


def format_amount(value: float, grouped: bool = True) -> str:
    """Render an amount with two decimals, comma-grouped unless ``grouped`` is False."""
    if not grouped:
        return f"{value:.2f}"
    return f"{value:,.2f}"


def locate_section(
    text: str,
    start: Pattern,
    end: Optional[Pattern] = None,
) -> Optional[str]:
    """
    Return the text strictly between the first match of ``start`` and the
    first match of ``end`` after it.

    Runs to the end of the text when ``end`` is omitted or never matches.
    Returns None when ``start`` is absent.
    """
    start_re = re.compile(start) if isinstance(start, str) else start
    start_match = start_re.search(text or "")
    if not start_match:
        return None

    section_start = start_match.end()
    if end is None:
        return text[section_start:]

    end_re = re.compile(end) if isinstance(end, str) else end
    end_match = end_re.search(text, section_start)
    if not end_match:
        return text[section_start:]
    return text[section_start:end_match.start()]
