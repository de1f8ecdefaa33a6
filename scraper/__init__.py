"""
UNIBEN Page Scraper
===================
Fetches the UNIBEN admissions portal page and extracts structured fee,
hostel, announcement and requirement records from its text and tables.

Architecture:
    - Fetcher: Single blocking GET of the portal page
    - Document: BeautifulSoup tree, body text and table rows
    - Extractors: Independent pattern-matching parsers, one per record type
    - Engine: Runs the extractors against one document and assembles a snapshot
    - Server: Flask JSON API wrapping each extractor in a success/error envelope

Version: 1.0.0
"""

__version__ = "1.0.0"
