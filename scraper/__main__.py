"""
Module entry point for: python -m scraper

Allows running the scraper directly as a module:
    python -m scraper scrape [options]
    python -m scraper sections
    python -m scraper serve [options]
"""

from .cli import cli


def main():
    cli()


if __name__ == "__main__":
    main()
