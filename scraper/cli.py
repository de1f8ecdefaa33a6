"""
CLI Interface
=============
Command-line interface for the UNIBEN page scraper.

Usage:
    python -m scraper.cli scrape [--section NAME] [--json-output]
    python -m scraper.cli sections
    python -m scraper.cli serve [--host HOST] [--port PORT]
"""

from __future__ import annotations

import json
import os
import sys

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .document import DEFAULT_TIMEOUT, DEFAULT_URL, ScraperError
from .engine import ScraperConfig, ScraperEngine
from .extractors import EXTRACTORS
from .server import ENDPOINTS

console = Console()

SECTION_ROUTES = {
    "undergraduate": ENDPOINTS["undergraduateFees"],
    "postgraduate": ENDPOINTS["postgraduateFees"],
    "hostel": ENDPOINTS["hostelFees"],
    "acceptance": ENDPOINTS["acceptanceFees"],
    "announcements": ENDPOINTS["announcements"],
    "requirements": ENDPOINTS["requirements"],
}


@click.group()
@click.version_option(version=__version__, prog_name="uniben-scraper")
def cli():
    """UNIBEN Scraper — structured fees and notices from the admissions portal."""
    pass


@cli.command()
@click.option("--url", default=DEFAULT_URL, help="Page to scrape")
@click.option(
    "--timeout",
    default=DEFAULT_TIMEOUT,
    type=float,
    help="Fetch timeout in seconds",
)
@click.option(
    "--section", "-s",
    default="all",
    type=click.Choice(["all", *EXTRACTORS]),
    help="Extractor to run (default: all)",
)
@click.option(
    "--log-level",
    default="INFO",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Logging level",
)
@click.option(
    "--json-output",
    is_flag=True,
    default=False,
    help="Output only JSON to stdout (for programmatic use)",
)
def scrape(
    url: str,
    timeout: float,
    section: str,
    log_level: str,
    json_output: bool,
):
    """Fetch the page once and print the extracted records."""

    if json_output:
        log_level = "ERROR"

    config = ScraperConfig(url=url, timeout=timeout, log_level=log_level)

    try:
        engine = ScraperEngine(config)
        if section == "all":
            data = engine.snapshot().to_json_dict()
        else:
            result = engine.extract(section)
            if isinstance(result, list):
                data = [item.to_json_dict() for item in result]
            else:
                data = result.to_json_dict()
    except ScraperError as e:
        console.print(f"[red]Error:[/] {e}")
        sys.exit(1)

    if json_output:
        print(json.dumps(data, indent=2, ensure_ascii=False))
        return

    if section == "all":
        _display_snapshot(data)
    else:
        console.print_json(data=data)


@cli.command()
def sections():
    """List the available extractors and their API routes."""
    table = Table(title="Extractors", border_style="cyan")
    table.add_column("Section", style="bold")
    table.add_column("Route")
    table.add_row("all", ENDPOINTS["all"])
    for name in EXTRACTORS:
        table.add_row(name, SECTION_ROUTES[name])
    console.print(table)


@cli.command()
@click.option("--host", default="0.0.0.0", help="Server host")
@click.option(
    "--port",
    default=lambda: int(os.environ.get("PORT", 3000)),
    type=int,
    help="Server port (default: $PORT or 3000)",
)
@click.option("--debug", is_flag=True, default=False, help="Debug mode")
def serve(host: str, port: int, debug: bool):
    """Start the HTTP API server."""
    from .server import run_server

    console.print()
    console.print(
        Panel.fit(
            f"[bold cyan]UNIBEN Scraper API[/]\n"
            f"[dim]Starting on {host}:{port}[/]",
            border_style="cyan",
        )
    )
    console.print()

    run_server(host=host, port=port, debug=debug)


# ─── Display Helpers ──────────────────────────────────────────────────────────


def _display_snapshot(data: dict):
    """Display a snapshot as summary tables."""
    console.print()
    console.print(f"[dim]Snapshot taken at {data['timestamp']}[/]")
    console.print()

    ug = data["undergraduateFees"]["freshStudents"]
    table = Table(title="Undergraduate Fees (Fresh Students)", border_style="cyan")
    table.add_column("Item", style="bold")
    table.add_column("Science", justify="right")
    table.add_column("Non-Science", justify="right")
    for item, amount in ug["science"].items():
        table.add_row(
            item,
            f"{amount:,.2f}",
            f"{ug['nonScience'].get(item, 0):,.2f}",
        )
    console.print(table)
    note = data["undergraduateFees"]["note"]
    if note:
        console.print(f"[yellow]{note}[/]")
    console.print()

    table = Table(title="Postgraduate Fees", border_style="cyan")
    table.add_column("Program", style="bold")
    table.add_column("Freshers", justify="right")
    table.add_column("Returning", justify="right")
    for entry in data["postgraduateFees"]["programs"]:
        table.add_row(
            entry["program"],
            f"{entry['freshers']:,.2f}",
            f"{entry['returning']:,.2f}",
        )
    console.print(table)
    console.print()

    table = Table(title="Hostel Fees", border_style="cyan")
    table.add_column("S/N", justify="right")
    table.add_column("Hostel", style="bold")
    table.add_column("Demarcation")
    table.add_column("Amount", justify="right")
    for entry in data["hostelFees"]:
        table.add_row(
            entry["sn"],
            entry["hostelName"],
            entry["demarcation"],
            f"{entry['amount']:,.2f}",
        )
    console.print(table)
    console.print()

    acceptance = data["acceptanceFees"]
    table = Table(title="Acceptance Fees", border_style="cyan")
    table.add_column("Item", style="bold")
    table.add_column("Medical Sciences", justify="right")
    table.add_column("Other Candidates", justify="right")
    for item, amount in acceptance["medicalSciences"].items():
        table.add_row(
            item,
            f"{amount:,.2f}",
            f"{acceptance['otherCandidates'].get(item, 0):,.2f}",
        )
    console.print(table)
    console.print()

    requirements = data["requirements"]
    console.print(
        f"[bold]Announcements:[/] {len(data['announcements'])} | "
        f"[bold]Required documents:[/] {len(requirements['documentsRequired'])} | "
        f"[bold]Instructions:[/] {len(requirements['instructions'])}"
    )
    console.print()


# ─── Entry point (for python -m scraper.cli) ──────────────────────────────────


if __name__ == "__main__":
    cli()
