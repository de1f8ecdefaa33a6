"""CLI tests using click's CliRunner with the portal fetch patched."""

from __future__ import annotations

import json
from unittest.mock import patch

import requests
from click.testing import CliRunner

from conftest import SAMPLE_PAGE, mock_response
from scraper.cli import cli


def test_scrape_json_output():
    runner = CliRunner()
    with patch("scraper.document.requests.get",
               return_value=mock_response(SAMPLE_PAGE)):
        result = runner.invoke(cli, ["scrape", "--section", "hostel", "--json-output"])

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert [h["hostelName"] for h in data] == [
        "HALL A", "BASIC STUDIES HOSTEL", "NDDC HOSTEL",
    ]


def test_scrape_all_tables():
    runner = CliRunner()
    with patch("scraper.document.requests.get",
               return_value=mock_response(SAMPLE_PAGE)):
        result = runner.invoke(cli, ["scrape", "--log-level", "ERROR"])

    assert result.exit_code == 0
    assert "Hostel Fees" in result.output
    assert "MBA" in result.output


def test_scrape_fetch_failure_exits_nonzero():
    runner = CliRunner()
    with patch("scraper.document.requests.get",
               side_effect=requests.ConnectionError("no route to host")):
        result = runner.invoke(cli, ["scrape", "--json-output"])

    assert result.exit_code == 1
    assert "Failed to fetch UNIBEN page" in result.output


def test_sections_lists_routes():
    result = CliRunner().invoke(cli, ["sections"])
    assert result.exit_code == 0
    assert "/api/fees/acceptance" in result.output


def test_serve_uses_port_from_environment(monkeypatch):
    monkeypatch.setenv("PORT", "8123")
    with patch("scraper.server.run_server") as run_server:
        result = CliRunner().invoke(cli, ["serve"])

    assert result.exit_code == 0
    run_server.assert_called_once_with(host="0.0.0.0", port=8123, debug=False)


def test_serve_port_option_overrides_environment(monkeypatch):
    monkeypatch.setenv("PORT", "8123")
    with patch("scraper.server.run_server") as run_server:
        result = CliRunner().invoke(
            cli, ["serve", "--host", "127.0.0.1", "--port", "9000", "--debug"]
        )

    assert result.exit_code == 0
    run_server.assert_called_once_with(host="127.0.0.1", port=9000, debug=True)
