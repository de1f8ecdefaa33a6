"""
API Tests
=========
Flask test-client checks for the JSON envelope around each extractor.
The portal fetch is patched; every request must trigger its own fetch.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest
import requests

from conftest import PAGE_WITHOUT_HOSTELS, SAMPLE_PAGE, mock_response
from scraper.engine import ScraperConfig
from scraper.server import ENDPOINTS, create_app


@pytest.fixture
def client():
    app = create_app({
        "TESTING": True,
        "SCRAPER_CONFIG": ScraperConfig(url="http://portal.test/", timeout=1),
    })
    return app.test_client()


def _get(client, path, html=SAMPLE_PAGE):
    with patch("scraper.document.requests.get",
               return_value=mock_response(html)) as get:
        response = client.get(path)
    return response, get


class TestDataEndpoints:

    def test_all(self, client):
        response, get = _get(client, "/api/all")
        assert response.status_code == 200
        body = response.get_json()
        assert body["success"] is True
        assert len(body["data"]["hostelFees"]) == 3
        get.assert_called_once()
        assert get.call_args[0][0] == "http://portal.test/"

    @pytest.mark.parametrize("path,check", [
        ("/api/fees/undergraduate",
         lambda d: d["freshStudents"]["science"]["Tuition"] == 50000.0),
        ("/api/fees/postgraduate",
         lambda d: d["programs"][0]["program"] == "MBA"),
        ("/api/hostel",
         lambda d: d[0]["demarcation"] == "NORTH WING"),
        ("/api/fees/acceptance",
         lambda d: d["otherCandidates"]["ICT LEVY"] == 0),
        ("/api/announcements",
         lambda d: d[-1]["title"] == "Accommodation Booking Start Date"),
        ("/api/requirements",
         lambda d: d["instructions"][0] == "PAY YOUR ACCEPTANCE FEE"),
    ])
    def test_section(self, client, path, check):
        response, _ = _get(client, path)
        assert response.status_code == 200
        body = response.get_json()
        assert body["success"] is True
        assert check(body["data"])

    def test_missing_section_is_not_an_error(self, client):
        response, _ = _get(client, "/api/hostel", html=PAGE_WITHOUT_HOSTELS)
        assert response.status_code == 200
        assert response.get_json() == {"success": True, "data": []}

    def test_each_request_fetches(self, client):
        with patch("scraper.document.requests.get",
                   return_value=mock_response(SAMPLE_PAGE)) as get:
            client.get("/api/hostel")
            client.get("/api/hostel")
        assert get.call_count == 2


class TestErrorEnvelope:

    def test_fetch_timeout(self, client):
        with patch("scraper.document.requests.get",
                   side_effect=requests.Timeout("read timed out")):
            response = client.get("/api/all")

        assert response.status_code == 500
        body = response.get_json()
        assert body["success"] is False
        assert body["error"].startswith("Failed to fetch UNIBEN page")
        assert "data" not in body

    def test_unexpected_error_hides_details(self, client):
        with patch("scraper.server.ScraperEngine",
                   side_effect=RuntimeError("secret internals")):
            response = client.get("/api/requirements")

        assert response.status_code == 500
        body = response.get_json()
        assert body["success"] is False
        assert "secret internals" not in body["error"]


class TestHealthAndDiscovery:

    def test_health(self, client):
        with patch("scraper.document.requests.get") as get:
            response = client.get("/health")
        assert response.status_code == 200
        assert response.get_json()["status"] == "OK"
        get.assert_not_called()

    def test_index_lists_routes(self, client):
        body = client.get("/").get_json()
        assert body["message"] == "UNIBEN Web Scraper API"
        assert body["endpoints"] == ENDPOINTS
        for route in ENDPOINTS.values():
            assert route.startswith("/")
