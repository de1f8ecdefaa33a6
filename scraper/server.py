"""
HTTP Microservice
=================
Flask-based read-only JSON API over the scraper engine.

Every data request triggers one fresh fetch of the portal page; nothing is
cached between requests.

Endpoints:
    GET /api/all                  → Snapshot of every extractor
    GET /api/fees/undergraduate   → Undergraduate school fees
    GET /api/fees/postgraduate    → Postgraduate program fees
    GET /api/hostel               → Hostel accommodation fees
    GET /api/fees/acceptance      → Acceptance fees
    GET /api/announcements        → Announcements
    GET /api/requirements         → Requirements for new students
    GET /health                   → Liveness check
    GET /                         → Route discovery
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from flask import Flask, jsonify
from flask_cors import CORS

from . import __version__
from .document import ScraperError
from .engine import ScraperConfig, ScraperEngine

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.json.sort_keys = False
CORS(app)

ENDPOINTS = {
    "all": "/api/all",
    "undergraduateFees": "/api/fees/undergraduate",
    "postgraduateFees": "/api/fees/postgraduate",
    "hostelFees": "/api/hostel",
    "acceptanceFees": "/api/fees/acceptance",
    "announcements": "/api/announcements",
    "requirements": "/api/requirements",
    "health": "/health",
}


def create_app(config: dict = None) -> Flask:
    """Create and configure the Flask app."""
    if config:
        app.config.update(config)
    app.config.setdefault("SCRAPER_CONFIG", ScraperConfig.from_env())
    return app


def _scraper_config() -> ScraperConfig:
    return app.config.get("SCRAPER_CONFIG") or ScraperConfig.from_env()


def _to_json(data):
    if isinstance(data, list):
        return [item.to_json_dict() for item in data]
    return data.to_json_dict()


def _scrape(section: Optional[str] = None):
    """
    Run one fetch-parse-extract cycle and wrap the result in the
    success/error envelope.
    """
    try:
        engine = ScraperEngine(_scraper_config())
        if section is None:
            data = engine.snapshot()
        else:
            data = engine.extract(section)
        return jsonify({"success": True, "data": _to_json(data)})
    except ScraperError as e:
        return jsonify({"success": False, "error": str(e)}), 500
    except Exception:
        logger.exception(f"Unexpected error serving section={section or 'all'}")
        return jsonify({
            "success": False,
            "error": "Unexpected error while scraping UNIBEN page",
        }), 500


# ─── Data Endpoints ───────────────────────────────────────────────────────────


@app.route("/api/all", methods=["GET"])
def get_all():
    return _scrape()


@app.route("/api/fees/undergraduate", methods=["GET"])
def get_undergraduate_fees():
    return _scrape("undergraduate")


@app.route("/api/fees/postgraduate", methods=["GET"])
def get_postgraduate_fees():
    return _scrape("postgraduate")


@app.route("/api/hostel", methods=["GET"])
def get_hostel_fees():
    return _scrape("hostel")


@app.route("/api/fees/acceptance", methods=["GET"])
def get_acceptance_fees():
    return _scrape("acceptance")


@app.route("/api/announcements", methods=["GET"])
def get_announcements():
    return _scrape("announcements")


@app.route("/api/requirements", methods=["GET"])
def get_requirements():
    """Documents checklist and instructions for newly admitted students."""
    return _scrape("requirements")


# ─── Health / Discovery ───────────────────────────────────────────────────────


@app.route("/health", methods=["GET"])
def health():
    """Liveness check; does not touch the portal."""
    return jsonify({
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    })


@app.route("/", methods=["GET"])
def index():
    return jsonify({
        "message": "UNIBEN Web Scraper API",
        "version": __version__,
        "endpoints": ENDPOINTS,
    })


def run_server(
    host: str = "0.0.0.0",
    port: int = 3000,
    debug: bool = False,
):
    """Start the microservice server."""
    create_app()
    logger.info(f"UNIBEN Scraper API running on port {port}")
    app.run(host=host, port=port, debug=debug)


if __name__ == "__main__":
    run_server(debug=True)
