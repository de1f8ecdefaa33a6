"""
UNIBEN Scraper Service — Main Entry Point
==========================================
Starts the Flask-based scraper API.

Usage:
    python main.py                    # Default: 0.0.0.0:$PORT or 3000
    python main.py --port 8000        # Custom port
    python main.py --debug            # Debug mode
"""

import argparse
import logging
import os

from scraper.server import app, create_app

logging.basicConfig(
    level=logging.INFO,
    format="[%(asctime)s] %(levelname)-8s %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="UNIBEN Scraper Service")
    parser.add_argument("--host", default="0.0.0.0", help="Bind host")
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.environ.get("PORT", 3000)),
        help="Bind port",
    )
    parser.add_argument("--debug", action="store_true", help="Debug mode")
    args = parser.parse_args()

    create_app()
    logger.info(f"Scraping: {app.config['SCRAPER_CONFIG'].url}")
    logger.info(f"Starting server on {args.host}:{args.port}")
    logger.info(f"Visit http://localhost:{args.port} for available endpoints")
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
