"""
data/config.py
Environment-driven settings for the price API and the dev server.
Values come from the process environment, optionally seeded from a .env file.
"""

import logging
import os

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

load_dotenv()  # loads COINGECKO_API_URL / API_TIMEOUT from .env file

DEFAULT_API_URL = "https://api.coingecko.com/api/v3"
DEFAULT_TIMEOUT_MS = 10_000


def get_api_base_url() -> str:
    """Base URL of the price API, without a trailing slash."""
    url = os.getenv("COINGECKO_API_URL", "").strip()
    return (url or DEFAULT_API_URL).rstrip("/")


def get_api_timeout() -> int:
    """
    Request timeout in milliseconds.

    Falls back to DEFAULT_TIMEOUT_MS when API_TIMEOUT is unset, not an
    integer, or not positive.
    """
    raw = os.getenv("API_TIMEOUT", "").strip()
    if not raw:
        return DEFAULT_TIMEOUT_MS
    try:
        timeout = int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-integer API_TIMEOUT '{raw}'.")
        return DEFAULT_TIMEOUT_MS
    if timeout <= 0:
        logger.warning(f"Ignoring non-positive API_TIMEOUT {timeout}.")
        return DEFAULT_TIMEOUT_MS
    return timeout


def get_server_options() -> dict:
    """Host/port/debug for app.run(), from DASH_HOST, DASH_PORT, DASH_DEBUG."""
    port = os.getenv("DASH_PORT", "8050")
    try:
        port = int(port)
    except ValueError:
        logger.warning(f"Ignoring non-integer DASH_PORT '{port}'.")
        port = 8050
    debug = os.getenv("DASH_DEBUG", "1").strip().lower() not in ("0", "false", "no", "off")
    return {
        "host": os.getenv("DASH_HOST", "127.0.0.1"),
        "port": port,
        "debug": debug,
    }
