"""
data/fetch.py
Handles the one external data fetch: USD spot prices from the CoinGecko
simple-price endpoint, turned into a rates DataFrame.
"""

import logging

import pandas as pd
import requests

from data.config import get_api_base_url, get_api_timeout

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)

# ── Constants ──────────────────────────────────────────────────────────────────

# (symbol, display name, CoinGecko id), in fetch order
CRYPTO_ASSETS: list[tuple[str, str, str]] = [
    ("BTC",   "Bitcoin",   "bitcoin"),
    ("ETH",   "Ethereum",  "ethereum"),
    ("SOL",   "Solana",    "solana"),
    ("ADA",   "Cardano",   "cardano"),
    ("DOT",   "Polkadot",  "polkadot"),
    ("AVAX",  "Avalanche", "avalanche-2"),
    ("MATIC", "Polygon",   "matic-network"),
    ("XRP",   "Ripple",    "ripple"),
    ("DOGE",  "Dogecoin",  "dogecoin"),
    ("LTC",   "Litecoin",  "litecoin"),
    ("LINK",  "Chainlink", "chainlink"),
    ("UNI",   "Uniswap",   "uniswap"),
]

REFERENCE_ID = "bitcoin"  # every PriceBTC is relative to this coin
FIAT = "usd"

RATE_COLUMNS = ["Symbol", "Name", "PriceUSD", "PriceBTC"]


class RatesFetchError(RuntimeError):
    """Raised when no usable set of rates could be fetched."""


# ── Helpers ────────────────────────────────────────────────────────────────────

def _price_of(data: dict, asset_id: str) -> float | None:
    """Return the positive fiat price for asset_id, or None if missing/zero/garbage."""
    entry = data.get(asset_id)
    if not isinstance(entry, dict):
        return None
    price = entry.get(FIAT)
    if isinstance(price, bool) or not isinstance(price, (int, float)):
        return None
    if not price > 0:
        return None
    return float(price)


def build_rates(data: dict) -> pd.DataFrame:
    """
    Turn a simple-price payload into a rates DataFrame.

    Assets with a missing or zero price are dropped; a missing reference
    price or an empty result is an error.

    Args:
        data: Mapping of CoinGecko id → {"usd": price}.

    Returns:
        DataFrame with columns Symbol, Name, PriceUSD, PriceBTC in CRYPTO_ASSETS order.
    """
    btc_price = _price_of(data, REFERENCE_ID)
    if btc_price is None:
        raise RatesFetchError("Unable to fetch BTC price")

    rows = []
    for symbol, name, asset_id in CRYPTO_ASSETS:
        price = _price_of(data, asset_id)
        if price is None:
            logger.warning(f"No usable price for {symbol} ({asset_id}) — skipping.")
            continue
        rows.append({
            "Symbol": symbol,
            "Name": name,
            "PriceUSD": price,
            "PriceBTC": price / btc_price,
        })

    if not rows:
        raise RatesFetchError("No rates could be fetched")

    return pd.DataFrame(rows, columns=RATE_COLUMNS)


# ── Main fetch function ────────────────────────────────────────────────────────

def fetch_crypto_rates() -> pd.DataFrame:
    """
    Fetch current USD prices for CRYPTO_ASSETS in a single batch request.

    Returns:
        Rates DataFrame (see build_rates).

    Raises:
        RatesFetchError: on HTTP/network failure, a missing BTC price, or
        when no asset has a usable price.
    """
    url = f"{get_api_base_url()}/simple/price"
    params = {
        "ids": ",".join(asset_id for _, _, asset_id in CRYPTO_ASSETS),
        "vs_currencies": FIAT,
    }
    timeout_s = get_api_timeout() / 1000

    logger.info(f"Fetching prices from {url}")
    try:
        resp = requests.get(url, params=params, timeout=timeout_s)
        if not resp.ok:
            logger.error(f"API response error: {resp.status_code} {resp.reason}")
            raise RatesFetchError(f"CoinGecko API error: {resp.status_code} {resp.reason}")
        data = resp.json()
        if not isinstance(data, dict):
            raise RatesFetchError("Unexpected response payload")
        rates = build_rates(data)
    except (RatesFetchError, requests.RequestException, ValueError) as e:
        logger.error(f"Error fetching crypto rates: {e}")
        raise RatesFetchError(f"Failed to fetch cryptocurrency rates: {e}") from e

    logger.info(f"Fetched {len(rates)} rates.")
    return rates
