import pytest
import requests

from data import fetch
from data.fetch import CRYPTO_ASSETS, RatesFetchError, build_rates, fetch_crypto_rates


class FakeResponse:
    def __init__(self, payload=None, status_code=200, reason="OK"):
        self._payload = payload
        self.status_code = status_code
        self.reason = reason

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


@pytest.fixture
def fake_get(monkeypatch):
    calls = []

    def install(response):
        def _get(url, params=None, timeout=None):
            calls.append({"url": url, "params": params, "timeout": timeout})
            if isinstance(response, Exception):
                raise response
            return response
        monkeypatch.setattr(fetch.requests, "get", _get)
        return calls

    return install


def test_fetch_builds_rates_in_asset_order(fake_get, monkeypatch):
    monkeypatch.setenv("COINGECKO_API_URL", "http://prices.test/api/v3")
    monkeypatch.setenv("API_TIMEOUT", "2500")
    calls = fake_get(FakeResponse({
        "ethereum": {"usd": 2500},
        "bitcoin": {"usd": 50000},
        "solana": {"usd": 150},
    }))

    rates = fetch_crypto_rates()

    assert rates["Symbol"].tolist() == ["BTC", "ETH", "SOL"]
    assert rates["Name"].tolist() == ["Bitcoin", "Ethereum", "Solana"]
    assert rates.loc[1, "PriceBTC"] == pytest.approx(0.05)
    assert rates.loc[0, "PriceBTC"] == pytest.approx(1.0)

    call = calls[0]
    assert call["url"] == "http://prices.test/api/v3/simple/price"
    assert call["params"]["vs_currencies"] == "usd"
    assert call["params"]["ids"].split(",") == [asset_id for _, _, asset_id in CRYPTO_ASSETS]
    assert call["timeout"] == pytest.approx(2.5)


def test_missing_and_zero_prices_are_dropped():
    rates = build_rates({
        "bitcoin": {"usd": 50000},
        "ethereum": {"usd": 0},
        "solana": {},
        "cardano": {"usd": 0.5},
    })
    assert rates["Symbol"].tolist() == ["BTC", "ADA"]


def test_non_numeric_prices_are_dropped():
    rates = build_rates({
        "bitcoin": {"usd": 50000},
        "ethereum": {"usd": 2500},
        "cardano": {"usd": "0.5"},
        "ripple": {"usd": True},
        "dogecoin": None,
        "litecoin": [80],
        "solana": {"usd": float("nan")},
        "polkadot": {"usd": -4.2},
        "chainlink": {"eur": 14.0},
    })
    assert rates["Symbol"].tolist() == ["BTC", "ETH"]


def test_integer_prices_are_accepted():
    rates = build_rates({"bitcoin": {"usd": 50000}, "uniswap": {"usd": 5}})
    assert rates["Symbol"].tolist() == ["BTC", "UNI"]
    assert rates.loc[1, "PriceUSD"] == 5.0


def test_missing_btc_price_fails(fake_get):
    fake_get(FakeResponse({"ethereum": {"usd": 2500}}))
    with pytest.raises(RatesFetchError, match="Unable to fetch BTC price"):
        fetch_crypto_rates()


def test_zero_btc_price_fails():
    with pytest.raises(RatesFetchError, match="Unable to fetch BTC price"):
        build_rates({"bitcoin": {"usd": 0}, "ethereum": {"usd": 2500}})


def test_http_error_is_reported(fake_get):
    fake_get(FakeResponse(status_code=429, reason="Too Many Requests"))
    with pytest.raises(RatesFetchError) as exc:
        fetch_crypto_rates()
    message = str(exc.value)
    assert message.startswith("Failed to fetch cryptocurrency rates: ")
    assert "CoinGecko API error: 429 Too Many Requests" in message


def test_network_error_is_wrapped(fake_get):
    fake_get(requests.ConnectionError("connection refused"))
    with pytest.raises(RatesFetchError, match="connection refused"):
        fetch_crypto_rates()


def test_bad_json_is_wrapped(fake_get):
    fake_get(FakeResponse(ValueError("Expecting value")))
    with pytest.raises(RatesFetchError, match="Expecting value"):
        fetch_crypto_rates()
