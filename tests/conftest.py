import pandas as pd
import pytest

from data.fetch import RATE_COLUMNS


def make_rates(rows):
    """rows: iterable of (symbol, name, usd); PriceBTC is relative to the first row."""
    rows = list(rows)
    btc = rows[0][2] if rows else 1.0
    return pd.DataFrame(
        [{"Symbol": s, "Name": n, "PriceUSD": usd, "PriceBTC": usd / btc} for s, n, usd in rows],
        columns=RATE_COLUMNS,
    )


@pytest.fixture
def sample_rates():
    return make_rates([
        ("BTC", "Bitcoin", 50000.0),
        ("ETH", "Ethereum", 2500.0),
        ("SOL", "Solana", 150.0),
    ])
