import pytest

from data.process import (
    apply_view,
    empty_rates,
    filter_rates,
    rates_from_json,
    rates_to_json,
    sort_by_default,
    sort_by_name,
    sort_by_price,
)

from conftest import make_rates


def symbols(df):
    return df["Symbol"].tolist()


def test_default_sort_preserves_order(sample_rates):
    shuffled = sample_rates.iloc[[2, 0, 1]]
    assert symbols(sort_by_default(shuffled)) == ["SOL", "BTC", "ETH"]


def test_default_sort_of_empty():
    assert sort_by_default(empty_rates()).empty


def test_sorts_do_not_mutate_input(sample_rates):
    before = symbols(sample_rates)
    sort_by_name(sample_rates)
    sort_by_price(sample_rates, ascending=True)
    assert symbols(sample_rates) == before


def test_name_sort_ignores_case():
    rates = make_rates([
        ("BTC", "bitcoin", 50000.0),
        ("ADA", "Cardano", 0.5),
        ("AAVE", "Aave", 90.0),
    ])
    assert sort_by_name(rates)["Name"].tolist() == ["Aave", "bitcoin", "Cardano"]


def test_price_sort_descending_by_default():
    rates = make_rates([
        ("ETH", "Ethereum", 2500.0),
        ("BTC", "Bitcoin", 50000.0),
        ("SOL", "Solana", 150.0),
        ("USDC", "USD Coin", 0.98),
    ])
    assert sort_by_price(rates)["PriceUSD"].tolist() == [50000.0, 2500.0, 150.0, 0.98]


def test_price_sort_ascending():
    rates = make_rates([
        ("BTC", "Bitcoin", 50000.0),
        ("ETH", "Ethereum", 2500.0),
        ("SOL", "Solana", 150.0),
    ])
    assert symbols(sort_by_price(rates, ascending=True)) == ["SOL", "ETH", "BTC"]


@pytest.mark.parametrize("ascending", [True, False])
def test_price_sort_is_stable_on_ties(ascending):
    rates = make_rates([
        ("BTC", "Bitcoin", 50000.0),
        ("AAA", "Alpha", 1.0),
        ("BBB", "Beta", 1.0),
        ("CCC", "Gamma", 1.0),
    ])
    ties = [s for s in symbols(sort_by_price(rates, ascending=ascending)) if s != "BTC"]
    assert ties == ["AAA", "BBB", "CCC"]


def test_filter_matches_symbol_case_insensitively(sample_rates):
    assert symbols(filter_rates(sample_rates, "eth")) == ["ETH"]


def test_filter_matches_name(sample_rates):
    assert symbols(filter_rates(sample_rates, "SOLA")) == ["SOL"]


def test_empty_filter_keeps_everything(sample_rates):
    assert symbols(filter_rates(sample_rates, "")) == ["BTC", "ETH", "SOL"]
    assert symbols(filter_rates(sample_rates, None)) == ["BTC", "ETH", "SOL"]


def test_filter_treats_term_literally(sample_rates):
    assert filter_rates(sample_rates, ".*").empty


def test_view_filters_before_sorting(sample_rates):
    view = apply_view(sample_rates, "t", "price-asc")
    # "t" matches Bitcoin and Ethereum, not Solana
    assert symbols(view) == ["ETH", "BTC"]


def test_view_unknown_sort_falls_back_to_manual_order(sample_rates):
    manual = sample_rates.iloc[[1, 2, 0]]
    assert symbols(apply_view(manual, "", "bogus")) == ["ETH", "SOL", "BTC"]


def test_store_payload_restores_rates(sample_rates):
    restored = rates_from_json(rates_to_json(sample_rates.iloc[[2, 0, 1]]))
    assert symbols(restored) == ["SOL", "BTC", "ETH"]
    assert restored["PriceBTC"].tolist() == pytest.approx([0.003, 1.0, 0.05])


def test_missing_store_payload_is_empty():
    assert rates_from_json(None).empty
    assert rates_from_json(rates_to_json(empty_rates())).empty
