"""
data/process.py
Sort/filter pipeline over a rates DataFrame, plus the dcc.Store round-trip.
Every function returns a new frame; inputs are never mutated.
"""

from io import StringIO

import pandas as pd

from data.fetch import RATE_COLUMNS

SORT_TYPES = ("default", "name", "price-asc", "price-desc")


def empty_rates() -> pd.DataFrame:
    """A rates frame with the right columns and no rows."""
    return pd.DataFrame(columns=RATE_COLUMNS)


# ── Sorting ────────────────────────────────────────────────────────────────────

def sort_by_default(rates: pd.DataFrame) -> pd.DataFrame:
    """Identity sort: keeps the manual (drag-and-drop) order."""
    return rates.reset_index(drop=True)


def sort_by_name(rates: pd.DataFrame) -> pd.DataFrame:
    """
    Alphabetical by display name, ignoring case.

    Stable, so names differing only in case keep their relative order.
    """
    return rates.sort_values(
        "Name",
        key=lambda names: names.astype(str).str.casefold(),
        kind="stable",
    ).reset_index(drop=True)


def sort_by_price(rates: pd.DataFrame, ascending: bool = False) -> pd.DataFrame:
    """
    Numeric sort on PriceUSD, highest first unless ascending=True.

    Examples:
        [2500, 50000, 150, 0.98] → [50000, 2500, 150, 0.98]

    Ties keep their input order in both directions.
    """
    return rates.sort_values(
        "PriceUSD",
        ascending=ascending,
        kind="stable",
    ).reset_index(drop=True)


# ── Filtering ──────────────────────────────────────────────────────────────────

def filter_rates(rates: pd.DataFrame, term: str | None) -> pd.DataFrame:
    """
    Keep rates whose name or symbol contains term, case-insensitively.
    An empty term keeps everything.
    """
    if not term or rates.empty:
        return rates.reset_index(drop=True)

    needle = term.lower()
    mask = (
        rates["Name"].astype(str).str.lower().str.contains(needle, regex=False)
        | rates["Symbol"].astype(str).str.lower().str.contains(needle, regex=False)
    )
    return rates[mask].reset_index(drop=True)


def apply_view(rates: pd.DataFrame, term: str | None, sort_type: str | None) -> pd.DataFrame:
    """
    Build the displayed view: filter by search term, then sort by mode.

    Args:
        rates:     Session rates in manual order.
        term:      Free-text search (may be empty).
        sort_type: One of SORT_TYPES; anything else behaves like "default".

    Returns:
        New DataFrame with the visible rates in display order.
    """
    filtered = filter_rates(rates, term)

    if sort_type == "name":
        return sort_by_name(filtered)
    if sort_type == "price-asc":
        return sort_by_price(filtered, ascending=True)
    if sort_type == "price-desc":
        return sort_by_price(filtered, ascending=False)
    return sort_by_default(filtered)


# ── Store round-trip ───────────────────────────────────────────────────────────

def rates_to_json(rates: pd.DataFrame) -> str:
    """Serialize rates for a dcc.Store."""
    return rates[RATE_COLUMNS].to_json(orient="split", index=False)


def rates_from_json(payload: str | None) -> pd.DataFrame:
    """Inverse of rates_to_json; None/empty payload → empty frame."""
    if not payload:
        return empty_rates()
    df = pd.read_json(StringIO(payload), orient="split")
    if df.empty:
        return empty_rates()
    df["Symbol"] = df["Symbol"].astype(str)
    df["Name"] = df["Name"].astype(str)
    df["PriceUSD"] = pd.to_numeric(df["PriceUSD"], errors="coerce")
    df["PriceBTC"] = pd.to_numeric(df["PriceBTC"], errors="coerce")
    return df[RATE_COLUMNS]
