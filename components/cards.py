"""
components/cards.py
Card grid: one draggable card per rate, skeleton placeholders, the empty
state, and the callbacks that load, refresh, reorder, and render rates.
"""

from __future__ import annotations

import logging
from datetime import datetime

import pandas as pd
from dash import html, callback, no_update, Input, Output, State

from data.colors import card_palette
from data.fetch import fetch_crypto_rates, RatesFetchError
from data.order import apply_saved_order, move_rate, order_to_json
from data.process import apply_view, rates_from_json, rates_to_json

logger = logging.getLogger(__name__)

SKELETON_COUNT = 12  # placeholders shown before the first render


# ══════════════════════════════════════════════════════════════════════════════
# BUILDERS
# ══════════════════════════════════════════════════════════════════════════════

def format_usd(price: float) -> str:
    """50000 → "$50,000.00" """
    return f"${price:,.2f}"


def format_btc(price: float) -> str:
    """0.05 → "0.0500000" """
    return f"{price:.7f}"


def build_rate_card(rate: dict, dark: bool = False) -> html.Div:
    """
    Build one draggable rate card.

    Args:
        rate: Row dict with Symbol, Name, PriceUSD, PriceBTC.
        dark: Use the dark-theme badge colours.

    Returns:
        html.Div carrying data-symbol, read by the drag script on drop.
    """
    symbol = rate["Symbol"]
    bg_color, text_color = card_palette(symbol, dark)

    return html.Div(
        className="rate-card",
        draggable="true",
        **{"data-symbol": symbol},
        children=[
            # ── Header: badge, name, drag handle ──────────────────
            html.Div(className="rate-card-header", children=[
                html.Div(className="rate-card-title", children=[
                    html.Div(
                        symbol[:1],
                        className="rate-badge",
                        style={"backgroundColor": bg_color, "color": text_color},
                    ),
                    html.Div(className="rate-names", children=[
                        html.H3(rate["Name"], className="rate-name", title=rate["Name"]),
                        html.Span(symbol, className="rate-symbol"),
                    ]),
                ]),
                # focusable so the arrow keys can move the card too
                html.Span(
                    "☰",
                    className="drag-handle",
                    title="Drag card to reorder (or focus and use the arrow keys)",
                    tabIndex="0",
                    role="button",
                    **{"aria-label": f"Move {rate['Name']}"},
                ),
            ]),

            # ── Body: prices ──────────────────────────────────────
            html.Div(className="rate-card-body", children=[
                html.Div(format_usd(rate["PriceUSD"]), className="rate-price-usd"),
                html.Div("USD Price", className="rate-label"),
                html.Div(className="rate-card-footer", children=[
                    html.Div([
                        html.Div(format_btc(rate["PriceBTC"]), className="rate-price-btc"),
                        html.Div("BTC Value", className="rate-label rate-label--small"),
                    ]),
                    html.Span(className="live-dot"),
                ]),
            ]),
        ],
    )


def build_skeleton_card() -> html.Div:
    return html.Div(className="rate-card skeleton", children=[
        html.Div(className="skeleton-block skeleton-badge"),
        html.Div(className="skeleton-block skeleton-line"),
        html.Div(className="skeleton-block skeleton-line skeleton-line--short"),
    ])


def build_skeleton_grid(count: int = SKELETON_COUNT) -> html.Div:
    """Placeholder grid shown until rates are rendered."""
    return html.Div(className="card-grid", children=[build_skeleton_card() for _ in range(count)])


def build_empty_state(search_term: str | None) -> html.Section:
    """No-results panel for a search, or the loading panel when there are no rates."""
    if search_term:
        return html.Section(className="empty-state", children=[
            html.H2(f'No results for "{search_term}"'),
            html.P("Check your spelling or try using the cryptocurrency symbol (e.g. BTC, ETH)."),
            html.Button("Clear Search", id="empty-clear-button", className="primary-button"),
        ])
    return html.Section(className="empty-state", children=[
        html.H2("Loading Market Data"),
        html.P("Connecting to CoinGecko for real-time exchange rates..."),
    ])


def build_card_grid(view: pd.DataFrame, search_term: str | None = None, dark: bool = False):
    """Grid of cards for the visible rates, or the empty state when there are none."""
    if view.empty:
        return build_empty_state(search_term)
    return html.Div(
        className="card-grid",
        children=[build_rate_card(rate, dark) for rate in view.to_dict("records")],
    )


def build_error_banner(message: str | None):
    if not message:
        return None
    return html.Div(message, className="error-banner", role="alert")


# ══════════════════════════════════════════════════════════════════════════════
# STATE TRANSITIONS
# ══════════════════════════════════════════════════════════════════════════════

def load_rates(saved_order) -> tuple[pd.DataFrame, str]:
    """
    Fetch fresh rates and reconcile them with the persisted manual order.

    Returns:
        (rates, fetched_at ISO timestamp). RatesFetchError propagates.
    """
    rates = fetch_crypto_rates()
    return apply_saved_order(rates, saved_order), datetime.now().isoformat(timespec="seconds")


def drop_card(rates: pd.DataFrame, drag_event: dict | None) -> pd.DataFrame | None:
    """
    Apply a drop event {active, over} to the session rates.

    Returns:
        The reordered rates, or None when the event doesn't change anything.
    """
    if not drag_event:
        return None
    active = drag_event.get("active")
    over = drag_event.get("over")
    if not active or not over or active == over:
        return None

    symbols = rates["Symbol"].tolist()
    if active not in symbols or over not in symbols:
        logger.warning(f"Ignoring drop of {active} onto {over}: not in current rates.")
        return None
    return move_rate(rates, active, over)


# ══════════════════════════════════════════════════════════════════════════════
# CALLBACKS
# ══════════════════════════════════════════════════════════════════════════════

@callback(
    Output("store-rates", "data"),
    Input("store-card-order", "modified_timestamp"),
    State("store-card-order", "data"),
    State("store-rates", "data"),
)
def restore_saved_order(_ts, saved_order, rates_json):
    """On page load, put the startup rates into the user's saved order."""
    rates = rates_from_json(rates_json)
    if rates.empty:
        return no_update
    ordered = apply_saved_order(rates, saved_order)
    if ordered["Symbol"].tolist() == rates["Symbol"].tolist():
        return no_update
    return rates_to_json(ordered)


@callback(
    Output("store-rates", "data", allow_duplicate=True),
    Output("store-fetched-at", "data"),
    Output("error-banner", "children"),
    Input("refresh-button", "n_clicks"),
    State("store-card-order", "data"),
    running=[(Output("refresh-button", "disabled"), True, False)],
    prevent_initial_call=True,
)
def refresh_rates(_n_clicks, saved_order):
    """Replace the session rates with a fresh fetch; keep the old ones on failure."""
    try:
        rates, fetched_at = load_rates(saved_order)
    except RatesFetchError as e:
        logger.error(f"Refresh failed: {e}")
        return no_update, no_update, build_error_banner(str(e))
    return rates_to_json(rates), fetched_at, None


@callback(
    Output("store-rates", "data", allow_duplicate=True),
    Output("store-card-order", "data"),
    Output("sort-select", "value"),
    Input("store-drag-event", "data"),
    State("store-rates", "data"),
    prevent_initial_call=True,
)
def handle_drop(drag_event, rates_json):
    """Reorder after a drop, persist the order, and switch back to manual order."""
    reordered = drop_card(rates_from_json(rates_json), drag_event)
    if reordered is None:
        return no_update, no_update, no_update
    return rates_to_json(reordered), order_to_json(reordered), "default"


@callback(
    Output("card-grid", "children"),
    Output("visible-count", "children"),
    Output("clear-filter-button", "style"),
    Input("store-rates", "data"),
    Input("search-input", "value"),
    Input("sort-select", "value"),
    Input("store-theme", "data"),
)
def render_cards(rates_json, search_term, sort_type, theme):
    """Filter → sort → render whenever rates, search, sort, or theme change."""
    view = apply_view(rates_from_json(rates_json), search_term, sort_type)
    clear_style = {} if search_term else {"display": "none"}
    return (
        build_card_grid(view, search_term, dark=(theme == "dark")),
        str(len(view)),
        clear_style,
    )
