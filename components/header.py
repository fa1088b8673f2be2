"""
components/header.py
Sticky header: title, search box, sort selector, refresh and theme buttons,
plus the status bar underneath. Owns the theme and clear-search callbacks.
"""

from __future__ import annotations

from datetime import datetime

from dash import dcc, html, callback, Input, Output, State

SORT_OPTIONS = [
    {"label": "Sort by Symbol",     "value": "default"},
    {"label": "Sort by Name",       "value": "name"},
    {"label": "Price: Low to High", "value": "price-asc"},
    {"label": "Price: High to Low", "value": "price-desc"},
]

SUN_ICON  = "☀"
MOON_ICON = "☾"


def build_header(visible_count: int = 0, fetched_at: str | None = None) -> html.Header:
    """
    Build the header and status bar.

    Args:
        visible_count: Initial "Displaying N assets" figure.
        fetched_at:    ISO timestamp of the startup fetch, if any.

    Returns:
        html.Header with all dashboard controls.
    """
    return html.Header(id="header", children=[
        html.Div(id="header-row", children=[

            # ── Title & badge ─────────────────────────────────────
            html.Div(id="header-left", children=[
                html.Span("⚡", id="header-icon"),
                html.Div([
                    html.H1("CryptoMonitor", id="header-logo"),
                    html.Span("Live Market Data", id="header-subtitle"),
                ]),
            ]),

            # ── Controls ──────────────────────────────────────────
            html.Div(id="header-controls", children=[
                dcc.Input(
                    id="search-input",
                    type="text",
                    value="",
                    placeholder="Search coins...",
                    debounce=False,
                    className="search-input",
                ),
                dcc.Dropdown(
                    id="sort-select",
                    options=SORT_OPTIONS,
                    value="default",
                    clearable=False,
                    searchable=False,
                    className="sort-select",
                ),
                html.Div(className="header-buttons", children=[
                    html.Button("⟳", id="refresh-button", className="icon-button",
                                title="Refresh Rates", n_clicks=0),
                    html.Button(MOON_ICON, id="theme-toggle", className="icon-button",
                                title="Switch to Dark Mode", n_clicks=0),
                ]),
            ]),
        ]),

        # ── Status bar ────────────────────────────────────────────
        html.Div(id="status-bar", children=[
            html.Div(className="status-left", children=[
                html.Span(["Displaying ", html.B(str(visible_count), id="visible-count"), " assets"]),
                html.Button("Clear filter ✕", id="clear-filter-button", className="link-button",
                            style={"display": "none"}),
            ]),
            html.Span(["Updated: ", html.Span(format_updated(fetched_at), id="updated-time",
                                              className="mono")]),
        ]),
    ])


def format_updated(fetched_at: str | None) -> str:
    """ISO timestamp → "HH:MM:SS"; blank when unknown or unparseable."""
    if not fetched_at:
        return ""
    try:
        return datetime.fromisoformat(fetched_at).strftime("%H:%M:%S")
    except ValueError:
        return ""


def next_theme(current: str | None) -> str:
    """Flip the stored theme; an unset theme counts as light."""
    return "light" if current == "dark" else "dark"


# ── Callbacks ──────────────────────────────────────────────────────────────────

@callback(
    Output("store-theme", "data"),
    Input("theme-toggle", "n_clicks"),
    State("store-theme", "data"),
    prevent_initial_call=True,
)
def toggle_theme(_n_clicks, theme):
    """Flip light/dark and persist the choice in local storage."""
    return next_theme(theme)


@callback(
    Output("app-wrapper", "className"),
    Output("theme-toggle", "children"),
    Output("theme-toggle", "title"),
    Input("store-theme", "data"),
)
def apply_theme(theme):
    """Apply the stored theme to the page (also runs on load)."""
    if theme == "dark":
        return "theme-dark", SUN_ICON, "Switch to Light Mode"
    return "theme-light", MOON_ICON, "Switch to Dark Mode"


@callback(
    Output("updated-time", "children"),
    Input("store-fetched-at", "data"),
)
def show_updated_time(fetched_at):
    return format_updated(fetched_at)


@callback(
    Output("search-input", "value"),
    Input("clear-filter-button", "n_clicks"),
    prevent_initial_call=True,
)
def clear_filter(_n_clicks):
    return ""


@callback(
    Output("search-input", "value", allow_duplicate=True),
    Input("empty-clear-button", "n_clicks"),
    prevent_initial_call=True,
)
def clear_search_from_empty_state(_n_clicks):
    # Button only exists while the empty state is on screen.
    return ""
