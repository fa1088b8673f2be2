"""
app.py — CryptoMonitor Dashboard
Entry point. Initializes Dash, loads rates, defines layout, wires callbacks.
Keep this file thin — card and header logic lives in components/.
"""

import logging
from datetime import datetime

from dash import Dash, dcc, html

from data.config import get_server_options
from data.fetch import fetch_crypto_rates, RatesFetchError
from data.process import empty_rates, rates_to_json
import data.state as _state  # shared runtime state (avoids circular imports)

logger = logging.getLogger(__name__)

# ══════════════════════════════════════════════════════════════════════════════
# DATA LOADING
# ══════════════════════════════════════════════════════════════════════════════


def load_rates_into_state() -> None:
    """Fetch rates for a page load and publish the result (or the error) to data.state."""
    print("Loading cryptocurrency rates...")
    try:
        _state.rates_df = fetch_crypto_rates()
        _state.fetched_at = datetime.now().isoformat(timespec="seconds")
        _state.load_error = None
        print(f"Ready — {len(_state.rates_df)} rates loaded.\n")
    except RatesFetchError as e:
        logger.error(f"Page-load fetch failed: {e}")
        _state.rates_df = empty_rates()
        _state.fetched_at = None
        _state.load_error = str(e)
        print("Serving without rates — use Refresh to retry.\n")


# ── Component callbacks (importing registers them with Dash) ──────────────────
import components.header as _hd   # noqa: F401, E402
import components.cards  as _cd   # noqa: F401, E402
from components.header import build_header            # noqa: E402
from components.cards import build_error_banner, build_skeleton_grid  # noqa: E402

# ══════════════════════════════════════════════════════════════════════════════
# APP
# ══════════════════════════════════════════════════════════════════════════════

app = Dash(
    __name__,
    title="CryptoMonitor",
    suppress_callback_exceptions=True,
)

# ══════════════════════════════════════════════════════════════════════════════
# LAYOUT
# ══════════════════════════════════════════════════════════════════════════════


def serve_layout() -> html.Div:
    """Build the page for one load, with rates fetched for that load."""
    load_rates_into_state()

    return html.Div(id="app-wrapper", className="theme-light", children=[

        # ── Header ────────────────────────────────────────────────
        build_header(len(_state.rates_df), _state.fetched_at),

        # ── Body ──────────────────────────────────────────────────
        html.Main(id="main-content", children=[
            html.Div(id="error-banner", children=build_error_banner(_state.load_error)),
            html.Div(id="card-grid", children=build_skeleton_grid()),
        ]),

        # ── Footer ────────────────────────────────────────────────
        html.Footer(id="footer", children=[
            html.Span(f"© {datetime.now().year} CryptoMonitor"),
            html.Span("Prices: CoinGecko · Not financial advice"),
        ]),

        # ── Data stores ───────────────────────────────────────────
        dcc.Store(id="store-rates", data=rates_to_json(_state.rates_df)),
        dcc.Store(id="store-fetched-at", data=_state.fetched_at),
        dcc.Store(id="store-drag-event"),
        dcc.Store(id="store-theme", storage_type="local"),
        dcc.Store(id="store-card-order", storage_type="local"),
    ])


# Dash calls serve_layout on every page load.
app.layout = serve_layout

# ══════════════════════════════════════════════════════════════════════════════
# ENTRY POINT
# ══════════════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    app.run(**get_server_options())
