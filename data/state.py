"""
data/state.py
Module-level shared state — holds the startup fetch result so component
callbacks can read it without circular imports back to app.py.
Populated once by app.py at startup.
"""

import pandas as pd

# Set by app.py after the initial fetch. rates_df stays empty and load_error
# holds the message when that fetch failed.
rates_df: pd.DataFrame = pd.DataFrame(columns=["Symbol", "Name", "PriceUSD", "PriceBTC"])
fetched_at: str | None = None
load_error: str | None = None
