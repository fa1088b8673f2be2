"""
data/order.py
Manual card order: drag-and-drop moves and the persisted symbol list that
survives across sessions in browser local storage.
"""

import json
import logging

import pandas as pd

logger = logging.getLogger(__name__)


def move_rate(rates: pd.DataFrame, active_symbol: str, over_symbol: str) -> pd.DataFrame:
    """
    Move the dragged card to the position of the card it was dropped on.

    Examples:
        [BTC, ETH, SOL], BTC dropped on SOL → [ETH, SOL, BTC]
        [BTC, ETH, SOL], SOL dropped on BTC → [SOL, BTC, ETH]

    Args:
        rates:         Session rates in manual order.
        active_symbol: Symbol of the card being dragged.
        over_symbol:   Symbol of the card under the pointer on drop.

    Returns:
        New DataFrame in the new order; unchanged order if either symbol is
        unknown or both are the same.
    """
    symbols = rates["Symbol"].tolist()
    if active_symbol == over_symbol or active_symbol not in symbols or over_symbol not in symbols:
        return rates.reset_index(drop=True)

    old_index = symbols.index(active_symbol)
    new_index = symbols.index(over_symbol)

    positions = list(range(len(symbols)))
    positions.insert(new_index, positions.pop(old_index))
    return rates.iloc[positions].reset_index(drop=True)


def order_to_json(rates: pd.DataFrame) -> str:
    """Encode the current order as a JSON list of symbols for local storage."""
    return json.dumps(rates["Symbol"].tolist())


def parse_saved_order(raw) -> list[str] | None:
    """
    Decode a persisted order.

    Accepts the JSON string written by order_to_json (or an already-decoded
    list). Anything that isn't a list of strings is logged and ignored.
    """
    if raw is None or raw == "":
        return None

    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError as e:
            logger.warning(f"Ignoring corrupt saved card order: {e}")
            return None

    if not isinstance(raw, list) or not all(isinstance(s, str) for s in raw):
        logger.warning(f"Ignoring saved card order of unexpected shape: {raw!r}")
        return None
    return raw


def apply_saved_order(rates: pd.DataFrame, raw) -> pd.DataFrame:
    """
    Reorder freshly fetched rates by a persisted symbol list.

    The saved order is used only when it names exactly the fetched symbols,
    each once. Otherwise the fetched order is kept.
    """
    order = parse_saved_order(raw)
    if order is None:
        return rates.reset_index(drop=True)

    symbols = rates["Symbol"].tolist()
    if len(order) != len(symbols) or set(order) != set(symbols) or len(set(order)) != len(order):
        logger.info("Saved card order doesn't match fetched assets — using fetch order.")
        return rates.reset_index(drop=True)

    position = {symbol: i for i, symbol in enumerate(symbols)}
    return rates.iloc[[position[s] for s in order]].reset_index(drop=True)
