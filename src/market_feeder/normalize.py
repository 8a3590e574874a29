"""Chart response normalization — turn a provider payload into a candle table."""
from __future__ import annotations

import json
import logging
from typing import Any

import pandas as pd

from .sources.base import (
    RAW_EXCERPT_CHARS,
    APIError,
    DataParsingError,
    MarketFeederError,
    TickerNotFoundError,
)
from .utils import unix_to_datetime

logger = logging.getLogger(__name__)

SOURCE_NAME = "Yahoo Finance"

# Fixed candle-table schema, in column order
CANDLE_DTYPES: dict[str, str] = {
    "timestamp": "datetime64[ns, UTC]",
    "open": "Float64",
    "high": "Float64",
    "low": "Float64",
    "close": "Float64",
    "volume": "Int64",
    "adj_close": "Float64",
}
CANDLE_COLUMNS = tuple(CANDLE_DTYPES)
PRICE_COLUMNS = ("open", "high", "low", "close")


def empty_candle_frame() -> pd.DataFrame:
    """Return a zero-row candle table with the full typed schema."""
    return pd.DataFrame(
        {col: pd.Series([], dtype=dtype) for col, dtype in CANDLE_DTYPES.items()}
    )


def parse_chart_response(
    raw: str | bytes,
    ticker: str,
    source: str = SOURCE_NAME,
) -> pd.DataFrame:
    """Parse a chart API JSON payload into a candle table.

    Rules applied (in order):
    1. Decode JSON.
    2. Surface ``chart.error`` as :class:`APIError` (status 0).
    3. Empty ``chart.result`` → :class:`TickerNotFoundError`.
    4. Empty ``timestamp`` array → empty table (not an error).
    5. Align open/high/low/close/volume by index; JSON nulls become ``NA``.
    6. ``adj_close`` comes from the adjclose block, else a copy of ``close``.
    7. Drop rows where open, high, low and close are all ``NA``.

    Row order is the provider's order; nothing is re-sorted.

    Raises
    ------
    APIError
        If the payload carries a provider error.
    TickerNotFoundError
        If the payload has no result series.
    DataParsingError
        For any other failure; carries the first 500 chars of *raw*.
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")

    try:
        return _parse(raw, ticker, source)
    except MarketFeederError:
        raise
    except Exception as exc:
        raise DataParsingError(
            f"Failed to parse {source} response: {exc}",
            raw[:RAW_EXCERPT_CHARS],
        ) from exc


# ------------------------------------------------------------------
# Internal helpers
# ------------------------------------------------------------------

def _parse(raw: str, ticker: str, source: str) -> pd.DataFrame:
    try:
        payload = json.loads(raw)
    except ValueError as exc:
        raise DataParsingError(
            f"Invalid JSON in {source} response: {exc}",
            raw[:RAW_EXCERPT_CHARS],
        ) from exc

    chart = payload["chart"]

    error = chart.get("error")
    if error is not None:
        description = error.get("description") if isinstance(error, dict) else error
        raise APIError(0, str(description or "Unknown error"), source)

    result = chart.get("result")
    if not result:
        raise TickerNotFoundError(ticker, source)

    entry = result[0]
    timestamps = entry.get("timestamp")
    if not timestamps:
        logger.info("%s returned no candles in range for %s", source, ticker)
        return empty_candle_frame()

    n = len(timestamps)
    indicators = entry["indicators"]
    quote = indicators["quote"][0]

    columns: dict[str, Any] = {
        "timestamp": pd.Series(
            [unix_to_datetime(ts) for ts in timestamps]
        ).astype(CANDLE_DTYPES["timestamp"]),
    }
    for col in PRICE_COLUMNS:
        columns[col] = _nullable_array(quote.get(col), col, n, "Float64")
    columns["volume"] = _nullable_array(quote.get("volume"), "volume", n, "Int64")

    adj_blocks = indicators.get("adjclose")
    adj_values = adj_blocks[0].get("adjclose") if adj_blocks else None
    if adj_values:
        columns["adj_close"] = _nullable_array(adj_values, "adjclose", n, "Float64")
    else:
        columns["adj_close"] = columns["close"].copy()

    df = pd.DataFrame(columns, columns=list(CANDLE_COLUMNS))

    empty_rows = df[list(PRICE_COLUMNS)].isna().all(axis=1)
    dropped = int(empty_rows.sum())
    if dropped:
        logger.debug("normalize: dropped %d rows with no OHLC values for %s", dropped, ticker)
        df = df[~empty_rows].reset_index(drop=True)

    return df


def _nullable_array(values: list | None, key: str, n: int, dtype: str):
    """Convert a JSON array to a nullable pandas array of length *n*.

    A missing array counts as zero-length.  JSON nulls become ``pd.NA``.
    Only JSON numbers are accepted; ``Int64`` columns also reject
    fractional values instead of truncating them.
    """
    values = values if values is not None else []
    if len(values) != n:
        raise ValueError(f"'{key}' has {len(values)} values, expected {n} (one per timestamp)")
    for i, v in enumerate(values):
        if v is None:
            continue
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError(f"'{key}'[{i}] is not a number: {v!r}")
        if dtype == "Int64" and isinstance(v, float) and not v.is_integer():
            raise ValueError(f"'{key}'[{i}] is not a whole number: {v!r}")
    return pd.array([pd.NA if v is None else v for v in values], dtype=dtype)
