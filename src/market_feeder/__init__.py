"""market-feeder — historical OHLCV candles from financial data sources.

Quick start::

    from datetime import datetime
    from market_feeder import YahooSource, format_ticker, get_data

    df = get_data(YahooSource(), "AAPL")
    df = get_data(YahooSource(), format_ticker("PETR4", "brazil"), interval="1h")
    df = get_data(
        YahooSource(),
        "VALE3.SA",
        start_date=datetime(2023, 1, 1),
        end_date=datetime(2024, 1, 1),
    )
"""
from __future__ import annotations

from datetime import date, datetime

import pandas as pd

from .normalize import CANDLE_COLUMNS, empty_candle_frame, parse_chart_response
from .sources.base import (
    APIError,
    DataParsingError,
    FetchOptions,
    FinancialSource,
    MarketFeederError,
    TickerNotFoundError,
)
from .sources.yahoo import YahooSource
from .utils import (
    MARKET_SUFFIXES,
    VALID_INTERVALS,
    datetime_to_unix,
    format_ticker,
    unix_to_datetime,
    validate_interval,
)

__version__ = "0.1.0"

__all__ = [
    "APIError",
    "CANDLE_COLUMNS",
    "DataParsingError",
    "FetchOptions",
    "FinancialSource",
    "MARKET_SUFFIXES",
    "MarketFeederError",
    "TickerNotFoundError",
    "VALID_INTERVALS",
    "YahooSource",
    "datetime_to_unix",
    "empty_candle_frame",
    "format_ticker",
    "get_data",
    "parse_chart_response",
    "unix_to_datetime",
    "validate_interval",
]


def get_data(
    source: FinancialSource,
    ticker: str,
    options: FetchOptions | None = None,
    *,
    interval: str | None = None,
    start_date: date | datetime | None = None,
    end_date: date | datetime | None = None,
) -> pd.DataFrame:
    """Fetch OHLCV candles for *ticker* from *source*.

    Keyword arguments override the matching fields of *options*; with
    neither, daily candles for the last year are returned.
    """
    opts = (options or FetchOptions()).with_overrides(
        interval=interval, start_date=start_date, end_date=end_date,
    )
    return source.get_data(ticker, opts)
