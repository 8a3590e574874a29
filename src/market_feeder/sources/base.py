"""Source interface and error taxonomy for market data retrieval."""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime, timezone
from typing import Protocol

import pandas as pd

DEFAULT_INTERVAL = "1d"

# Max characters of a raw payload kept on DataParsingError
RAW_EXCERPT_CHARS = 500


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class MarketFeederError(Exception):
    """Base exception for all market-feeder failures."""


class TickerNotFoundError(MarketFeederError):
    """The requested ticker has no matching series on the source."""

    def __init__(self, ticker: str, source: str):
        self.ticker = ticker
        self.source = source
        super().__init__(f"'{ticker}' not found on {source}")


class APIError(MarketFeederError):
    """The source was reachable but signalled a failure.

    ``status_code`` is the HTTP status, or ``0`` when no status is available
    (timeouts, errors embedded in a successful response).
    """

    def __init__(self, status_code: int, message: str, source: str):
        self.status_code = status_code
        self.message = message
        self.source = source
        super().__init__(f"{source}: HTTP {status_code} - {message}")


class DataParsingError(MarketFeederError):
    """The payload was received but could not be turned into candles."""

    def __init__(self, message: str, raw_data: str = ""):
        self.message = message
        self.raw_data = raw_data[:RAW_EXCERPT_CHARS]
        super().__init__(message)

    def __str__(self) -> str:
        if not self.raw_data:
            return self.message
        return f"{self.message}\nRaw data preview: {self.raw_data[:200]}..."


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

def _as_utc(value: date | datetime) -> datetime:
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class FetchOptions:
    """Request options shared by every source.

    ``start_date`` / ``end_date`` left as ``None`` resolve at call time to
    one year ago and now (UTC).  Naive values are taken as UTC.
    """

    interval: str = DEFAULT_INTERVAL
    start_date: date | datetime | None = None
    end_date: date | datetime | None = None

    def with_overrides(self, **overrides) -> "FetchOptions":
        """Return a copy with every non-``None`` override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self

    def resolve_window(self, now: datetime | None = None) -> tuple[datetime, datetime]:
        """Return the ``(start, end)`` window as tz-aware UTC datetimes."""
        end = _as_utc(self.end_date) if self.end_date else (now or datetime.now(timezone.utc))
        if self.start_date:
            start = _as_utc(self.start_date)
        else:
            start = _one_year_before(end)
        return start, end


def _one_year_before(dt: datetime) -> datetime:
    """Same instant one calendar year earlier; Feb 29 maps to Feb 28."""
    try:
        return dt.replace(year=dt.year - 1)
    except ValueError:
        return dt.replace(year=dt.year - 1, day=28)


# ---------------------------------------------------------------------------
# Source contract
# ---------------------------------------------------------------------------

class FinancialSource(Protocol):
    """Contract for financial data sources.

    ``get_data`` MUST return a DataFrame with columns:
        timestamp, open, high, low, close, volume, adj_close
    """

    name: str

    def get_data(self, ticker: str, options: FetchOptions | None = None) -> pd.DataFrame:
        """Fetch historical OHLCV candles for *ticker*.

        Parameters
        ----------
        ticker : str
            Source-specific symbol (e.g. ``AAPL``, ``PETR4.SA``).
        options : FetchOptions | None
            Interval and date window; defaults to daily candles over the
            last year.

        Returns
        -------
        pd.DataFrame
            Columns: timestamp, open, high, low, close, volume, adj_close.

        Raises
        ------
        ValueError
            If the options are invalid (checked before any network call).
        TickerNotFoundError
            If the source has no series for *ticker*.
        APIError
            On non-success responses, timeouts or source-side errors.
        DataParsingError
            If the response cannot be interpreted.
        """
        ...
