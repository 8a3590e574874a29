"""Shared helpers — interval validation, ticker formatting, epoch conversion."""
from __future__ import annotations

from datetime import datetime, timezone

# Interval code → human-readable description (description is documentation only)
VALID_INTERVALS: dict[str, str] = {
    "1m": "1 minute",
    "2m": "2 minutes",
    "5m": "5 minutes",
    "15m": "15 minutes",
    "30m": "30 minutes",
    "60m": "60 minutes",
    "90m": "90 minutes",
    "1h": "1 hour",
    "1d": "1 day",
    "5d": "5 days",
    "1wk": "1 week",
    "1mo": "1 month",
    "3mo": "3 months",
}

# Market code → Yahoo Finance ticker suffix
MARKET_SUFFIXES: dict[str, str] = {
    "brazil": ".SA",
    "b3": ".SA",
    "usa": "",
    "uk": ".L",
    "london": ".L",
    "germany": ".DE",
    "japan": ".T",
    "tokyo": ".T",
}


# ---------------------------------------------------------------------------
# Timestamps
# ---------------------------------------------------------------------------

def unix_to_datetime(timestamp: int) -> datetime:
    """Convert Unix epoch seconds to a tz-aware UTC ``datetime``.

    Raises ``ValueError`` unless *timestamp* is a whole number of seconds.
    """
    if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
        raise ValueError(f"timestamp is not a number: {timestamp!r}")
    if isinstance(timestamp, float) and not timestamp.is_integer():
        raise ValueError(f"timestamp is not whole seconds: {timestamp!r}")
    return datetime.fromtimestamp(int(timestamp), tz=timezone.utc)


def datetime_to_unix(dt: datetime) -> int:
    """Convert a ``datetime`` to Unix epoch seconds.

    Naive datetimes are interpreted as UTC.  Sub-second parts are rounded
    to the nearest second.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return round(dt.timestamp())


# ---------------------------------------------------------------------------
# Tickers
# ---------------------------------------------------------------------------

def format_ticker(ticker: str, market: str | None = None) -> str:
    """Append the Yahoo Finance suffix for *market* to *ticker*.

    A ticker that already contains a ``.`` is treated as fully qualified and
    returned unchanged, as is any ticker when *market* is omitted.  The
    market code is validated even for qualified tickers.

    Examples
    --------
    >>> format_ticker("PETR4", "brazil")
    'PETR4.SA'
    >>> format_ticker("PETR4.SA", "brazil")
    'PETR4.SA'
    >>> format_ticker("AAPL", "usa")
    'AAPL'

    Raises
    ------
    ValueError
        If *market* is not a known market code.
    """
    if market is None:
        return ticker

    suffix = MARKET_SUFFIXES.get(market.lower())
    if suffix is None:
        supported = ", ".join(MARKET_SUFFIXES)
        raise ValueError(f"Unknown market: {market!r}. Supported: {supported}")

    # Already qualified (e.g. PETR4.SA) — never stack a second suffix
    if "." in ticker:
        return ticker
    return ticker + suffix


# ---------------------------------------------------------------------------
# Intervals
# ---------------------------------------------------------------------------

def validate_interval(interval: str) -> bool:
    """Return ``True`` if *interval* is recognized, raise ``ValueError`` otherwise."""
    if interval not in VALID_INTERVALS:
        valid = ", ".join(VALID_INTERVALS)
        raise ValueError(f"Invalid interval: {interval!r}. Valid intervals: {valid}")
    return True
