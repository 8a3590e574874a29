"""Yahoo Finance source — chart API v8 over HTTP.

Endpoint: ``{base_url}/v8/finance/chart/{ticker}`` (GET, JSON response).
The API is unofficial and may change without notice.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.parse import quote, urlencode

import httpx
import pandas as pd

from ..normalize import SOURCE_NAME, parse_chart_response
from ..utils import datetime_to_unix, validate_interval
from .base import APIError, FetchOptions, TickerNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://query1.finance.yahoo.com"

CHART_PATH = "/v8/finance/chart/{ticker}"

REQUEST_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
    "Accept": "application/json",
}

# 10s to connect, 30s for everything else
REQUEST_TIMEOUT = httpx.Timeout(30.0, connect=10.0)


@dataclass(frozen=True)
class YahooSource:
    """Yahoo Finance data source (stocks, ETFs, indices worldwide).

    Non-US listings need an exchange suffix, e.g. ``PETR4.SA`` for B3;
    see :func:`market_feeder.utils.format_ticker`.

    ``base_url`` may point at a proxy exposing the same chart API.
    """

    base_url: str = DEFAULT_BASE_URL
    name: str = SOURCE_NAME

    # ------------------------------------------------------------------
    # FinancialSource
    # ------------------------------------------------------------------

    def get_data(self, ticker: str, options: FetchOptions | None = None) -> pd.DataFrame:
        """Fetch OHLCV candles for *ticker*.

        Returns
        -------
        pd.DataFrame
            Columns: timestamp, open, high, low, close, volume, adj_close.
            Empty (but fully typed) when the range holds no candles.
        """
        options = options or FetchOptions()
        validate_interval(options.interval)
        start, end = options.resolve_window()
        period1 = datetime_to_unix(start)
        period2 = datetime_to_unix(end)

        logger.info(
            "%s fetch — ticker=%s interval=%s window=%s→%s",
            self.name, ticker, options.interval, start.isoformat(), end.isoformat(),
        )
        url = self.build_url(ticker, options.interval, period1, period2)
        body = self.fetch(url, ticker)
        df = parse_chart_response(body, ticker, self.name)

        logger.info("%s — %s → %d candles", self.name, ticker, len(df))
        return df

    # ------------------------------------------------------------------
    # Request builder
    # ------------------------------------------------------------------

    def build_url(self, ticker: str, interval: str, period1: int, period2: int) -> str:
        """Build the chart URL.  *interval* must already be validated."""
        path = CHART_PATH.format(ticker=quote(ticker, safe=""))
        params = urlencode(
            {
                "period1": period1,
                "period2": period2,
                "interval": interval,
                "includeAdjustedClose": "true",
            }
        )
        return f"{self.base_url.rstrip('/')}{path}?{params}"

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def fetch(self, url: str, ticker: str) -> str:
        """GET *url* once and return the body text.

        No retries.  Status codes map to :class:`TickerNotFoundError` (404)
        or :class:`APIError`; timeouts map to ``APIError`` with status 0.
        """
        logger.debug("GET %s", url)
        try:
            with httpx.Client(
                headers=REQUEST_HEADERS,
                timeout=REQUEST_TIMEOUT,
                follow_redirects=True,
            ) as client:
                resp = client.get(url)
        except httpx.TimeoutException as exc:
            logger.warning("%s timeout for %s: %s", self.name, ticker, exc)
            raise APIError(0, "connection timeout", self.name) from exc

        if resp.is_success:
            return resp.text

        status = resp.status_code
        logger.warning("%s returned HTTP %d for %s", self.name, status, ticker)
        if status == 404:
            raise TickerNotFoundError(ticker, self.name)
        if status == 429:
            raise APIError(429, "rate limit exceeded, wait before retrying", self.name)
        if status >= 500:
            raise APIError(status, "server error, try again later", self.name)
        raise APIError(status, "request failed", self.name)
