"""Shared fixtures for market-feeder tests."""

from __future__ import annotations

import json

import httpx
import pytest

BASE_TS = 1704067200  # 2024-01-01T00:00:00Z
DAY = 86_400


def make_chart_payload(
    n: int = 3,
    *,
    start_ts: int = BASE_TS,
    base_close: float = 100.0,
    adjclose: bool = True,
    overrides: dict | None = None,
) -> dict:
    """Return a deterministic chart API payload with *n* daily candles.

    close values: base_close, base_close+1, …
    open = close - 0.5, high = close + 2, low = close - 2,
    adjclose = close - 1, volume = 1_000_000 * (i + 1)

    *overrides* replaces whole quote arrays, e.g. ``{"open": [None, 1.0]}``.
    """
    closes = [base_close + i for i in range(n)]
    quote = {
        "open": [c - 0.5 for c in closes],
        "high": [c + 2.0 for c in closes],
        "low": [c - 2.0 for c in closes],
        "close": closes,
        "volume": [1_000_000 * (i + 1) for i in range(n)],
    }
    quote.update(overrides or {})
    indicators: dict = {"quote": [quote]}
    if adjclose:
        indicators["adjclose"] = [{"adjclose": [c - 1.0 for c in closes]}]
    return {
        "chart": {
            "result": [
                {
                    "meta": {"symbol": "AAPL", "currency": "USD"},
                    "timestamp": [start_ts + DAY * i for i in range(n)],
                    "indicators": indicators,
                }
            ],
            "error": None,
        }
    }


def make_chart_body(n: int = 3, **kwargs) -> str:
    return json.dumps(make_chart_payload(n, **kwargs))


class RecordedCalls(list):
    """Requested URLs, plus the client settings seen on each request."""

    def __init__(self):
        super().__init__()
        self.clients: list[dict] = []


@pytest.fixture()
def fake_http(monkeypatch):
    """Patch ``httpx.Client.get`` to return canned responses.

    Usage: ``calls = fake_http(status=200, text="{...}")`` or
    ``fake_http(exc=httpx.ReadTimeout("..."))``.  Requested URLs are
    appended to the returned list; ``calls.clients`` holds the headers and
    timeout of the client that issued each request.
    """

    def install(status: int = 200, text: str = "", exc: Exception | None = None) -> RecordedCalls:
        calls = RecordedCalls()

        def fake_get(self, url, *args, **kwargs):
            calls.append(str(url))
            calls.clients.append(
                {
                    "user_agent": self.headers.get("User-Agent"),
                    "accept": self.headers.get("Accept"),
                    "timeout": self.timeout,
                }
            )
            if exc is not None:
                raise exc
            return httpx.Response(status, text=text, request=httpx.Request("GET", url))

        monkeypatch.setattr(httpx.Client, "get", fake_get)
        return calls

    return install
