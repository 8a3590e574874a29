"""Unit tests for ticker formatting, interval validation and epoch helpers.

No network — pure functions only.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from market_feeder.utils import (
    MARKET_SUFFIXES,
    VALID_INTERVALS,
    datetime_to_unix,
    format_ticker,
    unix_to_datetime,
    validate_interval,
)


# ── timestamps ───────────────────────────────────────────────────────


class TestTimestamps:
    def test_known_epoch(self):
        assert unix_to_datetime(1704067200) == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert unix_to_datetime(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)

    def test_result_is_utc_aware(self):
        assert unix_to_datetime(1704067200).tzinfo == timezone.utc

    @pytest.mark.parametrize("ts", [0, 1, 59, 1704067200, 1704067201, 2**31, 4102444800])
    def test_round_trip_is_exact(self, ts):
        assert datetime_to_unix(unix_to_datetime(ts)) == ts

    def test_whole_float_seconds_accepted(self):
        assert unix_to_datetime(1704067200.0) == datetime(2024, 1, 1, tzinfo=timezone.utc)

    @pytest.mark.parametrize("ts", [1704067200.9, 0.5, True, "1704067200", None])
    def test_rejects_non_integral_or_non_numeric(self, ts):
        with pytest.raises(ValueError):
            unix_to_datetime(ts)

    def test_naive_datetime_is_utc(self):
        assert datetime_to_unix(datetime(2024, 1, 1)) == 1704067200

    def test_aware_non_utc_datetime(self):
        from datetime import timedelta

        brt = timezone(timedelta(hours=-3))
        assert datetime_to_unix(datetime(2023, 12, 31, 21, 0, tzinfo=brt)) == 1704067200


# ── format_ticker ────────────────────────────────────────────────────


class TestFormatTicker:
    def test_brazil_suffix(self):
        assert format_ticker("PETR4", "brazil") == "PETR4.SA"
        assert format_ticker("VALE3", "b3") == "VALE3.SA"

    def test_already_qualified_not_duplicated(self):
        assert format_ticker("PETR4.SA", "brazil") == "PETR4.SA"
        assert format_ticker("BRK.B", "usa") == "BRK.B"

    def test_usa_has_no_suffix(self):
        assert format_ticker("AAPL", "usa") == "AAPL"

    @pytest.mark.parametrize(
        "market,expected",
        [
            ("uk", "HSBA.L"),
            ("london", "HSBA.L"),
            ("germany", "HSBA.DE"),
            ("japan", "HSBA.T"),
            ("tokyo", "HSBA.T"),
        ],
    )
    def test_other_markets(self, market, expected):
        assert format_ticker("HSBA", market) == expected

    def test_market_code_case_insensitive(self):
        assert format_ticker("PETR4", "BRAZIL") == "PETR4.SA"

    @pytest.mark.parametrize("ticker", ["AAPL", "PETR4.SA", ""])
    def test_unknown_market_fails(self, ticker):
        with pytest.raises(ValueError, match="Unknown market"):
            format_ticker(ticker, "mars")

    def test_unknown_market_lists_supported(self):
        with pytest.raises(ValueError) as exc_info:
            format_ticker("AAPL", "mars")
        for code in MARKET_SUFFIXES:
            assert code in str(exc_info.value)

    def test_single_argument_is_identity(self):
        assert format_ticker("AAPL") == "AAPL"
        assert format_ticker("PETR4.SA") == "PETR4.SA"


# ── validate_interval ────────────────────────────────────────────────


class TestValidateInterval:
    def test_recognized_set_is_exact(self):
        assert set(VALID_INTERVALS) == {
            "1m", "2m", "5m", "15m", "30m", "60m", "90m",
            "1h", "1d", "5d", "1wk", "1mo", "3mo",
        }

    @pytest.mark.parametrize("interval", list(VALID_INTERVALS))
    def test_accepts_every_recognized_interval(self, interval):
        assert validate_interval(interval) is True

    @pytest.mark.parametrize("interval", ["2d", "1D", "1y", "", "4h", "1w"])
    def test_rejects_everything_else(self, interval):
        with pytest.raises(ValueError, match="Invalid interval"):
            validate_interval(interval)
