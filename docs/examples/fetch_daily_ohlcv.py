#!/usr/bin/env python3
"""Fetch daily OHLCV candles for one ticker from Yahoo Finance.

Writes the candle table as CSV under ``docs/examples/out/`` and prints a
short summary.

Usage:
    python docs/examples/fetch_daily_ohlcv.py
    python docs/examples/fetch_daily_ohlcv.py --symbol PETR4 --market brazil --interval 1wk
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from market_feeder import MarketFeederError, YahooSource, format_ticker, get_data

logging.basicConfig(level=logging.INFO)

DEFAULT_OUT = str(Path(__file__).resolve().parent / "out")

parser = argparse.ArgumentParser(description="Fetch OHLCV candles from Yahoo Finance")
parser.add_argument("--symbol", default="AAPL", help="Ticker symbol (default: AAPL)")
parser.add_argument("--market", default=None, help="Market code, e.g. brazil, uk, japan")
parser.add_argument("--interval", default="1d", help="Candle interval (default: 1d)")
parser.add_argument("--out", default=DEFAULT_OUT, help="Output directory")


def main() -> int:
    args = parser.parse_args()

    try:
        ticker = format_ticker(args.symbol, args.market)
        df = get_data(YahooSource(), ticker, interval=args.interval)
    except (MarketFeederError, ValueError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / f"{ticker.replace('.', '_')}_{args.interval}.csv"
    df.to_csv(path, index=False)

    print(f"{ticker}: {len(df)} candles → {path}")
    if not df.empty:
        print(f"  first: {df['timestamp'].iloc[0]}  last: {df['timestamp'].iloc[-1]}")
        print(f"  null closes: {int(df['close'].isna().sum())}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
