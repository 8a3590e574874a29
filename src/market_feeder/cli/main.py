"""Typer CLI entry-point for market-feeder."""
from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

import typer
import yaml

from .. import get_data
from ..config.loader import load_config
from ..sources.base import FetchOptions, MarketFeederError
from ..sources.yahoo import YahooSource
from ..utils import MARKET_SUFFIXES, VALID_INTERVALS, format_ticker

app = typer.Typer(help="Fetch historical OHLCV candles.")


def _parse_day(value: Optional[str], flag: str) -> Optional[datetime]:
    if not value:
        return None
    try:
        d = date.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(f"expected YYYY-MM-DD, got {value!r}", param_hint=flag)
    return datetime(d.year, d.month, d.day, tzinfo=timezone.utc)


def _configure_logging(log_level: str) -> None:
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level!r}")
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command("fetch")
def fetch(
    ticker: str = typer.Argument(..., help="Ticker symbol, e.g. AAPL or PETR4.SA"),
    market: Optional[str] = typer.Option(None, "--market", help="Market code used to suffix the ticker (e.g. brazil)"),
    interval: Optional[str] = typer.Option(None, "--interval", help="Candle interval (see `intervals`)"),
    from_date: Optional[str] = typer.Option(None, "--from", help="Start date (YYYY-MM-DD)"),
    to_date: Optional[str] = typer.Option(None, "--to", help="End date (YYYY-MM-DD)"),
    config: Optional[Path] = typer.Option(None, help="Path to config YAML"),
    output: Optional[Path] = typer.Option(None, "--output", help="Write CSV here instead of printing"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level"),
) -> None:
    """Fetch candles for TICKER. Example: fetch PETR4 --market brazil --interval 1wk"""
    start = _parse_day(from_date, "--from")
    end = _parse_day(to_date, "--to")

    try:
        _configure_logging(log_level)
        cfg = load_config(config)
        symbol = format_ticker(ticker, market)
        if end is None:
            end = datetime.now(timezone.utc)
        if start is None and cfg["lookback_days"] is not None:
            start = end - timedelta(days=cfg["lookback_days"])
        options = FetchOptions(
            interval=interval or cfg["interval"],
            start_date=start,
            end_date=end,
        )
        df = get_data(YahooSource(base_url=cfg["base_url"]), symbol, options)
    except (MarketFeederError, ValueError, FileNotFoundError, yaml.YAMLError) as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=1)

    if output:
        df.to_csv(output, index=False)
        typer.echo(f"Wrote {len(df)} candles for {symbol} to {output}")
        return
    if df.empty:
        typer.echo(f"No candles for {symbol} in range.")
        return
    typer.echo(df.to_markdown(index=False))
    typer.echo(f"Total: {len(df)}")


@app.command("intervals")
def list_intervals() -> None:
    """List the recognized candle intervals."""
    for code, description in VALID_INTERVALS.items():
        typer.echo(f"- {code}: {description}")


@app.command("markets")
def list_markets() -> None:
    """List market codes and the ticker suffix each one adds."""
    for code, suffix in MARKET_SUFFIXES.items():
        typer.echo(f"- {code}: {suffix or '(none)'}")


if __name__ == "__main__":
    app()
