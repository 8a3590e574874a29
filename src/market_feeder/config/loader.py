"""YAML + env config loader for the market-feeder CLI."""
from __future__ import annotations

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv

from ..sources.base import DEFAULT_INTERVAL
from ..sources.yahoo import DEFAULT_BASE_URL

load_dotenv()

DEFAULTS: dict = {
    "base_url": DEFAULT_BASE_URL,
    "interval": DEFAULT_INTERVAL,
    "lookback_days": None,
}

# Config key → environment variable that overrides it
ENV_OVERRIDES = {
    "base_url": "MARKET_FEEDER_BASE_URL",
    "interval": "MARKET_FEEDER_INTERVAL",
}


def load_config(path: Path | None = None, default_filename: str = "market_feeder.yml") -> dict:
    """Load YAML config and return it merged over the defaults.

    Precedence: CLI > env vars > YAML > defaults.  CLI flags are applied by
    the caller; this loader handles the last three layers.
    """
    cfg = dict(DEFAULTS)
    if path:
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"Config file not found: {p}")
    else:
        # <project root>/config/market_feeder.yml
        p = Path(__file__).resolve().parents[3] / "config" / default_filename
    if p.exists():
        with p.open("r") as f:
            cfg.update(yaml.safe_load(f) or {})

    for key, env_var in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            cfg[key] = value
    if cfg["lookback_days"] is not None:
        cfg["lookback_days"] = int(cfg["lookback_days"])
    return cfg
