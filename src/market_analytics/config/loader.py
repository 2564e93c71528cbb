"""Config loader: YAML file first, then ANALYTICS_* environment overrides.

Override values arrive as strings; pydantic coerces them when the merged
document is validated, so ``ANALYTICS_WINDOW_SECONDS=3600`` becomes an int
and ``ANALYTICS_INCREMENTAL_GLOBAL_VOLUME=true`` a bool. List settings take
a comma-separated value.
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml

from market_analytics.config.schema import AppConfig

# env var -> (section, key)
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "ANALYTICS_DATABASE_URL": ("database", "url"),
    "ANALYTICS_LOG_LEVEL": ("logging", "level"),
    "ANALYTICS_LOG_FORMAT": ("logging", "format"),
    "ANALYTICS_WINDOW_SECONDS": ("aggregation", "window_seconds"),
    "ANALYTICS_INCREMENTAL_GLOBAL_VOLUME": ("aggregation", "incremental_global_volume"),
    "ANALYTICS_PRICE_HISTORY_SIZE": ("aggregation", "price_history_size"),
    "ANALYTICS_MARKET_SNAPSHOT_SECONDS": ("aggregation", "market_snapshot_seconds"),
    "ANALYTICS_CANDLE_PERIODS": ("aggregation", "candle_periods"),
    "ANALYTICS_SNAPSHOT_PERIODS": ("aggregation", "snapshot_periods"),
}

_LIST_KEYS = {"candle_periods", "snapshot_periods"}


def _read_yaml(path: str | Path | None) -> dict:
    if path is None:
        return {}
    p = Path(path)
    if not p.exists():
        return {}
    with open(p) as f:
        return yaml.safe_load(f) or {}


def apply_env_overrides(data: dict, environ: dict[str, str] | None = None) -> dict:
    """Merge every set ANALYTICS_* variable into *data* in place."""
    environ = os.environ if environ is None else environ
    for var, (section, key) in ENV_OVERRIDES.items():
        value = environ.get(var)
        if not value:
            continue
        if key in _LIST_KEYS:
            value = [part.strip() for part in value.split(",") if part.strip()]
        data.setdefault(section, {})[key] = value
    return data


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate the indexer config.

    A missing file (or no path) yields the defaults, still subject to the
    environment overrides in :data:`ENV_OVERRIDES`. Bad override values
    raise ``pydantic.ValidationError`` like bad YAML values do.
    """
    return AppConfig.model_validate(apply_env_overrides(_read_yaml(path)))
