"""Configuration system."""

from market_analytics.config.loader import load_config
from market_analytics.config.schema import AggregationConfig, AppConfig

__all__ = ["AggregationConfig", "AppConfig", "load_config"]
