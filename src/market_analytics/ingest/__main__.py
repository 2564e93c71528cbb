"""Allow replaying a trade log as: python -m market_analytics.ingest trades.jsonl [--config path]."""

import argparse

from market_analytics.ingest.runner import main

parser = argparse.ArgumentParser(description="Replay an ordered trade log into the analytics store")
parser.add_argument("trades", help="Path to a JSON-lines trade log, oldest first")
parser.add_argument("--config", default=None, help="Path to config.yaml")
parser.add_argument("--markets", default=None, help="JSON file of tokens/markets to seed first")
parser.add_argument(
    "--reset-schema",
    action="store_true",
    help="Drop and recreate analytics tables before replaying",
)
parser.add_argument(
    "--resume",
    action="store_true",
    help="Keep existing derived records; the log holds only trades newer than the last run",
)
args = parser.parse_args()
main(
    args.trades,
    config_path=args.config,
    markets_path=args.markets,
    reset_schema=args.reset_schema,
    resume=args.resume,
)
