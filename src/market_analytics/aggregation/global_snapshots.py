"""Time-bucketed platform snapshots with stock/flow update semantics."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from market_analytics.aggregation.candles import PERIOD_SECONDS, bucket_start
from market_analytics.aggregation.decimals import format_amount
from market_analytics.config.schema import ALL_PERIODS, Period
from market_analytics.models import GlobalStatsSnapshot
from market_analytics.store.base import EntityStore

log = structlog.get_logger("aggregation.global_snapshots")


@dataclass(frozen=True)
class SnapshotValues:
    total_value_locked_raw: int
    total_market_cap_raw: int
    period_volume_raw: int
    total_markets: int
    active_markets: int


def snapshot_id(period: str, bucket: int) -> str:
    return f"global-{period}-{bucket}"


class GlobalSnapshotPublisher:
    """Upserts one :class:`GlobalStatsSnapshot` per configured period.

    Within a bucket TVL, market cap and market counts are overwritten by the
    latest values while period volume accumulates. A bucket is never closed;
    it keeps accumulating for as long as trades land in its range.
    """

    def __init__(
        self,
        store: EntityStore,
        periods: list[Period] | None = None,
        decimals: int = 18,
    ) -> None:
        self.store = store
        self.periods = list(periods) if periods is not None else list(ALL_PERIODS)
        self.decimals = decimals

    def publish(self, timestamp: int, values: SnapshotValues) -> list[GlobalStatsSnapshot]:
        return [self.publish_period(period, timestamp, values) for period in self.periods]

    def publish_period(
        self,
        period: Period,
        timestamp: int,
        values: SnapshotValues,
    ) -> GlobalStatsSnapshot:
        bucket = bucket_start(timestamp, PERIOD_SECONDS[period])
        sid = snapshot_id(period, bucket)

        snap = self.store.get(GlobalStatsSnapshot, sid)
        if snap is None:
            volume = values.period_volume_raw
        else:
            volume = snap.period_volume_raw + values.period_volume_raw

        snap = GlobalStatsSnapshot(
            id=sid,
            period=period,
            timestamp=bucket,
            total_value_locked_raw=values.total_value_locked_raw,
            total_value_locked_formatted=format_amount(values.total_value_locked_raw, self.decimals),
            total_market_cap_raw=values.total_market_cap_raw,
            total_market_cap_formatted=format_amount(values.total_market_cap_raw, self.decimals),
            period_volume_raw=volume,
            period_volume_formatted=format_amount(volume, self.decimals),
            total_markets=values.total_markets,
            active_markets=values.active_markets,
        )
        self.store.set(snap)
        return snap
