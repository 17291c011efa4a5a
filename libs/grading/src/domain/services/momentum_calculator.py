"""Short-horizon momentum and tie-break features

m5 / m15 / m60 percent changes, volume ratio and support/resistance
distance used by the ranker.
"""

from libs.shared.src.domain.services.numeric_guards import finite_or_none
from libs.shared.src.dtos.grading.asset_bundle_dto import AssetBundleDTO
from libs.shared.src.dtos.grading.candle_dto import CandleDTO
from libs.shared.src.dtos.grading.indicator_snapshot_dto import IndicatorSnapshotDTO
from libs.grading.src.domain.services.indicator_features import indicators_of

MINUTE_MS = 60_000
VOLUME_LOOKBACK = 20


def pct_change_over_minutes(history: list[CandleDTO], minutes: int) -> float | None:
    """Percent change from the candle at or before (last - minutes) to the last candle

    Falls back to the first candle when no candle is old enough.
    """
    if len(history) < 2:
        return None
    last = history[-1]
    last_time = finite_or_none(last.get("time"))
    last_close = finite_or_none(last.get("close"))
    if not last_time or last_close is None:
        return None

    target = last_time - minutes * MINUTE_MS
    base = history[0]
    for candle in reversed(history[:-1]):
        stamp = finite_or_none(candle.get("time"))
        if stamp and stamp <= target:
            base = candle
            break

    base_close = finite_or_none(base.get("close"))
    if base_close is None or base_close <= 0:
        return None
    return (last_close - base_close) / base_close * 100


def momentum_triplet(
    bundle: AssetBundleDTO | None,
) -> tuple[float | None, float | None, float | None]:
    """(m5, m15, m60) in percent; explicit momentum block wins over history"""
    explicit = (bundle or {}).get("momentum") or {}
    history = (bundle or {}).get("history") or []
    values = []
    for key, minutes in (("m5", 5), ("m15", 15), ("m60", 60)):
        value = finite_or_none(explicit.get(key))
        if value is None:
            value = pct_change_over_minutes(history, minutes)
        values.append(value)
    return values[0], values[1], values[2]


def volume_ratio(bundle: AssetBundleDTO | None) -> float | None:
    """Latest volume / mean of the previous (up to 20) positive candle volumes"""
    history = (bundle or {}).get("history") or []
    if len(history) < 2:
        return None
    current = finite_or_none(indicators_of(bundle).get("volume"))
    if current is None:
        current = finite_or_none(history[-1].get("volume"))
    if current is None:
        return None

    previous = [
        volume
        for volume in (finite_or_none(c.get("volume")) for c in history[-1 - VOLUME_LOOKBACK : -1])
        if volume is not None and volume > 0
    ]
    if not previous:
        return None
    average = sum(previous) / len(previous)
    return current / average if average > 0 else None


def support_resistance_distance_pct(indicators: IndicatorSnapshotDTO) -> float | None:
    """Minimum |%| distance from price to any support / resistance level"""
    price = finite_or_none(indicators.get("price"))
    if price is None or price <= 0:
        return None
    levels = list(indicators.get("support_levels") or []) + list(
        indicators.get("resistance_levels") or []
    )
    distances = [
        abs(price - level) / price * 100
        for level in map(finite_or_none, levels)
        if level is not None and level > 0
    ]
    return min(distances) if distances else None
