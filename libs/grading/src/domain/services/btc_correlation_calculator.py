"""BTC correlation calculator

Rolling Pearson correlation of simple hourly returns between an asset
and BTC, and the pseudo-beta derived from it.
"""

import time

import numpy as np
from numpy.typing import NDArray

from libs.shared.src.constants.correlation_settings import (
    CORRELATION_PERIOD_24H,
    CORRELATION_PERIOD_30D,
    CORRELATION_PERIOD_7D,
    HOUR_MS,
    IMPACT_MAX,
    IMPACT_MIN,
    IMPACT_SCALE,
    MIN_ALIGNED_SAMPLES,
    MODERATE_CORRELATION,
    SIGNIFICANT_BTC_MOVE_PCT,
    STRONG_CORRELATION,
)
from libs.shared.src.domain.services.numeric_guards import finite_or_none
from libs.shared.src.dtos.grading.candle_dto import CandleDTO
from libs.shared.src.dtos.grading.correlation_record_dto import CorrelationRecordDTO
from libs.shared.src.enums.correlation_strength import CorrelationStrength


def neutral_record(now: float | None = None) -> CorrelationRecordDTO:
    """中性相關性 (資料不足或抓取失敗時使用)"""
    return {
        "correlation_24h": 0.0,
        "correlation_7d": 0.0,
        "correlation_30d": 0.0,
        "strength": CorrelationStrength.WEAK.value,
        "impact_multiplier": 1.0,
        "last_update": time.time() if now is None else now,
    }


def align_hourly_closes(
    asset_history: list[CandleDTO], btc_history: list[CandleDTO]
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Pair asset and BTC closes on hour-rounded timestamps

    Points without a positive close on both sides are dropped.
    Asset order is preserved.
    """
    btc_by_hour: dict[int, float] = {}
    for point in btc_history:
        stamp = finite_or_none(point.get("time"))
        close = finite_or_none(point.get("close"))
        if stamp is None or close is None:
            continue
        btc_by_hour[int(stamp // HOUR_MS) * HOUR_MS] = close

    asset_closes: list[float] = []
    btc_closes: list[float] = []
    for point in asset_history:
        stamp = finite_or_none(point.get("time"))
        close = finite_or_none(point.get("close"))
        if stamp is None or close is None or close <= 0:
            continue
        btc_close = btc_by_hour.get(int(stamp // HOUR_MS) * HOUR_MS)
        if btc_close is not None and btc_close > 0:
            asset_closes.append(close)
            btc_closes.append(btc_close)

    return np.asarray(asset_closes, dtype=float), np.asarray(btc_closes, dtype=float)


def rolling_correlation(
    asset_prices: NDArray[np.float64], btc_prices: NDArray[np.float64], period: int
) -> float:
    """Population Pearson correlation of simple returns over the last `period` prices

    Returns 0 when there are fewer than `period` prices, fewer than two
    returns, or a degenerate denominator. Result is clamped to [-1, 1].
    """
    if len(asset_prices) < period or len(btc_prices) < period:
        return 0.0
    asset_slice = asset_prices[-period:]
    btc_slice = btc_prices[-period:]

    valid = (asset_slice[:-1] > 0) & (btc_slice[:-1] > 0)
    asset_returns = (np.diff(asset_slice) / np.where(valid, asset_slice[:-1], 1.0))[valid]
    btc_returns = (np.diff(btc_slice) / np.where(valid, btc_slice[:-1], 1.0))[valid]
    if len(asset_returns) < 2:
        return 0.0

    asset_diff = asset_returns - asset_returns.mean()
    btc_diff = btc_returns - btc_returns.mean()
    covariance = float(np.mean(asset_diff * btc_diff))
    denominator = float(np.sqrt(np.mean(asset_diff**2) * np.mean(btc_diff**2)))
    if denominator == 0 or not np.isfinite(denominator):
        return 0.0
    correlation = covariance / denominator
    if not np.isfinite(correlation):
        return 0.0
    return float(np.clip(correlation, -1.0, 1.0))


def correlation_strength(c24h: float, c7d: float, c30d: float) -> CorrelationStrength:
    average = abs((c24h + c7d + c30d) / 3)
    if average > STRONG_CORRELATION:
        return CorrelationStrength.STRONG
    if average > MODERATE_CORRELATION:
        return CorrelationStrength.MODERATE
    return CorrelationStrength.WEAK


def impact_multiplier(correlation_7d: float) -> float:
    impact = abs(correlation_7d) * IMPACT_SCALE
    if not np.isfinite(impact):
        return 1.0
    return float(np.clip(impact, IMPACT_MIN, IMPACT_MAX))


def build_correlation_record(
    asset_history: list[CandleDTO],
    btc_history: list[CandleDTO],
    now: float | None = None,
) -> CorrelationRecordDTO:
    """計算完整相關性紀錄

    配對樣本少於 24 筆時返回中性紀錄
    """
    asset_prices, btc_prices = align_hourly_closes(asset_history, btc_history)
    if len(asset_prices) < MIN_ALIGNED_SAMPLES:
        return neutral_record(now)

    c24h = rolling_correlation(asset_prices, btc_prices, CORRELATION_PERIOD_24H)
    c7d = rolling_correlation(asset_prices, btc_prices, CORRELATION_PERIOD_7D)
    c30d = rolling_correlation(asset_prices, btc_prices, CORRELATION_PERIOD_30D)

    return {
        "correlation_24h": c24h,
        "correlation_7d": c7d,
        "correlation_30d": c30d,
        "strength": correlation_strength(c24h, c7d, c30d).value,
        "impact_multiplier": impact_multiplier(c7d),
        "last_update": time.time() if now is None else now,
    }


def predict_alt_impact(record: CorrelationRecordDTO, btc_move_pct: float) -> float:
    """Expected asset move (%) for a BTC move (%)"""
    return btc_move_pct * record["correlation_7d"] * record["impact_multiplier"]


def is_btc_move_significant(
    record: CorrelationRecordDTO,
    btc_move_pct: float,
    threshold: float = SIGNIFICANT_BTC_MOVE_PCT,
) -> bool:
    """BTC 波動是否足以影響此標的"""
    if abs(btc_move_pct) < threshold:
        return False
    if record["strength"] in (
        CorrelationStrength.STRONG.value,
        CorrelationStrength.MODERATE.value,
    ):
        return True
    return abs(predict_alt_impact(record, btc_move_pct)) > 1
