"""Indicator feature extraction

Small readers shared by the scorer, the conflict calculator, the ledger
and the ranker. Each returns None when the field is missing or invalid.
"""

from typing import Literal

from libs.shared.src.domain.services.numeric_guards import finite_or_none
from libs.shared.src.dtos.grading.asset_bundle_dto import AssetBundleDTO
from libs.shared.src.dtos.grading.external_context_dto import (
    ExternalContextDTO,
    FuturesContextDTO,
    VolumeAnalysisDTO,
)
from libs.shared.src.dtos.grading.indicator_snapshot_dto import IndicatorSnapshotDTO
from libs.shared.src.dtos.grading.trend_alignment_dto import TrendAlignmentDTO

EmaStructure = Literal["up", "down", "mixed"]


def indicators_of(bundle: AssetBundleDTO | None) -> IndicatorSnapshotDTO:
    return (bundle or {}).get("indicators") or {}


def trend_of(bundle: AssetBundleDTO | None) -> TrendAlignmentDTO:
    return (bundle or {}).get("trend_alignment") or {}


def external_of(bundle: AssetBundleDTO | None) -> ExternalContextDTO:
    return (bundle or {}).get("external") or {}


def futures_of(bundle: AssetBundleDTO | None) -> FuturesContextDTO:
    return external_of(bundle).get("futures") or {}


def volume_analysis_of(bundle: AssetBundleDTO | None) -> VolumeAnalysisDTO:
    return external_of(bundle).get("volume_analysis") or {}


def macd_histogram(indicators: IndicatorSnapshotDTO) -> float | None:
    return finite_or_none((indicators.get("macd") or {}).get("histogram"))


def bollinger_width(indicators: IndicatorSnapshotDTO) -> float | None:
    """(upper - lower) / middle"""
    bands = indicators.get("bollinger_bands") or {}
    upper = finite_or_none(bands.get("upper"))
    lower = finite_or_none(bands.get("lower"))
    middle = finite_or_none(bands.get("middle"))
    if upper is None or lower is None or middle is None or middle <= 0:
        return None
    return (upper - lower) / middle


def ema_structure(indicators: IndicatorSnapshotDTO) -> EmaStructure | None:
    """Price / EMA20 / EMA50 ordering"""
    price = finite_or_none(indicators.get("price"))
    ema20 = finite_or_none(indicators.get("ema20"))
    ema50 = finite_or_none(indicators.get("ema50"))
    if price is None or ema20 is None or ema50 is None or price <= 0:
        return None
    if price > ema20 > ema50:
        return "up"
    if price < ema20 < ema50:
        return "down"
    return "mixed"


def aroon_pair(indicators: IndicatorSnapshotDTO) -> tuple[float, float] | None:
    aroon = indicators.get("aroon") or {}
    up = finite_or_none(aroon.get("up"))
    down = finite_or_none(aroon.get("down"))
    if up is None or down is None:
        return None
    return up, down


def funding_rate(bundle: AssetBundleDTO | None) -> float | None:
    return finite_or_none((futures_of(bundle).get("funding_rate") or {}).get("current"))


def liquidation_distance(bundle: AssetBundleDTO | None) -> float | None:
    return finite_or_none(
        (futures_of(bundle).get("liquidation") or {}).get("liquidation_distance")
    )


def premium_pct(bundle: AssetBundleDTO | None) -> float | None:
    return finite_or_none((futures_of(bundle).get("premium_index") or {}).get("premium_pct"))


def btc_correlation_7d(bundle: AssetBundleDTO | None) -> float | None:
    return finite_or_none((futures_of(bundle).get("btc_correlation") or {}).get("correlation_7d"))


def sign(value: float) -> int:
    return (value > 0) - (value < 0)
