"""Conflict penalty calculator

Six independent all-or-nothing structural-conflict rules. Triggered
penalties are summed; only rules marked major count as mismatches.
"""

import math

from libs.shared.src.domain.services.numeric_guards import finite_or_none
from libs.shared.src.dtos.grading.asset_bundle_dto import AssetBundleDTO
from libs.shared.src.dtos.grading.conflict_penalty_dto import ConflictPenaltyDTO
from libs.shared.src.dtos.grading.scoring_config_dto import ScoringConfigDTO
from libs.grading.src.domain.services.indicator_features import (
    aroon_pair,
    bollinger_width,
    btc_correlation_7d,
    ema_structure,
    indicators_of,
    liquidation_distance,
    macd_histogram,
    sign,
    trend_of,
    volume_analysis_of,
)

AROON_DOMINANCE = 30  # |up - down| for a dominant Aroon side
CHOPPY_ADX = 20
SIDEWAYS_BB_WIDTH = 0.01
LIQ_TRAP_PCT = 2.0
LIQ_BOUNCE_PCT = 3.5
BTC_STRONG_CORRELATION = 0.6
BTC_MISMATCH_WEIGHT = 0.5
SHOCK_BB_WIDTH = 0.08


def compute_conflict_penalties(
    bundle: AssetBundleDTO | None, config: ScoringConfigDTO
) -> ConflictPenaltyDTO:
    """計算結構衝突扣分"""
    indicators = indicators_of(bundle)
    penalty = 0.0
    reasons: list[str] = []
    major_mismatches = 0

    # 1) Trend label vs EMA structure / Aroon dominance
    daily_trend = trend_of(bundle).get("daily_trend")
    structure = ema_structure(indicators)
    aroon = aroon_pair(indicators)
    aroon_up_dominant = aroon is not None and aroon[0] - aroon[1] > AROON_DOMINANCE
    aroon_down_dominant = aroon is not None and aroon[1] - aroon[0] > AROON_DOMINANCE
    if (daily_trend == "uptrend" and (structure == "down" or aroon_down_dominant)) or (
        daily_trend == "downtrend" and (structure == "up" or aroon_up_dominant)
    ):
        penalty += config["pen_trend_ema_aroon"]
        reasons.append("Trend×EMA×Aroon conflict")
        major_mismatches += 1

    # 2) Volume confirmation / delta vs momentum
    volume_analysis = volume_analysis_of(bundle)
    confirmation = volume_analysis.get("volume_confirmation")
    if confirmation and confirmation.get("is_valid") is False:
        penalty += config["pen_vol_delta"]
        reasons.append("Volume does not confirm move")
    net_delta = finite_or_none(volume_analysis.get("net_delta"))
    histogram = macd_histogram(indicators)
    if (
        net_delta is not None
        and histogram is not None
        and sign(net_delta) * sign(histogram) < 0
    ):
        penalty += config["pen_delta_contra"]
        reasons.append("Delta contra-direction to momentum")

    # 3) Regime
    adx = finite_or_none(indicators.get("adx"))
    bb_width = bollinger_width(indicators)
    if adx is not None and 0 < adx < CHOPPY_ADX:
        penalty += config["pen_regime_choppy"]
        reasons.append("Regime choppy (ADX<20)")
    elif adx is not None and adx >= CHOPPY_ADX and bb_width is not None and bb_width < SIDEWAYS_BB_WIDTH:
        penalty += config["pen_sideways_novol"]
        reasons.append("Sideways no volume")

    # 4) Liquidation distance
    distance = liquidation_distance(bundle)
    if distance is not None:
        if distance < LIQ_TRAP_PCT:
            penalty += config["pen_liq_trap"]
            reasons.append("Liquidity trap (<2%)")
            major_mismatches += 1
        elif distance < LIQ_BOUNCE_PCT:
            penalty += config["pen_liq_bounce"]
            reasons.append("High-bounce liquidity zone")

    # 5) Neutral RSI without MACD momentum
    rsi = finite_or_none(indicators.get("rsi14"))
    if rsi is not None and histogram is not None and 40 < rsi < 60 and abs(histogram) < 0.001:
        penalty += config["pen_rsi_no_momo"]
        reasons.append("RSI neutral with no MACD momentum")

    # 6) BTC context
    corr_7d = btc_correlation_7d(bundle)
    if corr_7d is not None:
        if abs(corr_7d) >= BTC_STRONG_CORRELATION and histogram is not None:
            penalty += math.floor(config["pen_btc_mismatch"] * BTC_MISMATCH_WEIGHT + 0.5)
            reasons.append("BTC correlation strong but context mismatch")
        if bb_width is not None and bb_width > SHOCK_BB_WIDTH:
            penalty += config["pen_btc_shock"]
            reasons.append("Volatility shock regime")

    return {
        "penalty": penalty,
        "reasons": reasons,
        "major_mismatches": major_mismatches,
    }
