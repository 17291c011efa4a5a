"""Multi-timeframe futures aligner

Per timeframe: funding / open-interest bias and a directional signal.
Across timeframes: alignment score, consensus signal and confidence.
"""

from libs.shared.src.domain.services.numeric_guards import clamp, finite_or_none
from libs.shared.src.dtos.grading.external_context_dto import (
    FundingRateDTO,
    FuturesTimeframeDTO,
    OpenInterestDTO,
)
from libs.shared.src.dtos.grading.futures_alignment_dto import (
    FuturesAlignmentDTO,
    TimeframeAnalysisDTO,
)
from libs.shared.src.enums.futures_signal import FuturesBias, FuturesSignal

TIMEFRAMES = ("5m", "15m", "1h", "4h", "1d")

FUNDING_EXTREME = 0.001  # |rate| > 0.1% per period
FUNDING_MEAN_REVERSION_MIN = 0.0005
FUNDING_TREND_BAND = 0.05  # ±5% vs 24h average
OI_TREND_PCT = 2.0
OI_DIVERGENCE_PCT = 3.0


def funding_trend(funding: FundingRateDTO) -> str:
    """rising / falling / neutral (explicit label wins)"""
    label = funding.get("trend")
    if label in ("rising", "falling", "neutral"):
        return label
    current = finite_or_none(funding.get("current"))
    rate_24h = finite_or_none(funding.get("rate_24h"))
    if current is None or rate_24h is None:
        return "neutral"
    if current > rate_24h * (1 + FUNDING_TREND_BAND):
        return "rising"
    if current < rate_24h * (1 - FUNDING_TREND_BAND):
        return "falling"
    return "neutral"


def open_interest_trend(open_interest: OpenInterestDTO) -> str:
    change = finite_or_none(open_interest.get("change_24h"))
    if change is None:
        label = open_interest.get("trend")
        return label if label in ("rising", "falling") else "neutral"
    if change > OI_TREND_PCT:
        return "rising"
    if change < -OI_TREND_PCT:
        return "falling"
    return "neutral"


def mean_reversion_direction(funding: FundingRateDTO) -> FuturesSignal | None:
    """Direction of an expected funding mean reversion, None when no signal"""
    current = finite_or_none(funding.get("current"))
    if current is None:
        return None
    rate_7d = finite_or_none(funding.get("rate_7d")) or 0.0
    deviation = abs(current - rate_7d)
    strength = min(1.0, deviation / max(0.0001, abs(rate_7d)))
    if not (strength > 0.5 and abs(current) > FUNDING_MEAN_REVERSION_MIN):
        return None
    if current > FUNDING_EXTREME:
        return FuturesSignal.SHORT
    if current < -FUNDING_EXTREME:
        return FuturesSignal.LONG
    return FuturesSignal.NEUTRAL


def analyze_timeframe(timeframe: str, data: FuturesTimeframeDTO) -> TimeframeAnalysisDTO:
    """單一時間框架分析"""
    funding = data.get("funding") or {}
    open_interest = data.get("open_interest") or {}

    oi_direction = open_interest_trend(open_interest)
    f_trend = funding_trend(funding)
    if f_trend == "rising" or oi_direction == "rising":
        bias = FuturesBias.BEARISH
    elif f_trend == "falling" or oi_direction == "falling":
        bias = FuturesBias.BULLISH
    else:
        bias = FuturesBias.NEUTRAL

    signal = FuturesSignal.NEUTRAL
    current = finite_or_none(funding.get("current"))
    reversion = mean_reversion_direction(funding)
    oi_change = finite_or_none(open_interest.get("change_24h"))
    price_change = finite_or_none(data.get("price_change_24h"))
    if current is not None and current > FUNDING_EXTREME:
        signal = FuturesSignal.SHORT
    elif current is not None and current < -FUNDING_EXTREME:
        signal = FuturesSignal.LONG
    elif reversion is not None:
        signal = reversion
    elif oi_change is not None and price_change is not None:
        if price_change < 0 and oi_change > OI_DIVERGENCE_PCT:
            signal = FuturesSignal.LONG  # Accumulation
        elif price_change > 0 and oi_change < -OI_DIVERGENCE_PCT:
            signal = FuturesSignal.SHORT  # Distribution

    return {"timeframe": timeframe, "trend": bias.value, "signal": signal.value}


def alignment_score(signals: list[str]) -> float:
    total = len(signals)
    if total == 0:
        return 0.0
    longs = signals.count(FuturesSignal.LONG.value)
    shorts = signals.count(FuturesSignal.SHORT.value)
    neutrals = signals.count(FuturesSignal.NEUTRAL.value)
    if longs == total or shorts == total:
        return 100.0
    majority_pct = max(longs, shorts) / total * 100
    neutral_penalty = neutrals / total * 30
    return clamp(majority_pct - neutral_penalty, 0.0, 100.0)


def consensus_signal(signals: list[str]) -> str:
    longs = signals.count(FuturesSignal.LONG.value)
    shorts = signals.count(FuturesSignal.SHORT.value)
    if longs > shorts and longs > len(signals) / 2:
        return FuturesSignal.LONG.value
    if shorts > longs and shorts > len(signals) / 2:
        return FuturesSignal.SHORT.value
    return FuturesSignal.NEUTRAL.value


def align_timeframes(
    asset: str, timeframes: dict[str, FuturesTimeframeDTO] | None
) -> FuturesAlignmentDTO:
    """多時間框架對齊

    Args:
        asset: 標的代號
        timeframes: {timeframe: funding / OI snapshot}，只分析 5m/15m/1h/4h/1d

    Returns:
        FuturesAlignmentDTO
    """
    timeframes = timeframes or {}
    analyses = [
        analyze_timeframe(tf, timeframes[tf]) for tf in TIMEFRAMES if timeframes.get(tf)
    ]
    signals = [a["signal"] for a in analyses]

    score = alignment_score(signals)
    consensus = consensus_signal(signals)
    directional = len(signals) - signals.count(FuturesSignal.NEUTRAL.value)
    signal_ratio = directional / len(signals) if signals else 0.0
    confidence = clamp(score / 100 * 0.7 + signal_ratio * 0.3, 0.0, 1.0)

    strengths: list[str] = []
    weaknesses: list[str] = []
    if score >= 80:
        strengths.append(f"Strong timeframe alignment ({score:g}%)")
    elif score < 50:
        weaknesses.append(f"Weak timeframe alignment ({score:g}%)")
    if consensus != FuturesSignal.NEUTRAL.value:
        strengths.append(f"Consensus {consensus.upper()} across {directional} timeframes")
    else:
        weaknesses.append("No clear consensus across timeframes")

    return {
        "asset": asset,
        "timeframes": analyses,
        "alignment_score": score,
        "consensus_signal": consensus,
        "confidence": confidence,
        "strengths": strengths,
        "weaknesses": weaknesses,
    }
