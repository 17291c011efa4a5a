"""Reward adjuster

Small coherence / safety rewards, capped at REWARD_CAP.
"""

from libs.shared.src.constants.quality_thresholds import REWARD_CAP
from libs.shared.src.domain.services.numeric_guards import finite_or_none
from libs.shared.src.dtos.grading.adjustment_result_dto import AdjustmentResultDTO
from libs.shared.src.dtos.grading.asset_bundle_dto import AssetBundleDTO
from libs.grading.src.domain.services.indicator_features import (
    ema_structure,
    funding_rate,
    indicators_of,
    liquidation_distance,
    macd_histogram,
    sign,
    trend_of,
    volume_analysis_of,
)

_STRUCTURE_FOR_TREND = {"uptrend": "up", "downtrend": "down"}


class RewardAdjuster:
    """協同與安全加分 (ScoreAdjusterPort)"""

    name = "reward"
    counts_as_indicator_always = False

    def adjust(self, asset: str, bundle: AssetBundleDTO) -> AdjustmentResultDTO:
        reward = 0.0
        notes: list[str] = []
        indicators = indicators_of(bundle)

        trend = trend_of(bundle)
        strength = finite_or_none(trend.get("strength")) or 0.0
        expected = _STRUCTURE_FOR_TREND.get(trend.get("daily_trend") or "")
        if trend.get("aligned") and strength >= 0.7 and expected is not None:
            if ema_structure(indicators) == expected:
                reward += 3
                notes.append("Trend coherent with EMA structure")

        volume_analysis = volume_analysis_of(bundle)
        confirmation = volume_analysis.get("volume_confirmation") or {}
        net_delta = finite_or_none(volume_analysis.get("net_delta"))
        histogram = macd_histogram(indicators)
        if confirmation.get("is_valid") and net_delta is not None and histogram is not None:
            if sign(net_delta) != 0 and sign(net_delta) == sign(histogram):
                reward += 2
                notes.append("Flow confirms momentum")

        distance = liquidation_distance(bundle)
        funding = funding_rate(bundle)
        if distance is not None and funding is not None:
            if distance >= 5 and abs(funding) < 0.0005:
                reward += 2
                notes.append("Safe leverage context")

        return {
            "bonus": min(reward, REWARD_CAP),
            "penalty": 0.0,
            "major_mismatches": 0,
            "notes": notes,
            "critical": False,
        }
