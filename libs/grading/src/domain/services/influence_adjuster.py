"""Influence adjuster

Cross-signal influence checks folded into the quality score: derivatives
tension, liquidation proximity, flow confirmation, whale manipulation,
BTC coupling and volatility stretch.
"""

from libs.shared.src.domain.services.numeric_guards import finite_or_none
from libs.shared.src.dtos.grading.adjustment_result_dto import AdjustmentResultDTO
from libs.shared.src.dtos.grading.asset_bundle_dto import AssetBundleDTO
from libs.grading.src.domain.services.futures_timeframe_aligner import (
    funding_trend,
    open_interest_trend,
)
from libs.grading.src.domain.services.indicator_features import (
    bollinger_width,
    btc_correlation_7d,
    funding_rate,
    futures_of,
    indicators_of,
    liquidation_distance,
    premium_pct,
    volume_analysis_of,
)

TIGHT_FUNDING = 0.0005
TIGHT_PREMIUM = 0.001
STRETCHED_FUNDING = 0.0015
STRETCHED_PREMIUM = 0.002
STRETCHED_BB_WIDTH = 0.08


class InfluenceAdjuster:
    """影響力調整 (ScoreAdjusterPort)"""

    name = "influence"
    counts_as_indicator_always = True

    def adjust(self, asset: str, bundle: AssetBundleDTO) -> AdjustmentResultDTO:
        bonus = 0.0
        penalty = 0.0
        major_mismatches = 0
        critical = False
        notes: list[str] = []

        # Funding × premium
        funding = funding_rate(bundle)
        premium = premium_pct(bundle)
        if funding is not None and premium is not None:
            if abs(funding) < TIGHT_FUNDING and abs(premium) < TIGHT_PREMIUM:
                bonus += 4
                notes.append("Influence: funding & premium tight")
            elif abs(funding) > STRETCHED_FUNDING and abs(premium) > STRETCHED_PREMIUM:
                penalty += 4
                major_mismatches += 1

        # Funding rising while open interest drains
        futures = futures_of(bundle)
        funding_block = futures.get("funding_rate") or {}
        oi_block = futures.get("open_interest") or {}
        if funding_block and oi_block:
            if funding_trend(funding_block) == "rising" and open_interest_trend(oi_block) == "falling":
                penalty += 3
                major_mismatches += 1

        distance = liquidation_distance(bundle)
        if distance is not None:
            if distance >= 5:
                bonus += 3
                notes.append("Influence: liquidation distance safe")
            elif distance < 2:
                penalty += 5
                major_mismatches += 1
                critical = True

        confirmation = volume_analysis_of(bundle).get("volume_confirmation")
        if confirmation:
            if confirmation.get("is_valid"):
                label = confirmation.get("strength")
                if label == "strong":
                    bonus += 4
                    notes.append("Influence: volume confirms (strong)")
                elif label == "moderate":
                    bonus += 2
                    notes.append("Influence: volume confirms (moderate)")
            else:
                penalty += 3

        whales = futures.get("whale_activity") or {}
        if whales.get("spoofing_detected") or whales.get("wash_trading_detected"):
            penalty += 5
            major_mismatches += 1

        corr_7d = btc_correlation_7d(bundle)
        if corr_7d is not None:
            if abs(corr_7d) >= 0.7:
                bonus += 3
                notes.append("Influence: BTC coupling stable")
            elif abs(corr_7d) < 0.3:
                penalty += 2

        indicators = indicators_of(bundle)
        width = bollinger_width(indicators)
        if finite_or_none(indicators.get("atr")) is not None and width is not None:
            if width > STRETCHED_BB_WIDTH:
                penalty += 2

        return {
            "bonus": bonus,
            "penalty": penalty,
            "major_mismatches": major_mismatches,
            "notes": notes,
            "critical": critical,
        }
