"""InfluenceAdjuster / RewardAdjuster 單元測試"""

import pytest

from libs.grading.src.domain.services.influence_adjuster import InfluenceAdjuster
from libs.grading.src.domain.services.reward_adjuster import RewardAdjuster


def futures_bundle(**futures) -> dict:
    return {"external": {"futures": futures}}


class TestInfluenceAdjuster:
    """影響力調整規則"""

    @pytest.fixture
    def adjuster(self):
        return InfluenceAdjuster()

    def test_always_counts_as_indicator(self, adjuster):
        assert adjuster.counts_as_indicator_always is True
        assert adjuster.name == "influence"

    def test_empty_bundle_is_neutral(self, adjuster):
        result = adjuster.adjust("X", {})

        assert result == {
            "bonus": 0.0,
            "penalty": 0.0,
            "major_mismatches": 0,
            "notes": [],
            "critical": False,
        }

    def test_tight_funding_and_premium(self, adjuster):
        """|funding| < 0.0005 且 |premium| < 0.001 → +4"""
        bundle = futures_bundle(
            funding_rate={"current": 0.0004},
            premium_index={"premium_pct": 0.0008},
        )

        result = adjuster.adjust("X", bundle)

        assert result["bonus"] == 4
        assert result["penalty"] == 0
        assert result["notes"] == ["Influence: funding & premium tight"]

    def test_stretched_funding_and_premium_is_major(self, adjuster):
        bundle = futures_bundle(
            funding_rate={"current": 0.002},
            premium_index={"premium_pct": 0.003},
        )

        result = adjuster.adjust("X", bundle)

        assert result["bonus"] == 0
        assert result["penalty"] == 4
        assert result["major_mismatches"] == 1

    def test_between_bands_is_neutral(self, adjuster):
        bundle = futures_bundle(
            funding_rate={"current": 0.001},
            premium_index={"premium_pct": 0.0015},
        )

        result = adjuster.adjust("X", bundle)

        assert result["bonus"] == 0
        assert result["penalty"] == 0

    def test_funding_rising_with_open_interest_falling(self, adjuster):
        bundle = futures_bundle(
            funding_rate={"trend": "rising"},
            open_interest={"trend": "falling"},
        )

        result = adjuster.adjust("X", bundle)

        assert result["penalty"] == 3
        assert result["major_mismatches"] == 1

    @pytest.mark.parametrize(
        "distance, bonus, penalty, major, critical",
        [(8.0, 3, 0, 0, False), (3.0, 0, 0, 0, False), (1.5, 0, 5, 1, True)],
    )
    def test_liquidation_distance(self, adjuster, distance, bonus, penalty, major, critical):
        bundle = futures_bundle(liquidation={"liquidation_distance": distance})

        result = adjuster.adjust("X", bundle)

        assert result["bonus"] == bonus
        assert result["penalty"] == penalty
        assert result["major_mismatches"] == major
        assert result["critical"] is critical

    @pytest.mark.parametrize(
        "confirmation, bonus, penalty",
        [
            ({"is_valid": True, "strength": "strong"}, 4, 0),
            ({"is_valid": True, "strength": "moderate"}, 2, 0),
            ({"is_valid": True, "strength": "weak"}, 0, 0),
            ({"is_valid": False}, 0, 3),
        ],
    )
    def test_volume_confirmation(self, adjuster, confirmation, bonus, penalty):
        bundle = {"external": {"volume_analysis": {"volume_confirmation": confirmation}}}

        result = adjuster.adjust("X", bundle)

        assert result["bonus"] == bonus
        assert result["penalty"] == penalty
        assert result["major_mismatches"] == 0

    @pytest.mark.parametrize("flag", ["spoofing_detected", "wash_trading_detected"])
    def test_whale_manipulation_is_major(self, adjuster, flag):
        bundle = futures_bundle(whale_activity={flag: True})

        result = adjuster.adjust("X", bundle)

        assert result["penalty"] == 5
        assert result["major_mismatches"] == 1

    @pytest.mark.parametrize(
        "corr_7d, bonus, penalty",
        [(0.8, 3, 0), (-0.75, 3, 0), (0.5, 0, 0), (0.1, 0, 2)],
    )
    def test_btc_coupling(self, adjuster, corr_7d, bonus, penalty):
        bundle = futures_bundle(btc_correlation={"correlation_7d": corr_7d})

        result = adjuster.adjust("X", bundle)

        assert result["bonus"] == bonus
        assert result["penalty"] == penalty
        assert result["major_mismatches"] == 0

    def test_wide_bands_with_atr(self, adjuster):
        """ATR 存在且 BB 寬度 > 8% → -2"""
        indicators = {
            "atr": 1.0,
            "bollinger_bands": {"upper": 110.0, "middle": 100.0, "lower": 90.0},
        }

        with_atr = adjuster.adjust("X", {"indicators": indicators})
        without_atr = adjuster.adjust(
            "X", {"indicators": {"bollinger_bands": indicators["bollinger_bands"]}}
        )

        assert with_atr["penalty"] == 2
        assert with_atr["major_mismatches"] == 0
        assert without_atr["penalty"] == 0


class TestRewardAdjuster:
    """協同與安全加分規則"""

    @pytest.fixture
    def adjuster(self):
        return RewardAdjuster()

    def test_only_counts_when_rewarding(self, adjuster):
        assert adjuster.counts_as_indicator_always is False
        assert adjuster.adjust("X", {})["bonus"] == 0

    def test_trend_coherent_with_ema(self, adjuster):
        bundle = {
            "indicators": {"price": 90.0, "ema20": 95.0, "ema50": 100.0},
            "trend_alignment": {"daily_trend": "downtrend", "aligned": True, "strength": 0.9},
        }

        result = adjuster.adjust("X", bundle)

        assert result["bonus"] == 3
        assert result["notes"] == ["Trend coherent with EMA structure"]

    def test_flow_confirms_momentum(self, adjuster):
        """淨買賣量與 MACD 同向"""
        bundle = {
            "indicators": {"macd": {"histogram": -0.01}},
            "external": {
                "volume_analysis": {
                    "net_delta": -300.0,
                    "volume_confirmation": {"is_valid": True},
                }
            },
        }

        result = adjuster.adjust("X", bundle)

        assert result["bonus"] == 2
        assert result["notes"] == ["Flow confirms momentum"]

    def test_flow_against_momentum_has_no_reward(self, adjuster):
        bundle = {
            "indicators": {"macd": {"histogram": 0.01}},
            "external": {
                "volume_analysis": {
                    "net_delta": -300.0,
                    "volume_confirmation": {"is_valid": True},
                }
            },
        }

        assert adjuster.adjust("X", bundle)["bonus"] == 0

    @pytest.mark.parametrize(
        "distance, funding, bonus",
        [(6.0, 0.0004, 2), (6.0, 0.0006, 0), (4.0, 0.0001, 0)],
    )
    def test_safe_leverage_context(self, adjuster, distance, funding, bonus):
        bundle = futures_bundle(
            liquidation={"liquidation_distance": distance},
            funding_rate={"current": funding},
        )

        result = adjuster.adjust("X", bundle)

        assert result["bonus"] == bonus

    def test_total_is_capped(self, adjuster, make_bundle):
        """3 + 2 + 2 → 上限 6"""
        result = adjuster.adjust("X", make_bundle())

        assert result["bonus"] == 6
        assert result["penalty"] == 0
        assert result["major_mismatches"] == 0
        assert result["notes"] == [
            "Trend coherent with EMA structure",
            "Flow confirms momentum",
            "Safe leverage context",
        ]
