"""compute_conflict_penalties 單元測試"""

import pytest

from libs.grading.src.domain.services.conflict_penalty_calculator import (
    compute_conflict_penalties,
)
from libs.grading.src.domain.services.scoring_config_loader import load_scoring_config


class TestComputeConflictPenalties:
    """測試結構衝突扣分"""

    @pytest.fixture
    def config(self):
        return load_scoring_config(env={})

    def test_trend_against_ema_structure(self, config):
        """uptrend 但 price < EMA20 < EMA50"""
        bundle = {
            "indicators": {"price": 90.0, "ema20": 95.0, "ema50": 100.0},
            "trend_alignment": {"daily_trend": "uptrend"},
        }

        result = compute_conflict_penalties(bundle, config)

        assert result["penalty"] >= 40
        assert "Trend×EMA×Aroon conflict" in result["reasons"]
        assert result["major_mismatches"] == 1

    def test_trend_against_aroon_dominance(self, config):
        bundle = {
            "indicators": {"aroon": {"up": 90, "down": 20}},
            "trend_alignment": {"daily_trend": "downtrend"},
        }

        result = compute_conflict_penalties(bundle, config)

        assert result["reasons"] == ["Trend×EMA×Aroon conflict"]
        assert result["penalty"] == 40

    def test_empty_bundle_has_no_penalty(self, config):
        result = compute_conflict_penalties({}, config)

        assert result == {"penalty": 0.0, "reasons": [], "major_mismatches": 0}

    def test_volume_and_delta_conflicts_sum(self, config):
        bundle = {
            "indicators": {"macd": {"histogram": 0.02}},
            "external": {
                "volume_analysis": {
                    "volume_confirmation": {"is_valid": False},
                    "net_delta": -1500.0,
                }
            },
        }

        result = compute_conflict_penalties(bundle, config)

        assert result["penalty"] == 45
        assert result["reasons"] == [
            "Volume does not confirm move",
            "Delta contra-direction to momentum",
        ]
        assert result["major_mismatches"] == 0

    def test_choppy_regime_excludes_sideways(self, config):
        """ADX<20 時只算 choppy"""
        bundle = {
            "indicators": {
                "adx": 15,
                "bollinger_bands": {"upper": 100.2, "middle": 100.0, "lower": 99.8},
            }
        }

        result = compute_conflict_penalties(bundle, config)

        assert result["reasons"] == ["Regime choppy (ADX<20)"]
        assert result["penalty"] == 20

    def test_sideways_requires_narrow_bands(self, config):
        bundle = {
            "indicators": {
                "adx": 25,
                "bollinger_bands": {"upper": 100.2, "middle": 100.0, "lower": 99.8},
            }
        }

        result = compute_conflict_penalties(bundle, config)

        assert result["reasons"] == ["Sideways no volume"]
        assert result["penalty"] == 15

    def test_liquidation_trap_is_major(self, config):
        bundle = {"external": {"futures": {"liquidation": {"liquidation_distance": 1.5}}}}

        result = compute_conflict_penalties(bundle, config)

        assert result["reasons"] == ["Liquidity trap (<2%)"]
        assert result["penalty"] == 25
        assert result["major_mismatches"] == 1

    def test_liquidation_bounce_zone(self, config):
        bundle = {"external": {"futures": {"liquidation": {"liquidation_distance": 3.0}}}}

        result = compute_conflict_penalties(bundle, config)

        assert result["reasons"] == ["High-bounce liquidity zone"]
        assert result["major_mismatches"] == 0

    def test_neutral_rsi_without_momentum(self, config):
        bundle = {"indicators": {"rsi14": 50, "macd": {"histogram": 0.0004}}}

        result = compute_conflict_penalties(bundle, config)

        assert result["reasons"] == ["RSI neutral with no MACD momentum"]
        assert result["penalty"] == 10

    def test_btc_context_half_weight_and_shock(self, config):
        """強相關 → 20×0.5；BB 寬度 > 8% → shock"""
        bundle = {
            "indicators": {
                "macd": {"histogram": 0.02},
                "bollinger_bands": {"upper": 110.0, "middle": 100.0, "lower": 90.0},
            },
            "external": {"futures": {"btc_correlation": {"correlation_7d": -0.75}}},
        }

        result = compute_conflict_penalties(bundle, config)

        assert result["reasons"] == [
            "BTC correlation strong but context mismatch",
            "Volatility shock regime",
        ]
        assert result["penalty"] == 10 + 25

    def test_configured_magnitudes_are_used(self):
        config = load_scoring_config(env={}, overrides={"pen_liq_trap": 50})
        bundle = {"external": {"futures": {"liquidation": {"liquidation_distance": 0.5}}}}

        result = compute_conflict_penalties(bundle, config)

        assert result["penalty"] == 50
