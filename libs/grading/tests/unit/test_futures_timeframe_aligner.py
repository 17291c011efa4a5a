"""Futures timeframe aligner 單元測試"""

import pytest

from libs.grading.src.application.queries.align_futures_timeframes import (
    AlignFuturesTimeframesQuery,
)
from libs.grading.src.domain.services.futures_timeframe_aligner import (
    alignment_score,
    analyze_timeframe,
    consensus_signal,
    funding_trend,
)


class TestAnalyzeTimeframe:
    """測試單一時間框架分析"""

    def test_extreme_positive_funding_is_short(self):
        result = analyze_timeframe("1h", {"funding": {"current": 0.0015}})

        assert result["signal"] == "short"

    def test_extreme_negative_funding_is_long(self):
        result = analyze_timeframe("1h", {"funding": {"current": -0.002}})

        assert result["signal"] == "long"

    def test_rising_open_interest_is_bearish_bias(self):
        result = analyze_timeframe("4h", {"open_interest": {"change_24h": 5.0}})

        assert result["trend"] == "bearish"

    def test_falling_funding_is_bullish_bias(self):
        result = analyze_timeframe(
            "4h", {"funding": {"current": 0.00005, "rate_24h": 0.0001}}
        )

        assert result["trend"] == "bullish"

    def test_oi_price_divergence_accumulation(self):
        """價跌 OI 升 → long"""
        result = analyze_timeframe(
            "1d",
            {"open_interest": {"change_24h": 4.0}, "price_change_24h": -2.0},
        )

        assert result["signal"] == "long"

    def test_oi_price_divergence_distribution(self):
        result = analyze_timeframe(
            "1d",
            {"open_interest": {"change_24h": -4.0}, "price_change_24h": 2.0},
        )

        assert result["signal"] == "short"

    def test_explicit_funding_trend_label_wins(self):
        assert funding_trend({"trend": "rising", "current": 0.0, "rate_24h": 1.0}) == "rising"


class TestAlignmentScore:
    """測試對齊分數與共識"""

    def test_unanimous_signals_score_100(self):
        assert alignment_score(["long", "long", "long"]) == 100

    def test_majority_minus_neutral_penalty(self):
        # majority 2/4 = 50%, neutral 1/4 × 30 = 7.5
        assert alignment_score(["long", "long", "short", "neutral"]) == pytest.approx(42.5)

    def test_all_neutral_floors_at_zero(self):
        assert alignment_score(["neutral", "neutral"]) == 0

    def test_empty_is_zero(self):
        assert alignment_score([]) == 0

    def test_consensus_requires_strict_majority(self):
        assert consensus_signal(["long", "long", "short"]) == "long"
        assert consensus_signal(["long", "short", "neutral", "neutral"]) == "neutral"


class TestAlignFuturesTimeframesQuery:
    """測試 AlignFuturesTimeframesQuery"""

    @pytest.fixture
    def query(self):
        return AlignFuturesTimeframesQuery()

    def test_all_timeframes_short(self, query):
        bundle = {
            "external": {
                "futures": {
                    "timeframes": {
                        tf: {"funding": {"current": 0.002}}
                        for tf in ("5m", "15m", "1h", "4h", "1d")
                    }
                }
            }
        }

        result = query.execute("ETH", bundle)

        assert result["asset"] == "ETH"
        assert len(result["timeframes"]) == 5
        assert result["alignment_score"] == 100
        assert result["consensus_signal"] == "short"
        assert result["confidence"] == pytest.approx(1.0)

    def test_unknown_timeframes_are_ignored(self, query):
        bundle = {
            "external": {
                "futures": {
                    "timeframes": {
                        "1h": {"funding": {"current": -0.002}},
                        "2h": {"funding": {"current": 0.002}},
                    }
                }
            }
        }

        result = query.execute("SOL", bundle)

        assert [t["timeframe"] for t in result["timeframes"]] == ["1h"]
        assert result["consensus_signal"] == "long"

    def test_missing_timeframes_returns_empty_alignment(self, query):
        result = query.execute("SOL", {})

        assert result["timeframes"] == []
        assert result["alignment_score"] == 0
        assert result["consensus_signal"] == "neutral"
        assert result["confidence"] == 0
