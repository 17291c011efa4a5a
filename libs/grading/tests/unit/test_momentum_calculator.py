"""Momentum / tie-break features 與排序鍵單元測試"""

import pytest

from libs.grading.src.domain.services.momentum_calculator import (
    momentum_triplet,
    pct_change_over_minutes,
    support_resistance_distance_pct,
    volume_ratio,
)
from libs.grading.src.domain.services.rank_sorter import sort_rank_entries

MINUTE_MS = 60_000


def minute_history(closes: list[float], volumes: list[float] | None = None) -> list[dict]:
    volumes = volumes or [100.0] * len(closes)
    return [
        {"time": i * MINUTE_MS + 1, "close": close, "volume": volume}
        for i, (close, volume) in enumerate(zip(closes, volumes))
    ]


def rank_entry(asset: str, aggressive: float = 50.0, **diagnostics) -> dict:
    return {
        "asset": asset,
        "score": 100.0,
        "indicators_count": 18,
        "strengths": [],
        "weaknesses": [],
        "quality": "good",
        "coverage_pct": 90.0,
        "momentum_composite": 0.5,
        "trend_alignment_score": 0.5,
        "external_data_score": 0.5,
        "composite_score": 0.5,
        "aggressive_percent": aggressive,
        "diagnostics": {
            "m60_pct": None,
            "volume_ratio": None,
            "sr_dist_pct": None,
            "btc_60m_abs_pct": None,
            "funding_abs_pct": None,
            "confidence_percent": 0.0,
            "penalties_applied": [],
            **diagnostics,
        },
    }


class TestPctChangeOverMinutes:
    """測試 N 分鐘漲跌幅"""

    def test_uses_candle_at_or_before_target(self):
        history = minute_history([100.0 + i for i in range(10)])

        # last = 109 at t=9, target t=4 → close 104
        assert pct_change_over_minutes(history, 5) == pytest.approx((109 - 104) / 104 * 100)

    def test_falls_back_to_first_candle(self):
        history = minute_history([100.0, 110.0])

        assert pct_change_over_minutes(history, 60) == pytest.approx(10.0)

    def test_short_history(self):
        assert pct_change_over_minutes(minute_history([100.0]), 5) is None
        assert pct_change_over_minutes([], 5) is None

    def test_explicit_momentum_wins(self):
        bundle = {
            "momentum": {"m5": 1.0, "m60": None},
            "history": minute_history([100.0 + i for i in range(70)]),
        }

        m5, m15, m60 = momentum_triplet(bundle)

        assert m5 == 1.0
        assert m15 == pytest.approx((169 - 154) / 154 * 100)
        assert m60 == pytest.approx((169 - 109) / 109 * 100)

    def test_empty_bundle(self):
        assert momentum_triplet(None) == (None, None, None)


class TestTieBreakFeatures:
    def test_volume_ratio_ignores_zero_volumes(self):
        history = minute_history([1.0] * 4, volumes=[100.0, 0.0, 300.0, 400.0])

        assert volume_ratio({"history": history}) == pytest.approx(400 / 200)

    def test_volume_ratio_prefers_snapshot_volume(self):
        history = minute_history([1.0] * 3, volumes=[100.0, 100.0, 900.0])

        assert volume_ratio({"history": history, "indicators": {"volume": 50.0}}) == pytest.approx(0.5)

    def test_volume_ratio_needs_two_candles(self):
        assert volume_ratio({"history": minute_history([1.0])}) is None

    def test_support_resistance_distance(self):
        indicators = {"price": 100.0, "support_levels": [90.0, 97.0], "resistance_levels": [104.0]}

        assert support_resistance_distance_pct(indicators) == pytest.approx(3.0)
        assert support_resistance_distance_pct({"price": 100.0}) is None


class TestSortRankEntries:
    """測試十鍵排序"""

    def test_aggressive_percent_first(self):
        entries = [rank_entry("LOW", 10), rank_entry("HIGH", 90), rank_entry("MID", 50)]

        assert [e["asset"] for e in sort_rank_entries(entries)] == ["HIGH", "MID", "LOW"]

    def test_missing_volume_ratio_sorts_last(self):
        entries = [rank_entry("NONE"), rank_entry("LOW", volume_ratio=0.5), rank_entry("HIGH", volume_ratio=2.0)]

        assert [e["asset"] for e in sort_rank_entries(entries)] == ["HIGH", "LOW", "NONE"]

    def test_smaller_btc_move_wins(self):
        entries = [
            rank_entry("NONE"),
            rank_entry("BIG", btc_60m_abs_pct=0.7),
            rank_entry("SMALL", btc_60m_abs_pct=0.1),
        ]

        assert [e["asset"] for e in sort_rank_entries(entries)] == ["SMALL", "BIG", "NONE"]

    def test_fewer_weaknesses_win(self):
        noisy = rank_entry("NOISY")
        noisy["weaknesses"] = ["a", "b"]
        clean = rank_entry("CLEAN")

        assert [e["asset"] for e in sort_rank_entries([noisy, clean])] == ["CLEAN", "NOISY"]

    def test_identical_keys_keep_input_order(self):
        entries = [rank_entry("FIRST"), rank_entry("SECOND")]

        assert [e["asset"] for e in sort_rank_entries(entries)] == ["FIRST", "SECOND"]
