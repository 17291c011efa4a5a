"""RankAssetsQuery 單元測試

品質評分使用真實實作，BTC 相關性引擎以 AsyncMock 取代
"""

import copy
from unittest.mock import AsyncMock, MagicMock

import pytest

from libs.grading.src.application.queries.align_futures_timeframes import (
    AlignFuturesTimeframesQuery,
)
from libs.grading.src.application.queries.rank_assets import (
    RankAssetsQuery,
    select_top_assets,
)
from libs.grading.src.application.queries.score_indicator_quality import (
    ScoreIndicatorQualityQuery,
)
from libs.grading.src.domain.services.influence_adjuster import InfluenceAdjuster
from libs.grading.src.domain.services.reward_adjuster import RewardAdjuster
from libs.grading.src.domain.services.scoring_config_loader import load_scoring_config


def quality_stub(label: str, count: int) -> dict:
    return {
        "asset": "",
        "score": 100.0,
        "indicators_count": count,
        "strengths": [],
        "weaknesses": [],
        "quality": label,
    }


class TestRankAssetsQuery:
    """多標的排名測試"""

    @pytest.fixture
    def config(self):
        return load_scoring_config(env={})

    @pytest.fixture
    def correlation(self):
        mock = MagicMock()
        mock.execute_batch = AsyncMock(return_value={})
        return mock

    @pytest.fixture
    def make_query(self, config, correlation):
        def build(quality_scorer=None, influence=None):
            return RankAssetsQuery(
                quality_scorer=quality_scorer
                or ScoreIndicatorQualityQuery(
                    config=config, adjusters=[InfluenceAdjuster(), RewardAdjuster()]
                ),
                correlation=correlation,
                futures_aligner=AlignFuturesTimeframesQuery(),
                influence=influence or InfluenceAdjuster(),
                config=config,
            )

        return build

    @pytest.fixture
    def pool(self, make_bundle):
        """A0..A8 動能遞增，外加一個空資料標的"""
        bundles = {f"A{i}": make_bundle(m60=0.1 * (i + 1)) for i in range(9)}
        bundles["EMPTY"] = {}
        return bundles

    @pytest.mark.asyncio
    async def test_ranks_pool_and_counts_skips(self, make_query, pool):
        result = await make_query().execute(pool)

        assert result["total_processed"] == 10
        assert result["total_ranked"] == 9
        assert result["skipped_no_indicators"] == 1
        assert result["skipped_quality"] == 0
        assert result["skipped_btc"] == 0
        assert [e["asset"] for e in result["entries"][:3]] == ["A8", "A7", "A6"]

        aggressive = [e["aggressive_percent"] for e in result["entries"]]
        assert aggressive == sorted(aggressive, reverse=True)
        assert all(0 <= value <= 100 for value in aggressive)

    @pytest.mark.asyncio
    async def test_order_is_independent_of_input_order(self, make_query, pool):
        forward = await make_query().execute(pool)
        backward = await make_query().execute(dict(reversed(list(pool.items()))))

        assert [e["asset"] for e in forward["entries"]] == [
            e["asset"] for e in backward["entries"]
        ]

    @pytest.mark.asyncio
    async def test_entry_fields_and_diagnostics(self, make_query, make_bundle):
        result = await make_query().execute({"ETH": make_bundle()})

        entry = result["entries"][0]
        assert entry["asset"] == "ETH"
        assert entry["coverage_pct"] == 100
        assert entry["external_data_score"] == pytest.approx(1.0)
        assert entry["trend_alignment_score"] == pytest.approx(0.86)
        assert 0 <= entry["momentum_composite"] <= 1
        assert 0 <= entry["composite_score"] <= 1
        assert entry["diagnostics"] == {
            "m60_pct": pytest.approx(0.3),
            "volume_ratio": pytest.approx(2.0),
            "sr_dist_pct": pytest.approx(5.0),
            "btc_60m_abs_pct": pytest.approx(0.1),
            "funding_abs_pct": pytest.approx(0.01),
            "confidence_percent": pytest.approx(70),
            "penalties_applied": [
                "reward_momo_trend_0.03",
                "reward_align_0.03",
                "reward_vol_confirm_0.02",
            ],
        }
        assert "futures_alignment" not in entry

    @pytest.mark.asyncio
    async def test_quality_gate(self, make_query, make_bundle):
        """very poor 一律排除；poor 需覆蓋率 >= 70%"""
        labels = {
            "VP": quality_stub("very poor", 18),
            "POOR_LOW": quality_stub("poor", 13),
            "POOR_OK": quality_stub("poor", 14),
            "FAIR": quality_stub("fair", 12),
        }
        scorer = MagicMock()
        scorer.execute.side_effect = lambda asset, bundle: {**labels[asset], "asset": asset}
        bundles = {asset: make_bundle() for asset in labels}

        result = await make_query(quality_scorer=scorer).execute(bundles)

        assert result["skipped_quality"] == 2
        assert {e["asset"] for e in result["entries"]} == {"POOR_OK", "FAIR"}

    @pytest.mark.asyncio
    async def test_real_scorer_rejects_sparse_bundle(self, make_query):
        result = await make_query().execute({"THIN": {"indicators": {"rsi14": 50}}})

        assert result["skipped_quality"] == 1
        assert result["entries"] == []

    @pytest.mark.asyncio
    async def test_btc_gate_uses_explicit_move(self, make_query, make_bundle):
        result = await make_query().execute(
            {"CALM": make_bundle(btc_60m_pct=0.5), "SHAKY": make_bundle(btc_60m_pct=-1.2)}
        )

        assert result["skipped_btc"] == 1
        assert [e["asset"] for e in result["entries"]] == ["CALM"]

    @pytest.mark.asyncio
    async def test_btc_gate_falls_back_to_btc_bundle(self, make_query, make_bundle):
        """未提供 btc_60m_pct 時以 BTC 本身的 60 分鐘動能判斷"""
        bundles = {
            "BTC": make_bundle(m60=1.5, btc_60m_pct=None),
            "ETH": make_bundle(btc_60m_pct=None),
        }

        result = await make_query().execute(bundles)

        assert result["skipped_btc"] == 2
        assert result["entries"] == []

    @pytest.mark.asyncio
    async def test_missing_btc_context_passes_gate(self, make_query, make_bundle):
        result = await make_query().execute({"ETH": make_bundle(btc_60m_pct=None)})

        assert result["total_ranked"] == 1
        assert result["entries"][0]["diagnostics"]["btc_60m_abs_pct"] is None

    @pytest.mark.asyncio
    async def test_allow_list_and_top_n(self, make_query, pool):
        limited = await make_query().execute(pool, allow_list=["A0", "A1", "NOPE"])
        top = await make_query().execute(pool, top_n=3)

        assert limited["total_processed"] == 2
        assert [e["asset"] for e in limited["entries"]] == ["A1", "A0"]
        assert len(top["entries"]) == 3
        assert top["total_ranked"] == 9

    @pytest.mark.asyncio
    async def test_empty_allow_list_means_all_assets(self, make_query, pool):
        """空的 allow_list 等同不過濾"""
        result = await make_query().execute(pool, allow_list=[])

        assert result["total_processed"] == 10
        assert result["total_ranked"] == 9

    @pytest.mark.asyncio
    async def test_select_top_assets(self, make_query, pool):
        result = await make_query().execute(pool)

        assert select_top_assets(result, top_n=2) == ["A8", "A7"]
        assert select_top_assets(result, top_n=0) == []
        assert len(select_top_assets(result)) == 9

    @pytest.mark.asyncio
    async def test_correlation_enrichment_does_not_mutate_input(
        self, make_query, correlation, make_bundle
    ):
        bundle = make_bundle()
        del bundle["external"]["futures"]["btc_correlation"]
        original = copy.deepcopy(bundle)
        record = {
            "correlation_24h": 0.9,
            "correlation_7d": 0.9,
            "correlation_30d": 0.9,
            "strength": "strong",
            "impact_multiplier": 1.35,
            "last_update": 0.0,
        }
        correlation.execute_batch.return_value = {"SOL": record}

        result = await make_query().execute({"SOL": bundle})

        correlation.execute_batch.assert_awaited_once_with({"SOL": bundle["history"]})
        assert bundle == original
        assert result["entries"][0]["external_data_score"] == pytest.approx(1.0)
        assert "BTC correlation strong (β≈1.35, ρ7d=0.90)" in result["entries"][0]["strengths"]

    @pytest.mark.asyncio
    async def test_enrichment_skipped_when_correlation_present(
        self, make_query, correlation, pool
    ):
        await make_query().execute(pool)

        correlation.execute_batch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failing_scorer_counts_as_skipped(self, make_query, make_bundle):
        real = ScoreIndicatorQualityQuery(
            config=load_scoring_config(env={}),
            adjusters=[InfluenceAdjuster(), RewardAdjuster()],
        )

        def score(asset, bundle):
            if asset == "BROKEN":
                raise RuntimeError("boom")
            return real.execute(asset, bundle)

        scorer = MagicMock()
        scorer.execute.side_effect = score

        result = await make_query(quality_scorer=scorer).execute(
            {"OK": make_bundle(), "BROKEN": make_bundle()}
        )

        assert result["skipped_no_indicators"] == 1
        assert [e["asset"] for e in result["entries"]] == ["OK"]

    @pytest.mark.asyncio
    async def test_failing_influence_drops_confidence_component(self, make_query, make_bundle):
        influence = MagicMock()
        influence.adjust.side_effect = RuntimeError("boom")

        result = await make_query(influence=influence).execute({"ETH": make_bundle()})

        assert result["entries"][0]["diagnostics"]["confidence_percent"] == pytest.approx(50)

    @pytest.mark.asyncio
    async def test_futures_alignment_attached_when_timeframes_present(
        self, make_query, make_bundle
    ):
        bundle = make_bundle()
        bundle["external"]["futures"]["timeframes"] = {
            "1h": {"funding": {"current": -0.002}},
            "4h": {"funding": {"current": -0.002}},
        }

        result = await make_query().execute({"ETH": bundle})

        alignment = result["entries"][0]["futures_alignment"]
        assert alignment["consensus_signal"] == "long"
        assert alignment["alignment_score"] == 100

    @pytest.mark.asyncio
    async def test_empty_pool(self, make_query):
        result = await make_query().execute({})

        assert result == {
            "entries": [],
            "total_processed": 0,
            "total_ranked": 0,
            "skipped_no_indicators": 0,
            "skipped_quality": 0,
            "skipped_btc": 0,
        }
