"""標的排名 Query

實作 RankAssetsPort Driving Port

Flow:
1. allow-list 過濾
2. 批次補上 BTC 相關性 (缺 btc_correlation 且有歷史 K 線者)
3. Semaphore 控制並行，逐一評分 + 合成分數
4. 品質 / BTC 獨立性閘門
5. 十鍵排序，取前 N 名
"""

import asyncio
import logging

from injector import inject

from libs.grading.src.domain.services.composite_scorer import (
    aggressive_percent,
    alignment_score,
    apply_contextual_adjustments,
    base_composite,
    clamp_momentum,
    external_data_score,
    momentum_blend,
)
from libs.grading.src.domain.services.expected_confidence import (
    compute_expected_confidence,
)
from libs.grading.src.domain.services.indicator_features import (
    external_of,
    funding_rate,
    futures_of,
    indicators_of,
    trend_of,
)
from libs.grading.src.domain.services.momentum_calculator import (
    momentum_triplet,
    support_resistance_distance_pct,
    volume_ratio,
)
from libs.grading.src.domain.services.rank_sorter import sort_rank_entries
from libs.grading.src.ports.align_futures_timeframes_port import (
    AlignFuturesTimeframesPort,
)
from libs.grading.src.ports.get_btc_correlation_port import GetBtcCorrelationPort
from libs.grading.src.ports.rank_assets_port import RankAssetsPort
from libs.grading.src.ports.score_adjuster_port import ScoreAdjusterPort
from libs.grading.src.ports.score_indicator_quality_port import (
    ScoreIndicatorQualityPort,
)
from libs.shared.src.constants.correlation_settings import BTC_SYMBOL
from libs.shared.src.domain.services.numeric_guards import clamp, finite_or_none
from libs.shared.src.dtos.grading.adjustment_result_dto import AdjustmentResultDTO
from libs.shared.src.dtos.grading.asset_bundle_dto import AssetBundleDTO, AssetBundleMap
from libs.shared.src.dtos.grading.ranking_dto import RankEntryDTO, RankingResultDTO
from libs.shared.src.dtos.grading.scoring_config_dto import ScoringConfigDTO
from libs.shared.src.enums.quality_label import QualityLabel

DEFAULT_TOP_N = 15

# Per-asset outcome
RANKED = "ranked"
SKIPPED_NO_INDICATORS = "skipped_no_indicators"
SKIPPED_QUALITY = "skipped_quality"
SKIPPED_BTC = "skipped_btc"


class RankAssetsQuery(RankAssetsPort):
    """多標的合成排名"""

    @inject
    def __init__(
        self,
        quality_scorer: ScoreIndicatorQualityPort,
        correlation: GetBtcCorrelationPort,
        futures_aligner: AlignFuturesTimeframesPort,
        influence: ScoreAdjusterPort,
        config: ScoringConfigDTO,
    ) -> None:
        """初始化 Query

        Args:
            quality_scorer: 指標品質評分
            correlation: BTC 相關性引擎 (批次補資料)
            futures_aligner: 期貨多時間框架對齊
            influence: 影響力調整 (預期信心用)
            config: 評分設定
        """
        self._logger = logging.getLogger(self.__class__.__name__)
        self._quality_scorer = quality_scorer
        self._correlation = correlation
        self._futures_aligner = futures_aligner
        self._influence = influence
        self._config = config

    async def execute(
        self,
        bundles: AssetBundleMap,
        allow_list: list[str] | None = None,
        top_n: int | None = None,
    ) -> RankingResultDTO:
        """評分、過濾並排序標的池

        Args:
            bundles: asset → bundle
            allow_list: 只評估清單內的標的 (None 或空清單 = 全部)
            top_n: 只回傳前 N 名 (None = 全部)

        Returns:
            RankingResultDTO: 排序結果 + 統計
        """
        if allow_list:
            allowed = set(allow_list)
            candidates = {a: b for a, b in bundles.items() if a in allowed}
        else:
            candidates = dict(bundles)

        candidates = await self._enrich_correlations(candidates)
        btc_m60 = self._btc_momentum_60m(bundles)

        semaphore = asyncio.Semaphore(max(1, int(self._config["rank_max_concurrency"])))

        async def evaluate_one(asset: str, bundle: AssetBundleDTO):
            async with semaphore:
                return self._evaluate(asset, bundle, btc_m60)

        assets = list(candidates)
        tasks = [evaluate_one(asset, candidates[asset]) for asset in assets]
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)

        counters = {SKIPPED_NO_INDICATORS: 0, SKIPPED_QUALITY: 0, SKIPPED_BTC: 0}
        entries: list[RankEntryDTO] = []
        for asset, outcome in zip(assets, outcomes):
            if isinstance(outcome, Exception):
                self._logger.warning(f"Ranking failed for {asset}: {outcome}")
                counters[SKIPPED_NO_INDICATORS] += 1
                continue
            status, entry = outcome
            if status == RANKED:
                entries.append(entry)
            else:
                counters[status] += 1
                self._logger.debug(f"{asset}: {status}")

        ranked = sort_rank_entries(entries)
        if top_n is not None:
            ranked = ranked[: max(0, top_n)]

        self._logger.info(
            f"Ranked {len(entries)}/{len(assets)} assets "
            f"(no indicators: {counters[SKIPPED_NO_INDICATORS]}, "
            f"quality: {counters[SKIPPED_QUALITY]}, btc: {counters[SKIPPED_BTC]})"
        )

        return {
            "entries": ranked,
            "total_processed": len(assets),
            "total_ranked": len(entries),
            "skipped_no_indicators": counters[SKIPPED_NO_INDICATORS],
            "skipped_quality": counters[SKIPPED_QUALITY],
            "skipped_btc": counters[SKIPPED_BTC],
        }

    async def _enrich_correlations(self, candidates: AssetBundleMap) -> AssetBundleMap:
        """缺 btc_correlation 的標的以歷史 K 線批次計算 (不修改輸入)"""
        histories = {
            asset: bundle["history"]
            for asset, bundle in candidates.items()
            if asset != BTC_SYMBOL
            and bundle
            and bundle.get("history")
            and not futures_of(bundle).get("btc_correlation")
        }
        if not histories:
            return candidates

        records = await self._correlation.execute_batch(histories)

        enriched = dict(candidates)
        for asset, record in records.items():
            bundle = candidates[asset]
            external = external_of(bundle)
            enriched[asset] = {
                **bundle,
                "external": {
                    **external,
                    "futures": {**futures_of(bundle), "btc_correlation": record},
                },
            }
        return enriched

    def _btc_momentum_60m(self, bundles: AssetBundleMap) -> float | None:
        if BTC_SYMBOL not in bundles:
            return None
        return momentum_triplet(bundles[BTC_SYMBOL])[2]

    def _influence_outcome(
        self, asset: str, bundle: AssetBundleDTO
    ) -> AdjustmentResultDTO | None:
        try:
            return self._influence.adjust(asset, bundle)
        except Exception as e:
            self._logger.warning(f"Influence check failed for {asset}: {e}")
            return None

    def _evaluate(
        self, asset: str, bundle: AssetBundleDTO | None, btc_m60: float | None
    ) -> tuple[str, RankEntryDTO | None]:
        quality = self._quality_scorer.execute(asset, bundle)
        if quality["indicators_count"] <= 0:
            return SKIPPED_NO_INDICATORS, None

        coverage_pct = clamp(
            quality["indicators_count"] / self._config["indicators_total"] * 100, 0.0, 100.0
        )
        label = QualityLabel.from_value(quality["quality"])
        if label is QualityLabel.VERY_POOR or (
            label is QualityLabel.POOR and coverage_pct < self._config["quality_min_coverage"]
        ):
            return SKIPPED_QUALITY, None

        explicit_btc = finite_or_none((bundle or {}).get("btc_60m_pct"))
        btc_source = explicit_btc if explicit_btc is not None else btc_m60
        btc_abs = abs(btc_source) if btc_source is not None else None
        if btc_abs is not None and btc_abs > self._config["btc_abs_max"]:
            return SKIPPED_BTC, None

        m5, m15, m60 = momentum_triplet(bundle)
        m60_clamped = clamp_momentum(m60)
        momo_pct, momo_norm = momentum_blend(m5, m15, m60)
        align = alignment_score(trend_of(bundle))
        external = external_data_score(bundle)

        composite = base_composite(
            quality["score"], coverage_pct, momo_norm, align, external, self._config
        )
        composite, applied = apply_contextual_adjustments(
            composite, bundle, momo_pct, m60_clamped, self._config
        )

        confidence = compute_expected_confidence(
            bundle, self._influence_outcome(asset, bundle)
        )
        aggressive = aggressive_percent(
            quality["score"], composite, confidence, m60_clamped, self._config
        )

        rate = funding_rate(bundle)
        entry: RankEntryDTO = {
            **quality,
            "coverage_pct": coverage_pct,
            "momentum_composite": momo_norm,
            "trend_alignment_score": align,
            "external_data_score": external,
            "composite_score": composite,
            "aggressive_percent": aggressive,
            "diagnostics": {
                "m60_pct": m60,
                "volume_ratio": volume_ratio(bundle),
                "sr_dist_pct": support_resistance_distance_pct(indicators_of(bundle)),
                "btc_60m_abs_pct": btc_abs,
                "funding_abs_pct": abs(rate) * 100 if rate is not None else None,
                "confidence_percent": confidence,
                "penalties_applied": applied,
            },
        }

        if futures_of(bundle).get("timeframes"):
            entry["futures_alignment"] = self._futures_aligner.execute(asset, bundle)

        return RANKED, entry


def select_top_assets(result: RankingResultDTO, top_n: int = DEFAULT_TOP_N) -> list[str]:
    """取前 N 名標的代號"""
    return [entry["asset"] for entry in result["entries"][: max(0, top_n)]]
