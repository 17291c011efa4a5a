"""指標品質評分 Query

實作 ScoreIndicatorQualityPort Driving Port
"""

import logging

from injector import inject

from libs.grading.src.domain.services.conflict_penalty_calculator import (
    compute_conflict_penalties,
)
from libs.grading.src.domain.services.indicator_quality_scorer import (
    NO_INDICATORS,
    QualityTally,
    evaluate_base_checks,
    has_any_indicator,
    resolve_quality_label,
)
from libs.grading.src.ports.score_adjuster_port import ScoreAdjusterPort
from libs.grading.src.ports.score_indicator_quality_port import (
    ScoreIndicatorQualityPort,
)
from libs.shared.src.constants.quality_thresholds import MAX_ADJUSTER_NOTES
from libs.shared.src.domain.services.numeric_guards import clamp, dedupe
from libs.shared.src.dtos.grading.asset_bundle_dto import AssetBundleDTO
from libs.shared.src.dtos.grading.quality_score_dto import QualityScoreDTO
from libs.shared.src.dtos.grading.scoring_config_dto import ScoringConfigDTO
from libs.shared.src.enums.quality_label import QualityLabel


class ScoreIndicatorQualityQuery(ScoreIndicatorQualityPort):
    """指標品質評分"""

    @inject
    def __init__(
        self,
        config: ScoringConfigDTO,
        adjusters: list[ScoreAdjusterPort],
    ) -> None:
        """初始化 Query

        Args:
            config: 評分設定
            adjusters: 依序套用的 ScoreAdjuster 策略
        """
        self._logger = logging.getLogger(self.__class__.__name__)
        self._config = config
        self._adjusters = list(adjusters)

    def execute(self, asset: str, bundle: AssetBundleDTO | None) -> QualityScoreDTO:
        """評分單一標的的指標覆蓋率與可靠度

        Args:
            asset: 標的代號
            bundle: 標的資料 (任何欄位都可缺)

        Returns:
            QualityScoreDTO: 空資料時 score=0, quality="poor"
        """
        if not bundle or not has_any_indicator(bundle):
            return {
                "asset": asset,
                "score": 0,
                "indicators_count": 0,
                "strengths": [],
                "weaknesses": [NO_INDICATORS],
                "quality": QualityLabel.POOR.value,
            }

        tally = evaluate_base_checks(bundle)

        conflict = compute_conflict_penalties(bundle, self._config)
        if conflict["penalty"] > 0:
            tally.award(-conflict["penalty"])
            tally.weaknesses.extend(conflict["reasons"])

        for adjuster in self._adjusters:
            self._apply_adjuster(adjuster, asset, bundle, tally)

        score = max(0.0, tally.score)
        total = self._config["indicators_total"]
        coverage_pct = tally.indicators_count / total * 100
        quality = resolve_quality_label(coverage_pct, score)

        return {
            "asset": asset,
            "score": score,
            "indicators_count": tally.indicators_count,
            "strengths": dedupe(tally.strengths),
            "weaknesses": dedupe(tally.weaknesses),
            "quality": quality.value,
        }

    def _apply_adjuster(
        self,
        adjuster: ScoreAdjusterPort,
        asset: str,
        bundle: AssetBundleDTO,
        tally: QualityTally,
    ) -> None:
        try:
            outcome = adjuster.adjust(asset, bundle)
        except Exception as e:
            self._logger.warning(f"Score adjuster {adjuster.name} failed for {asset}: {e}")
            return

        bonus = max(0.0, outcome["bonus"])
        if not adjuster.counts_as_indicator_always and bonus <= 0:
            return

        tally.count()
        tally.award(bonus - max(0.0, outcome["penalty"]))

        if outcome["major_mismatches"] > 0:
            ratio = clamp(self._config["influence_major_mismatch_penalty"], 0.0, 1.0)
            tally.score *= 1 - ratio
            tally.weaknesses.append(
                f"{adjuster.name.capitalize()}: {outcome['major_mismatches']} major mismatch(es) "
                f"(score cut {ratio * 100:.0f}%)"
            )

        tally.strengths.extend(outcome["notes"][:MAX_ADJUSTER_NOTES])
