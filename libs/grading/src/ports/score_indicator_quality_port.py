"""
ScoreIndicatorQualityPort - Driving Port

實作者: ScoreIndicatorQualityQuery
"""

from typing import Protocol

from libs.shared.src.dtos.grading.asset_bundle_dto import AssetBundleDTO
from libs.shared.src.dtos.grading.quality_score_dto import QualityScoreDTO


class ScoreIndicatorQualityPort(Protocol):
    """Driving Port for ScoreIndicatorQualityQuery"""

    def execute(self, asset: str, bundle: AssetBundleDTO | None) -> QualityScoreDTO:
        """Score one asset's indicator coverage / reliability"""
        ...
