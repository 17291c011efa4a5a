"""
RankAssetsPort - Driving Port

實作者: RankAssetsQuery
"""

from typing import Protocol

from libs.shared.src.dtos.grading.asset_bundle_dto import AssetBundleMap
from libs.shared.src.dtos.grading.ranking_dto import RankingResultDTO


class RankAssetsPort(Protocol):
    """Driving Port for RankAssetsQuery"""

    async def execute(
        self,
        bundles: AssetBundleMap,
        allow_list: list[str] | None = None,
        top_n: int | None = None,
    ) -> RankingResultDTO:
        """Score, gate and deterministically sort a pool of assets"""
        ...
