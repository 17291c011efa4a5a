"""
AlignFuturesTimeframesPort - Driving Port

實作者: AlignFuturesTimeframesQuery
"""

from typing import Protocol

from libs.shared.src.dtos.grading.asset_bundle_dto import AssetBundleDTO
from libs.shared.src.dtos.grading.futures_alignment_dto import FuturesAlignmentDTO


class AlignFuturesTimeframesPort(Protocol):
    """Driving Port for AlignFuturesTimeframesQuery"""

    def execute(self, asset: str, bundle: AssetBundleDTO | None) -> FuturesAlignmentDTO:
        ...
