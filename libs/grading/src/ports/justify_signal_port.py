"""
JustifySignalPort - Driving Port

實作者: JustifySignalQuery
"""

from typing import Protocol

from libs.shared.src.dtos.grading.asset_bundle_dto import AssetBundleDTO
from libs.shared.src.dtos.grading.justification_dto import JustificationResultDTO
from libs.shared.src.enums.trade_direction import TradeDirection


class JustifySignalPort(Protocol):
    """Driving Port for JustifySignalQuery"""

    def execute(
        self, direction: TradeDirection, bundle: AssetBundleDTO | None
    ) -> JustificationResultDTO:
        """Weighted evidence for / against a candidate direction"""
        ...
