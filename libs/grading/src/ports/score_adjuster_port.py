"""Score Adjuster Strategy Port

Extension hook folded into the indicator quality score after the base
checks. Failures are logged by the scorer and treated as no-op.
"""

from typing import Protocol

from libs.shared.src.dtos.grading.adjustment_result_dto import AdjustmentResultDTO
from libs.shared.src.dtos.grading.asset_bundle_dto import AssetBundleDTO


class ScoreAdjusterPort(Protocol):
    """Score adjuster strategy"""

    name: str
    counts_as_indicator_always: bool  # True: +1 coverage even with no bonus

    def adjust(self, asset: str, bundle: AssetBundleDTO) -> AdjustmentResultDTO:
        ...
