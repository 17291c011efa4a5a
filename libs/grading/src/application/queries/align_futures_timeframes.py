"""多時間框架期貨對齊 Query

實作 AlignFuturesTimeframesPort Driving Port
"""

import logging

from injector import inject

from libs.grading.src.domain.services.futures_timeframe_aligner import align_timeframes
from libs.grading.src.domain.services.indicator_features import futures_of
from libs.grading.src.ports.align_futures_timeframes_port import (
    AlignFuturesTimeframesPort,
)
from libs.shared.src.dtos.grading.asset_bundle_dto import AssetBundleDTO
from libs.shared.src.dtos.grading.futures_alignment_dto import FuturesAlignmentDTO


class AlignFuturesTimeframesQuery(AlignFuturesTimeframesPort):
    """期貨多時間框架對齊"""

    @inject
    def __init__(self) -> None:
        self._logger = logging.getLogger(self.__class__.__name__)

    def execute(self, asset: str, bundle: AssetBundleDTO | None) -> FuturesAlignmentDTO:
        timeframes = futures_of(bundle).get("timeframes")
        if not timeframes:
            self._logger.debug(f"{asset}: no futures timeframes")
        return align_timeframes(asset, timeframes)
