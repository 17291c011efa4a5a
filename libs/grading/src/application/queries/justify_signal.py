"""訊號佐證 Query

實作 JustifySignalPort Driving Port
"""

import logging

from injector import inject

from libs.grading.src.domain.services.evidence_ledger import build_justification
from libs.grading.src.ports.justify_signal_port import JustifySignalPort
from libs.shared.src.dtos.grading.asset_bundle_dto import AssetBundleDTO
from libs.shared.src.dtos.grading.justification_dto import JustificationResultDTO
from libs.shared.src.enums.trade_direction import TradeDirection


class JustifySignalQuery(JustifySignalPort):
    """加權證據帳本"""

    @inject
    def __init__(self) -> None:
        self._logger = logging.getLogger(self.__class__.__name__)

    def execute(
        self, direction: TradeDirection, bundle: AssetBundleDTO | None
    ) -> JustificationResultDTO:
        result = build_justification(direction, bundle)
        self._logger.debug(
            f"{direction.value}: severity={result['conflict_severity']} "
            f"confidence={result['adjusted_confidence']:.2f}"
        )
        return result
