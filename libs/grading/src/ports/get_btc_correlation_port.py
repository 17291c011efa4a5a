"""
GetBtcCorrelationPort - Driving Port

實作者: GetBtcCorrelationQuery
"""

from typing import Protocol

from libs.shared.src.dtos.grading.btc_move_impact_dto import BtcMoveImpactDTO
from libs.shared.src.dtos.grading.candle_dto import CandleDTO
from libs.shared.src.dtos.grading.correlation_record_dto import CorrelationRecordDTO


class GetBtcCorrelationPort(Protocol):
    """Driving Port for GetBtcCorrelationQuery"""

    async def execute(
        self, asset: str, history: list[CandleDTO] | None = None
    ) -> CorrelationRecordDTO:
        """Correlation record of one asset (cached 5 min)"""
        ...

    async def execute_batch(
        self, histories: dict[str, list[CandleDTO]]
    ) -> dict[str, CorrelationRecordDTO]:
        """Correlation records sharing a single BTC history fetch"""
        ...

    async def get_btc_price(self) -> float:
        """BTC spot price (cached 30 s)"""
        ...

    async def assess_btc_move(
        self, asset: str, btc_move_pct: float
    ) -> BtcMoveImpactDTO:
        """Predicted asset move for a BTC move, with a significance flag"""
        ...
