"""BTC 市場資料提供者 Driven Port"""

from typing import Protocol

from libs.shared.src.dtos.grading.candle_dto import CandleDTO


class BtcMarketDataProviderPort(Protocol):
    """Hourly history and BTC spot price

    Implementations raise MarketDataUnavailableError when data cannot be
    produced; callers degrade to neutral values.
    """

    async def get_btc_price(self) -> float:
        """取得 BTC 現價"""
        ...

    async def get_hourly_history(self, asset: str, limit: int) -> list[CandleDTO]:
        """取得最近 limit 根 1h K 線 (舊 → 新)"""
        ...
