"""BTC 市場資料 Fake Adapter"""

from libs.grading.src.ports.btc_market_data_provider_port import (
    BtcMarketDataProviderPort,
)
from libs.shared.src.dtos.grading.candle_dto import CandleDTO
from libs.shared.src.errors.market_data_unavailable_error import (
    MarketDataUnavailableError,
)


class BtcMarketDataFakeAdapter(BtcMarketDataProviderPort):
    """BTC 市場資料 Mock 實作 (記錄呼叫次數)"""

    def __init__(self) -> None:
        self._btc_price: float = 50_000.0
        self._histories: dict[str, list[CandleDTO]] = {}
        self._failing = False
        self.price_calls = 0
        self.history_calls = 0

    async def get_btc_price(self) -> float:
        self.price_calls += 1
        if self._failing:
            raise MarketDataUnavailableError("BTC", "fake outage")
        return self._btc_price

    async def get_hourly_history(self, asset: str, limit: int) -> list[CandleDTO]:
        self.history_calls += 1
        if self._failing:
            raise MarketDataUnavailableError(asset, "fake outage")
        if asset not in self._histories:
            raise MarketDataUnavailableError(asset, "no history")
        return self._histories[asset][-limit:]

    # Setters for testing
    def set_btc_price(self, price: float) -> None:
        self._btc_price = price

    def set_history(self, asset: str, candles: list[CandleDTO]) -> None:
        self._histories[asset] = candles

    def set_failing(self, failing: bool) -> None:
        self._failing = failing
