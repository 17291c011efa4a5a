"""取得 BTC 相關性 Query

Owns the two process-wide TTL caches: BTC spot price (30 s) and the
per-asset correlation record (5 min). Any fetch or compute failure
degrades to the neutral record, which is cached for the normal TTL.
"""

import logging
import time
from typing import Callable

from injector import inject

from libs.grading.src.domain.services.btc_correlation_calculator import (
    build_correlation_record,
    is_btc_move_significant,
    neutral_record,
    predict_alt_impact,
)
from libs.grading.src.ports.btc_market_data_provider_port import (
    BtcMarketDataProviderPort,
)
from libs.grading.src.ports.get_btc_correlation_port import GetBtcCorrelationPort
from libs.shared.src.constants.correlation_settings import (
    BTC_HISTORY_POINTS,
    BTC_SYMBOL,
)
from libs.shared.src.domain.services.ttl_cache import TtlCache
from libs.shared.src.dtos.grading.btc_move_impact_dto import BtcMoveImpactDTO
from libs.shared.src.dtos.grading.candle_dto import CandleDTO
from libs.shared.src.dtos.grading.correlation_record_dto import CorrelationRecordDTO
from libs.shared.src.dtos.grading.scoring_config_dto import ScoringConfigDTO


class GetBtcCorrelationQuery(GetBtcCorrelationPort):
    """BTC 相關性引擎"""

    @inject
    def __init__(
        self,
        market_data: BtcMarketDataProviderPort,
        config: ScoringConfigDTO,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._logger = logging.getLogger(self.__class__.__name__)
        self._market_data = market_data
        self._btc_price_cache: TtlCache[str, float] = TtlCache(
            config["btc_price_ttl_seconds"], clock
        )
        self._correlation_cache: TtlCache[str, CorrelationRecordDTO] = TtlCache(
            config["correlation_ttl_seconds"], clock
        )

    async def execute(
        self, asset: str, history: list[CandleDTO] | None = None
    ) -> CorrelationRecordDTO:
        """計算單一標的與 BTC 的相關性

        Args:
            asset: 標的代號
            history: 標的 1h K 線 (None 時由 market data port 取得)
        """
        cached = self._correlation_cache.get(asset)
        if cached is not None:
            return cached

        try:
            if history is None:
                history = await self._market_data.get_hourly_history(
                    asset, BTC_HISTORY_POINTS
                )
            btc_history = await self._market_data.get_hourly_history(
                BTC_SYMBOL, BTC_HISTORY_POINTS
            )
            record = build_correlation_record(history, btc_history)
        except Exception as e:
            self._logger.warning(f"BTC correlation failed for {asset}: {e}")
            record = neutral_record()

        self._correlation_cache.set(asset, record)
        return record

    async def execute_batch(
        self, histories: dict[str, list[CandleDTO]]
    ) -> dict[str, CorrelationRecordDTO]:
        """批次計算 (BTC 歷史只抓一次，無歷史的標的略過)"""
        btc_history: list[CandleDTO] = []
        try:
            btc_history = await self._market_data.get_hourly_history(
                BTC_SYMBOL, BTC_HISTORY_POINTS
            )
        except Exception as e:
            self._logger.warning(f"BTC history unavailable for batch: {e}")

        results: dict[str, CorrelationRecordDTO] = {}
        for asset, history in histories.items():
            if not history:
                continue
            cached = self._correlation_cache.get(asset)
            if cached is not None:
                results[asset] = cached
                continue
            try:
                record = build_correlation_record(history, btc_history)
            except Exception as e:
                self._logger.warning(f"BTC correlation failed for {asset}: {e}")
                record = neutral_record()
            self._correlation_cache.set(asset, record)
            results[asset] = record

        return results

    async def get_btc_price(self) -> float:
        """BTC 現價 (抓取失敗時回傳最後快取值，皆無則 0)"""
        cached = self._btc_price_cache.get(BTC_SYMBOL)
        if cached is not None:
            return cached
        try:
            price = await self._market_data.get_btc_price()
        except Exception as e:
            self._logger.warning(f"BTC price fetch failed: {e}")
            return self._btc_price_cache.get_stale(BTC_SYMBOL) or 0.0
        self._btc_price_cache.set(BTC_SYMBOL, price)
        return price

    async def assess_btc_move(
        self, asset: str, btc_move_pct: float
    ) -> BtcMoveImpactDTO:
        """評估 BTC 波動對標的之影響

        Returns:
            BtcMoveImpactDTO: predicted_move_pct / significant
        """
        record = await self.execute(asset)
        return {
            "asset": asset,
            "btc_move_pct": btc_move_pct,
            "predicted_move_pct": predict_alt_impact(record, btc_move_pct),
            "significant": is_btc_move_significant(record, btc_move_pct),
        }
