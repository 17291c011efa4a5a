"""JSON Bundle File Adapter: 本地 JSON 檔案讀取實作"""

import json
import logging
from pathlib import Path

from libs.grading.src.ports.asset_bundle_provider_port import AssetBundleProviderPort
from libs.grading.src.ports.btc_market_data_provider_port import (
    BtcMarketDataProviderPort,
)
from libs.shared.src.constants.correlation_settings import BTC_SYMBOL
from libs.shared.src.dtos.grading.asset_bundle_dto import AssetBundleMap
from libs.shared.src.dtos.grading.candle_dto import CandleDTO
from libs.shared.src.errors.invalid_bundle_file_error import InvalidBundleFileError
from libs.shared.src.errors.market_data_unavailable_error import (
    MarketDataUnavailableError,
)


class JsonBundleFileAdapter(AssetBundleProviderPort, BtcMarketDataProviderPort):
    """本地 bundle 檔案

    格式: {"BTC": {...bundle}, "ETH": {...bundle}, ...}
    The last loaded mapping also serves BTC price / hourly history, so the
    correlation engine can run offline against the same file.
    """

    def __init__(self) -> None:
        self._logger = logging.getLogger(self.__class__.__name__)
        self._bundles: AssetBundleMap = {}

    def load_bundles(self, path: Path) -> AssetBundleMap:
        """讀取 bundle 檔案

        Args:
            path: JSON 檔案路徑

        Returns:
            asset → bundle

        Raises:
            InvalidBundleFileError: 檔案不存在或格式錯誤
        """
        path = Path(path)
        if not path.exists():
            raise InvalidBundleFileError(path, "file not found")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidBundleFileError(path, f"invalid JSON ({e.msg})") from e

        if not isinstance(data, dict):
            raise InvalidBundleFileError(path, "top-level value must be an object")

        self._bundles = {
            str(asset): bundle if isinstance(bundle, dict) else {}
            for asset, bundle in data.items()
        }
        self._logger.info(f"Loaded {len(self._bundles)} bundles from {path}")
        return self._bundles

    async def get_btc_price(self) -> float:
        history = await self.get_hourly_history(BTC_SYMBOL, 1)
        return float(history[-1]["close"])

    async def get_hourly_history(self, asset: str, limit: int) -> list[CandleDTO]:
        history = (self._bundles.get(asset) or {}).get("history") or []
        if not history:
            raise MarketDataUnavailableError(asset, "no history in bundle file")
        return history[-limit:]
