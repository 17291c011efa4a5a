"""Hourly / Minute Candle"""

from typing import TypedDict


class CandleDTO(TypedDict):
    """OHLCV candle, ordered oldest → newest inside a history list"""

    time: int  # Epoch milliseconds
    open: float
    high: float
    low: float
    close: float
    volume: float
