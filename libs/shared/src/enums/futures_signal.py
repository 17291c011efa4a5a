"""Futures Signal / Bias Enums"""

from enum import Enum


class FuturesSignal(Enum):
    """Per-timeframe directional signal"""

    LONG = "long"
    SHORT = "short"
    NEUTRAL = "neutral"


class FuturesBias(Enum):
    """Per-timeframe positioning bias"""

    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"
