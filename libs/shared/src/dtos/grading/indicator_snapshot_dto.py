"""Indicator Snapshot

Precomputed technical indicators for one asset. Every field is optional;
absence degrades coverage, it never raises.
"""

from typing import Literal, NotRequired, TypedDict


class MacdDTO(TypedDict, total=False):
    macd: float
    signal: float
    histogram: float


class BollingerBandsDTO(TypedDict, total=False):
    upper: float
    middle: float
    lower: float


class AroonDTO(TypedDict, total=False):
    up: float
    down: float


class StochasticDTO(TypedDict, total=False):
    k: float
    d: float


class FibonacciDTO(TypedDict, total=False):
    """Fibonacci retracement proximity"""

    nearest_level: str | None
    is_near_level: bool
    signal: Literal["buy", "sell", "neutral"] | None
    strength: float  # 0-100
    direction: Literal["uptrend", "downtrend", "neutral"]


class MarketRegimeDTO(TypedDict, total=False):
    regime: str  # trending / ranging / choppy / neutral
    volatility: str  # high / normal / low


class IndicatorSnapshotDTO(TypedDict, total=False):
    """Technical indicator snapshot"""

    price: float
    rsi14: float
    rsi7: float
    ema8: float
    ema20: float
    ema50: float
    vwap: float
    macd: MacdDTO
    bollinger_bands: BollingerBandsDTO
    adx: float
    plus_di: float
    minus_di: float
    aroon: AroonDTO
    stochastic: StochasticDTO
    williams_r: float
    atr: float
    atr_percent: float
    obv: float
    volume: float  # Latest candle volume
    support_levels: list[float]
    resistance_levels: list[float]
    fibonacci: FibonacciDTO
    market_regime: MarketRegimeDTO
    rsi_divergence: NotRequired[Literal["bullish", "bearish"] | None]
    macd_divergence: NotRequired[Literal["bullish", "bearish"] | None]
    volume_price_divergence: float  # -1..1, negative = price up on falling volume
    price_change_24h: float  # %
    volume_change_24h: float  # %
