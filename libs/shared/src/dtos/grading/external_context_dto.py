"""External Market Context

Futures, volume-analysis and order-book data supplied next to the
indicator snapshot.
"""

from typing import TypedDict

from libs.shared.src.dtos.grading.correlation_record_dto import CorrelationRecordDTO


class FundingRateDTO(TypedDict, total=False):
    current: float  # Rate per 8h period (0.0001 = 0.01%)
    rate_24h: float
    rate_7d: float
    trend: str  # rising / falling / neutral


class OpenInterestDTO(TypedDict, total=False):
    current: float  # USD
    change_24h: float  # %
    trend: str  # rising / falling / neutral


class LongShortRatioDTO(TypedDict, total=False):
    long_pct: float  # 0-100
    short_pct: float  # 0-100


class LiquidationDTO(TypedDict, total=False):
    liquidation_distance: float  # % to nearest liquidation cluster


class PremiumIndexDTO(TypedDict, total=False):
    premium_pct: float


class WhaleActivityDTO(TypedDict, total=False):
    spoofing_detected: bool
    wash_trading_detected: bool


class FuturesTimeframeDTO(TypedDict, total=False):
    """Funding / OI snapshot for one timeframe"""

    funding: FundingRateDTO
    open_interest: OpenInterestDTO
    price_change_24h: float  # %


class FuturesContextDTO(TypedDict, total=False):
    funding_rate: FundingRateDTO
    open_interest: OpenInterestDTO
    long_short_ratio: LongShortRatioDTO
    liquidation: LiquidationDTO
    premium_index: PremiumIndexDTO
    btc_correlation: CorrelationRecordDTO
    whale_activity: WhaleActivityDTO
    timeframes: dict[str, FuturesTimeframeDTO]  # 5m / 15m / 1h / 4h / 1d


class VolumeConfirmationDTO(TypedDict, total=False):
    is_valid: bool
    strength: str  # strong / moderate / weak


class VolumeAnalysisDTO(TypedDict, total=False):
    """Footprint / delta / CVD bundle"""

    footprint: dict
    net_delta: float
    buy_pressure: float
    sell_pressure: float
    volume_confirmation: VolumeConfirmationDTO
    cvd_trend: str


class OrderBookDTO(TypedDict, total=False):
    imbalance: float  # -1..1


class ExternalContextDTO(TypedDict, total=False):
    futures: FuturesContextDTO
    volume_analysis: VolumeAnalysisDTO
    order_book: OrderBookDTO
    spot_futures_divergence: float  # %
