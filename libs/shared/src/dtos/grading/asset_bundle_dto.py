"""Asset Bundle

Everything the engine knows about one asset for one evaluation.
"""

from typing import TypedDict

from libs.shared.src.dtos.grading.candle_dto import CandleDTO
from libs.shared.src.dtos.grading.external_context_dto import ExternalContextDTO
from libs.shared.src.dtos.grading.indicator_snapshot_dto import IndicatorSnapshotDTO
from libs.shared.src.dtos.grading.trend_alignment_dto import TrendAlignmentDTO


class MomentumDTO(TypedDict, total=False):
    """Explicit percent price changes (override history-derived momentum)"""

    m5: float
    m15: float
    m60: float


class AssetBundleDTO(TypedDict, total=False):
    history: list[CandleDTO]
    indicators: IndicatorSnapshotDTO
    trend_alignment: TrendAlignmentDTO
    external: ExternalContextDTO
    momentum: MomentumDTO
    btc_60m_pct: float  # Asset-specific BTC 60-minute move proxy (%)


# asset id → bundle
AssetBundleMap = dict[str, AssetBundleDTO]
