"""Multi-timeframe Trend Alignment"""

from typing import Literal, TypedDict


class TrendAlignmentDTO(TypedDict, total=False):
    """Daily trend and its agreement with the 4h / 1h timeframes"""

    daily_trend: Literal["uptrend", "downtrend", "neutral"]
    h4_aligned: bool
    h1_aligned: bool
    aligned: bool
    strength: float  # 0-1
