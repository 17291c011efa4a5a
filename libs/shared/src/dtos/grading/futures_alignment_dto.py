"""Multi-Timeframe Futures Alignment"""

from typing import TypedDict


class TimeframeAnalysisDTO(TypedDict):
    timeframe: str
    trend: str  # bullish / bearish / neutral
    signal: str  # long / short / neutral


class FuturesAlignmentDTO(TypedDict):
    """Cross-timeframe agreement of funding / OI signals"""

    asset: str
    timeframes: list[TimeframeAnalysisDTO]
    alignment_score: float  # 0-100
    consensus_signal: str  # long / short / neutral
    confidence: float  # 0-1
    strengths: list[str]
    weaknesses: list[str]
