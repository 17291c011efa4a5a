"""Indicator Quality Score"""

from typing import TypedDict


class QualityScoreDTO(TypedDict):
    """Coverage / reliability score of one asset's indicator snapshot"""

    asset: str
    score: float
    indicators_count: int  # Coverage numerator
    strengths: list[str]
    weaknesses: list[str]
    quality: str  # QualityLabel value
