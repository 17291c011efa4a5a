"""Score Adjustment Result"""

from typing import TypedDict


class AdjustmentResultDTO(TypedDict):
    """Output of one ScoreAdjuster strategy"""

    bonus: float
    penalty: float
    major_mismatches: int
    notes: list[str]
    critical: bool  # Hard-risk flag (e.g. liquidation trap)
