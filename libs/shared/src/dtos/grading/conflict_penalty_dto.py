"""Conflict Penalty Result"""

from typing import TypedDict


class ConflictPenaltyDTO(TypedDict):
    """Summed structural-conflict penalty of one bundle"""

    penalty: float
    reasons: list[str]
    major_mismatches: int
