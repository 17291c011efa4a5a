"""Indicator Quality Label

Categorical reliability rating derived from (coverage %, score)
"""

from enum import Enum


class QualityLabel(Enum):
    """Quality label, ordered from worst to best"""

    VERY_POOR = "very poor"
    POOR = "poor"
    FAIR = "fair"
    GOOD = "good"
    VERY_GOOD = "very good"
    EXCELLENT = "excellent"

    @property
    def rank(self) -> int:
        """Position in the worst → best ordering (0 = very poor)"""
        return list(QualityLabel).index(self)

    @classmethod
    def from_value(cls, value: str) -> "QualityLabel":
        for label in cls:
            if label.value == value:
                return label
        raise ValueError(f"Unknown quality label: {value}")
