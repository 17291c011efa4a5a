"""BTC Correlation Strength"""

from enum import Enum


class CorrelationStrength(Enum):
    """Strength of the rolling BTC correlation"""

    WEAK = "weak"  # |avg| <= 0.4
    MODERATE = "moderate"  # 0.4 < |avg| <= 0.7
    STRONG = "strong"  # |avg| > 0.7
