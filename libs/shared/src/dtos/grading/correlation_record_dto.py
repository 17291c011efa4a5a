"""BTC Correlation Record"""

from typing import TypedDict


class CorrelationRecordDTO(TypedDict):
    """Rolling correlation bundle of one asset against BTC

    Cached per asset for the correlation TTL.
    """

    correlation_24h: float
    """24h rolling correlation (-1 to 1)"""

    correlation_7d: float
    """7d rolling correlation (-1 to 1)"""

    correlation_30d: float
    """30d rolling correlation (-1 to 1)"""

    strength: str
    """weak / moderate / strong"""

    impact_multiplier: float
    """Expected asset move per 1% BTC move (0.1 to 3)"""

    last_update: float
    """Epoch seconds"""
