"""Trade Direction

Candidate action direction evaluated by the evidence ledger
"""

from enum import Enum


class TradeDirection(Enum):
    """Long-like or short-like candidate action"""

    BUY = "buy"
    SELL = "sell"
