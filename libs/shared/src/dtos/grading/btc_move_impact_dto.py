"""BTC Move Impact"""

from typing import TypedDict


class BtcMoveImpactDTO(TypedDict):
    """Expected reaction of one asset to a BTC move"""

    asset: str
    btc_move_pct: float
    """BTC move being assessed (%)"""

    predicted_move_pct: float
    """btc_move_pct × impact multiplier"""

    significant: bool
    """Strong/moderate coupling and a large enough BTC move"""
