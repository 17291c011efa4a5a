"""Market Data Unavailable Error"""

from libs.shared.src.errors.domain_error import DomainError


class MarketDataUnavailableError(DomainError):
    """Raised by market-data adapters when price or history cannot be produced

    The correlation engine converts this into a neutral record.
    """

    def __init__(self, asset: str, reason: str | None = None) -> None:
        message = f"Market data unavailable for {asset}"
        if reason:
            message += f": {reason}"
        super().__init__(message, code="MARKET_DATA_UNAVAILABLE")
        self.asset = asset
        self.reason = reason
