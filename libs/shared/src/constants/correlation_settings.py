"""BTC Correlation Engine Parameters"""

CORRELATION_PERIOD_24H = 24  # Hourly returns
CORRELATION_PERIOD_7D = 168
CORRELATION_PERIOD_30D = 720
BTC_SYMBOL = "BTC"  # Asset id of the BTC series / bundle
BTC_HISTORY_POINTS = 720  # Hourly candles fetched per asset / for BTC
MIN_ALIGNED_SAMPLES = 24  # Paired hourly closes required
HOUR_MS = 3_600_000

STRONG_CORRELATION = 0.7
MODERATE_CORRELATION = 0.4
IMPACT_SCALE = 1.5  # impact = |corr7d| * 1.5
IMPACT_MIN = 0.1
IMPACT_MAX = 3.0

SIGNIFICANT_BTC_MOVE_PCT = 2.0  # Default threshold for a significant BTC move
