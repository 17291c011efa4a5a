import pytest

HOUR_MS = 3_600_000
START_MS = 1_700_000_000_000


def _history(volume_last: float) -> list[dict]:
    candles = []
    for i in range(21):
        close = 100.0 + i * 0.1
        candles.append(
            {
                "time": START_MS + i * HOUR_MS,
                "open": close,
                "high": close + 0.5,
                "low": close - 0.5,
                "close": close,
                "volume": 1000.0,
            }
        )
    candles[-1]["volume"] = volume_last
    return candles


@pytest.fixture
def make_bundle():
    """建立完整 bundle (20 項指標皆有資料，預設偏多且一致)"""

    def build(
        rsi14: float = 50.0,
        m60: float = 0.3,
        btc_60m_pct: float = 0.1,
        volume_last: float = 2000.0,
    ) -> dict:
        return {
            "history": _history(volume_last),
            "indicators": {
                "price": 100.0,
                "rsi14": rsi14,
                "ema20": 98.0,
                "ema50": 95.0,
                "macd": {"macd": 0.5, "signal": 0.3, "histogram": 0.02},
                "bollinger_bands": {"upper": 103.0, "middle": 100.0, "lower": 97.0},
                "adx": 30.0,
                "aroon": {"up": 80.0, "down": 20.0},
                "support_levels": [95.0],
                "resistance_levels": [110.0],
                "fibonacci": {
                    "nearest_level": "0.618",
                    "is_near_level": True,
                    "signal": "buy",
                    "strength": 70,
                    "direction": "bullish",
                },
            },
            "trend_alignment": {
                "daily_trend": "uptrend",
                "h4_aligned": True,
                "h1_aligned": True,
                "aligned": True,
                "strength": 0.8,
            },
            "external": {
                "futures": {
                    "funding_rate": {"current": 0.0001},
                    "open_interest": {"current": 1_000_000.0},
                    "long_short_ratio": {"long_pct": 52.0, "short_pct": 48.0},
                    "liquidation": {"liquidation_distance": 8.0},
                    "premium_index": {"premium_pct": 0.0001},
                    "btc_correlation": {
                        "correlation_24h": 0.3,
                        "correlation_7d": 0.3,
                        "correlation_30d": 0.3,
                        "strength": "weak",
                        "impact_multiplier": 0.45,
                        "last_update": 0.0,
                    },
                },
                "volume_analysis": {
                    "net_delta": 500.0,
                    "buy_pressure": 0.6,
                    "sell_pressure": 0.4,
                    "volume_confirmation": {"is_valid": True, "strength": "strong"},
                },
                "order_book": {"imbalance": 0.2},
                "spot_futures_divergence": 0.2,
            },
            "momentum": {"m5": 0.2, "m15": 0.25, "m60": m60},
            "btc_60m_pct": btc_60m_pct,
        }

    return build
