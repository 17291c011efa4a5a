"""Evidence Ledger Indicator Weights

Reliability weight per indicator finding (higher = more reliable)
"""

# Evidence categories (context weighting is applied per category)
CATEGORY_TREND_MOMENTUM = "Trend Momentum"
CATEGORY_OVERBOUGHT_OVERSOLD = "Overbought/Oversold"
CATEGORY_PRICE_POSITION = "Price Position"
CATEGORY_VOLUME = "Volume Confirmation"
CATEGORY_SUPPORT_RESISTANCE = "Support/Resistance"
CATEGORY_STRUCTURE = "Structure & Regime"
CATEGORY_DIVERGENCE = "Divergence"
CATEGORY_EXTERNAL = "External"

INDICATOR_WEIGHTS: dict[str, float] = {
    "MACD_DIVERGENCE": 3.0,  # Most reliable reversal warning
    "RSI_DIVERGENCE": 2.8,
    "TRIPLE_OVERBOUGHT": 2.5,
    "TRIPLE_OVERSOLD": 2.5,
    "VOLUME_DIVERGENCE": 2.2,
    "DUAL_OVERBOUGHT": 2.0,
    "DUAL_OVERSOLD": 2.0,
    "OBV_DIVERGENCE": 1.8,
    "AROON_CONTRADICTION": 1.8,
    "ADX_STRONG": 1.8,
    "SUPPORT_RESISTANCE_PROXIMITY": 1.6,
    "EMA_ALIGNMENT": 1.5,
    "FUNDING_RATE_EXTREME": 1.5,
    "MACD_CROSSOVER": 1.2,
    "PLUS_DI_DOMINANCE": 1.2,
    "MACD_HISTOGRAM": 0.6,
    "PRICE_ABOVE_EMA20": 0.5,
    "PRICE_ABOVE_EMA8": 0.4,
    "PRICE_ABOVE_VWAP": 0.4,
    "PRICE_ABOVE_BB_MIDDLE": 0.4,
}

# Regime / volatility modulation
TRENDING_TREND_MULT = 1.3
TRENDING_OSCILLATOR_MULT = 0.7
HIGH_VOLATILITY_DIVERGENCE_MULT = 0.8

# Adjusted confidence factors
CONFLICT_FACTOR_CRITICAL = 0.70
CONFLICT_FACTOR_HIGH = 0.85
CONFLICT_FACTOR_MEDIUM = 0.95
CONFLICT_FACTOR_AROON_MEDIUM = 0.70  # Aroon/EMA contradiction at MEDIUM severity
REDUNDANCY_DISCOUNT = 0.1  # Max -10% at 100% redundancy
