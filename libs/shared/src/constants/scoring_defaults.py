"""Scoring Configuration Defaults

Every tunable weight / penalty / threshold of the grading engine.
Key = config field, value = (environment variable, default)
"""

SCORING_DEFAULTS: dict[str, tuple[str, float]] = {
    # Indicator quality
    "indicators_total": ("INDICATORS_TOTAL", 20),  # Coverage denominator
    "influence_major_mismatch_penalty": ("INFLUENCE_MAJOR_MISMATCH_PENALTY", 0.5),
    # Conflict penalties
    "pen_trend_ema_aroon": ("PEN_TREND_EMA_AROON", 40),
    "pen_vol_delta": ("PEN_VOL_DELTA", 25),
    "pen_delta_contra": ("PEN_DELTA_CONTRA", 20),
    "pen_regime_choppy": ("PEN_REGIME_CHOPPY", 20),
    "pen_sideways_novol": ("PEN_SIDEWAYS_NOVOL", 15),
    "pen_liq_trap": ("PEN_LIQ_TRAP", 25),
    "pen_liq_bounce": ("PEN_LIQ_BOUNCE", 15),
    "pen_rsi_no_momo": ("PEN_RSI_NO_MOMO", 10),
    "pen_btc_mismatch": ("PEN_BTC_MISMATCH", 20),
    "pen_btc_shock": ("PEN_BTC_SHOCK", 25),
    # Composite weights
    "rank_w_quality": ("RANK_W_QUALITY", 0.35),
    "rank_w_coverage": ("RANK_W_COVERAGE", 0.15),
    "rank_w_momo": ("RANK_W_MOMO", 0.25),
    "rank_w_align": ("RANK_W_ALIGN", 0.20),
    "rank_w_ext": ("RANK_W_EXT", 0.05),
    # Contextual ranking penalties
    "rank_pen_trend_mismatch": ("RANK_PEN_TREND_MISMATCH", 0.03),
    "rank_pen_not_aligned_cap": ("RANK_PEN_NOT_ALIGNED_CAP", 0.85),
    "rank_pen_intraday_per_tf": ("RANK_PEN_INTRADAY_PER_TF", 0.02),
    "rank_pen_choppy": ("RANK_PEN_CHOPPY", 0.03),
    "rank_pen_vol_momo_disagree": ("RANK_PEN_VOL_MOMO_DISAGREE", 0.02),
    # Contextual rewards
    "aggr_reward_momo_trend": ("AGGR_REWARD_MOMO_TREND", 0.03),
    "aggr_reward_align": ("AGGR_REWARD_ALIGN", 0.03),
    "aggr_reward_vol_confirm": ("AGGR_REWARD_VOL_CONFIRM", 0.02),
    # Aggressive score
    "aggr_w_score": ("AGGR_W_SCORE", 0.25),
    "aggr_w_comp": ("AGGR_W_COMP", 0.25),
    "aggr_w_conf": ("AGGR_W_CONF", 0.20),
    "aggr_w_momo60": ("AGGR_W_MOMO60", 0.30),
    "aggr_momo60_mult": ("AGGR_MOMO60_MULT", 15),
    "aggr_max": ("AGGR_MAX", 120),
    # Gates
    "quality_min_coverage": ("AGGRV2_QUALITY_MIN_COVERAGE", 70),  # % coverage to admit "poor"
    "btc_abs_max": ("AGGRV2_BTC_ABS_MAX", 0.8),  # Max |BTC 60m move| %
    # Caches (seconds)
    "btc_price_ttl_seconds": ("BTC_PRICE_TTL_SECONDS", 30),
    "correlation_ttl_seconds": ("CORRELATION_TTL_SECONDS", 300),
    # Fan-out
    "rank_max_concurrency": ("RANK_MAX_CONCURRENCY", 8),
}

# Fields that must stay integral after parsing
INTEGER_FIELDS = frozenset({"indicators_total", "rank_max_concurrency"})
