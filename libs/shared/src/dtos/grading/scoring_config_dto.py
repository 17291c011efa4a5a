"""Scoring Configuration

Single validated configuration struct, built once by load_scoring_config().
Defaults live in libs/shared/src/constants/scoring_defaults.py.
"""

from typing import TypedDict


class ScoringConfigDTO(TypedDict):
    # Indicator quality
    indicators_total: int
    influence_major_mismatch_penalty: float
    # Conflict penalties
    pen_trend_ema_aroon: float
    pen_vol_delta: float
    pen_delta_contra: float
    pen_regime_choppy: float
    pen_sideways_novol: float
    pen_liq_trap: float
    pen_liq_bounce: float
    pen_rsi_no_momo: float
    pen_btc_mismatch: float
    pen_btc_shock: float
    # Composite weights
    rank_w_quality: float
    rank_w_coverage: float
    rank_w_momo: float
    rank_w_align: float
    rank_w_ext: float
    # Contextual penalties
    rank_pen_trend_mismatch: float
    rank_pen_not_aligned_cap: float
    rank_pen_intraday_per_tf: float
    rank_pen_choppy: float
    rank_pen_vol_momo_disagree: float
    # Contextual rewards
    aggr_reward_momo_trend: float
    aggr_reward_align: float
    aggr_reward_vol_confirm: float
    # Aggressive score
    aggr_w_score: float
    aggr_w_comp: float
    aggr_w_conf: float
    aggr_w_momo60: float
    aggr_momo60_mult: float
    aggr_max: float
    # Gates
    quality_min_coverage: float
    btc_abs_max: float
    # Caches
    btc_price_ttl_seconds: float
    correlation_ttl_seconds: float
    # Fan-out
    rank_max_concurrency: int
