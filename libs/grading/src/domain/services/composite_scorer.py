"""Composite ranking score

Blends quality, coverage, momentum, trend alignment and external-data
completeness into [0, 1], applies the contextual penalties / rewards and
derives the aggressive percent used as the primary sort key.
"""

from libs.shared.src.constants.quality_thresholds import SCORE_NORMALIZER
from libs.shared.src.domain.services.numeric_guards import clamp, finite_or_none
from libs.shared.src.dtos.grading.asset_bundle_dto import AssetBundleDTO
from libs.shared.src.dtos.grading.scoring_config_dto import ScoringConfigDTO
from libs.shared.src.dtos.grading.trend_alignment_dto import TrendAlignmentDTO
from libs.grading.src.domain.services.indicator_features import (
    external_of,
    futures_of,
    indicators_of,
    trend_of,
    volume_analysis_of,
)

MOMENTUM_CLAMP_PCT = 5.0
EXTERNAL_SOURCES_FULL = 5
CHOPPY_ATR_PCT = 1.0
CHOPPY_ADX = 20


def clamp_momentum(value: float | None) -> float:
    """Clamp a percent move to ±5 (missing → 0)"""
    value = finite_or_none(value)
    if value is None:
        return 0.0
    return clamp(value, -MOMENTUM_CLAMP_PCT, MOMENTUM_CLAMP_PCT)


def momentum_blend(
    m5: float | None, m15: float | None, m60: float | None
) -> tuple[float, float]:
    """Returns (blended percent, blend mapped [-5, 5] → [0, 1])"""
    momo_pct = (
        0.5 * clamp_momentum(m5) + 0.3 * clamp_momentum(m15) + 0.2 * clamp_momentum(m60)
    )
    return momo_pct, (momo_pct + MOMENTUM_CLAMP_PCT) / (2 * MOMENTUM_CLAMP_PCT)


def alignment_score(trend: TrendAlignmentDTO) -> float:
    strength = clamp(finite_or_none(trend.get("strength")) or 0.0, 0.0, 1.0)
    if trend.get("aligned"):
        return 0.7 * strength + 0.3
    return 0.3 * strength


def external_data_score(bundle: AssetBundleDTO | None) -> float:
    """Presence count of external sources / 5, capped at 1"""
    external = external_of(bundle)
    futures = futures_of(bundle)
    present = [
        bool(futures.get("funding_rate") or futures.get("open_interest")),
        bool(futures.get("btc_correlation")),
        bool(external.get("volume_analysis")),
        bool(external.get("order_book")),
        finite_or_none(external.get("spot_futures_divergence")) is not None,
    ]
    return min(1.0, sum(present) / EXTERNAL_SOURCES_FULL)


def base_composite(
    score: float,
    coverage_pct: float,
    momo_norm: float,
    align: float,
    external: float,
    config: ScoringConfigDTO,
) -> float:
    """加權合成分數 (未調整)"""
    return (
        config["rank_w_quality"] * clamp(score / SCORE_NORMALIZER, 0.0, 1.0)
        + config["rank_w_coverage"] * clamp(coverage_pct / 100, 0.0, 1.0)
        + config["rank_w_momo"] * momo_norm
        + config["rank_w_align"] * align
        + config["rank_w_ext"] * external
    )


def _unit(config: ScoringConfigDTO, key: str) -> float:
    return clamp(config[key], 0.0, 1.0)


def _atr_percent(bundle: AssetBundleDTO | None) -> float:
    indicators = indicators_of(bundle)
    explicit = finite_or_none(indicators.get("atr_percent"))
    if explicit is not None:
        return explicit
    atr = finite_or_none(indicators.get("atr"))
    price = finite_or_none(indicators.get("price"))
    if atr is not None and price is not None and price > 0:
        return atr / price * 100
    return 0.0


def _pressures(bundle: AssetBundleDTO | None) -> tuple[float, float] | None:
    volume = volume_analysis_of(bundle)
    buy = finite_or_none(volume.get("buy_pressure"))
    sell = finite_or_none(volume.get("sell_pressure"))
    if buy is None or sell is None:
        return None
    return buy, sell


def apply_contextual_adjustments(
    composite: float,
    bundle: AssetBundleDTO | None,
    momo_pct: float,
    m60_clamped: float,
    config: ScoringConfigDTO,
) -> tuple[float, list[str]]:
    """依序套用情境懲罰與獎勵

    Args:
        composite: 未調整的合成分數
        bundle: 標的資料
        momo_pct: 加權動能 (%)
        m60_clamped: 60 分鐘動能 (±5 clamp 後)
        config: 評分設定

    Returns:
        tuple: (調整後分數 0-1, 套用紀錄)
    """
    applied: list[str] = []
    trend = trend_of(bundle)
    daily = trend.get("daily_trend")

    def penalize(amount: float, tag: str) -> None:
        nonlocal composite
        composite = max(0.0, composite - amount)
        applied.append(tag)

    mismatch = _unit(config, "rank_pen_trend_mismatch")
    if daily == "uptrend" and momo_pct < 0:
        penalize(mismatch, f"trend_mismatch_up_momo_neg_{mismatch:g}")
    elif daily == "downtrend" and momo_pct > 0:
        penalize(mismatch, f"trend_mismatch_down_momo_pos_{mismatch:g}")

    if trend and trend.get("aligned") is False:
        cap = _unit(config, "rank_pen_not_aligned_cap")
        composite = min(composite, cap)
        applied.append(f"not_aligned_cap_{cap:g}")

    per_tf = _unit(config, "rank_pen_intraday_per_tf")
    if trend.get("h4_aligned") is False:
        penalize(per_tf, f"h4_misaligned_{per_tf:g}")
    if trend.get("h1_aligned") is False:
        penalize(per_tf, f"h1_misaligned_{per_tf:g}")

    atr_pct = _atr_percent(bundle)
    adx = finite_or_none(indicators_of(bundle).get("adx"))
    if 0 < atr_pct < CHOPPY_ATR_PCT and adx is not None and 0 < adx < CHOPPY_ADX:
        choppy = _unit(config, "rank_pen_choppy")
        penalize(choppy, f"choppy_atr{atr_pct:.2f}_adx{adx:.1f}_{choppy:g}")

    pressures = _pressures(bundle)
    disagree = _unit(config, "rank_pen_vol_momo_disagree")
    if pressures is not None:
        buy, sell = pressures
        if buy > sell and momo_pct < 0:
            penalize(disagree, f"vol_momo_disagree_buy>sell_momo<0_{disagree:g}")
        elif sell > buy and momo_pct > 0:
            penalize(disagree, f"vol_momo_disagree_sell>buy_momo>0_{disagree:g}")

    composite = clamp(composite, 0.0, 1.0)

    def reward(amount: float, tag: str) -> None:
        nonlocal composite
        composite = min(1.0, composite + amount)
        applied.append(tag)

    momo_trend = _unit(config, "aggr_reward_momo_trend")
    if (daily == "uptrend" and m60_clamped > 0) or (daily == "downtrend" and m60_clamped < 0):
        reward(momo_trend, f"reward_momo_trend_{momo_trend:g}")

    if trend.get("aligned"):
        align = _unit(config, "aggr_reward_align")
        reward(align, f"reward_align_{align:g}")

    if pressures is not None:
        buy, sell = pressures
        if (buy > sell and momo_pct > 0) or (sell > buy and momo_pct < 0):
            confirm = _unit(config, "aggr_reward_vol_confirm")
            reward(confirm, f"reward_vol_confirm_{confirm:g}")

    return composite, applied


def aggressive_percent(
    score: float,
    composite: float,
    confidence_pct: float,
    m60_clamped: float,
    config: ScoringConfigDTO,
) -> float:
    """Primary sort key, 0-100"""
    raw = (
        score * config["aggr_w_score"]
        + clamp(composite * 100, 0.0, 100.0) * config["aggr_w_comp"]
        + clamp(confidence_pct, 0.0, 100.0) * config["aggr_w_conf"]
        + m60_clamped * config["aggr_momo60_mult"] * config["aggr_w_momo60"]
    )
    denominator = config["aggr_max"] or 120
    return clamp(raw / denominator * 100, 0.0, 100.0)
