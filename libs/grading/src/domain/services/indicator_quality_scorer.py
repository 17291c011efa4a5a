"""Indicator quality scorer

Base coverage / reliability checks of one asset bundle. Every check
validates its numeric domain first; invalid values become weaknesses and
are not counted. RSI is scored for stability: the neutral 40-60 band is
the most reliable reading, the extremes the least.
"""

from libs.shared.src.constants.quality_thresholds import (
    QUALITY_LABEL_BUCKETS,
    QUALITY_LABEL_TOP_BUCKET,
    QUALITY_LABEL_TOP_FALLBACK,
)
from libs.shared.src.domain.services.numeric_guards import finite_or_none
from libs.shared.src.dtos.grading.asset_bundle_dto import AssetBundleDTO
from libs.shared.src.enums.quality_label import QualityLabel
from libs.grading.src.domain.services.indicator_features import (
    external_of,
    futures_of,
    indicators_of,
    volume_analysis_of,
)

NO_INDICATORS = "No indicators available"
VOLUME_LOOKBACK = 20


class QualityTally:
    """Running score / coverage / findings of one scoring pass"""

    def __init__(self) -> None:
        self.score = 0.0
        self.indicators_count = 0
        self.strengths: list[str] = []
        self.weaknesses: list[str] = []

    def count(self) -> None:
        self.indicators_count += 1

    def award(
        self,
        points: float,
        strength: str | None = None,
        weakness: str | None = None,
    ) -> None:
        self.score += points
        if strength:
            self.strengths.append(strength)
        if weakness:
            self.weaknesses.append(weakness)


def _present(value: object) -> bool:
    return value is not None


def has_any_indicator(bundle: AssetBundleDTO | None) -> bool:
    """是否有任何可評估的欄位"""
    if not bundle:
        return False
    indicators = indicators_of(bundle)
    external = external_of(bundle)
    return any(
        [
            any(_present(value) for value in indicators.values()),
            bool(bundle.get("trend_alignment")),
            bool(external.get("order_book")),
            bool(external.get("futures")),
            bool(external.get("volume_analysis")),
            _present(external.get("spot_futures_divergence")),
        ]
    )


def _check_btc_correlation(bundle: AssetBundleDTO, tally: QualityTally) -> None:
    record = futures_of(bundle).get("btc_correlation") or {}
    corr_7d = finite_or_none(record.get("correlation_7d"))
    impact = finite_or_none(record.get("impact_multiplier"))
    if corr_7d is None or impact is None:
        return
    tally.count()
    if abs(corr_7d) >= 0.7 and 0.3 < impact < 2.5:
        tally.award(5, strength=f"BTC correlation strong (β≈{impact:.2f}, ρ7d={corr_7d:.2f})")
    elif abs(corr_7d) >= 0.5:
        tally.award(3, strength=f"BTC correlation moderate (ρ7d={corr_7d:.2f})")
    else:
        tally.award(0, weakness="BTC correlation weak/unstable")


def _check_rsi(bundle: AssetBundleDTO, tally: QualityTally) -> None:
    raw = indicators_of(bundle).get("rsi14")
    if raw is None:
        return
    rsi = finite_or_none(raw)
    if rsi is None or not 0 <= rsi <= 100:
        tally.award(0, weakness=f"RSI invalid value ({raw}) - must be 0-100")
        return
    tally.count()
    # 40-60 最穩定，極端區反轉風險最高
    if 40 <= rsi <= 60:
        tally.award(18, strength=f"RSI in optimal neutral zone ({rsi:.1f} - stable, reliable)")
    elif 30 <= rsi < 40 or 60 < rsi <= 70:
        tally.award(15, strength=f"RSI in neutral zone ({rsi:.1f} - stable)")
    elif 20 <= rsi < 30 or 70 < rsi <= 80:
        side = "overbought" if rsi > 70 else "oversold"
        tally.award(12, weakness=f"RSI {side} ({rsi:.1f} - high reversal risk)")
    else:
        side = "overbought" if rsi > 80 else "oversold"
        tally.award(8, weakness=f"RSI extreme {side} ({rsi:.1f} - very high reversal risk)")


def _check_macd(bundle: AssetBundleDTO, tally: QualityTally) -> None:
    macd = indicators_of(bundle).get("macd") or {}
    if "histogram" not in macd or macd.get("histogram") is None:
        return
    raw = macd["histogram"]
    histogram = finite_or_none(raw)
    if histogram is None:
        tally.award(0, weakness=f"MACD histogram invalid value ({raw})")
        return
    tally.count()
    magnitude = abs(histogram)
    if magnitude > 0.01:
        tally.award(20, strength=f"MACD strong momentum ({histogram:.4f})")
    elif magnitude > 0.005:
        tally.award(15, strength=f"MACD moderate momentum ({histogram:.4f})")
    elif magnitude > 0.001:
        tally.award(12, strength=f"MACD weak momentum ({histogram:.4f})")
    elif magnitude > 0:
        tally.award(8, weakness=f"MACD very weak momentum ({histogram:.4f})")
    else:
        tally.award(5, weakness="MACD histogram is zero (no momentum)")


def _check_bollinger(bundle: AssetBundleDTO, tally: QualityTally) -> None:
    indicators = indicators_of(bundle)
    bands = indicators.get("bollinger_bands") or {}
    price = finite_or_none(indicators.get("price"))
    upper = finite_or_none(bands.get("upper"))
    lower = finite_or_none(bands.get("lower"))
    middle = finite_or_none(bands.get("middle"))
    if not bands or price is None or price <= 0:
        return
    if upper is None or lower is None or middle is None or middle <= 0 or upper <= lower:
        tally.award(
            0,
            weakness=f"BB invalid values (upper: {bands.get('upper')}, middle: {bands.get('middle')}, lower: {bands.get('lower')})",
        )
        return
    tally.count()
    width = (upper - lower) / middle
    if width > 0.05:
        tally.award(15, strength=f"BB high volatility ({width * 100:.2f}%)")
    elif width > 0.02:
        tally.award(10, strength=f"BB moderate volatility ({width * 100:.2f}%)")
    else:
        tally.award(5, weakness=f"BB low volatility ({width * 100:.2f}%)")


def _check_ema_alignment(bundle: AssetBundleDTO, tally: QualityTally) -> None:
    indicators = indicators_of(bundle)
    raw = (indicators.get("price"), indicators.get("ema20"), indicators.get("ema50"))
    if any(value is None for value in raw):
        return
    price, ema20, ema50 = (finite_or_none(value) for value in raw)
    if price is None or ema20 is None or ema50 is None or min(price, ema20, ema50) <= 0:
        tally.award(
            0,
            weakness=f"EMA alignment: Invalid values (price: {raw[0]}, ema20: {raw[1]}, ema50: {raw[2]})",
        )
        return
    tally.count()
    if price > ema20 > ema50:
        tally.award(15, strength="EMA alignment: Price > EMA20 > EMA50 (uptrend)")
    elif price < ema20 < ema50:
        tally.award(15, strength="EMA alignment: Price < EMA20 < EMA50 (downtrend)")
    else:
        tally.award(5, weakness="EMA alignment: Mixed signals")


def _check_adx(bundle: AssetBundleDTO, tally: QualityTally) -> None:
    raw = indicators_of(bundle).get("adx")
    if raw is None:
        return
    adx = finite_or_none(raw)
    if adx is None or not 0 < adx <= 100:
        tally.award(0, weakness=f"ADX invalid value ({raw}) - must be > 0 and <= 100")
        return
    tally.count()
    if adx > 25:
        tally.award(15, strength=f"ADX strong trend ({adx:.1f})")
    elif adx > 20:
        tally.award(10, strength=f"ADX moderate trend ({adx:.1f})")
    else:
        tally.award(5, weakness=f"ADX weak trend ({adx:.1f})")


def _check_aroon(bundle: AssetBundleDTO, tally: QualityTally) -> None:
    aroon = indicators_of(bundle).get("aroon") or {}
    up = finite_or_none(aroon.get("up"))
    down = finite_or_none(aroon.get("down"))
    if up is None or down is None:
        return
    tally.count()
    diff = abs(up - down)
    if diff > 50:
        tally.award(10, strength=f"Aroon strong direction ({diff:.0f} diff)")
    elif diff > 30:
        tally.award(7, strength=f"Aroon moderate direction ({diff:.0f} diff)")
    else:
        tally.award(3, weakness=f"Aroon weak direction ({diff:.0f} diff)")


def _check_trend_alignment(bundle: AssetBundleDTO, tally: QualityTally) -> None:
    trend = bundle.get("trend_alignment")
    if not trend:
        return
    aligned = bool(trend.get("aligned"))
    raw = trend.get("strength")
    strength = 0.0 if raw is None else finite_or_none(raw)
    if strength is None or not 0 <= strength <= 1:
        tally.award(0, weakness=f"Trend alignment: Invalid strength value ({raw}) - must be 0-1")
        return
    tally.count()
    if aligned and strength > 0.7:
        tally.award(
            15, strength=f"Trend alignment: All timeframes aligned ({strength * 100:.0f}% strength)"
        )
    elif aligned:
        tally.award(10, strength=f"Trend alignment: Aligned ({strength * 100:.0f}% strength)")
    else:
        tally.award(5, weakness=f"Trend alignment: Not aligned ({strength * 100:.0f}% strength)")


def _check_volume(bundle: AssetBundleDTO, tally: QualityTally) -> None:
    history = bundle.get("history") or []
    if not history:
        return
    current = finite_or_none(indicators_of(bundle).get("volume"))
    if current is None:
        current = finite_or_none(history[-1].get("volume"))
    if current is None or current <= 0:
        return
    window = history[-VOLUME_LOOKBACK:]
    volumes = [finite_or_none(candle.get("volume")) or 0.0 for candle in window]
    average = sum(volumes) / len(window)
    if average <= 0:
        return
    tally.count()
    ratio = current / average
    if ratio > 1.5:
        tally.award(10, strength=f"Volume: High ({ratio * 100:.0f}% of average)")
    elif ratio > 1.2:
        tally.award(7, strength=f"Volume: Above average ({ratio * 100:.0f}% of average)")
    else:
        tally.award(3, weakness=f"Volume: Below average ({ratio * 100:.0f}% of average)")


def _check_order_book(bundle: AssetBundleDTO, tally: QualityTally) -> None:
    order_book = external_of(bundle).get("order_book") or {}
    if order_book.get("imbalance") is None:
        return
    raw = order_book["imbalance"]
    imbalance = finite_or_none(raw)
    if imbalance is None:
        tally.award(0, weakness=f"Order book imbalance invalid value ({raw})")
        return
    tally.count()
    if abs(imbalance) > 0.1:
        tally.award(10, strength=f"Order book imbalance: {imbalance * 100:.2f}%")
    elif abs(imbalance) > 0.05:
        tally.award(7, strength=f"Order book imbalance: {imbalance * 100:.2f}%")
    else:
        tally.award(3, weakness=f"Order book: Balanced ({imbalance * 100:.2f}%)")


def _check_support_resistance(bundle: AssetBundleDTO, tally: QualityTally) -> None:
    indicators = indicators_of(bundle)
    supports = indicators.get("support_levels")
    resistances = indicators.get("resistance_levels")
    if not isinstance(supports, list) and not isinstance(resistances, list):
        return
    tally.count()
    support_count = len(supports) if isinstance(supports, list) else 0
    resistance_count = len(resistances) if isinstance(resistances, list) else 0
    total = support_count + resistance_count
    if support_count > 0 and resistance_count > 0:
        tally.award(
            10,
            strength=f"Support/Resistance: {support_count} support, {resistance_count} resistance levels",
        )
    elif total > 0:
        tally.award(
            5,
            strength=f"Support/Resistance: {total} level(s) ({support_count} support, {resistance_count} resistance)",
        )
    else:
        tally.award(0, weakness="Support/Resistance: No levels identified")


def _check_fibonacci(bundle: AssetBundleDTO, tally: QualityTally) -> None:
    fib = indicators_of(bundle).get("fibonacci")
    if not fib:
        return
    tally.count()
    level = fib.get("nearest_level")
    signal = fib.get("signal")
    strength = finite_or_none(fib.get("strength")) or 0.0
    if fib.get("is_near_level") and level:
        if signal and strength > 60:
            tally.award(
                15,
                strength=f"Fibonacci: Near {level} level ({signal.upper()} signal, Strength: {strength:g}/100)",
            )
        elif signal and strength > 40:
            tally.award(
                12,
                strength=f"Fibonacci: Near {level} level ({signal.upper()} signal, Strength: {strength:g}/100)",
            )
        else:
            tally.award(8, strength=f"Fibonacci: Near {level} level")
    elif level:
        tally.award(5, strength=f"Fibonacci: {level} level identified")
    else:
        tally.award(2, weakness="Fibonacci: No clear levels")

    direction = fib.get("direction")
    if direction and direction != "neutral" and (fib.get("is_near_level") or level):
        tally.award(2, strength=f"Fibonacci: {direction} context")


def _check_futures(bundle: AssetBundleDTO, tally: QualityTally) -> None:
    """Funding / OI / long-short / liquidation / premium, counted per field"""
    futures = futures_of(bundle)
    if not futures:
        return

    funding = finite_or_none((futures.get("funding_rate") or {}).get("current"))
    if funding is not None:
        tally.count()
        if abs(funding) < 0.0002:
            tally.award(6, strength="Funding: near-neutral (low bias)")
        elif abs(funding) < 0.0006:
            tally.award(4, strength="Funding: mild (manageable bias)")
        else:
            tally.award(1, weakness="Funding: elevated (potential bias)")

    open_interest = finite_or_none((futures.get("open_interest") or {}).get("current"))
    if open_interest is not None:
        tally.count()
        if open_interest > 0:
            tally.award(4, strength="Open Interest: healthy")
        else:
            tally.award(0, weakness="Open Interest: low/unknown")

    ratio = futures.get("long_short_ratio") or {}
    long_pct = finite_or_none(ratio.get("long_pct"))
    short_pct = finite_or_none(ratio.get("short_pct"))
    if long_pct is not None and short_pct is not None:
        tally.count()
        imbalance = abs(long_pct - short_pct)
        if imbalance <= 10:
            tally.award(5, strength="L/S ratio: balanced (low crowding)")
        elif imbalance <= 20:
            tally.award(3, strength="L/S ratio: mildly imbalanced")
        else:
            tally.award(0, weakness="L/S ratio: crowded side (risk of squeeze)")

    distance = finite_or_none((futures.get("liquidation") or {}).get("liquidation_distance"))
    if distance is not None:
        tally.count()
        if distance >= 5:
            tally.award(3, strength="Liquidation: distance comfortable")
        elif distance >= 2:
            tally.award(1, strength="Liquidation: moderate distance")
        else:
            tally.award(0, weakness="Liquidation: too close (hunt risk)")

    premium = finite_or_none((futures.get("premium_index") or {}).get("premium_pct"))
    if premium is not None:
        tally.count()
        if abs(premium) < 0.0005:
            tally.award(2, strength="Premium: tight spot-future")
        elif abs(premium) > 0.002:
            tally.award(0, weakness="Premium: wide (arb distortions)")


def _check_bonuses(bundle: AssetBundleDTO, tally: QualityTally) -> None:
    """Spot-futures divergence, liquidation reinforcement, CVD confirmation"""
    divergence = finite_or_none(external_of(bundle).get("spot_futures_divergence"))
    if divergence is not None:
        tally.count()
        if abs(divergence) < 0.5:
            tally.award(3, strength="Spot-Futures divergence low")
        elif abs(divergence) > 1.5:
            tally.award(0, weakness="Spot-Futures divergence high")

    distance = finite_or_none(
        (futures_of(bundle).get("liquidation") or {}).get("liquidation_distance")
    )
    if distance is not None:
        if distance >= 5:
            tally.award(2)
        elif distance < 2:
            tally.award(0, weakness="Near liquidation cluster (<2%)")

    confirmation = volume_analysis_of(bundle).get("volume_confirmation")
    if confirmation:
        tally.count()
        if confirmation.get("is_valid"):
            label = confirmation.get("strength") or "moderate"
            tally.award(5 if label == "strong" else 3, strength=f"CVD confirms move ({label})")
        else:
            tally.award(0, weakness="CVD does not confirm move")


BASE_CHECKS = (
    _check_btc_correlation,
    _check_rsi,
    _check_macd,
    _check_bollinger,
    _check_ema_alignment,
    _check_adx,
    _check_aroon,
    _check_trend_alignment,
    _check_volume,
    _check_order_book,
    _check_support_resistance,
    _check_fibonacci,
    _check_futures,
    _check_bonuses,
)


def evaluate_base_checks(bundle: AssetBundleDTO) -> QualityTally:
    """執行所有基礎檢查"""
    tally = QualityTally()
    for check in BASE_CHECKS:
        check(bundle, tally)
    return tally


def resolve_quality_label(coverage_pct: float, score: float) -> QualityLabel:
    """(coverage %, score) → quality label

    Higher coverage unlocks higher labels at the same score.
    """
    for upper_bound, thresholds, fallback in QUALITY_LABEL_BUCKETS:
        if coverage_pct < upper_bound:
            return _first_met(thresholds, score, fallback)
    return _first_met(QUALITY_LABEL_TOP_BUCKET, score, QUALITY_LABEL_TOP_FALLBACK)


def _first_met(
    thresholds: list[tuple[float, QualityLabel]], score: float, fallback: QualityLabel
) -> QualityLabel:
    for minimum, label in thresholds:
        if score >= minimum:
            return label
    return fallback
