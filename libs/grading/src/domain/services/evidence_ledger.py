"""Weighted evidence ledger

Quality-weighted justification of a candidate direction. Each check is
supporting (adds its weight to the candidate side), opposing (listed on
the other side and recorded as a minor contradiction, never scored), a
warning (adds to the opposing side) or silent (data missing).

Adjusted confidence:
    quality_ratio × conflict_factor(severity) × (1 - redundancy × 0.1)
"""

from libs.shared.src.constants.indicator_weights import (
    CATEGORY_DIVERGENCE,
    CATEGORY_EXTERNAL,
    CATEGORY_OVERBOUGHT_OVERSOLD,
    CATEGORY_PRICE_POSITION,
    CATEGORY_STRUCTURE,
    CATEGORY_SUPPORT_RESISTANCE,
    CATEGORY_TREND_MOMENTUM,
    CATEGORY_VOLUME,
    CONFLICT_FACTOR_AROON_MEDIUM,
    CONFLICT_FACTOR_CRITICAL,
    CONFLICT_FACTOR_HIGH,
    CONFLICT_FACTOR_MEDIUM,
    HIGH_VOLATILITY_DIVERGENCE_MULT,
    INDICATOR_WEIGHTS,
    REDUNDANCY_DISCOUNT,
    TRENDING_OSCILLATOR_MULT,
    TRENDING_TREND_MULT,
)
from libs.shared.src.domain.services.numeric_guards import clamp, finite_or_none
from libs.shared.src.dtos.grading.asset_bundle_dto import AssetBundleDTO
from libs.shared.src.dtos.grading.indicator_snapshot_dto import IndicatorSnapshotDTO
from libs.shared.src.dtos.grading.justification_dto import (
    ContradictionDTO,
    EvidenceItemDTO,
    JustificationResultDTO,
)
from libs.shared.src.enums.conflict_severity import ConflictSeverity
from libs.shared.src.enums.trade_direction import TradeDirection
from libs.grading.src.domain.services.indicator_features import (
    aroon_pair,
    ema_structure,
    funding_rate,
    indicators_of,
)

AROON_STRONG = 70
SR_PROXIMITY_PCT = 2.0
FUNDING_EXTREME_PCT = 0.1
OBV_VOLUME_CHANGE_PCT = 20
VOLUME_DIVERGENCE = 0.5

AROON_EMA_CONTRADICTION = "aroon_ema_contradiction"


def zeroed_justification(direction: TradeDirection) -> JustificationResultDTO:
    return {
        "direction": direction.value,
        "bullish_score": 0.0,
        "bearish_score": 0.0,
        "bullish_count": 0,
        "bearish_count": 0,
        "unique_bullish_count": 0,
        "unique_bearish_count": 0,
        "bullish_indicators": [],
        "bearish_indicators": [],
        "contradictions": [],
        "redundant_groups": [],
        "quality_ratio": 0.0,
        "conflict_severity": ConflictSeverity.LOW.name,
        "conflict_score": 0.0,
        "total_contradictions": 0,
        "base_confidence": 0.0,
        "adjusted_confidence": 0.0,
        "redundancy_penalty": 0.0,
    }


def context_weight(base_weight: float, category: str, regime: str, volatility: str) -> float:
    """Regime / volatility modulation of a base weight"""
    if regime == "trending":
        if category == CATEGORY_TREND_MOMENTUM:
            return base_weight * TRENDING_TREND_MULT
        if category == CATEGORY_OVERBOUGHT_OVERSOLD:
            return base_weight * TRENDING_OSCILLATOR_MULT
    if regime in ("ranging", "choppy"):
        if category == CATEGORY_OVERBOUGHT_OVERSOLD:
            return base_weight * TRENDING_TREND_MULT
        if category == CATEGORY_TREND_MOMENTUM:
            return base_weight * TRENDING_OSCILLATOR_MULT
    if volatility == "high" and category == CATEGORY_DIVERGENCE:
        return base_weight * HIGH_VOLATILITY_DIVERGENCE_MULT
    return base_weight


def detect_contradictions(
    indicators: IndicatorSnapshotDTO, direction: TradeDirection
) -> list[ContradictionDTO]:
    """偵測與候選方向衝突的關鍵訊號 (critical / high)"""
    contradictions: list[ContradictionDTO] = []
    is_buy = direction is TradeDirection.BUY
    price = finite_or_none(indicators.get("price"))

    # 1) Aroon vs EMA structure
    aroon = aroon_pair(indicators)
    structure = ema_structure(indicators)
    if aroon is not None and structure is not None and price:
        up, down = aroon
        if is_buy and structure == "up" and down > up and down > AROON_STRONG:
            contradictions.append(
                _contradiction(
                    AROON_EMA_CONTRADICTION,
                    ConflictSeverity.CRITICAL,
                    f"EMA shows uptrend but Aroon shows strong downtrend (Down: {down:.2f}% > Up: {up:.2f}%)",
                )
            )
        if not is_buy and structure != "up" and up > down and up > AROON_STRONG:
            contradictions.append(
                _contradiction(
                    AROON_EMA_CONTRADICTION,
                    ConflictSeverity.CRITICAL,
                    f"EMA shows downtrend but Aroon shows strong uptrend (Up: {up:.2f}% > Down: {down:.2f}%)",
                )
            )

    # 2) Dual / triple overbought-oversold
    extreme = _oscillator_extreme(indicators, direction)
    if extreme is not None:
        kind, description = extreme
        severity = ConflictSeverity.CRITICAL if kind.startswith("triple") else ConflictSeverity.HIGH
        contradictions.append(_contradiction(kind, severity, description))

    # 3) MACD divergence
    divergence = indicators.get("macd_divergence")
    if is_buy and divergence == "bearish":
        contradictions.append(
            _contradiction(
                "macd_divergence",
                ConflictSeverity.CRITICAL,
                "MACD Bearish Divergence: Price rising but momentum declining (strong reversal warning)",
            )
        )
    if not is_buy and divergence == "bullish":
        contradictions.append(
            _contradiction(
                "macd_divergence",
                ConflictSeverity.CRITICAL,
                "MACD Bullish Divergence: Price falling but momentum rising (strong reversal warning)",
            )
        )

    return contradictions


def conflict_severity(contradictions: list[ContradictionDTO]) -> ConflictSeverity:
    critical = sum(1 for c in contradictions if c["severity"] == "critical")
    high = sum(1 for c in contradictions if c["severity"] == "high")
    if critical >= 2 or (critical >= 1 and high >= 2):
        return ConflictSeverity.CRITICAL
    if (critical == 1 and high >= 1) or high >= 2:
        return ConflictSeverity.HIGH
    if critical == 1 or high == 1:
        return ConflictSeverity.MEDIUM
    return ConflictSeverity.LOW


def adjusted_confidence(
    base: float,
    severity: ConflictSeverity,
    redundancy: float,
    has_aroon_contradiction: bool,
) -> float:
    """Conflict- and redundancy-adjusted confidence, clamped [0, 1]"""
    if has_aroon_contradiction and severity is ConflictSeverity.MEDIUM:
        factor = CONFLICT_FACTOR_AROON_MEDIUM
    elif severity is ConflictSeverity.CRITICAL:
        factor = CONFLICT_FACTOR_CRITICAL
    elif severity is ConflictSeverity.HIGH:
        factor = CONFLICT_FACTOR_HIGH
    elif severity is ConflictSeverity.MEDIUM:
        factor = CONFLICT_FACTOR_MEDIUM
    else:
        factor = 1.0
    return clamp(base * factor * (1 - redundancy * REDUNDANCY_DISCOUNT), 0.0, 1.0)


class _Ledger:
    """Per-call accumulation of both sides"""

    def __init__(self, direction: TradeDirection, regime: str, volatility: str) -> None:
        self.is_buy = direction is TradeDirection.BUY
        self.label = direction.value.upper()
        self.regime = regime
        self.volatility = volatility
        self.bullish: list[EvidenceItemDTO] = []
        self.bearish: list[EvidenceItemDTO] = []
        self.bullish_score = 0.0
        self.bearish_score = 0.0
        self.opposing: list[ContradictionDTO] = []
        self.redundant_groups: list[str] = []

    def item(
        self, key: str, name: str, category: str, impact: str, description: str
    ) -> EvidenceItemDTO:
        weight = context_weight(INDICATOR_WEIGHTS[key], category, self.regime, self.volatility)
        return {
            "name": name,
            "weight": weight,
            "category": category,
            "impact": impact,
            "description": description,
        }

    def add(self, item: EvidenceItemDTO, bullish: bool, scored: bool = True) -> None:
        if bullish:
            self.bullish.append(item)
            if scored:
                self.bullish_score += item["weight"]
        else:
            self.bearish.append(item)
            if scored:
                self.bearish_score += item["weight"]

    def directional(
        self,
        key: str,
        name: str,
        impact: str,
        bullish: bool,
        description: str,
        category: str = CATEGORY_TREND_MOMENTUM,
    ) -> None:
        """A check pointing bullish or bearish: supports or opposes the candidate"""
        if bullish == self.is_buy:
            self.add(self.item(key, name, category, impact, description), bullish)
            return
        item = self.item(key, name, category, impact, _contradicts(description, self.label))
        self.add(item, bullish, scored=False)
        self.opposing.append(
            _contradiction(
                f"{key.lower()}_opposes",
                ConflictSeverity.LOW,
                f"{name} opposes {self.label}",
                severity_label="minor",
            )
        )

    def warning(
        self, key: str, name: str, category: str, impact: str, description: str
    ) -> None:
        """A reversal warning: scored on the side opposing the candidate"""
        self.add(self.item(key, name, category, impact, description), not self.is_buy)

    def supporting(
        self, key: str, name: str, category: str, impact: str, description: str
    ) -> None:
        self.add(self.item(key, name, category, impact, description), self.is_buy)


def _contradicts(description: str, label: str) -> str:
    head, _, tail = description.rpartition(" (")
    if not head:
        return f"{description} (CONTRADICTS {label})"
    return f"{head} (CONTRADICTS {label} - {tail}"


def _contradiction(
    kind: str,
    severity: ConflictSeverity,
    description: str,
    severity_label: str | None = None,
) -> ContradictionDTO:
    return {
        "type": kind,
        "severity": severity_label or severity.name.lower(),
        "description": description,
        "severity_score": severity.value,
    }


def _oscillator_extreme(
    indicators: IndicatorSnapshotDTO, direction: TradeDirection
) -> tuple[str, str] | None:
    """("triple_overbought" | "dual_overbought" | ..., description) against the candidate"""
    stoch_k = finite_or_none((indicators.get("stochastic") or {}).get("k"))
    williams = finite_or_none(indicators.get("williams_r"))
    rsi = finite_or_none(indicators.get("rsi14"))
    if stoch_k is None or williams is None:
        return None
    if direction is TradeDirection.BUY:
        if stoch_k > 80 and williams > -20:
            if rsi is not None and rsi > 70:
                return (
                    "triple_overbought",
                    f"TRIPLE overbought: RSI {rsi:.2f} + Stochastic K {stoch_k:.2f} + Williams %R {williams:.2f} (extremely high reversal risk)",
                )
            return (
                "dual_overbought",
                f"Dual overbought: Stochastic K {stoch_k:.2f} + Williams %R {williams:.2f} (high reversal risk)",
            )
        return None
    if stoch_k < 20 and williams < -80:
        if rsi is not None and rsi < 30:
            return (
                "triple_oversold",
                f"TRIPLE oversold: RSI {rsi:.2f} + Stochastic K {stoch_k:.2f} + Williams %R {williams:.2f} (extremely high reversal risk)",
            )
        return (
            "dual_oversold",
            f"Dual oversold: Stochastic K {stoch_k:.2f} + Williams %R {williams:.2f} (high reversal risk)",
        )
    return None


def _record_momentum(ledger: _Ledger, indicators: IndicatorSnapshotDTO) -> None:
    macd = indicators.get("macd") or {}
    histogram = finite_or_none(macd.get("histogram"))
    if histogram is not None and histogram != 0:
        bullish = histogram > 0
        ledger.directional(
            "MACD_HISTOGRAM",
            "MACD Histogram",
            "low",
            bullish,
            f"MACD histogram {histogram:+.4f} ({'bullish' if bullish else 'bearish'} momentum)",
        )

    line = finite_or_none(macd.get("macd"))
    signal = finite_or_none(macd.get("signal"))
    if line is not None and signal is not None and line != signal:
        bullish = line > signal
        relation = "above" if bullish else "below"
        ledger.directional(
            "MACD_CROSSOVER",
            "MACD Crossover",
            "medium",
            bullish,
            f"MACD line {line:.4f} {relation} Signal {signal:.4f} ({'bullish' if bullish else 'bearish'} crossover)",
        )


def _record_price_position(ledger: _Ledger, indicators: IndicatorSnapshotDTO) -> None:
    """EMA8 / EMA20 / VWAP / BB middle: one redundancy group"""
    price = finite_or_none(indicators.get("price"))
    if price is None or price <= 0:
        return
    references = (
        ("PRICE_ABOVE_EMA8", "EMA8", indicators.get("ema8")),
        ("PRICE_ABOVE_EMA20", "EMA20", indicators.get("ema20")),
        ("PRICE_ABOVE_VWAP", "VWAP", indicators.get("vwap")),
        ("PRICE_ABOVE_BB_MIDDLE", "BB Middle", (indicators.get("bollinger_bands") or {}).get("middle")),
    )
    members: list[EvidenceItemDTO] = []
    for key, label, raw in references:
        level = finite_or_none(raw)
        if level is None:
            continue
        if ledger.is_buy and price > level:
            members.append(
                ledger.item(key, f"Price > {label}", CATEGORY_PRICE_POSITION, "low", f"Price above {label} ${level:.2f}")
            )
        elif not ledger.is_buy and price < level:
            members.append(
                ledger.item(key, f"Price < {label}", CATEGORY_PRICE_POSITION, "low", f"Price below {label} ${level:.2f}")
            )
    if not members:
        return

    best = max(members, key=lambda m: m["weight"])
    redundant = len(members) > 1
    for member in members:
        if redundant:
            member["redundancy_group"] = CATEGORY_PRICE_POSITION
            member["is_redundant"] = member is not best
        ledger.add(member, ledger.is_buy, scored=member is best)
    if redundant:
        ledger.redundant_groups.append(CATEGORY_PRICE_POSITION)


def _record_trend(ledger: _Ledger, indicators: IndicatorSnapshotDTO) -> None:
    structure = ema_structure(indicators)
    if structure == "up":
        ledger.directional(
            "EMA_ALIGNMENT", "EMA Alignment", "high", True,
            "EMA alignment: Price > EMA20 > EMA50 (uptrend structure)",
        )
    elif structure == "down":
        ledger.directional(
            "EMA_ALIGNMENT", "EMA Alignment", "high", False,
            "EMA alignment: Price < EMA20 < EMA50 (downtrend structure)",
        )

    adx = finite_or_none(indicators.get("adx"))
    if adx is not None and adx > 25:
        ledger.supporting(
            "ADX_STRONG", "ADX Strong Trend", CATEGORY_TREND_MOMENTUM, "high",
            f"ADX {adx:.2f} (strong trend)",
        )

    plus_di = finite_or_none(indicators.get("plus_di"))
    minus_di = finite_or_none(indicators.get("minus_di"))
    if plus_di is not None and minus_di is not None and plus_di != minus_di:
        if plus_di > minus_di:
            ledger.directional(
                "PLUS_DI_DOMINANCE", "+DI > -DI", "medium", True,
                f"+DI {plus_di:.2f} > -DI {minus_di:.2f} (bullish trend)",
            )
        else:
            ledger.directional(
                "PLUS_DI_DOMINANCE", "-DI > +DI", "medium", False,
                f"-DI {minus_di:.2f} > +DI {plus_di:.2f} (bearish trend)",
            )


def _record_warnings(ledger: _Ledger, indicators: IndicatorSnapshotDTO) -> None:
    direction = TradeDirection.BUY if ledger.is_buy else TradeDirection.SELL
    extreme = _oscillator_extreme(indicators, direction)
    if extreme is not None:
        kind, description = extreme
        key = kind.upper()
        name = kind.replace("_", " ").title()
        ledger.warning(key, name, CATEGORY_OVERBOUGHT_OVERSOLD, "high", description)

    aroon = aroon_pair(indicators)
    structure = ema_structure(indicators)
    if aroon is not None and structure is not None:
        up, down = aroon
        if ledger.is_buy and structure == "up" and down > up and down > AROON_STRONG:
            ledger.warning(
                "AROON_CONTRADICTION", "Aroon Contradiction", CATEGORY_STRUCTURE, "high",
                f"Aroon contradiction: EMA shows uptrend but Aroon Down {down:.2f}% > Up {up:.2f}% (downtrend)",
            )
        elif not ledger.is_buy and structure != "up" and up > down and up > AROON_STRONG:
            ledger.warning(
                "AROON_CONTRADICTION", "Aroon Contradiction", CATEGORY_STRUCTURE, "high",
                f"Aroon contradiction: EMA shows downtrend but Aroon Up {up:.2f}% > Down {down:.2f}% (uptrend)",
            )

    macd_divergence = indicators.get("macd_divergence")
    if ledger.is_buy and macd_divergence == "bearish":
        ledger.warning(
            "MACD_DIVERGENCE", "MACD Bearish Divergence", CATEGORY_DIVERGENCE, "high",
            "MACD Bearish Divergence: Price rising but momentum declining (strong reversal warning)",
        )
    elif not ledger.is_buy and macd_divergence == "bullish":
        ledger.warning(
            "MACD_DIVERGENCE", "MACD Bullish Divergence", CATEGORY_DIVERGENCE, "high",
            "MACD Bullish Divergence: Price falling but momentum rising (strong reversal warning)",
        )

    rsi_divergence = indicators.get("rsi_divergence")
    if ledger.is_buy and rsi_divergence == "bearish":
        ledger.warning(
            "RSI_DIVERGENCE", "RSI Bearish Divergence", CATEGORY_DIVERGENCE, "high",
            "RSI Bearish Divergence: Price making higher highs but RSI making lower highs (reversal warning)",
        )
    elif not ledger.is_buy and rsi_divergence == "bullish":
        ledger.warning(
            "RSI_DIVERGENCE", "RSI Bullish Divergence", CATEGORY_DIVERGENCE, "high",
            "RSI Bullish Divergence: Price making lower lows but RSI making higher lows (reversal warning)",
        )

    vpd = finite_or_none(indicators.get("volume_price_divergence"))
    if vpd is not None:
        if ledger.is_buy and vpd < -VOLUME_DIVERGENCE:
            ledger.warning(
                "VOLUME_DIVERGENCE", "Volume Divergence", CATEGORY_VOLUME, "high",
                f"Volume Divergence: Price rising but volume declining ({vpd:.2f}, bearish signal)",
            )
        elif not ledger.is_buy and vpd > VOLUME_DIVERGENCE:
            ledger.warning(
                "VOLUME_DIVERGENCE", "Volume Divergence", CATEGORY_VOLUME, "high",
                f"Volume Divergence: Price falling but volume increasing ({vpd:.2f}, bullish signal)",
            )

    price = finite_or_none(indicators.get("price"))
    price_change = finite_or_none(indicators.get("price_change_24h"))
    if finite_or_none(indicators.get("obv")) is not None and price and price > 0 and price_change is not None:
        volume_change = finite_or_none(indicators.get("volume_change_24h")) or 0.0
        if ledger.is_buy and price_change > 0 and volume_change < -OBV_VOLUME_CHANGE_PCT:
            ledger.warning(
                "OBV_DIVERGENCE", "OBV Divergence", CATEGORY_VOLUME, "high",
                f"OBV Divergence: Price rising (+{price_change:.2f}%) but volume declining ({volume_change:.2f}%, no confirmation)",
            )
        elif not ledger.is_buy and price_change < 0 and volume_change > OBV_VOLUME_CHANGE_PCT:
            ledger.warning(
                "OBV_DIVERGENCE", "OBV Divergence", CATEGORY_VOLUME, "high",
                f"OBV Divergence: Price falling ({price_change:.2f}%) but volume increasing (+{volume_change:.2f}%, bullish signal)",
            )


def _record_support_resistance(ledger: _Ledger, indicators: IndicatorSnapshotDTO) -> None:
    price = finite_or_none(indicators.get("price"))
    if price is None or price <= 0:
        return
    supports = [
        level for level in map(finite_or_none, indicators.get("support_levels") or [])
        if level is not None and 0 < level <= price
    ]
    resistances = [
        level for level in map(finite_or_none, indicators.get("resistance_levels") or [])
        if level is not None and level >= price
    ]

    if supports:
        support = max(supports)
        distance = (price - support) / price * 100
        if distance <= SR_PROXIMITY_PCT:
            description = f"Price near support ${support:.2f} (within {distance:.2f}% - potential bounce)"
            if ledger.is_buy:
                ledger.supporting(
                    "SUPPORT_RESISTANCE_PROXIMITY", "Support Proximity",
                    CATEGORY_SUPPORT_RESISTANCE, "medium", description,
                )
            else:
                ledger.warning(
                    "SUPPORT_RESISTANCE_PROXIMITY", "Support Proximity",
                    CATEGORY_SUPPORT_RESISTANCE, "medium", description,
                )

    if resistances:
        resistance = min(resistances)
        distance = (resistance - price) / price * 100
        if distance <= SR_PROXIMITY_PCT:
            description = f"Price near resistance ${resistance:.2f} (within {distance:.2f}% - potential rejection)"
            if ledger.is_buy:
                ledger.warning(
                    "SUPPORT_RESISTANCE_PROXIMITY", "Resistance Proximity",
                    CATEGORY_SUPPORT_RESISTANCE, "medium", description,
                )
            else:
                ledger.supporting(
                    "SUPPORT_RESISTANCE_PROXIMITY", "Resistance Proximity",
                    CATEGORY_SUPPORT_RESISTANCE, "medium", description,
                )


def _record_funding(ledger: _Ledger, bundle: AssetBundleDTO) -> None:
    funding = funding_rate(bundle)
    if funding is None:
        return
    funding_pct = funding * 100
    if ledger.is_buy and funding_pct > FUNDING_EXTREME_PCT:
        ledger.warning(
            "FUNDING_RATE_EXTREME", "Funding Rate Extreme", CATEGORY_EXTERNAL, "medium",
            f"Funding rate extremely positive {funding_pct:.4f}% (bearish for longs)",
        )
    elif not ledger.is_buy and funding_pct < -FUNDING_EXTREME_PCT:
        ledger.warning(
            "FUNDING_RATE_EXTREME", "Funding Rate Extreme", CATEGORY_EXTERNAL, "medium",
            f"Funding rate extremely negative {funding_pct:.4f}% (bullish for shorts)",
        )


def build_justification(
    direction: TradeDirection, bundle: AssetBundleDTO | None
) -> JustificationResultDTO:
    """建立加權證據帳本

    Args:
        direction: 候選方向
        bundle: 標的資料 (指標快照缺失時返回歸零結果)
    """
    indicators = indicators_of(bundle)
    if not indicators:
        return zeroed_justification(direction)

    regime_block = indicators.get("market_regime") or {}
    ledger = _Ledger(
        direction,
        regime=regime_block.get("regime") or "trending",
        volatility=regime_block.get("volatility") or "normal",
    )

    _record_momentum(ledger, indicators)
    _record_price_position(ledger, indicators)
    _record_trend(ledger, indicators)
    _record_warnings(ledger, indicators)
    _record_support_resistance(ledger, indicators)
    _record_funding(ledger, bundle or {})

    contradictions = detect_contradictions(indicators, direction) + ledger.opposing
    severity = conflict_severity(contradictions)

    unique_bullish = sum(1 for item in ledger.bullish if not item.get("is_redundant"))
    unique_bearish = sum(1 for item in ledger.bearish if not item.get("is_redundant"))
    total_items = len(ledger.bullish) + len(ledger.bearish)
    redundancy = (
        (total_items - unique_bullish - unique_bearish) / total_items if total_items else 0.0
    )

    total_score = ledger.bullish_score + ledger.bearish_score
    candidate_score = ledger.bullish_score if ledger.is_buy else ledger.bearish_score
    quality_ratio = candidate_score / total_score if total_score > 0 else 0.0
    has_aroon = any(c["type"] == AROON_EMA_CONTRADICTION for c in contradictions)

    return {
        "direction": direction.value,
        "bullish_score": ledger.bullish_score,
        "bearish_score": ledger.bearish_score,
        "bullish_count": len(ledger.bullish),
        "bearish_count": len(ledger.bearish),
        "unique_bullish_count": unique_bullish,
        "unique_bearish_count": unique_bearish,
        "bullish_indicators": ledger.bullish,
        "bearish_indicators": ledger.bearish,
        "contradictions": contradictions,
        "redundant_groups": ledger.redundant_groups,
        "quality_ratio": quality_ratio,
        "conflict_severity": severity.name,
        "conflict_score": sum(c["severity_score"] for c in contradictions),
        "total_contradictions": len(contradictions),
        "base_confidence": quality_ratio,
        "adjusted_confidence": adjusted_confidence(quality_ratio, severity, redundancy, has_aroon),
        "redundancy_penalty": redundancy,
    }
