"""Expected confidence

Context-only confidence estimate (0-100) used by the aggressive score.
"""

import math

from libs.shared.src.domain.services.numeric_guards import clamp, finite_or_none
from libs.shared.src.dtos.grading.adjustment_result_dto import AdjustmentResultDTO
from libs.shared.src.dtos.grading.asset_bundle_dto import AssetBundleDTO
from libs.grading.src.domain.services.indicator_features import (
    bollinger_width,
    indicators_of,
    macd_histogram,
    trend_of,
)

INFLUENCE_BASELINE = 10
INFLUENCE_CAP = 20


def compute_expected_confidence(
    bundle: AssetBundleDTO | None, influence: AdjustmentResultDTO | None = None
) -> float:
    """計算預期信心 (0-100)

    Missing inputs contribute nothing.
    """
    indicators = indicators_of(bundle)
    trend = trend_of(bundle)
    expected = 0.0

    strength = finite_or_none(trend.get("strength")) or 0.0
    if trend.get("aligned") and strength >= 0.7:
        expected += 18
    elif trend.get("aligned"):
        expected += 12
    elif strength > 0.4:
        expected += 6

    adx = finite_or_none(indicators.get("adx"))
    if adx is not None:
        expected += 12 if adx > 25 else 8 if adx > 20 else 3

    histogram = macd_histogram(indicators)
    if histogram is not None:
        magnitude = abs(histogram)
        if magnitude > 0.01:
            expected += 12
        elif magnitude > 0.005:
            expected += 8
        elif magnitude > 0.001:
            expected += 5
        else:
            expected += 2

    width = bollinger_width(indicators)
    if width is not None:
        if 0.02 <= width <= 0.06:
            expected += 8
        elif 0.06 < width <= 0.1:
            expected += 4
        else:
            expected += 2

    if influence is not None:
        net = INFLUENCE_BASELINE + influence["bonus"] - influence["penalty"]
        expected += min(INFLUENCE_CAP, math.floor(max(0.0, net) + 0.5))

    return clamp(expected, 0.0, 100.0)
