"""Scoring configuration loader

Builds the single ScoringConfigDTO at startup:
defaults → environment variables → explicit overrides.
Values that do not parse as finite numbers fall back to the default.
"""

import logging
import math
import os
from typing import Any, Mapping, cast

from libs.shared.src.constants.scoring_defaults import INTEGER_FIELDS, SCORING_DEFAULTS
from libs.shared.src.dtos.grading.scoring_config_dto import ScoringConfigDTO

_logger = logging.getLogger(__name__)

# Denominators and TTLs
_POSITIVE_FIELDS = (
    "indicators_total",
    "aggr_max",
    "btc_price_ttl_seconds",
    "correlation_ttl_seconds",
    "rank_max_concurrency",
)


def _parse_number(raw: Any) -> float | None:
    if isinstance(raw, bool):
        return None
    try:
        number = float(raw)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def load_scoring_config(
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> ScoringConfigDTO:
    """載入評分設定

    Args:
        env: 環境變數來源 (預設 os.environ)
        overrides: 明確覆寫值 (key 為設定欄位名稱)

    Returns:
        ScoringConfigDTO: 每個欄位都有合法數值
    """
    source = os.environ if env is None else env
    overrides = overrides or {}
    config: dict[str, float | int] = {}

    for key, (env_name, default) in SCORING_DEFAULTS.items():
        value: float = float(default)

        env_value = _parse_number(source.get(env_name)) if env_name in source else None
        if env_name in source and env_value is None:
            _logger.warning(f"Ignoring non-numeric {env_name}={source.get(env_name)!r}")
        if env_value is not None:
            value = env_value

        if key in overrides:
            override_value = _parse_number(overrides[key])
            if override_value is None:
                _logger.warning(f"Ignoring non-numeric override {key}={overrides[key]!r}")
            else:
                value = override_value

        config[key] = int(value) if key in INTEGER_FIELDS else value

    for key in _POSITIVE_FIELDS:
        if config[key] <= 0:
            _logger.warning(f"Ignoring non-positive {key}={config[key]}")
            default = SCORING_DEFAULTS[key][1]
            config[key] = int(default) if key in INTEGER_FIELDS else float(default)

    return cast(ScoringConfigDTO, config)
