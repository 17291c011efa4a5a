"""Asset Ranking DTOs"""

from typing import NotRequired, TypedDict

from libs.shared.src.dtos.grading.futures_alignment_dto import FuturesAlignmentDTO


class RankDiagnosticsDTO(TypedDict):
    """Tie-break features and audit trail of one rank entry"""

    m60_pct: float | None
    volume_ratio: float | None
    sr_dist_pct: float | None
    btc_60m_abs_pct: float | None
    funding_abs_pct: float | None
    confidence_percent: float
    penalties_applied: list[str]


class RankEntryDTO(TypedDict):
    """Quality score enriched with composite ranking features"""

    asset: str
    score: float
    indicators_count: int
    strengths: list[str]
    weaknesses: list[str]
    quality: str
    coverage_pct: float  # 0-100
    momentum_composite: float  # 0-1
    trend_alignment_score: float  # 0-1
    external_data_score: float  # 0-1
    composite_score: float  # 0-1
    aggressive_percent: float  # 0-100
    diagnostics: RankDiagnosticsDTO
    futures_alignment: NotRequired[FuturesAlignmentDTO]


class RankingResultDTO(TypedDict):
    """Ordered ranking plus batch counters"""

    entries: list[RankEntryDTO]
    total_processed: int
    total_ranked: int
    skipped_no_indicators: int
    skipped_quality: int
    skipped_btc: int
