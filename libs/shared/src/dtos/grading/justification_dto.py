"""Weighted Evidence Ledger DTOs"""

from typing import NotRequired, TypedDict


class EvidenceItemDTO(TypedDict):
    """One weighted indicator finding"""

    name: str
    weight: float  # Post-modulation weight (> 0)
    category: str
    impact: str  # low / medium / high
    description: str
    is_redundant: NotRequired[bool]
    redundancy_group: NotRequired[str]


class ContradictionDTO(TypedDict):
    """Finding that opposes the candidate direction"""

    type: str
    severity: str  # critical / high / minor
    description: str
    severity_score: float


class JustificationResultDTO(TypedDict):
    """Conflict-adjusted directional confidence"""

    direction: str
    bullish_score: float
    bearish_score: float
    bullish_count: int
    bearish_count: int
    unique_bullish_count: int
    unique_bearish_count: int
    bullish_indicators: list[EvidenceItemDTO]
    bearish_indicators: list[EvidenceItemDTO]
    contradictions: list[ContradictionDTO]
    redundant_groups: list[str]
    quality_ratio: float
    conflict_severity: str  # ConflictSeverity name
    conflict_score: float
    total_contradictions: int
    base_confidence: float
    adjusted_confidence: float  # 0-1
    redundancy_penalty: float
