"""Deterministic ten-key ranking sort

Missing tie-break values sort last: -inf for keys where larger is better,
+inf for keys where smaller is better.
"""

import math

from libs.shared.src.dtos.grading.ranking_dto import RankEntryDTO


def _desc(value: float | None) -> float:
    """Descending key (larger first); missing → -inf"""
    return -(value if value is not None else -math.inf)


def _asc(value: float | None) -> float:
    """Ascending key (smaller first); missing → +inf"""
    return value if value is not None else math.inf


def _abs(value: float | None) -> float | None:
    return abs(value) if value is not None else None


def rank_sort_key(entry: RankEntryDTO) -> tuple[float, ...]:
    diagnostics = entry["diagnostics"]
    return (
        _desc(entry["aggressive_percent"]),
        _desc(entry["composite_score"]),
        _desc(entry["score"]),
        _desc(entry["coverage_pct"]),
        _asc(len(entry["weaknesses"])),
        _desc(diagnostics["volume_ratio"]),
        _desc(_abs(diagnostics["sr_dist_pct"])),
        _desc(_abs(diagnostics["m60_pct"])),
        _asc(diagnostics["btc_60m_abs_pct"]),
        _asc(diagnostics["funding_abs_pct"]),
    )


def sort_rank_entries(entries: list[RankEntryDTO]) -> list[RankEntryDTO]:
    """排序 (stable，完全相同的鍵保留輸入順序)"""
    return sorted(entries, key=rank_sort_key)
