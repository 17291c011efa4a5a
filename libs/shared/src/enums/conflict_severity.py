"""Conflict Severity Enum

Aggregate risk level of the contradictions found for a candidate signal
"""

from enum import Enum


class ConflictSeverity(Enum):
    """Conflict severity (value = severity score)"""

    LOW = 1.0  # Minor inconsistencies
    MEDIUM = 1.5  # One major contradiction
    HIGH = 2.0  # Two major contradictions
    CRITICAL = 3.0  # Critical contradiction stack
