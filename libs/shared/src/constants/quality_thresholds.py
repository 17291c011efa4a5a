"""Indicator Quality Label Breakpoints

2-D lookup: coverage % bucket → minimum score per label.
Buckets are checked top-down; within a bucket, the first label whose
minimum score is met wins, else the bucket fallback applies.
"""

from libs.shared.src.enums.quality_label import QualityLabel

# (coverage % upper bound, [(min score, label), ...], fallback label)
QUALITY_LABEL_BUCKETS: list[tuple[float, list[tuple[float, QualityLabel]], QualityLabel]] = [
    (50, [], QualityLabel.VERY_POOR),
    (60, [], QualityLabel.POOR),
    (70, [(120, QualityLabel.FAIR)], QualityLabel.POOR),
    (80, [(130, QualityLabel.GOOD), (110, QualityLabel.FAIR)], QualityLabel.POOR),
    (90, [(140, QualityLabel.VERY_GOOD), (120, QualityLabel.GOOD)], QualityLabel.FAIR),
]

# Coverage >= 90%
QUALITY_LABEL_TOP_BUCKET: list[tuple[float, QualityLabel]] = [
    (150, QualityLabel.EXCELLENT),
    (140, QualityLabel.VERY_GOOD),
    (130, QualityLabel.GOOD),
    (120, QualityLabel.FAIR),
]
QUALITY_LABEL_TOP_FALLBACK = QualityLabel.POOR

SCORE_NORMALIZER = 200  # Raw score cap used by the composite (score / 200)
REWARD_CAP = 6  # Max total bonus from the reward adjuster
MAX_ADJUSTER_NOTES = 2  # Notes folded into strengths per adjuster
