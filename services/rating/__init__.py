"""
Rating package.

This package contains the rating computation split into focused modules:
- histogram: Vote histogram model and validation
- normalizer: Review-bombing resistant score normalization
- audience: Target audience estimation
- errors: Exception hierarchy
"""

from .errors import (
    RatingError,
    MalformedHistogramError,
    AudienceEstimationError,
    TitleNotRatedError,
    FetchError
)
from .histogram import (
    VoteCount,
    VoteHistogram,
    CHILD_SENTINEL,
    SCORES,
    is_sentinel,
    validate_histogram,
    histogram_from_counts
)
from .normalizer import (
    NormalizedResult,
    round_score,
    discount_extremes,
    normalize_score
)
from .audience import (
    AudienceEstimate,
    estimate_target_audience,
    describe_audience
)

__all__ = [
    'RatingError',
    'MalformedHistogramError',
    'AudienceEstimationError',
    'TitleNotRatedError',
    'FetchError',
    'VoteCount',
    'VoteHistogram',
    'CHILD_SENTINEL',
    'SCORES',
    'is_sentinel',
    'validate_histogram',
    'histogram_from_counts',
    'NormalizedResult',
    'round_score',
    'discount_extremes',
    'normalize_score',
    'AudienceEstimate',
    'estimate_target_audience',
    'describe_audience',
]
