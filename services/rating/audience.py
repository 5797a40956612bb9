"""
Target audience estimation from per-demographic normalized results.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

import config
from .errors import AudienceEstimationError
from .normalizer import NormalizedResult


@dataclass(frozen=True)
class AudienceEstimate:
    male_share: float
    female_share: float
    for_children: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'male_share': self.male_share,
            'female_share': self.female_share,
            'for_children': self.for_children,
        }


def _usable(result: Optional[NormalizedResult], name: str) -> Optional[NormalizedResult]:
    if result is not None and result.is_degenerate:
        raise AudienceEstimationError(f"{name} result has no votes, pass None for an absent demographic")
    return result


def estimate_target_audience(
    total: NormalizedResult,
    female: Optional[NormalizedResult],
    male: Optional[NormalizedResult],
    child: Optional[NormalizedResult],
    female_boost: Optional[float] = None,
    child_ratio_threshold: Optional[float] = None,
) -> AudienceEstimate:
    """
    Estimate the gender lean of a title and whether it is aimed at children.

    Female vote counts are boosted to offset the male-heavy reviewer
    population before the shares are computed. A title counts as aimed at
    children when under-18 voters rate it above the overall score by more
    than the threshold ratio.

    Args:
        total: Result for all voters
        female, male, child: Demographic results, None when absent
        female_boost: Override for config.FEMALE_BOOST_FACTOR
        child_ratio_threshold: Override for config.CHILD_SCORE_RATIO_THRESHOLD

    Raises:
        AudienceEstimationError: If total is missing, a degenerate result is
            passed, or neither gender has any votes
    """
    if female_boost is None:
        female_boost = config.FEMALE_BOOST_FACTOR
    if child_ratio_threshold is None:
        child_ratio_threshold = config.CHILD_SCORE_RATIO_THRESHOLD

    if total is None:
        raise AudienceEstimationError("Overall result is required")
    _usable(total, 'total')
    female = _usable(female, 'female')
    male = _usable(male, 'male')
    child = _usable(child, 'child')

    adjusted_female_votes = (female.votes if female else 0) * female_boost
    male_votes = male.votes if male else 0

    if male_votes + adjusted_female_votes == 0:
        raise AudienceEstimationError("Neither male nor female voters are available")

    male_share = male_votes / (male_votes + adjusted_female_votes)

    for_children = False
    if child is not None and total.score > 0:
        for_children = (child.score / total.score) > child_ratio_threshold

    return AudienceEstimate(
        male_share=male_share,
        female_share=1 - male_share,
        for_children=for_children,
    )


def describe_audience(estimate: AudienceEstimate) -> str:
    """Human readable gender lean, e.g. 'mostly for women'."""
    male, female = estimate.male_share, estimate.female_share

    for threshold, male_label, female_label in config.AUDIENCE_SKEW_THRESHOLDS:
        if male > threshold * female:
            return male_label
    for threshold, male_label, female_label in config.AUDIENCE_SKEW_THRESHOLDS:
        if female > threshold * male:
            return female_label
    return config.AUDIENCE_NEUTRAL_LABEL
