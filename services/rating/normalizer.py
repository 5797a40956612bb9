"""
Review-bombing resistant score normalization.

Votes at 1 and 10 are weighed against each other. The less frequent extreme
is taken as the organic baseline: its votes and the matching share of the
other extreme are discarded, and only a discounted part of the excess is
folded back in at face value. Scores 2-9 always count as cast.
"""

import math
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, Mapping, Optional

from utils.logging_config import get_logger
from .histogram import VoteCount, validate_histogram

logger = get_logger('Normalizer')

_ONE_DECIMAL = Decimal('0.1')


@dataclass(frozen=True)
class NormalizedResult:
    """Adjusted score of one histogram and the number of votes behind it."""
    score: float
    votes: int

    @property
    def is_degenerate(self) -> bool:
        """True when no votes survived normalization and the score is NaN."""
        return self.votes == 0 or math.isnan(self.score)

    def to_dict(self) -> Dict[str, Any]:
        return {'score': self.score, 'votes': self.votes}

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> Optional['NormalizedResult']:
        if data is None:
            return None
        return cls(score=float(data['score']), votes=int(data['votes']))


def round_score(value: float) -> float:
    """Round half-up to one decimal (2.25 -> 2.3, unlike round())."""
    return float(Decimal(repr(value)).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def discount_extremes(ones: int, tens: int):
    """
    Decide how many extreme votes survive.

    Returns:
        (score, votes) pair to fold into the totals; votes is 0 when
        the extremes cancel out.
    """
    if ones == 0:
        # Ratio undefined, tens count as ordinary votes
        return 10, tens

    factor = tens / ones
    excess = tens - ones
    if excess > 0:
        return 10, math.floor(excess * (1 - 1 / factor))
    if excess < 0:
        return 1, math.floor(-excess * (1 - factor))
    return 10, 0


def normalize_score(histogram: Iterable[VoteCount]) -> NormalizedResult:
    """
    Compute the bombing-corrected score of a vote histogram.

    Args:
        histogram: Ten VoteCount buckets (or the single-entry sentinel)

    Returns:
        NormalizedResult with the score rounded to one decimal. When no
        votes remain the result is degenerate: score NaN, votes 0.

    Raises:
        MalformedHistogramError: If the histogram is missing buckets
    """
    histogram = validate_histogram(histogram)

    total_votes = 0
    total_score = 0
    ones = 0
    tens = 0

    for entry in histogram:
        if entry.score == 1:
            ones = entry.votes
        elif entry.score == 10:
            tens = entry.votes
        else:
            total_votes += entry.votes
            total_score += entry.votes * entry.score

    extreme_score, extreme_votes = discount_extremes(ones, tens)
    total_votes += extreme_votes
    total_score += extreme_votes * extreme_score

    logger.debug(
        f"ones={ones} tens={tens} kept {extreme_votes}@{extreme_score}, "
        f"{total_votes} votes in total"
    )

    if total_votes == 0:
        return NormalizedResult(score=math.nan, votes=0)

    return NormalizedResult(score=round_score(total_score / total_votes), votes=total_votes)
