"""
Vote histogram model and validation.

A histogram holds one VoteCount per score 1-10. Demographics nobody voted in
are represented by the single-entry CHILD_SENTINEL so they can flow through
the pipeline without failing.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Tuple

from utils.validation import validate_integer
from .errors import MalformedHistogramError

MIN_SCORE = 1
MAX_SCORE = 10
SCORES = tuple(range(MIN_SCORE, MAX_SCORE + 1))


@dataclass(frozen=True)
class VoteCount:
    """Number of votes cast at one score."""
    score: int
    votes: int

    @classmethod
    def from_dict(cls, row: Mapping[str, Any]) -> 'VoteCount':
        try:
            return cls(score=row['score'], votes=row['votes'])
        except (KeyError, TypeError) as e:
            raise MalformedHistogramError(f"Histogram row {row!r} needs 'score' and 'votes'") from e

    def to_dict(self) -> Dict[str, int]:
        return {'score': self.score, 'votes': self.votes}


VoteHistogram = Tuple[VoteCount, ...]

CHILD_SENTINEL: VoteHistogram = (VoteCount(score=1, votes=1),)


def is_sentinel(histogram: Iterable[VoteCount]) -> bool:
    """Check whether a histogram is the placeholder for a demographic without voters."""
    return tuple(histogram) == CHILD_SENTINEL


def _coerce_row(row: Any) -> VoteCount:
    if isinstance(row, VoteCount):
        row = row.to_dict()
    elif not isinstance(row, Mapping):
        raise MalformedHistogramError(f"Histogram row must be a mapping, got {type(row).__name__}")

    row = VoteCount.from_dict(row)
    # bool is an int subclass but never a valid count
    if isinstance(row.score, bool) or isinstance(row.votes, bool):
        raise MalformedHistogramError(f"Histogram row {row!r} holds a boolean")
    try:
        score = validate_integer(row.score, 'score', min_value=MIN_SCORE, max_value=MAX_SCORE)
        votes = validate_integer(row.votes, 'votes', min_value=0)
    except ValueError as e:
        raise MalformedHistogramError(str(e)) from e
    if score != row.score or votes != row.votes:
        raise MalformedHistogramError(f"Histogram row {row!r} must hold whole numbers")
    return VoteCount(score=score, votes=votes)


def validate_histogram(rows: Iterable[Any]) -> VoteHistogram:
    """
    Validate raw histogram rows.

    Args:
        rows: VoteCount objects or {'score': int, 'votes': int} mappings

    Returns:
        Tuple of VoteCount in input order

    Raises:
        MalformedHistogramError: If a bucket is missing, duplicated or invalid
    """
    if rows is None:
        raise MalformedHistogramError("Histogram is required")

    histogram = tuple(_coerce_row(row) for row in rows)

    if is_sentinel(histogram):
        return histogram

    seen = set()
    for entry in histogram:
        if entry.score in seen:
            raise MalformedHistogramError(f"Duplicate bucket for score {entry.score}")
        seen.add(entry.score)

    missing = [score for score in SCORES if score not in seen]
    if missing:
        raise MalformedHistogramError(
            f"Histogram is missing buckets for scores: {', '.join(map(str, missing))}"
        )

    return histogram


def histogram_from_counts(counts: Mapping[int, int]) -> VoteHistogram:
    """Build a validated histogram from a {score: votes} mapping, unlisted scores get 0 votes."""
    return validate_histogram(
        VoteCount(score=score, votes=counts.get(score, 0)) for score in SCORES
    )
