"""
Title rating service.

Fetches the four demographic histograms of a title, normalizes each one,
caches the normalized results as a single unit and derives the audience
estimate from them.
"""

from typing import Any, Dict, Mapping, Optional

import config
from core import SqliteStore, TTLCache
from services import imdb_fetcher
from services.rating import (
    AudienceEstimationError,
    NormalizedResult,
    TitleNotRatedError,
    VoteHistogram,
    describe_audience,
    estimate_target_audience,
    is_sentinel,
    normalize_score
)
from utils.logging_config import get_logger

logger = get_logger('RatingService')

_default_cache: Optional[TTLCache] = None


def get_default_cache() -> TTLCache:
    """Process-wide cache backed by the SQLite file in config.CACHE_DATABASE_PATH."""
    global _default_cache
    if _default_cache is None:
        _default_cache = TTLCache(SqliteStore(config.CACHE_DATABASE_PATH))
    return _default_cache


def cache_key(title_id: str) -> str:
    return f"{config.CACHE_KEY_PREFIX}{imdb_fetcher.ratings_path(title_id)}"


def normalize_demographics(histograms: Mapping[str, VoteHistogram]) -> Dict[str, Optional[NormalizedResult]]:
    """
    Normalize every demographic histogram.

    Degenerate results (no votes left) and the under-18 placeholder are
    reported as None so they are treated as absent demographics instead of
    carrying a NaN score or a rating nobody gave.
    """
    results = {}
    for demographic, histogram in histograms.items():
        if is_sentinel(histogram):
            logger.info(f"No votes for the {demographic} demographic")
            results[demographic] = None
            continue
        result = normalize_score(histogram)
        if result.is_degenerate:
            logger.info(f"No usable votes for the {demographic} demographic")
            result = None
        results[demographic] = result
    return results


def build_audience(results: Mapping[str, Optional[NormalizedResult]]) -> Optional[Dict[str, Any]]:
    """Audience estimate as plain data, or None when the demographics don't allow one."""
    try:
        estimate = estimate_target_audience(
            total=results['total'],
            female=results.get('female'),
            male=results.get('male'),
            child=results.get('child'),
        )
    except AudienceEstimationError as e:
        logger.info(f"Skipping audience estimate: {e}")
        return None
    return {**estimate.to_dict(), 'label': describe_audience(estimate)}


def parse_cached_results(payload: Any) -> Dict[str, Optional[NormalizedResult]]:
    """
    Turn a cached payload back into normalized results.

    Raises:
        ValueError: If the payload does not have the shape produced by
            compute_normalized_results
    """
    if not isinstance(payload, dict):
        raise ValueError(f"Cached payload must be an object, got {type(payload).__name__}")
    try:
        results = {
            demographic: NormalizedResult.from_dict(payload.get(demographic))
            for demographic in imdb_fetcher.DEMOGRAPHICS
        }
    except (KeyError, TypeError, AttributeError) as e:
        raise ValueError(f"Cached payload has a malformed result: {e!r}") from e
    if results['total'] is None:
        raise ValueError("Cached payload has no total result")
    return results


async def compute_normalized_results(title_id: str) -> Optional[Dict[str, Optional[Dict[str, Any]]]]:
    """
    Fetch and normalize the four histograms of a title.

    Returns:
        {demographic: {'score', 'votes'} or None}, or None when the title
        has no usable votes at all (so nothing gets cached)
    """
    histograms = await imdb_fetcher.fetch_demographic_histograms(title_id)
    results = normalize_demographics(histograms)
    if results['total'] is None:
        return None
    return {
        demographic: result.to_dict() if result else None
        for demographic, result in results.items()
    }


async def get_title_rating(title_id: str, cache: Optional[TTLCache] = None) -> Dict[str, Any]:
    """
    Compute (or reuse) the nuanced rating of a title.

    Args:
        title_id: Title identifier such as 'tt0111161'
        cache: Cache to use, the process-wide SQLite cache if omitted

    Returns:
        {
            'title_id': str,
            'total': {'score': float, 'votes': int},
            'female' / 'male' / 'child': same shape or None when absent,
            'audience': {'male_share', 'female_share', 'for_children', 'label'} or None
        }

    Raises:
        ValueError: If title_id is malformed
        TitleNotRatedError: If the title has no usable votes
        FetchError: If a ratings page can't be retrieved
    """
    title_id = imdb_fetcher.validate_title_id(title_id)
    if cache is None:
        cache = get_default_cache()

    logger.info(f"Rating requested for {title_id}")
    payload = await cache.get_or_compute(
        cache_key(title_id),
        lambda: compute_normalized_results(title_id),
        validate=parse_cached_results
    )
    if payload is None:
        raise TitleNotRatedError(f"{title_id} has no votes to rate")

    results = parse_cached_results(payload)

    return {
        'title_id': title_id,
        **{demographic: result.to_dict() if result else None for demographic, result in results.items()},
        'audience': build_audience(results),
    }
