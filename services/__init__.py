"""
Services package for NuancedRating.

This module provides the business logic services for:
- Rating computation (histogram validation, normalization, audience estimation)
- Ratings page retrieval and parsing
- Title rating orchestration with result caching
"""

# Note: We intentionally keep imports minimal at the package level.
# Service modules should be imported directly where needed,
# e.g., `from services import rating_service`

__all__ = [
    'imdb_fetcher',
    'rating',
    'rating_service',
]
