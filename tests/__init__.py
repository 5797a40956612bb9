"""
NuancedRating Test Suite

Test organization:
- test_histogram.py: Vote histogram validation
- test_normalizer.py: Review-bombing normalization
- test_audience.py: Target audience estimation and labels
- test_stores.py: Memory and SQLite key/value stores
- test_ttl_cache.py: TTL cache freshness and fallbacks
- test_imdb_fetcher.py: Ratings page retrieval and parsing
- test_rating_service.py: End-to-end title rating with mocked pages
- test_api.py: API decorators, responses and endpoint tests
- test_rate_title.py: Command line script
- conftest.py: Shared fixtures and test utilities
"""
