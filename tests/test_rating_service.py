"""
Tests for the title rating service
"""
import json
import pytest
from unittest.mock import patch
from core import TTLCache
from services import rating_service
from services.rating import (
    CHILD_SENTINEL,
    FetchError,
    NormalizedResult,
    TitleNotRatedError,
    histogram_from_counts
)
from tests.conftest import BOMBED_COUNTS, build_ratings_page

BASE_URL = 'https://www.imdb.com'

FEMALE_COUNTS = {1: 50, 5: 100, 8: 300, 10: 50}
MALE_COUNTS = {1: 100, 7: 1000, 10: 400}
CHILD_COUNTS = {8: 100, 9: 100}


def full(counts):
    return {**dict.fromkeys(range(1, 11), 0), **counts}


def title_pages(title_id, total=BOMBED_COUNTS, female=FEMALE_COUNTS, male=MALE_COUNTS, child=CHILD_COUNTS):
    url = f'{BASE_URL}/title/{title_id}/ratings'
    return {
        url: build_ratings_page(full(total)),
        f'{url}?demo=females': build_ratings_page(full(female)),
        f'{url}?demo=males': build_ratings_page(full(male)),
        f'{url}?demo=aged_under_18': (
            build_ratings_page(None, "Under 18") if child is None else build_ratings_page(full(child))
        ),
    }


@pytest.fixture
def cache(memory_store, clock):
    return TTLCache(memory_store, ttl_seconds=7200, clock=clock)


@pytest.fixture(autouse=True)
def imdb_base_url(monkeypatch):
    monkeypatch.setattr(rating_service.config, 'IMDB_BASE_URL', BASE_URL)


class TestGetTitleRating:
    """Test get_title_rating end to end with mocked pages."""

    @pytest.mark.asyncio
    async def test_output_contract(self, cache):
        pages = title_pages('tt100')

        with patch('services.imdb_fetcher.fetch_ratings_page', side_effect=pages.__getitem__):
            rating = await rating_service.get_title_rating('tt100', cache=cache)

        assert rating['title_id'] == 'tt100'
        assert rating['total'] == {'score': 7.9, 'votes': 7213}
        # Extremes cancel: (500 + 2400) / 400 = 7.25
        assert rating['female'] == {'score': 7.3, 'votes': 400}
        assert rating['male'] == {'score': 7.6, 'votes': 1225}
        assert rating['child'] == {'score': 8.5, 'votes': 200}

        audience = rating['audience']
        # 1225 / (1225 + 400 * 4.27)
        assert audience['male_share'] == pytest.approx(1225 / 2933)
        assert audience['male_share'] + audience['female_share'] == pytest.approx(1)
        # 8.5 / 7.9 = 1.076
        assert audience['for_children'] is True
        assert audience['label'] == 'slightly angled toward a female audience'

    @pytest.mark.asyncio
    async def test_output_is_json_serializable(self, cache):
        pages = title_pages('tt100')

        with patch('services.imdb_fetcher.fetch_ratings_page', side_effect=pages.__getitem__):
            rating = await rating_service.get_title_rating('tt100', cache=cache)

        assert json.loads(json.dumps(rating)) == rating

    @pytest.mark.asyncio
    async def test_second_call_uses_cache(self, cache):
        pages = title_pages('tt100')

        with patch('services.imdb_fetcher.fetch_ratings_page', side_effect=pages.__getitem__) as mock_fetch:
            first = await rating_service.get_title_rating('tt100', cache=cache)
            second = await rating_service.get_title_rating('tt100', cache=cache)

        assert first == second
        assert mock_fetch.call_count == 4

    @pytest.mark.asyncio
    async def test_stale_cache_refetches(self, cache, clock):
        pages = title_pages('tt100')

        with patch('services.imdb_fetcher.fetch_ratings_page', side_effect=pages.__getitem__) as mock_fetch:
            await rating_service.get_title_rating('tt100', cache=cache)
            clock.advance(7201)
            await rating_service.get_title_rating('tt100', cache=cache)

        assert mock_fetch.call_count == 8

    @pytest.mark.asyncio
    async def test_caches_normalized_results_under_title_key(self, cache, memory_store):
        pages = title_pages('tt100')

        with patch('services.imdb_fetcher.fetch_ratings_page', side_effect=pages.__getitem__):
            await rating_service.get_title_rating('tt100', cache=cache)

        stored = json.loads(memory_store.get('normscore|/title/tt100/ratings'))
        assert set(stored) == {'storedAt', 'value'}
        assert set(stored['value']) == {'total', 'female', 'male', 'child'}
        assert stored['value']['total'] == {'score': 7.9, 'votes': 7213}

    @pytest.mark.asyncio
    async def test_child_without_votes(self, cache):
        pages = title_pages('tt100', child=None)

        with patch('services.imdb_fetcher.fetch_ratings_page', side_effect=pages.__getitem__):
            rating = await rating_service.get_title_rating('tt100', cache=cache)

        # Placeholder histogram is reported as an absent demographic
        assert rating['child'] is None
        assert rating['audience']['for_children'] is False
        assert rating['audience']['label'] == 'slightly angled toward a female audience'

    @pytest.mark.asyncio
    async def test_no_gendered_votes_leaves_audience_empty(self, cache):
        pages = title_pages('tt100', female={}, male={})

        with patch('services.imdb_fetcher.fetch_ratings_page', side_effect=pages.__getitem__):
            rating = await rating_service.get_title_rating('tt100', cache=cache)

        assert rating['female'] is None
        assert rating['male'] is None
        assert rating['audience'] is None
        assert rating['total'] == {'score': 7.9, 'votes': 7213}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("cached_value", [
        [1],
        'stale',
        {'total': {}},
        {'total': None, 'female': None, 'male': None, 'child': None},
        {'total': {'score': 'high', 'votes': 3}},
    ])
    async def test_malformed_cached_payload_is_recomputed(self, cache, memory_store, clock, cached_value):
        memory_store.set(
            'normscore|/title/tt100/ratings',
            json.dumps({'storedAt': int(clock.now * 1000), 'value': cached_value})
        )
        pages = title_pages('tt100')

        with patch('services.imdb_fetcher.fetch_ratings_page', side_effect=pages.__getitem__) as mock_fetch:
            rating = await rating_service.get_title_rating('tt100', cache=cache)

        assert rating['total'] == {'score': 7.9, 'votes': 7213}
        assert mock_fetch.call_count == 4
        stored = json.loads(memory_store.get('normscore|/title/tt100/ratings'))
        assert stored['value']['total'] == {'score': 7.9, 'votes': 7213}

    @pytest.mark.asyncio
    async def test_title_without_votes_is_not_cached(self, cache, memory_store):
        pages = title_pages('tt100', total={}, female={}, male={}, child=None)

        with patch('services.imdb_fetcher.fetch_ratings_page', side_effect=pages.__getitem__):
            with pytest.raises(TitleNotRatedError):
                await rating_service.get_title_rating('tt100', cache=cache)

        assert len(memory_store) == 0

    @pytest.mark.asyncio
    async def test_fetch_failure_propagates_and_is_not_cached(self, cache, memory_store):
        with patch('services.imdb_fetcher.fetch_ratings_page', side_effect=FetchError("HTTP 503")):
            with pytest.raises(FetchError):
                await rating_service.get_title_rating('tt100', cache=cache)

        assert len(memory_store) == 0

    @pytest.mark.asyncio
    async def test_invalid_title_id(self, cache):
        with patch('services.imdb_fetcher.fetch_ratings_page') as mock_fetch:
            with pytest.raises(ValueError):
                await rating_service.get_title_rating('not-a-title', cache=cache)

        mock_fetch.assert_not_called()

    @pytest.mark.asyncio
    async def test_default_cache_is_sqlite(self, monkeypatch, cache_db_path):
        monkeypatch.setattr(rating_service.config, 'CACHE_DATABASE_PATH', cache_db_path)
        monkeypatch.setattr(rating_service, '_default_cache', None)
        pages = title_pages('tt100')

        with patch('services.imdb_fetcher.fetch_ratings_page', side_effect=pages.__getitem__) as mock_fetch:
            await rating_service.get_title_rating('tt100')
            # Fresh cache object over the same file still hits
            monkeypatch.setattr(rating_service, '_default_cache', None)
            await rating_service.get_title_rating('tt100')

        assert mock_fetch.call_count == 4


class TestNormalizeDemographics:
    """Test normalize_demographics."""

    def test_degenerate_demographics_become_none(self):
        results = rating_service.normalize_demographics({
            'total': histogram_from_counts(BOMBED_COUNTS),
            'female': histogram_from_counts({}),
            'male': histogram_from_counts({1: 3, 10: 3}),
            'child': CHILD_SENTINEL,
        })

        assert results['total'] == NormalizedResult(score=7.9, votes=7213)
        assert results['female'] is None
        assert results['male'] is None
        assert results['child'] is None

    def test_placeholder_is_absent_but_real_child_votes_are_kept(self):
        results = rating_service.normalize_demographics({
            'total': histogram_from_counts(BOMBED_COUNTS),
            'child': histogram_from_counts({1: 1}),
        })

        # A single real 1-vote spread over all ten buckets is not the placeholder
        assert results['child'] == NormalizedResult(score=1.0, votes=1)

    def test_parse_cached_results(self):
        results = rating_service.parse_cached_results({
            'total': {'score': 7.9, 'votes': 7213},
            'female': None,
            'male': {'score': 7.6, 'votes': 1225},
            'child': None,
        })

        assert results['total'] == NormalizedResult(score=7.9, votes=7213)
        assert results['female'] is None
        assert results['male'] == NormalizedResult(score=7.6, votes=1225)

    @pytest.mark.parametrize("payload", [None, [1], {'total': {}}, {'male': {'score': 7.0, 'votes': 3}}])
    def test_parse_cached_results_rejects_bad_shapes(self, payload):
        with pytest.raises(ValueError):
            rating_service.parse_cached_results(payload)

    def test_cache_key(self):
        assert rating_service.cache_key('tt0111161') == 'normscore|/title/tt0111161/ratings'
