"""
Ratings page retrieval and parsing.

Each title has four ratings pages (everyone, females, males, under 18).
Every page carries a table of ten rows, one per score, with the score in a
right-aligned cell and the vote count in a left-aligned cell.
"""

import asyncio
import re
from html.parser import HTMLParser
from typing import Dict, List, Optional

import requests

import config
from services.rating import (
    CHILD_SENTINEL,
    FetchError,
    MalformedHistogramError,
    SCORES,
    VoteHistogram,
    validate_histogram
)
from utils.decorators import sync_to_async
from utils.logging_config import get_logger
from utils.validation import validate_string

logger = get_logger('Fetcher')

# Demographic -> value of the ?demo= query parameter (None for everyone)
DEMOGRAPHICS = {
    'total': None,
    'female': 'females',
    'male': 'males',
    'child': 'aged_under_18',
}

CHILD_SECTION_HEADING = 'Under 18'

TITLE_ID_PATTERN = re.compile(r'^tt\d+$')

_VOID_TAGS = {
    'area', 'base', 'br', 'col', 'embed', 'hr', 'img', 'input',
    'link', 'meta', 'param', 'source', 'track', 'wbr',
}


def validate_title_id(title_id) -> str:
    """Validate a title identifier such as 'tt0111161'."""
    title_id = validate_string(title_id, 'title_id', max_length=32)
    if not TITLE_ID_PATTERN.match(title_id):
        raise ValueError(f"title_id must look like 'tt1234567', got '{title_id}'")
    return title_id


def ratings_path(title_id: str) -> str:
    return f"/title/{title_id}/ratings"


def ratings_url(title_id: str, demographic: str = 'total') -> str:
    """Build the ratings page URL of a title for one demographic."""
    if demographic not in DEMOGRAPHICS:
        raise ValueError(f"Unknown demographic '{demographic}'")
    url = f"{config.IMDB_BASE_URL}{ratings_path(title_id)}"
    demo = DEMOGRAPHICS[demographic]
    return f"{url}?demo={demo}" if demo else url


class _RatingsPageParser(HTMLParser):
    """Collects the score rows of the first ratings table and the section headings."""

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.rows: List[Dict[str, Optional[str]]] = []
        self.headings: List[str] = []
        self._stack: List[str] = []
        self._listo_depth = None
        self._table_depth = None
        self._table_done = False
        self._row = None
        self._row_depth = None
        self._capture = None  # (field, depth)
        self._heading_depth = None
        self._text: List[str] = []
        self._heading_text: List[str] = []

    def handle_starttag(self, tag, attrs):
        attrs = dict(attrs)
        classes = set((attrs.get('class') or '').split())
        if tag not in _VOID_TAGS:
            self._stack.append(tag)
        depth = len(self._stack)

        if self._listo_depth is None and {'article', 'listo'} <= classes:
            self._listo_depth = depth

        if self._heading_depth is None and 'sectionHeading' in classes:
            self._heading_depth = depth
            self._heading_text = []

        if (tag == 'table' and 'cellpadding' in attrs and self._listo_depth is not None
                and self._table_depth is None and not self._table_done):
            self._table_depth = depth
            return

        if tag == 'tr' and self._table_depth is not None and self._row is None:
            self._row = {'score': None, 'votes': None}
            self._row_depth = depth
            return

        if self._row is not None and self._capture is None:
            if 'rightAligned' in classes and self._row['score'] is None:
                self._capture = ('score', depth)
                self._text = []
            elif 'leftAligned' in classes and self._row['votes'] is None:
                self._capture = ('votes', depth)
                self._text = []

    def handle_data(self, data):
        if self._capture is not None:
            self._text.append(data)
        if self._heading_depth is not None:
            self._heading_text.append(data)

    def handle_endtag(self, tag):
        if tag not in self._stack:
            return
        index = len(self._stack) - 1 - self._stack[::-1].index(tag)
        depth = index + 1

        if self._capture is not None and self._capture[1] >= depth:
            field = self._capture[0]
            self._row[field] = ''.join(self._text).strip()
            self._capture = None
        if self._heading_depth is not None and self._heading_depth >= depth:
            self.headings.append(' '.join(''.join(self._heading_text).split()))
            self._heading_depth = None
        if self._row is not None and self._row_depth >= depth:
            self.rows.append(self._row)
            self._row = None
        if self._table_depth is not None and self._table_depth >= depth:
            self._table_depth = None
            self._table_done = True
        if self._listo_depth is not None and self._listo_depth >= depth:
            self._listo_depth = None

        del self._stack[index:]


def _parse_count(text: Optional[str], field: str) -> int:
    if text is None:
        raise MalformedHistogramError(f"Score row has no {field} cell")
    digits = re.sub(r'[,.\s]', '', text)
    if not digits.isdigit():
        raise MalformedHistogramError(f"Cannot read {field} from '{text}'")
    return int(digits)


def parse_vote_histogram(html: str, demographic: str = 'total') -> VoteHistogram:
    """
    Extract the vote histogram from a ratings page.

    Args:
        html: Page markup
        demographic: Which page this is, used for messages

    Returns:
        Validated histogram. An under-18 page without any score rows yields
        CHILD_SENTINEL, since nobody in that group rated the title.

    Raises:
        MalformedHistogramError: If the score rows cannot be found
    """
    parser = _RatingsPageParser()
    parser.feed(html)
    parser.close()

    # First row is the table header
    rows = parser.rows[1:]

    if len(rows) != len(SCORES):
        if CHILD_SECTION_HEADING in parser.headings:
            logger.info(f"No under-18 votes on the {demographic} page, using placeholder histogram")
            return CHILD_SENTINEL
        raise MalformedHistogramError(
            f"Expected 10 score rows on the {demographic} ratings page, found {len(rows)}"
        )

    return validate_histogram(
        {'score': _parse_count(row['score'], 'score'), 'votes': _parse_count(row['votes'], 'votes')}
        for row in rows
    )


def fetch_ratings_page(url: str) -> str:
    """
    Download a ratings page.

    Raises:
        FetchError: On network failure or a non-200 response
    """
    headers = {
        'User-Agent': config.USER_AGENT,
        'Accept-Language': 'en-US,en;q=0.8',
    }
    try:
        response = requests.get(url, headers=headers, timeout=config.REQUEST_TIMEOUT)
    except requests.RequestException as e:
        raise FetchError(f"Failed to fetch {url}: {e}", url=url) from e

    if response.status_code != 200:
        raise FetchError(
            f"Fetching {url} returned HTTP {response.status_code}",
            url=url,
            status_code=response.status_code
        )
    return response.text


def fetch_histogram(title_id: str, demographic: str) -> VoteHistogram:
    """Fetch and parse one demographic's histogram (blocking)."""
    url = ratings_url(title_id, demographic)
    logger.debug(f"Fetching {url}")
    return parse_vote_histogram(fetch_ratings_page(url), demographic)


fetch_histogram_async = sync_to_async(fetch_histogram)


async def fetch_demographic_histograms(title_id: str) -> Dict[str, VoteHistogram]:
    """
    Fetch the four demographic histograms of a title in parallel.

    Returns:
        {'total': ..., 'female': ..., 'male': ..., 'child': ...}
    """
    title_id = validate_title_id(title_id)
    histograms = await asyncio.gather(
        *(fetch_histogram_async(title_id, demographic) for demographic in DEMOGRAPHICS)
    )
    return dict(zip(DEMOGRAPHICS, histograms))
