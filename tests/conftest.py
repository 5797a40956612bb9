"""
Pytest fixtures and test configuration
"""
import pytest
import os
import sys
import tempfile
import shutil

# Set testing environment variables BEFORE importing app modules
os.environ['TESTING'] = 'true'

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from core import MemoryStore, SqliteStore
from services.rating import histogram_from_counts


# Heavily upvote-bombed title: normalizes to 7.9 from 7213 votes
BOMBED_COUNTS = {
    1: 500, 2: 50, 3: 100, 4: 150, 5: 300,
    6: 600, 7: 1200, 8: 2000, 9: 1500, 10: 2200,
}


class FakeClock:
    """Controllable replacement for time.time."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


def build_ratings_page(counts=None, heading="IMDb Users"):
    """
    Render a ratings page the way the site lays it out: one header row
    followed by one row per score, highest score first.
    """
    rows = ""
    if counts is not None:
        for score in sorted(counts, reverse=True):
            rows += f"""
            <tr>
              <td class="rightAligned"><div class="rightAligned">{score}</div></td>
              <td><div class="allText"><div class="topAligned">12.3%</div></div></td>
              <td class="reviewCount"><div class="leftAligned">{counts[score]:,}</div></td>
            </tr>"""

    return f"""<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>Ratings</title></head>
<body>
  <table cellpadding="4"><tr><td class="rightAligned">99</td><td class="leftAligned">1</td></tr></table>
  <div class="article listo">
    <div class="sectionHeading">{heading}</div>
    <table cellpadding="0" cellspacing="0" border="0">
      <tr>
        <td class="aligncenter"><div class="tableHeadings">Rating</div></td>
        <td><div class="tableHeadings">Votes</div></td>
      </tr>{rows}
    </table>
    <br>
    <table cellpadding="0"><tr><td class="rightAligned">Males</td><td class="leftAligned">7.1</td></tr></table>
  </div>
</body>
</html>"""


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def cache_db_path(temp_dir):
    """Path to test cache database file."""
    return os.path.join(temp_dir, 'test_cache.db')


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def sqlite_store(cache_db_path):
    return SqliteStore(cache_db_path)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def bombed_histogram():
    return histogram_from_counts(BOMBED_COUNTS)


@pytest.fixture
def ratings_page():
    """Factory for ratings page markup."""
    return build_ratings_page
