"""
Pytest configuration and fixtures for news ticker tests.

Provides common fixtures for mocking core components and test setup.
"""

import pytest
import logging
import sys
from pathlib import Path
from unittest.mock import Mock, MagicMock
from typing import Dict, Any, List, Optional

# Add project root to path
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from newsticker.cache_manager import CacheManager
from newsticker.exceptions import FetchError
from newsticker.models import Headline

# 2026-01-01T12:00:00Z
FIXED_NOW_MS = 1767268800000


class FrozenClock:
    """Settable epoch-millisecond clock."""

    def __init__(self, now: int = FIXED_NOW_MS):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class FakeFetcher:
    """Stand-in for HeadlineFetcher returning canned results per call."""

    def __init__(self, headlines: Optional[List[Headline]] = None):
        self.headlines = headlines or []
        self.error: Optional[Exception] = None
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def fetch(self, service=None, query=None):
        self.calls.append({'service': service, 'query': query})
        if self.error is not None:
            raise self.error
        return list(self.headlines)

    def fail(self, message: str = "connection refused") -> None:
        self.error = FetchError(message, url='http://localhost:3005/api/news')

    def close(self):
        self.closed = True


def make_headlines(count: int, ts: int = FIXED_NOW_MS) -> List[Headline]:
    return [
        Headline(source=f'Source {i}', title=f'Headline {i}', url=f'https://example.com/{i}', ts=ts)
        for i in range(count)
    ]


@pytest.fixture
def clock():
    """Frozen clock at a fixed instant."""
    return FrozenClock()


@pytest.fixture
def fake_fetcher():
    """Fetcher returning three headlines."""
    return FakeFetcher(make_headlines(3))


@pytest.fixture
def cache_manager(tmp_path):
    """CacheManager writing to a temporary directory."""
    return CacheManager(cache_dir=str(tmp_path / 'cache'))


@pytest.fixture
def mock_cache_manager():
    """Create a mock CacheManager for testing."""
    mock = MagicMock()
    mock._memory_cache = {}
    mock.cache_dir = "/tmp/test_cache"

    def mock_get(key: str, max_age: Optional[int] = None) -> Optional[Dict]:
        return mock._memory_cache.get(key)

    def mock_set(key: str, data: Dict) -> bool:
        mock._memory_cache[key] = data
        return True

    mock.get_cached_data = Mock(side_effect=mock_get)
    mock.save_cache = Mock(side_effect=mock_set)
    mock.get_cache_dir = Mock(return_value=mock.cache_dir)
    return mock


@pytest.fixture
def news_dir(tmp_path):
    """News directory with a default source and a sports source."""
    directory = tmp_path / 'news'
    directory.mkdir()
    (directory / 'news.txt').write_text(
        "# general news\n"
        "Reuters|Markets open higher|https://example.com/markets|1767268500000\n"
        "AP|Storm heads north|https://example.com/storm|1767265200000\n"
        "\n"
        "BBC|Library reopens downtown|https://example.com/library|1767182400000\n",
        encoding='utf-8'
    )
    (directory / 'news-sports.txt').write_text(
        "ESPN|Home team wins final|https://example.com/final|1767268740000\n",
        encoding='utf-8'
    )
    return directory


@pytest.fixture
def test_config(tmp_path, news_dir):
    """Provide a test configuration dictionary."""
    return {
        'ticker': {
            'target': '#news-ticker',
            'endpoint': 'http://localhost:3005/api/news',
            'speed': 60,
            'max_headlines': 50,
        },
        'server': {
            'host': '127.0.0.1',
            'port': 3005,
            'news_dir': str(news_dir),
            'static_dir': str(project_root / 'web_interface' / 'static'),
        },
        'video': {
            'origin': 'http://localhost:3005',
            'playlist': [
                'https://www.youtube.com/watch?v=abc123XYZ',
                'https://example.com/not-a-video',
            ],
        },
    }


@pytest.fixture(autouse=True)
def reset_logging():
    """Restore root logger handlers after tests that call setup_logging."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
