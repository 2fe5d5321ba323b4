"""
Tests for the data models.
"""

import pytest

from newsticker.exceptions import FetchError
from newsticker.models import CacheSnapshot, Headline, SERVICE_CYCLE


class TestHeadline:
    """Test Headline parsing."""

    def test_from_dict(self):
        headline = Headline.from_dict({'source': 'A', 'title': 'T', 'url': 'u', 'ts': '1500'})
        assert headline == Headline('A', 'T', 'u', 1500)
        assert headline.to_dict() == {'source': 'A', 'title': 'T', 'url': 'u', 'ts': 1500}

    def test_missing_ts_uses_default(self):
        assert Headline.from_dict({'source': 'A', 'title': 'T', 'url': 'u'}, default_ts=7).ts == 7

    def test_missing_fields_become_empty(self):
        headline = Headline.from_dict({'ts': 1})
        assert (headline.source, headline.title, headline.url) == ('', '', '')

    @pytest.mark.parametrize("record", ['text', 5, None, ['a']])
    def test_rejects_non_objects(self, record):
        with pytest.raises(FetchError):
            Headline.from_dict(record)

    @pytest.mark.parametrize("ts", ['yesterday', float('inf'), float('nan'), [1]])
    def test_rejects_bad_ts(self, ts):
        with pytest.raises(FetchError):
            Headline.from_dict({'source': 'A', 'title': 'T', 'url': 'u', 'ts': ts})


class TestCacheSnapshot:
    """Test snapshot serialization."""

    def test_round_trip_shape(self):
        snapshot = CacheSnapshot(headlines=[Headline('A', 'T1', 'u', 10)], timestamp=20)
        data = snapshot.to_dict()
        assert data == {'headlines': [{'source': 'A', 'title': 'T1', 'url': 'u', 'ts': 10}], 'timestamp': 20}
        assert CacheSnapshot.from_dict(data) == snapshot

    def test_missing_timestamp(self):
        with pytest.raises(KeyError):
            CacheSnapshot.from_dict({'headlines': []})


class TestServiceCycle:
    """Test the service options."""

    def test_cycle(self):
        assert [(o.service, o.label, o.emoji) for o in SERVICE_CYCLE] == [
            ('sports', 'Sports', '⚽'),
            ('local', 'Local', '🏠'),
            ('news', 'News', '📰'),
            ('weather', 'Weather', '🌤️'),
            ('tweets', 'Tweets', '🐦'),
        ]
