"""
Data models for the news ticker.
"""

import time
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Mapping, Optional, Tuple

from newsticker.exceptions import FetchError


DEFAULT_SERVICE = 'news'
SNAPSHOT_CACHE_KEY = 'news-ticker-cache'


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass
class Headline:
    """One displayable news record."""
    source: str
    title: str
    url: str
    ts: int

    @classmethod
    def from_dict(cls, data: Any, default_ts: Optional[int] = None) -> 'Headline':
        """
        Build a headline from the news endpoint's JSON object.

        Args:
            data: Mapping with source, title, url and ts keys
            default_ts: Timestamp used when the record has none (defaults to now)

        Raises:
            FetchError: If the record is not a mapping or ts is not numeric
        """
        if not isinstance(data, Mapping):
            raise FetchError(f"Headline record must be an object, got {type(data).__name__}")
        ts = data.get('ts')
        if ts is None:
            ts = default_ts if default_ts is not None else now_ms()
        try:
            ts = int(ts)
        except (TypeError, ValueError, OverflowError) as e:
            raise FetchError(f"Invalid headline timestamp: {ts!r}") from e
        return cls(
            source=str(data.get('source') or ''),
            title=str(data.get('title') or ''),
            url=str(data.get('url') or ''),
            ts=ts,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class CacheSnapshot:
    """Last successfully rendered headline set plus capture time (epoch ms)."""
    headlines: List[Headline] = field(default_factory=list)
    timestamp: int = 0

    def age_ms(self, now: int) -> int:
        return now - self.timestamp

    def is_fresh(self, now: int, max_age_ms: int) -> bool:
        return self.age_ms(now) < max_age_ms

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'CacheSnapshot':
        return cls(
            headlines=[Headline.from_dict(item) for item in data.get('headlines', [])],
            timestamp=int(data['timestamp']),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'headlines': [headline.to_dict() for headline in self.headlines],
            'timestamp': self.timestamp,
        }


@dataclass(frozen=True)
class ServiceOption:
    """A named headline source selectable from the ticker button."""
    service: str
    label: str
    emoji: str


SERVICE_CYCLE: Tuple[ServiceOption, ...] = (
    ServiceOption('sports', 'Sports', '⚽'),
    ServiceOption('local', 'Local', '🏠'),
    ServiceOption('news', 'News', '📰'),
    ServiceOption('weather', 'Weather', '🌤️'),
    ServiceOption('tweets', 'Tweets', '🐦'),
)


@dataclass
class TickerOptions:
    """Ticker widget settings, with the widget's built-in defaults."""
    target: str = '#news-ticker'
    endpoint: str = '/api/news'
    speed: float = 60.0  # pixels per second
    gap: int = 48  # gap between headlines
    pause_on_hover: bool = True
    direction: str = 'ltr'
    font_path: Optional[str] = None
    font_size: int = 14
    max_headlines: int = 50
    query: Optional[str] = None
    refresh_interval: float = 300.0
    cache_max_age: float = 3600.0
    frame_rate: float = 60.0
    request_timeout: float = 10.0

    @classmethod
    def from_config(cls, config: Optional[Mapping[str, Any]]) -> 'TickerOptions':
        """Build options from the ``ticker`` config section, ignoring unknown and null keys."""
        known = cls.__dataclass_fields__
        values = {key: value for key, value in (config or {}).items()
                  if key in known and value is not None}
        return cls(**values)
