"""
File-backed headline sources for the news endpoint.

Each service reads a plain text file from the news directory, one headline
per line::

    source|title|url[|ts]

Blank lines and lines starting with ``#`` are skipped. ``ts`` is epoch
milliseconds; when it is missing the file's modification time is used.
"""

import os
import logging
from typing import Dict, List, Optional

from newsticker.common.error_handler import handle_file_operation
from newsticker.exceptions import NewsSourceError
from newsticker.logging_config import get_logger
from newsticker.models import Headline, now_ms

DEFAULT_SOURCE_FILE = 'news.txt'

SERVICE_SOURCE_FILES: Dict[str, str] = {
    'local': 'news-local.txt',
    'sports': 'news-sports.txt',
    'weather': 'news-weather.txt',
    'tweets': 'news-tweets.txt',
}


def source_file_for_service(service: Optional[str]) -> str:
    """Map a service id to its source file; anything unrecognized reads the default file."""
    return SERVICE_SOURCE_FILES.get(service or '', DEFAULT_SOURCE_FILE)


def filter_headlines(headlines: List[Headline], query: Optional[str]) -> List[Headline]:
    """Case-insensitive substring match against title or source."""
    if not query:
        return headlines
    needle = query.lower()
    return [h for h in headlines if needle in h.title.lower() or needle in h.source.lower()]


class NewsSourceParser:
    """Loads headlines from the text files in a news directory."""

    def __init__(self, news_dir: str = 'news', logger: Optional[logging.Logger] = None) -> None:
        self.news_dir = news_dir
        self.logger = logger or get_logger(__name__)

    def load_headlines(self) -> List[Headline]:
        """Load the default (general news) source."""
        return self.load_headlines_from_source(DEFAULT_SOURCE_FILE)

    def load_headlines_from_source(self, source_file: str) -> List[Headline]:
        """
        Parse one source file.

        Raises:
            NewsSourceError: If the file is missing or unreadable
        """
        path = os.path.join(self.news_dir, os.path.basename(source_file))
        try:
            with open(path, 'r', encoding='utf-8') as f:
                lines = f.readlines()
        except (IOError, OSError, UnicodeDecodeError) as e:
            raise NewsSourceError(f"Could not read headline source: {e}", source_file=source_file) from e

        mtime = handle_file_operation(
            lambda: os.path.getmtime(path),
            "Could not stat headline source",
            self.logger,
            context={'source_file': source_file},
        )
        default_ts = int(mtime * 1000) if mtime is not None else now_ms()

        headlines = []
        for line_number, line in enumerate(lines, start=1):
            line = line.strip()
            if not line or line.startswith('#'):
                continue
            headline = self._parse_line(line, default_ts)
            if headline is None:
                self.logger.warning("Skipping malformed line %d in %s", line_number, source_file)
                continue
            headlines.append(headline)

        self.logger.debug("Loaded %d headlines from %s", len(headlines), source_file)
        return headlines

    def _parse_line(self, line: str, default_ts: int) -> Optional[Headline]:
        parts = [part.strip() for part in line.split('|')]
        if len(parts) < 3 or not parts[1]:
            return None
        ts = default_ts
        if len(parts) > 3 and parts[3]:
            try:
                ts = int(parts[3])
            except ValueError:
                return None
        return Headline(source=parts[0], title=parts[1], url=parts[2], ts=ts)

    def load_for_service(self, service: Optional[str]) -> List[Headline]:
        """
        Load the source file for a service, falling back to the default source.

        Raises:
            NewsSourceError: If the default source cannot be read either
        """
        source_file = source_file_for_service(service)
        try:
            return self.load_headlines_from_source(source_file)
        except NewsSourceError as e:
            if source_file == DEFAULT_SOURCE_FILE:
                raise
            self.logger.warning("Failed to load %s headlines, falling back to main news: %s", service, e)
            return self.load_headlines()
