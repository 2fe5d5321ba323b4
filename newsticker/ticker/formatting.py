"""
Headline formatting: relative age labels and escaped item markup.
"""

from typing import Optional

from newsticker.common.text_helper import escape_html
from newsticker.models import Headline, now_ms

SEPARATOR = '•'

MINUTE_MS = 60000
HOUR_MS = 3600000
DAY_MS = 86400000


def sanitize_text(text: str) -> str:
    """Plain-text-safe escaping for headline source and title."""
    return escape_html(text)


def format_time_ago(timestamp: int, now: Optional[int] = None) -> str:
    """
    Relative age label for a headline timestamp.

    Args:
        timestamp: Publish time in epoch milliseconds
        now: Reference time in epoch milliseconds (defaults to the wall clock)

    Returns:
        "now", "{m}m ago", "{h}h ago" or "{d}d ago"
    """
    if now is None:
        now = now_ms()
    diff = now - timestamp
    minutes = diff // MINUTE_MS
    hours = diff // HOUR_MS
    days = diff // DAY_MS

    if minutes < 1:
        return 'now'
    if minutes < 60:
        return f'{minutes}m ago'
    if hours < 24:
        return f'{hours}h ago'
    return f'{days}d ago'


def headline_text(headline: Headline, now: Optional[int] = None) -> str:
    """Plain text of a rendered item, e.g. ``"Reuters • Markets rally • 5m ago"``."""
    return f'{headline.source} {SEPARATOR} {headline.title} {SEPARATOR} {format_time_ago(headline.ts, now)}'


def headline_markup(headline: Headline, now: Optional[int] = None) -> str:
    """HTML for one ticker item; source and title are escaped, the link opens in a new context."""
    return (
        '<div class="news-ticker-item">'
        f'<span class="news-source">{sanitize_text(headline.source)}</span>'
        f'<span class="news-separator">{SEPARATOR}</span>'
        f'<a href="{escape_html(headline.url)}" target="_blank" rel="noopener" class="news-title-link">'
        f'<span class="news-title">{sanitize_text(headline.title)}</span>'
        '</a>'
        f'<span class="news-time">{format_time_ago(headline.ts, now)}</span>'
        '</div>'
    )
