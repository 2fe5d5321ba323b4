"""
Ticker engine.

- state: headline list, service cycle and visibility transitions (no I/O)
- acquisition: HTTP fetch and the offline cache snapshot
- scroll: per-frame position math
- formatting: age labels and escaped headline text
- renderer: rendering adapter that follows state changes
- engine: NewsTicker lifecycle and scheduling
"""

from newsticker.ticker.engine import NewsTicker, init_news_ticker
from newsticker.ticker.renderer import Page, TickerView
from newsticker.ticker.state import TickerState, TickerEvent, Activation

__all__ = [
    'NewsTicker',
    'init_news_ticker',
    'Page',
    'TickerView',
    'TickerState',
    'TickerEvent',
    'Activation',
]
