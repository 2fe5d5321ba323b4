"""
Ticker Renderer

Headless display surface for the ticker. A :class:`Page` holds mount points
keyed by selector; a :class:`TickerView` mounted there mirrors the widget's
markup (track, item list, service button, offline badge) and follows the
ticker state through its listener.

Item widths are measured with Pillow font metrics so the scroll loop knows
when one full copy of the headlines has passed.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from PIL import ImageFont

from newsticker.common.error_handler import log_and_continue
from newsticker.logging_config import get_logger
from newsticker.models import Headline
from newsticker.ticker.formatting import headline_markup, headline_text
from newsticker.ticker.state import TickerEvent, TickerState

HIDDEN_GLYPH = '📤'
HIDDEN_BUTTON_BORDER = '2px solid #8FE04A'
OFFLINE_BADGE = '📡 Offline'


def load_font(font_path: Optional[str] = None, font_size: int = 14,
              logger: Optional[logging.Logger] = None):
    """Load a TrueType font for measuring, falling back to Pillow's default font."""
    logger = logger or get_logger(__name__)
    if font_path:
        try:
            return ImageFont.truetype(font_path, font_size)
        except (OSError, IOError) as e:
            logger.warning("Could not load ticker font %s: %s. Using default font.", font_path, e)
    return ImageFont.load_default(size=font_size)


class TickerView:
    """Rendering adapter for one mounted ticker widget."""

    def __init__(self, target: str, measure: Optional[Callable[[str], float]] = None,
                 font_path: Optional[str] = None, font_size: int = 14) -> None:
        self.target = target
        self.logger = get_logger(__name__)
        if measure is None:
            font = load_font(font_path, font_size, self.logger)
            measure = font.getlength
        self.measure = measure
        self.gap = 48

        self.mounted = False
        self.items: List[str] = []
        self.item_texts: List[str] = []
        self.content_width = 0.0
        self.transform = 'translateX(0px)'
        self.direction = 'ltr'
        self.offline_visible = False
        self.content_hidden = False
        self.container_style: Dict[str, str] = {}
        self.container_classes: set = set()
        self.button_label = ''
        self.button_border = ''

    def use_font(self, font_path: Optional[str], font_size: int = 14) -> None:
        """Measure item widths with the given font from now on."""
        self.measure = load_font(font_path, font_size, self.logger).getlength

    def setup(self, state: TickerState, gap: int = 48) -> Callable[[], None]:
        """
        Build the widget structure and start following state changes.

        Returns:
            Callable that stops following the state
        """
        self.gap = gap
        self.mounted = True
        self.items = []
        self.item_texts = []
        self.content_width = 0.0
        self.offline_visible = state.offline_mode
        self.content_hidden = state.visibility_hidden
        self.button_label = state.current_option.label
        self.direction = state.direction
        self._apply_position(state.current_position)
        return state.subscribe(self.on_state_change)

    def render_items(self, headlines: List[Headline], now: Optional[int] = None) -> None:
        """Replace the item list with two back-to-back copies of the headlines."""
        if not self.mounted:
            log_and_continue(self.logger, "Render skipped, ticker view not mounted",
                             context={'target': self.target})
            return
        markup = [headline_markup(headline, now) for headline in headlines]
        texts = [headline_text(headline, now) for headline in headlines]
        self.items = markup + markup
        self.item_texts = texts + texts
        self.content_width = sum(self.measure(text) + self.gap for text in self.item_texts)

    def on_state_change(self, state: TickerState, event: TickerEvent) -> None:
        if not self.mounted:
            return
        if event == TickerEvent.POSITION_CHANGED:
            self._apply_position(state.current_position)
        elif event == TickerEvent.OFFLINE_CHANGED:
            self.offline_visible = state.offline_mode
        elif event == TickerEvent.PAUSE_CHANGED:
            if state.is_paused:
                self.container_classes.add('paused')
            else:
                self.container_classes.discard('paused')
        elif event == TickerEvent.SERVICE_CHANGED:
            self.button_label = state.current_option.label
        elif event == TickerEvent.VISIBILITY_CHANGED:
            self._apply_visibility(state)
        elif event == TickerEvent.DIRECTION_CHANGED:
            self.direction = state.direction

    def _apply_position(self, position: float) -> None:
        self.transform = f'translateX({position:g}px)'

    def _apply_visibility(self, state: TickerState) -> None:
        if state.visibility_hidden:
            # Content and background go away; the button stays reachable
            self.content_hidden = True
            self.container_style = {'background': 'transparent', 'border': 'none'}
            self.button_label = HIDDEN_GLYPH
            self.button_border = HIDDEN_BUTTON_BORDER
            self.logger.debug("News ticker content hidden")
        else:
            self.content_hidden = False
            self.container_style = {}
            self.button_label = state.current_option.label
            self.button_border = ''
            self.logger.debug("News ticker content shown")

    def teardown(self) -> None:
        """Empty the mount point."""
        self.mounted = False
        self.items = []
        self.item_texts = []
        self.content_width = 0.0

    def to_html(self) -> str:
        """Markup of the widget in its current state."""
        if not self.mounted:
            return ''
        container_style = '; '.join(f'{k}: {v}' for k, v in self.container_style.items())
        classes = ' '.join(['news-ticker-container'] + sorted(self.container_classes))
        content_classes = 'news-ticker-content hidden' if self.content_hidden else 'news-ticker-content'
        offline_style = 'display: block;' if self.offline_visible else 'display: none;'
        button_style = f' style="border: {self.button_border}"' if self.button_border else ''
        return (
            f'<div class="{classes}" style="{container_style}">'
            f'<div class="{content_classes}">'
            f'<div class="news-ticker-track" style="transform: {self.transform}; direction: {self.direction}">'
            f'<div class="news-ticker-list">{"".join(self.items)}</div>'
            '</div></div>'
            '<div class="news-service-selector">'
            f'<button class="news-service-button" id="news-service-btn"{button_style}>{self.button_label}</button>'
            '</div>'
            f'<div class="news-ticker-offline" style="{offline_style}">{OFFLINE_BADGE}</div>'
            '</div>'
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'target': self.target,
            'mounted': self.mounted,
            'items': len(self.items),
            'item_texts': list(self.item_texts),
            'content_width': self.content_width,
            'transform': self.transform,
            'direction': self.direction,
            'offline_visible': self.offline_visible,
            'content_hidden': self.content_hidden,
            'container_style': dict(self.container_style),
            'paused': 'paused' in self.container_classes,
            'button_label': self.button_label,
            'button_border': self.button_border,
        }


class Page:
    """Registry of mount points for ticker views."""

    def __init__(self) -> None:
        self._views: Dict[str, TickerView] = {}

    def mount(self, target: str, **view_kwargs) -> TickerView:
        view = TickerView(target, **view_kwargs)
        self._views[target] = view
        return view

    def query(self, target: str) -> Optional[TickerView]:
        return self._views.get(target)

    def unmount(self, target: str) -> None:
        self._views.pop(target, None)
