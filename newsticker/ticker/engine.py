"""
News Ticker Engine

Owns one ticker widget: headline acquisition with offline fallback, the
scroll animation, the service button and the visibility toggle.

Scheduling runs on a single asyncio event loop:
- the animation is a task that steps once and sleeps one frame, forever;
- the refresh timer is a second task that starts a headline load every
  ``refresh_interval`` seconds;
- blocking HTTP runs in a worker thread (``asyncio.to_thread``) so frames
  keep coming while a fetch is in flight.

Destroying the widget cancels both tasks. A fetch that is still in flight is
left to finish, and its result is dropped.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Set, Union

from newsticker.cache_manager import CacheManager
from newsticker.exceptions import DisplayError, FetchError
from newsticker.logging_config import get_logger, log_with_context
from newsticker.models import TickerOptions, now_ms
from newsticker.ticker.acquisition import HeadlineFetcher, SnapshotStore
from newsticker.ticker.renderer import Page, TickerView
from newsticker.ticker.scroll import ScrollAnimator
from newsticker.ticker.state import Activation, TickerState

logger = get_logger(__name__)


class NewsTicker:
    """A scrolling headline ticker bound to one mount point of a :class:`Page`."""

    def __init__(self,
                 options: Union[TickerOptions, Mapping[str, Any], None] = None,
                 page: Optional[Page] = None,
                 cache_manager: Optional[CacheManager] = None,
                 fetcher: Optional[HeadlineFetcher] = None,
                 clock: Callable[[], int] = now_ms) -> None:
        if not isinstance(options, TickerOptions):
            options = TickerOptions.from_config(options)
        self.options = options
        self.page = page or Page()
        self.clock = clock

        self.state = TickerState(direction=options.direction)
        self.animator = ScrollAnimator(speed=options.speed, frame_rate=options.frame_rate)
        self.fetcher = fetcher or HeadlineFetcher(options.endpoint, timeout=options.request_timeout)
        self.snapshots = SnapshotStore(
            cache_manager or CacheManager(),
            max_age_ms=int(options.cache_max_age * 1000),
            clock=clock,
        )

        self.view: Optional[TickerView] = None
        self._unsubscribe_view: Optional[Callable[[], None]] = None
        self._animation_task: Optional[asyncio.Task] = None
        self._refresh_task: Optional[asyncio.Task] = None
        self._pending: Set[asyncio.Task] = set()
        self._live = False

    @property
    def is_live(self) -> bool:
        return self._live

    @property
    def headlines(self):
        return self.state.headlines

    @property
    def offline_mode(self) -> bool:
        return self.state.offline_mode

    @property
    def current_position(self) -> float:
        return self.state.current_position

    async def start(self) -> bool:
        """
        Mount the widget and start loading, animating and refreshing.

        Returns:
            False when the configured mount point does not exist
        """
        if self._live:
            return True

        view = self.page.query(self.options.target)
        if view is None:
            error = DisplayError("News ticker target not found", target=self.options.target)
            logger.error("%s", error)
            return False

        if self.options.font_path:
            view.use_font(self.options.font_path, self.options.font_size)

        self.view = view
        self._unsubscribe_view = view.setup(self.state, gap=self.options.gap)
        self._live = True
        log_with_context(logger, logging.INFO, "News ticker started",
                         widget=self.options.target, service=self.state.current_service)

        self._spawn(self.load_headlines)
        self.start_animation()
        self._refresh_task = asyncio.create_task(self._refresh_loop())
        return True

    async def load_headlines(self) -> bool:
        """
        Fetch headlines for the current service.

        On failure the ticker goes offline and falls back to the cache
        snapshot; nothing is raised.

        Returns:
            True when fresh headlines were applied
        """
        if not self._live:
            return False

        service = self.state.current_service
        try:
            headlines = await asyncio.to_thread(self.fetcher.fetch, service, self.options.query)
        except FetchError as e:
            if not self._live:
                logger.debug("Discarding failed fetch for destroyed ticker %s", self.options.target)
                return False
            log_with_context(logger, logging.WARNING,
                             f"Failed to fetch headlines, using cached data: {e}",
                             widget=self.options.target, service=service)
            self.state.set_offline(True)
            self.load_from_cache()
            return False

        if not self._live:
            logger.debug("Discarding %d headlines fetched for destroyed ticker %s",
                         len(headlines), self.options.target)
            return False

        self.state.replace_headlines(headlines, self.options.max_headlines)
        if self.state.offline_mode:
            self.state.set_offline(False)
        self.render_headlines()
        self.state.last_update = self.clock()
        return True

    def load_from_cache(self) -> bool:
        """Show the cached snapshot if one is fresh; otherwise keep the current content."""
        cached = self.snapshots.load()
        if not cached:
            return False
        self.state.replace_headlines(cached, self.options.max_headlines)
        self.render_headlines()
        return True

    def render_headlines(self) -> None:
        """Rebuild the item list as two copies of the headlines, reset the scroll and save a snapshot."""
        if self.view is None or not self.view.mounted or not self.state.headlines:
            return
        self.view.render_items(self.state.headlines, now=self.clock())
        self.snapshots.save(self.state.headlines)
        self.state.set_position(0.0)

    def step(self) -> None:
        """Advance the animation by one frame."""
        width = self.view.content_width if self.view is not None else 0.0
        position = self.animator.step(self.state.current_position, width, paused=self.state.is_paused)
        if position != self.state.current_position:
            self.state.set_position(position)
        self.animator.log_frame_rate()

    def start_animation(self) -> None:
        if self._animation_task is not None and not self._animation_task.done():
            return
        self._animation_task = asyncio.create_task(self._animate())

    async def _animate(self) -> None:
        while True:
            self.step()
            await asyncio.sleep(self.animator.frame_interval)

    async def _refresh_loop(self) -> None:
        while True:
            await asyncio.sleep(self.options.refresh_interval)
            self._spawn(self.load_headlines)

    def _spawn(self, coroutine_fn: Callable[[], Awaitable[Any]]) -> Optional[asyncio.Task]:
        """Run a coroutine function as a tracked background task on the running loop."""
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop, %s not scheduled", coroutine_fn.__name__)
            return None
        task = asyncio.create_task(coroutine_fn())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def wait_for_pending(self) -> None:
        """Wait until every headline load started so far has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def activate(self) -> Activation:
        """Single click on the service button."""
        result = self.state.activate()
        if result == Activation.SERVICE_ADVANCED:
            log_with_context(logger, logging.INFO, "Cycled to service",
                             widget=self.options.target, service=self.state.current_service)
            self._spawn(self.load_headlines)
        return result

    def double_activate(self) -> Activation:
        """Double click on the service button."""
        return self.state.double_activate()

    def toggle_visibility(self) -> bool:
        return self.state.toggle_visibility()

    def cycle_to_next_service(self) -> str:
        """Advance the service regardless of visibility and load its headlines."""
        option = self.state.advance_service()
        self._spawn(self.load_headlines)
        return option.service

    def pointer_enter(self) -> None:
        if self.options.pause_on_hover:
            self.pause()

    def pointer_leave(self) -> None:
        if self.options.pause_on_hover:
            self.resume()

    def pause(self) -> None:
        self.state.set_paused(True)

    def resume(self) -> None:
        self.state.set_paused(False)

    def set_speed(self, speed: float) -> None:
        self.options.speed = speed
        self.animator.set_speed(speed)

    def set_direction(self, direction: str) -> None:
        self.options.direction = direction
        self.state.set_direction(direction)

    def refresh(self) -> Optional[asyncio.Task]:
        """Start a headline load now."""
        return self._spawn(self.load_headlines)

    def destroy(self) -> None:
        """Stop the animation and the refresh timer and empty the mount point."""
        self._live = False
        if self._animation_task is not None:
            self._animation_task.cancel()
            self._animation_task = None
        if self._refresh_task is not None:
            self._refresh_task.cancel()
            self._refresh_task = None
        if self._unsubscribe_view is not None:
            self._unsubscribe_view()
            self._unsubscribe_view = None
        if self.view is not None:
            self.view.teardown()
        self.fetcher.close()
        log_with_context(logger, logging.INFO, "News ticker destroyed", widget=self.options.target)

    def get_status(self) -> Dict[str, Any]:
        return {
            'target': self.options.target,
            'live': self._live,
            'service': self.state.current_service,
            'service_index': self.state.current_service_index,
            'headline_count': len(self.state.headlines),
            'offline_mode': self.state.offline_mode,
            'paused': self.state.is_paused,
            'hidden': self.state.visibility_hidden,
            'position': self.state.current_position,
            'last_update': self.state.last_update,
            'scroll': self.animator.get_scroll_info(),
        }


def init_news_ticker(options: Union[TickerOptions, Mapping[str, Any], None] = None,
                     **kwargs) -> NewsTicker:
    """Create a ticker and start it on the running event loop, if there is one."""
    ticker = NewsTicker(options, **kwargs)
    ticker._spawn(ticker.start)
    return ticker
