"""
Scroll Animator

Position math for the continuously scrolling ticker track.

The track holds two back-to-back copies of the headline items, so once a full
copy (half the track width) has scrolled past, jumping back to 0 shows the
exact same picture and the loop has no visible seam.

Features:
- Constant-velocity leftward scroll, one step per frame
- Loop-around at half the duplicated content width
- Pause handling (the loop keeps running, the position freezes)
- Frame rate tracking and logging
"""

import logging
import time
from typing import Any, Dict, Optional


class ScrollAnimator:
    """
    Computes the ticker position for each animation frame.

    The animator owns no timer; the engine calls :meth:`step` once per frame
    and stores the result on the ticker state.
    """

    def __init__(self, speed: float = 60.0, frame_rate: float = 60.0,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the ScrollAnimator.

        Args:
            speed: Scroll speed in pixels per second
            frame_rate: Animation steps per second
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.speed = max(0.0, float(speed))
        self.frame_rate = max(1.0, float(frame_rate))

        self.loop_count = 0

        # Frame rate tracking
        self.frame_count = 0
        self.last_frame_time = time.monotonic()
        self.last_fps_log_time = time.monotonic()
        self.frame_times = []

    @property
    def frame_interval(self) -> float:
        """Seconds between two animation steps."""
        return 1.0 / self.frame_rate

    @property
    def pixels_per_frame(self) -> float:
        return self.speed / self.frame_rate

    def step(self, position: float, content_width: float, paused: bool = False) -> float:
        """
        Advance the scroll by one frame.

        Args:
            position: Current horizontal offset in pixels (0 or negative)
            content_width: Width of the duplicated content (both copies)
            paused: When True the position is returned unchanged

        Returns:
            The new position
        """
        if paused:
            return position

        position -= self.pixels_per_frame

        if abs(position) >= content_width / 2:
            position = 0.0
            self.loop_count += 1
            self.logger.debug("Scroll wrap-around after %d loops (content width %.0fpx)",
                              self.loop_count, content_width)

        return position

    def set_speed(self, speed: float) -> None:
        """
        Set the scroll speed in pixels per second.

        Args:
            speed: Pixels to advance per second (negative values are treated as 0)
        """
        self.speed = max(0.0, float(speed))
        self.logger.debug("Scroll speed set to: %s pixels/second", self.speed)

    def log_frame_rate(self) -> None:
        """
        Log frame rate statistics for performance monitoring.
        """
        current_time = time.monotonic()

        frame_time = current_time - self.last_frame_time
        self.frame_times.append(frame_time)

        # Keep only last 100 frames for average
        if len(self.frame_times) > 100:
            self.frame_times.pop(0)

        # Log FPS every 60 seconds to avoid spam
        if current_time - self.last_fps_log_time >= 60.0:
            avg_frame_time = sum(self.frame_times) / len(self.frame_times)
            avg_fps = 1.0 / avg_frame_time if avg_frame_time > 0 else 0
            self.logger.debug("Ticker frame stats - Avg FPS: %.1f (target %.0f), frames: %d",
                              avg_fps, self.frame_rate, self.frame_count)
            self.last_fps_log_time = current_time
            self.frame_count = 0

        self.last_frame_time = current_time
        self.frame_count += 1

    def get_scroll_info(self) -> Dict[str, Any]:
        """
        Get current animator settings and counters.

        Returns:
            Dictionary with scroll state information
        """
        return {
            'speed': self.speed,
            'frame_rate': self.frame_rate,
            'pixels_per_frame': self.pixels_per_frame,
            'loop_count': self.loop_count,
        }
