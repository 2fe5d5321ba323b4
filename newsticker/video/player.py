"""
Video Player

Plays a playlist of external video links in an embedded surface. The player
owns its playlist; nothing is shared through module globals.
"""

import re
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

import requests

from newsticker.common.error_handler import handle_json_operation
from newsticker.exceptions import VideoError
from newsticker.logging_config import get_logger


YOUTUBE_ID_PATTERNS = (
    re.compile(r'(?:youtube\.com/watch\?v=|youtu\.be/)([^\s&?]+)'),
    re.compile(r'youtube\.com/embed/([^\s&?]+)'),
    re.compile(r'youtube\.com/v/([^\s&?]+)'),
)

EMBED_URL_TEMPLATE = ('https://www.youtube.com/embed/{video_id}'
                      '?autoplay=1&mute=0&controls=1&loop=0&enablejsapi=1&origin={origin}')
OEMBED_URL = 'https://www.youtube.com/oembed'


def extract_video_id(url: str) -> Optional[str]:
    """Pull the platform video id out of a known YouTube URL shape."""
    if not url:
        return None
    for pattern in YOUTUBE_ID_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


def build_embed_url(video_id: str, origin: str) -> str:
    return EMBED_URL_TEMPLATE.format(video_id=video_id, origin=origin)


@dataclass
class VideoSurface:
    """The embed frame the player loads videos into."""
    src: str = ''
    visible: bool = False
    z_index: int = -1
    pointer_events: bool = False


class VideoPlayer:
    """Playlist-driven embedded video player."""

    def __init__(self, playlist: Optional[Sequence[str]] = None, origin: str = '',
                 surface: Optional[VideoSurface] = None,
                 session: Optional[requests.Session] = None,
                 logger: Optional[logging.Logger] = None) -> None:
        self.playlist: List[str] = list(playlist or [])
        self.origin = origin
        self.surface = surface or VideoSurface()
        self.session = session or requests.Session()
        self.logger = logger or get_logger(__name__)
        self.current_index = 0
        self.is_playing = False
        self.last_error: Optional[VideoError] = None

    def play(self, index: int) -> bool:
        """
        Load the playlist entry at ``index`` into the surface.

        Out-of-range indexes are ignored. An entry without a recognizable video
        id is reported and leaves the surface untouched.

        Returns:
            True if playback was started
        """
        if index < 0 or index >= len(self.playlist):
            return False

        url = self.playlist[index]
        video_id = extract_video_id(url)
        if not video_id:
            self.last_error = VideoError("Could not extract YouTube ID from URL", url=url)
            self.logger.error("Invalid YouTube URL: %s", self.last_error)
            return False

        self.current_index = index
        self.surface.src = build_embed_url(video_id, self.origin)
        self.surface.visible = True
        self.surface.z_index = 1
        self.surface.pointer_events = True
        self.is_playing = True
        self.last_error = None
        self.logger.info("Playing video %d/%d (%s)", index + 1, len(self.playlist), video_id)
        return True

    def next(self) -> bool:
        if not self.playlist:
            return False
        return self.play((self.current_index + 1) % len(self.playlist))

    def previous(self) -> bool:
        if not self.playlist:
            return False
        return self.play((self.current_index - 1) % len(self.playlist))

    def add(self, url: str) -> None:
        self.playlist.append(url)

    def remove(self, index: int) -> Optional[str]:
        """Remove a playlist entry; the current index keeps pointing at the same video when possible."""
        if index < 0 or index >= len(self.playlist):
            return None
        removed = self.playlist.pop(index)
        if index < self.current_index:
            self.current_index -= 1
        elif self.current_index >= len(self.playlist):
            self.current_index = max(0, len(self.playlist) - 1)
        return removed

    def force_close(self) -> None:
        """Hide the surface and stop playback."""
        self.logger.info("Force closing video")
        self.surface.visible = False
        self.surface.pointer_events = False
        self.surface.z_index = -1
        self.is_playing = False

    def fetch_video_title(self, video_id: str, timeout: float = 10.0) -> Optional[str]:
        """Look the title up through YouTube oEmbed; None on any failure."""
        params = {'url': f'https://www.youtube.com/watch?v={video_id}', 'format': 'json'}
        try:
            response = self.session.get(OEMBED_URL, params=params, timeout=timeout,
                                        headers={'Accept': 'application/json'})
        except requests.exceptions.RequestException as e:
            self.logger.warning("Network error fetching video title for %s: %s", video_id, e)
            return None

        if not response.ok:
            self.logger.warning("YouTube oEmbed returned status %s for %s", response.status_code, video_id)
            return None

        payload = handle_json_operation(
            response.json, "Malformed oEmbed response", self.logger, context={'video_id': video_id}
        )
        if not isinstance(payload, dict):
            return None
        title = payload.get('title')

        self.logger.debug("Fetched video title for %s: %s", video_id, title)
        return title
