"""
Playlist video player for the dashboard.
"""

from newsticker.video.player import VideoPlayer, VideoSurface, extract_video_id, build_embed_url

__all__ = ['VideoPlayer', 'VideoSurface', 'extract_video_id', 'build_embed_url']
