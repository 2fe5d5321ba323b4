"""
Flask application for the news ticker dashboard.

Serves the news endpoint under ``/api``, the static assets and a
server-rendered dashboard page.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

from flask import Flask, render_template, request

from newsticker.logging_config import get_logger
from newsticker.models import DEFAULT_SERVICE
from newsticker.news_source import NewsSourceParser
from newsticker.exceptions import NewsSourceError
from newsticker.ticker.formatting import headline_markup
from newsticker.video import VideoPlayer
from web_interface.blueprints.api_v1 import api_v1

logger = get_logger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def _resolve(path: str) -> str:
    return path if os.path.isabs(path) else str(PROJECT_ROOT / path)


def create_app(config: Optional[Dict[str, Any]] = None) -> Flask:
    """
    Build the Flask app.

    Args:
        config: Full configuration dictionary (``server`` and ``video`` sections are used)
    """
    config = config or {}
    server_config = config.get('server', {})
    video_config = config.get('video', {})

    app = Flask(
        __name__,
        static_folder=_resolve(server_config.get('static_dir', 'web_interface/static')),
        static_url_path='/static',
    )
    app.config['NEWS_DIR'] = _resolve(server_config.get('news_dir', 'news'))
    app.config['VIDEO_PLAYLIST'] = list(video_config.get('playlist', []))
    app.config['VIDEO_ORIGIN'] = video_config.get('origin', '')

    app.register_blueprint(api_v1, url_prefix='/api')

    @app.after_request
    def add_cors_headers(response):
        response.headers['Access-Control-Allow-Origin'] = '*'
        response.headers['Access-Control-Allow-Methods'] = 'GET, POST, PUT, DELETE, OPTIONS'
        response.headers['Access-Control-Allow-Headers'] = 'Origin, X-Requested-With, Content-Type, Accept, Authorization'
        return response

    @app.route('/')
    def dashboard():
        parser = NewsSourceParser(app.config['NEWS_DIR'])
        try:
            headlines = parser.load_for_service(request.args.get('service') or DEFAULT_SERVICE)
        except NewsSourceError as e:
            logger.warning("Dashboard rendered without headlines: %s", e)
            headlines = []
        items = [headline_markup(headline) for headline in headlines]

        player = VideoPlayer(app.config['VIDEO_PLAYLIST'], origin=app.config['VIDEO_ORIGIN'] or request.host_url.rstrip('/'))
        player.play(0)

        return render_template(
            'index.html',
            ticker_items=items + items,
            video_src=player.surface.src if player.is_playing else None,
            playlist=player.playlist,
        )

    logger.info("Web interface created (news dir: %s)", app.config['NEWS_DIR'])
    return app
