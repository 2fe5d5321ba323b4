#!/usr/bin/env python3
import logging
import sys
import os
import argparse
import asyncio

# Add project directory to Python path (needed before importing newsticker modules)
project_dir = os.path.dirname(os.path.abspath(__file__))
if project_dir not in sys.path:
    sys.path.insert(0, project_dir)

parser = argparse.ArgumentParser(description='News Ticker')
parser.add_argument('-d', '--debug', action='store_true',
                    help='Enable debug logging and verbose output')
parser.add_argument('--server', action='store_true',
                    help='Run the news backend and dashboard instead of the headless ticker')
parser.add_argument('--config', default='config/config.json',
                    help='Path to the configuration file')
args = parser.parse_args()

debug_mode = args.debug or os.environ.get('NEWSTICKER_DEBUG', '').lower() == 'true'

# Configure logging before importing any other modules
from newsticker.logging_config import setup_logging, get_logger

log_level = logging.DEBUG if debug_mode else logging.INFO
setup_logging(level=log_level, format_type='readable', include_location=debug_mode)

from newsticker.cache_manager import CacheManager
from newsticker.config_manager import ConfigManager
from newsticker.models import TickerOptions
from newsticker.ticker import NewsTicker, Page

logger = get_logger(__name__)


async def run_ticker(options: TickerOptions, report_interval: float = 5.0) -> None:
    """Mount a headless ticker and log what it shows until interrupted."""
    page = Page()
    page.mount(options.target, font_path=options.font_path, font_size=options.font_size)
    cache_manager = CacheManager()
    ticker = NewsTicker(options, page=page, cache_manager=cache_manager)
    if not await ticker.start():
        return
    try:
        while True:
            await asyncio.sleep(report_interval)
            status = ticker.get_status()
            logger.info("Service %s: %d headlines, offline=%s, position=%.1f",
                        status['service'], status['headline_count'],
                        status['offline_mode'], status['position'])
    finally:
        ticker.destroy()
        cache_manager.log_cache_metrics()


def main():
    config = ConfigManager(config_path=args.config).load_config()

    if args.server:
        from web_interface.app import create_app
        server_config = config.get('server', {})
        port = int(os.environ.get('PORT', server_config.get('port', 3005)))
        create_app(config).run(host=server_config.get('host', '0.0.0.0'), port=port, debug=debug_mode)
        return

    options = TickerOptions.from_config(config.get('ticker', {}))
    try:
        asyncio.run(run_ticker(options))
    except KeyboardInterrupt:
        logger.info("News ticker stopped")


if __name__ == "__main__":
    main()
