#!/usr/bin/env python3
"""
News Ticker Web Interface Startup Script
Serves the news endpoint, the dashboard page and the static assets.
"""

import os
import sys
from pathlib import Path


def main():
    """Main startup function."""
    # Change to project root directory
    project_root = Path(__file__).parent.parent
    os.chdir(project_root)

    # Add to Python path
    sys.path.insert(0, str(project_root))

    from newsticker.config_manager import ConfigManager
    from newsticker.logging_config import setup_logging
    from web_interface.app import create_app

    setup_logging()
    config = ConfigManager().load_config()
    server_config = config.get('server', {})
    host = server_config.get('host', '0.0.0.0')
    port = int(os.environ.get('PORT', server_config.get('port', 3005)))

    app = create_app(config)

    print("Starting News Ticker Web Interface...")
    print(f"Web server binding to: {host}:{port}")
    print(f"News endpoint: http://localhost:{port}/api/news")

    app.run(host=host, port=port, debug=False)


if __name__ == '__main__':
    main()
