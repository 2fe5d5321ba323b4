"""
Common utilities and helpers for the news ticker.

This package provides reusable functionality shared by the ticker engine,
the video player and the backend:
- Error handling utilities
- HTML escaping for rendered headline text
"""

from newsticker.common.error_handler import (
    handle_file_operation,
    handle_json_operation,
    safe_execute,
    log_and_continue,
)
from newsticker.common.text_helper import escape_html

__all__ = [
    'handle_file_operation',
    'handle_json_operation',
    'safe_execute',
    'log_and_continue',
    'escape_html',
]
