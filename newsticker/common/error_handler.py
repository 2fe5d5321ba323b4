"""
Error Handling Utilities

Helpers for the failure paths the ticker degrades through instead of raising:
news file reads, oEmbed bodies, state listeners and skipped renders. Each
helper logs with the caller's context (source file, video id, widget target)
and hands back a default value.
"""

import logging
from typing import Any, Callable, Optional, TypeVar, Dict
from newsticker.exceptions import NewsTickerError

T = TypeVar('T')


def _with_context(message: str, context: Optional[Dict[str, Any]]) -> str:
    if not context:
        return message
    details = ", ".join(f"{key}={value}" for key, value in context.items())
    return f"{message} ({details})"


def handle_file_operation(
    operation: Callable[[], T],
    error_message: str,
    logger: logging.Logger,
    default: Optional[T] = None,
    context: Optional[Dict[str, Any]] = None
) -> Optional[T]:
    """
    Run a file read/stat, logging failures and returning ``default`` instead.

    A missing file is a warning; permission and other I/O errors are errors.
    """
    message = _with_context(error_message, context)
    try:
        return operation()
    except FileNotFoundError as e:
        logger.warning("%s: File not found: %s", message, e)
        return default
    except PermissionError as e:
        logger.error("%s: Permission denied: %s", message, e)
        return default
    except (IOError, OSError) as e:
        logger.error("%s: I/O error: %s", message, e, exc_info=True)
        return default


def handle_json_operation(
    operation: Callable[[], T],
    error_message: str,
    logger: logging.Logger,
    default: Optional[T] = None,
    context: Optional[Dict[str, Any]] = None
) -> Optional[T]:
    """
    Decode a JSON body, returning ``default`` when it is malformed.

    Malformed bodies come from remote services, so they are logged as warnings.
    """
    message = _with_context(error_message, context)
    try:
        return operation()
    except ValueError as e:
        logger.warning("%s: Invalid JSON: %s", message, e)
        return default
    except (IOError, OSError) as e:
        logger.error("%s: I/O error: %s", message, e, exc_info=True)
        return default


def safe_execute(
    operation: Callable[[], T],
    error_message: str,
    logger: logging.Logger,
    default: Optional[T] = None,
    raise_on_error: bool = False,
    exception_type: type = NewsTickerError
) -> Optional[T]:
    """
    Safely execute an operation with error handling.

    Args:
        operation: Function to execute
        error_message: Base error message
        logger: Logger instance
        default: Default value to return on error
        raise_on_error: If True, raise exception instead of returning default
        exception_type: Type of exception to raise if raise_on_error is True

    Returns:
        Result of operation or default value (or raises exception)
    """
    try:
        return operation()
    except NewsTickerError:
        raise
    except Exception as e:
        logger.error("%s: %s", error_message, e, exc_info=True)
        if raise_on_error:
            raise exception_type(error_message, context={'original_error': str(e)}) from e
        return default


def log_and_continue(
    logger: logging.Logger,
    message: str,
    level: int = logging.WARNING,
    context: Optional[Dict[str, Any]] = None
):
    """Log a non-critical condition with its context and carry on."""
    if context:
        logger.log(level, "%s (context: %s)", message, context)
    else:
        logger.log(level, message)
