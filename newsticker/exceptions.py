"""
Custom exception hierarchy for the news ticker.

Provides specific exception types for different error categories,
enabling better error handling and debugging.
"""


class NewsTickerError(Exception):
    """Base exception for all news ticker errors."""
    
    def __init__(self, message: str, context: dict = None):
        """
        Initialize the exception.
        
        Args:
            message: Error message
            context: Optional context dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}
    
    def __str__(self) -> str:
        """Return formatted error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class CacheError(NewsTickerError):
    """Exception raised for cache-related errors."""
    
    def __init__(self, message: str, cache_key: str = None, context: dict = None):
        """
        Initialize cache error.
        
        Args:
            message: Error message
            cache_key: Optional cache key that caused the error
            context: Optional context dictionary
        """
        if cache_key:
            context = context or {}
            context['cache_key'] = cache_key
        super().__init__(message, context)
        self.cache_key = cache_key


class ConfigError(NewsTickerError):
    """Exception raised for configuration-related errors."""
    
    def __init__(self, message: str, config_path: str = None, field: str = None, context: dict = None):
        """
        Initialize config error.
        
        Args:
            message: Error message
            config_path: Optional path to config file
            field: Optional field name that caused the error
            context: Optional context dictionary
        """
        if config_path or field:
            context = context or {}
            if config_path:
                context['config_path'] = config_path
            if field:
                context['field'] = field
        super().__init__(message, context)
        self.config_path = config_path
        self.field = field


class FetchError(NewsTickerError):
    """Exception raised when headlines cannot be fetched or parsed."""
    
    def __init__(self, message: str, url: str = None, status_code: int = None, context: dict = None):
        """
        Initialize fetch error.
        
        Args:
            message: Error message
            url: Optional request URL
            status_code: Optional HTTP status code of the failed response
            context: Optional context dictionary
        """
        if url or status_code is not None:
            context = context or {}
            if url:
                context['url'] = url
            if status_code is not None:
                context['status_code'] = status_code
        super().__init__(message, context)
        self.url = url
        self.status_code = status_code


class DisplayError(NewsTickerError):
    """Exception raised for display-related errors."""
    
    def __init__(self, message: str, target: str = None, context: dict = None):
        """
        Initialize display error.
        
        Args:
            message: Error message
            target: Optional mount target selector that caused the error
            context: Optional context dictionary
        """
        if target:
            context = context or {}
            context['target'] = target
        super().__init__(message, context)
        self.target = target


class VideoError(NewsTickerError):
    """Exception raised when a playlist entry cannot be played."""
    
    def __init__(self, message: str, url: str = None, context: dict = None):
        if url:
            context = context or {}
            context['url'] = url
        super().__init__(message, context)
        self.url = url


class NewsSourceError(NewsTickerError):
    """Exception raised when a headline source file cannot be loaded."""
    
    def __init__(self, message: str, source_file: str = None, context: dict = None):
        if source_file:
            context = context or {}
            context['source_file'] = source_file
        super().__init__(message, context)
        self.source_file = source_file
