"""
Memory Cache

Handles in-memory caching with TTL support and a size limit.
"""

import time
import threading
import logging
from typing import Dict, Any, Optional


class MemoryCache:
    """Manages in-memory cache with TTL and size limits."""
    
    def __init__(self, max_size: int = 100) -> None:
        """
        Initialize memory cache.
        
        Args:
            max_size: Maximum number of entries in cache
        """
        self.logger = logging.getLogger(__name__)
        self._cache: Dict[str, Dict[str, Any]] = {}
        self._timestamps: Dict[str, float] = {}
        self._lock = threading.Lock()
        self._max_size = max_size
    
    def get(self, key: str, max_age: Optional[int] = None) -> Optional[Dict[str, Any]]:
        """
        Get value from memory cache.
        
        Args:
            key: Cache key
            max_age: Maximum age in seconds (None = no expiration)
            
        Returns:
            Cached value or None if not found or expired
        """
        now = time.time()
        
        with self._lock:
            if key not in self._cache:
                return None
            
            timestamp = self._timestamps.get(key)
            if timestamp is None:
                return None
            
            if max_age is not None and (now - timestamp) > max_age:
                self._cache.pop(key, None)
                self._timestamps.pop(key, None)
                return None
            
            return self._cache[key]
    
    def set(self, key: str, value: Dict[str, Any]) -> None:
        """
        Set value in memory cache, evicting the oldest entry when full.
        
        Args:
            key: Cache key
            value: Value to cache
        """
        with self._lock:
            if key not in self._cache and len(self._cache) >= self._max_size:
                oldest_key = min(self._timestamps, key=self._timestamps.get)
                self._cache.pop(oldest_key, None)
                self._timestamps.pop(oldest_key, None)
                self.logger.debug("Memory cache full, evicted %s", oldest_key)
            self._cache[key] = value
            self._timestamps[key] = time.time()
    
    def clear(self, key: Optional[str] = None) -> None:
        """
        Clear cache entry or all entries.
        
        Args:
            key: Specific key to clear, or None to clear all
        """
        with self._lock:
            if key:
                self._cache.pop(key, None)
                self._timestamps.pop(key, None)
            else:
                self._cache.clear()
                self._timestamps.clear()
    
    def size(self) -> int:
        """Get current cache size."""
        with self._lock:
            return len(self._cache)
