"""
Disk Cache

Handles persistent disk-based caching with atomic writes and error recovery.
"""

import json
import os
import time
import tempfile
import logging
import threading
from typing import Dict, Any, Optional


class DiskCache:
    """Manages persistent disk-based cache."""
    
    def __init__(self, cache_dir: Optional[str], logger: Optional[logging.Logger] = None) -> None:
        """
        Initialize disk cache.
        
        Args:
            cache_dir: Directory for cache files (None = disabled)
            logger: Optional logger instance
        """
        self.cache_dir = cache_dir
        self.logger = logger or logging.getLogger(__name__)
        self._lock = threading.Lock()
    
    def get_cache_path(self, key: str) -> Optional[str]:
        """
        Get the path for a cache file.
        
        Args:
            key: Cache key
            
        Returns:
            Path to cache file or None if cache is disabled
        """
        if not self.cache_dir:
            return None
        return os.path.join(self.cache_dir, f"{key}.json")
    
    def get(self, key: str, max_age: Optional[int] = None) -> Optional[Dict[str, Any]]:
        """
        Get data from disk cache.
        
        Args:
            key: Cache key
            max_age: Maximum age in seconds, judged by file mtime (None = no expiration)
            
        Returns:
            Cached data or None if not found, expired or unreadable
        """
        cache_path = self.get_cache_path(key)
        if not cache_path or not os.path.exists(cache_path):
            return None
        
        try:
            if max_age is not None and (time.time() - os.path.getmtime(cache_path)) > max_age:
                # Stale on disk; keep file for potential diagnostics but treat as miss
                return None
            
            with self._lock:
                with open(cache_path, 'r', encoding='utf-8') as f:
                    return json.load(f)
                
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            self.logger.error("Error parsing cache file for %s at %s: %s", key, cache_path, e)
            # If the file is corrupted, remove it
            try:
                os.remove(cache_path)
                self.logger.info("Removed corrupted cache file: %s", cache_path)
            except OSError as remove_error:
                self.logger.warning("Could not remove corrupted cache file %s: %s", cache_path, remove_error)
            return None
        except PermissionError as e:
            self.logger.warning("Permission denied loading cache for %s from %s: %s. Cache unavailable for this key.", key, cache_path, e)
            return None
        except (IOError, OSError) as e:
            self.logger.error("Error loading cache for %s from %s: %s", key, cache_path, e, exc_info=True)
            return None
    
    def set(self, key: str, data: Dict[str, Any]) -> bool:
        """
        Save data to disk cache with atomic write.
        
        Permission and I/O errors are logged and swallowed: the cache is an
        offline fallback, never a reason to stop the ticker.
        
        Args:
            key: Cache key
            data: Data to cache
            
        Returns:
            True if the data reached disk
        """
        cache_path = self.get_cache_path(key)
        if not cache_path:
            return False
        
        tmp_path = None
        try:
            with self._lock:
                fd, tmp_path = tempfile.mkstemp(prefix=f".{os.path.basename(cache_path)}.",
                                                dir=os.path.dirname(cache_path))
                with os.fdopen(fd, 'w', encoding='utf-8') as tmp_file:
                    json.dump(data, tmp_file, indent=4)
                    tmp_file.flush()
                    os.fsync(tmp_file.fileno())
                os.replace(tmp_path, cache_path)
                tmp_path = None
            return True
        except (IOError, OSError, PermissionError) as e:
            self.logger.warning(
                "Could not write cache for key '%s' to %s: %s. "
                "Cache will be unavailable for this key, but the ticker will continue.",
                key, cache_path, e
            )
            return False
        except (TypeError, ValueError) as e:
            self.logger.warning("Could not serialize cache data for key '%s': %s", key, e)
            return False
        finally:
            if tmp_path and os.path.exists(tmp_path):
                try:
                    os.remove(tmp_path)
                except OSError:
                    pass
    
    def clear(self, key: Optional[str] = None) -> None:
        """
        Clear cache entry or all entries.
        
        Args:
            key: Specific key to clear, or None to clear all
        """
        if not self.cache_dir:
            return
        
        with self._lock:
            if key:
                cache_path = self.get_cache_path(key)
                if cache_path and os.path.exists(cache_path):
                    try:
                        os.remove(cache_path)
                    except OSError as e:
                        self.logger.warning("Could not remove cache file %s: %s", cache_path, e)
            else:
                if os.path.exists(self.cache_dir):
                    for filename in os.listdir(self.cache_dir):
                        if filename.endswith('.json'):
                            try:
                                os.remove(os.path.join(self.cache_dir, filename))
                            except OSError as e:
                                self.logger.warning("Could not remove cache file %s: %s", filename, e)
    
    def get_cache_dir(self) -> Optional[str]:
        """Get the cache directory path."""
        return self.cache_dir
