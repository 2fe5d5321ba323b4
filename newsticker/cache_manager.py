import os
import tempfile
import logging
from typing import Any, Dict, Optional
from newsticker.cache.memory_cache import MemoryCache
from newsticker.cache.disk_cache import DiskCache
from newsticker.cache.cache_metrics import CacheMetrics
from newsticker.logging_config import get_logger


class CacheManager:
    """Local persistence for the ticker: memory cache backed by JSON files on disk."""
    
    def __init__(self, cache_dir: Optional[str] = None) -> None:
        self.logger: logging.Logger = get_logger(__name__)
        
        if cache_dir:
            self.cache_dir: Optional[str] = cache_dir if self._prepare_cache_dir(cache_dir) else None
        else:
            self.cache_dir = self._get_writable_cache_dir()
        if self.cache_dir:
            self.logger.info(f"Using cache directory: {self.cache_dir}")
        else:
            self.logger.error("Could not find or create a writable cache directory. Offline fallback will be memory-only.")
        
        self._memory_cache_component = MemoryCache(max_size=100)
        self._disk_cache_component = DiskCache(cache_dir=self.cache_dir, logger=self.logger)
        self._metrics_component = CacheMetrics(logger=self.logger)

    def _get_writable_cache_dir(self) -> Optional[str]:
        """Tries to find or create a writable cache directory."""
        candidates = []
        env_dir = os.environ.get('NEWSTICKER_CACHE_DIR')
        if env_dir:
            candidates.append(env_dir)
        candidates.append(os.path.join(os.path.expanduser('~'), '.newsticker_cache'))
        candidates.append(os.path.join(tempfile.gettempdir(), 'newsticker_cache'))
        
        for candidate in candidates:
            if self._prepare_cache_dir(candidate):
                if candidate.startswith(tempfile.gettempdir()):
                    self.logger.warning("Using temporary cache directory - cache will NOT persist across restarts")
                return candidate
        
        return None

    def _prepare_cache_dir(self, path: str) -> bool:
        """Create the directory if needed; True when it is writable."""
        try:
            os.makedirs(path, exist_ok=True)
        except (OSError, IOError, PermissionError) as e:
            self.logger.warning(f"Could not use cache directory {path}: {e}")
            return False
        if not os.access(path, os.W_OK):
            self.logger.warning(f"Directory exists but is not writable: {path}")
            return False
        return True

    def get_cached_data(self, key: str, max_age: Optional[int] = None) -> Optional[Dict[str, Any]]:
        """Get data from cache (memory first, then disk).

        - max_age: TTL in seconds for both layers; None keeps entries until overwritten
        """
        cached = self._memory_cache_component.get(key, max_age=max_age)
        if cached is not None:
            self._metrics_component.record_hit()
            return cached

        record = self._disk_cache_component.get(key, max_age=max_age)
        if record is not None:
            # Hydrate memory cache
            self._memory_cache_component.set(key, record)
            self._metrics_component.record_hit()
            return record

        self._metrics_component.record_miss()
        return None
            
    def save_cache(self, key: str, data: Dict[str, Any]) -> bool:
        """
        Save data to cache.
        Args:
            key: Cache key
            data: Data to cache
        Returns:
            True if the entry was persisted to disk
        """
        self._memory_cache_component.set(key, data)
        self._metrics_component.record_write()
        return self._disk_cache_component.set(key, data)

    def clear_cache(self, key: Optional[str] = None) -> None:
        """Clear cache for a specific key or all keys."""
        if key:
            self._memory_cache_component.clear(key)
            self._disk_cache_component.clear(key)
            self.logger.info("Cleared cache for key: %s", key)
        else:
            memory_count = self._memory_cache_component.size()
            self._memory_cache_component.clear()
            self._disk_cache_component.clear()
            self.logger.info("Cleared all cache: %d memory entries", memory_count)

    def get_cache_dir(self) -> Optional[str]:
        """Get the cache directory path."""
        return self.cache_dir

    def get_cache_metrics(self) -> Dict[str, Any]:
        """Get current cache performance metrics."""
        return self._metrics_component.get_metrics()

    def log_cache_metrics(self) -> None:
        """Log current cache performance metrics."""
        self._metrics_component.log_metrics()
