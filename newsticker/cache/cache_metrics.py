"""
Cache Metrics

Tracks cache hit and miss counts for the snapshot store.
"""

import threading
import logging
from typing import Dict, Any, Optional


class CacheMetrics:
    """Tracks cache performance metrics."""
    
    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self._lock = threading.Lock()
        self._metrics: Dict[str, int] = {
            'hits': 0,
            'misses': 0,
            'writes': 0,
        }
    
    def record_hit(self) -> None:
        with self._lock:
            self._metrics['hits'] += 1
    
    def record_miss(self) -> None:
        with self._lock:
            self._metrics['misses'] += 1
    
    def record_write(self) -> None:
        with self._lock:
            self._metrics['writes'] += 1
    
    def get_metrics(self) -> Dict[str, Any]:
        """
        Get current cache metrics.
        
        Returns:
            Dictionary with counters and the derived hit rate
        """
        with self._lock:
            total_requests = self._metrics['hits'] + self._metrics['misses']
            return {
                'total_requests': total_requests,
                'hits': self._metrics['hits'],
                'misses': self._metrics['misses'],
                'writes': self._metrics['writes'],
                'cache_hit_rate': self._metrics['hits'] / total_requests if total_requests > 0 else 0.0,
            }
    
    def log_metrics(self) -> None:
        """Log current cache metrics."""
        metrics = self.get_metrics()
        self.logger.info("Cache Performance - Hit Rate: %.2f%%, Hits: %d, Misses: %d, Writes: %d",
                        metrics['cache_hit_rate'] * 100,
                        metrics['hits'],
                        metrics['misses'],
                        metrics['writes'])
