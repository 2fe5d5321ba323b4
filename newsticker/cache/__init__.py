"""
Cache module for the news ticker.

Provides specialized cache components:
- MemoryCache: In-memory caching
- DiskCache: Persistent disk caching
- CacheMetrics: Hit/miss tracking
"""
