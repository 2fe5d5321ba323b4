"""
Tests for CacheManager and cache components.

Tests cache functionality including memory cache, disk cache and metrics.
"""

import pytest
import json
import os
import time
from unittest.mock import patch
from newsticker.cache_manager import CacheManager
from newsticker.cache.memory_cache import MemoryCache
from newsticker.cache.disk_cache import DiskCache
from newsticker.cache.cache_metrics import CacheMetrics


class TestCacheManager:
    """Test CacheManager functionality."""
    
    def test_init(self, tmp_path):
        """Test CacheManager initialization."""
        with patch('newsticker.cache_manager.CacheManager._get_writable_cache_dir', return_value=str(tmp_path)):
            cm = CacheManager()
            assert cm.cache_dir == str(tmp_path)
            assert hasattr(cm, '_memory_cache_component')
            assert hasattr(cm, '_disk_cache_component')
            assert hasattr(cm, '_metrics_component')
    
    def test_env_cache_dir(self, tmp_path, monkeypatch):
        """Test NEWSTICKER_CACHE_DIR is preferred."""
        target = tmp_path / 'env_cache'
        monkeypatch.setenv('NEWSTICKER_CACHE_DIR', str(target))
        cm = CacheManager()
        assert cm.get_cache_dir() == str(target)
        assert target.is_dir()
    
    def test_set_and_get(self, tmp_path):
        """Test basic set and get operations."""
        cm = CacheManager(cache_dir=str(tmp_path))
        test_data = {"key": "value", "number": 42}
        
        assert cm.save_cache("test_key", test_data) is True
        result = cm.get_cached_data("test_key")
        
        assert result == test_data
        assert os.path.exists(tmp_path / "test_key.json")
    
    def test_explicit_dir_is_created(self, tmp_path):
        """Test a missing explicit directory is created so entries reach disk."""
        cache_dir = tmp_path / "nested" / "cache"
        cm = CacheManager(cache_dir=str(cache_dir))
        
        assert cm.save_cache("news-ticker-cache", {"headlines": [], "timestamp": 1}) is True
        assert (cache_dir / "news-ticker-cache.json").exists()
        assert CacheManager(cache_dir=str(cache_dir)).get_cached_data("news-ticker-cache") == {"headlines": [], "timestamp": 1}
    
    def test_unusable_explicit_dir_disables_disk(self, tmp_path):
        """Test an explicit directory that cannot be created leaves a memory-only cache."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        cm = CacheManager(cache_dir=str(blocker / "cache"))
        
        assert cm.get_cache_dir() is None
        assert cm.save_cache("k", {"v": 1}) is False
        assert cm.get_cached_data("k") == {"v": 1}
    
    def test_survives_restart(self, tmp_path):
        """Test entries are read back from disk by a new manager."""
        CacheManager(cache_dir=str(tmp_path)).save_cache("snap", {"headlines": [], "timestamp": 1})
        
        fresh = CacheManager(cache_dir=str(tmp_path))
        assert fresh.get_cached_data("snap") == {"headlines": [], "timestamp": 1}
    
    def test_missing_key(self, tmp_path):
        """Test missing key returns None and counts a miss."""
        cm = CacheManager(cache_dir=str(tmp_path))
        assert cm.get_cached_data("absent") is None
        assert cm.get_cache_metrics()['misses'] == 1
    
    def test_clear_cache(self, tmp_path):
        """Test clearing a single key."""
        cm = CacheManager(cache_dir=str(tmp_path))
        cm.save_cache("a", {"x": 1})
        cm.save_cache("b", {"x": 2})
        
        cm.clear_cache("a")
        
        assert cm.get_cached_data("a") is None
        assert cm.get_cached_data("b") == {"x": 2}
    
    def test_metrics(self, tmp_path):
        """Test hit/miss/write counters."""
        cm = CacheManager(cache_dir=str(tmp_path))
        cm.save_cache("k", {"v": 1})
        cm.get_cached_data("k")
        cm.get_cached_data("nothing")
        
        metrics = cm.get_cache_metrics()
        assert metrics['hits'] == 1
        assert metrics['misses'] == 1
        assert metrics['writes'] == 1


class TestMemoryCache:
    """Test MemoryCache functionality."""
    
    def test_set_and_get(self):
        """Test basic set and get."""
        cache = MemoryCache()
        cache.set("key", {"value": 1})
        assert cache.get("key") == {"value": 1}
    
    def test_expired(self):
        """Test max_age expiry."""
        cache = MemoryCache()
        cache.set("key", {"value": 1})
        with patch('newsticker.cache.memory_cache.time.time', return_value=time.time() + 10):
            assert cache.get("key", max_age=5) is None
    
    def test_evicts_oldest(self):
        """Test size limit eviction."""
        cache = MemoryCache(max_size=2)
        with patch('newsticker.cache.memory_cache.time.time', side_effect=[1.0, 2.0, 3.0]):
            cache.set("a", {"v": 1})
            cache.set("b", {"v": 2})
            cache.set("c", {"v": 3})
        
        assert cache.size() == 2
        assert cache.get("a") is None
        assert cache.get("c") == {"v": 3}


class TestDiskCache:
    """Test DiskCache functionality."""
    
    def test_set_and_get(self, tmp_path):
        """Test atomic write and read back."""
        cache = DiskCache(cache_dir=str(tmp_path))
        assert cache.set("key", {"value": 1}) is True
        assert cache.get("key") == {"value": 1}
        assert not [name for name in os.listdir(tmp_path) if name.startswith('.')]
    
    def test_disabled(self):
        """Test cache without directory."""
        cache = DiskCache(cache_dir=None)
        assert cache.set("key", {"value": 1}) is False
        assert cache.get("key") is None
    
    def test_corrupted_file_removed(self, tmp_path):
        """Test corrupted JSON is treated as a miss and removed."""
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        cache = DiskCache(cache_dir=str(tmp_path))
        
        assert cache.get("broken") is None
        assert not path.exists()
    
    def test_undecodable_file_removed(self, tmp_path):
        """Test a file that is not UTF-8 is treated as a miss and removed."""
        path = tmp_path / "news-ticker-cache.json"
        path.write_bytes(b"\xff\xfe\x00garbage")
        cache = DiskCache(cache_dir=str(tmp_path))
        
        assert cache.get("news-ticker-cache") is None
        assert not path.exists()
    
    def test_max_age_uses_mtime(self, tmp_path):
        """Test stale files are treated as a miss."""
        cache = DiskCache(cache_dir=str(tmp_path))
        cache.set("old", {"value": 1})
        old_time = time.time() - 100
        os.utime(tmp_path / "old.json", (old_time, old_time))
        
        assert cache.get("old", max_age=50) is None
        assert cache.get("old") == {"value": 1}
    
    def test_unserializable_data(self, tmp_path):
        """Test serialization errors are reported, not raised."""
        cache = DiskCache(cache_dir=str(tmp_path))
        assert cache.set("bad", {"value": object()}) is False
        assert not (tmp_path / "bad.json").exists()


class TestCacheMetrics:
    """Test CacheMetrics functionality."""
    
    def test_hit_rate(self):
        """Test hit rate calculation."""
        metrics = CacheMetrics()
        metrics.record_hit()
        metrics.record_hit()
        metrics.record_miss()
        
        result = metrics.get_metrics()
        assert result['hits'] == 2
        assert result['misses'] == 1
        assert result['cache_hit_rate'] == pytest.approx(2 / 3)
