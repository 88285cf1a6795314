"""
Weather caching module for Grand Prix Predictor.

Keeps recent weather API payloads on disk with an expiry timestamp so
repeated predictions for the same circuit do not hit the network.
"""

import json
import logging
import re
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional, Any


logger = logging.getLogger(__name__)


class DataCache:
    """
    Local JSON cache with TTL support.

    Each entry is stored as its own file alongside the time it expires.
    Every failure is logged and treated as a cache miss.
    """

    def __init__(self, cache_dir: str = ".gp_cache"):
        """
        Initialize cache with configurable directory.

        Args:
            cache_dir: Directory path for cache storage (default: .gp_cache)
        """
        self.cache_dir = Path(cache_dir)
        self.enabled = True
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Failed to create cache directory '{self.cache_dir}': {e}")
            logger.warning("Caching will be disabled.")
            self.enabled = False

    def _get_cache_path(self, key: str) -> Path:
        """Map a cache key to a file name safe on every platform."""
        safe_key = re.sub(r'[^a-z0-9_-]+', '_', key.strip().lower())
        return self.cache_dir / f"{safe_key}.json"

    def get(self, key: str) -> Optional[Any]:
        """
        Retrieve cached data if it has not expired.

        Args:
            key: Cache key identifier

        Returns:
            Cached data, or None if missing, expired or corrupted
        """
        if not self.enabled:
            return None

        cache_path = self._get_cache_path(key)
        if not cache_path.exists():
            return None

        try:
            with open(cache_path, 'r', encoding='utf-8') as f:
                entry = json.load(f)
            expires_at = datetime.fromisoformat(entry['expires_at'])
            data = entry['data']
        except (json.JSONDecodeError, KeyError, TypeError, ValueError, OSError) as e:
            logger.warning(f"Corrupted cache file for key '{key}': {e}")
            try:
                cache_path.unlink()
            except OSError as unlink_error:
                logger.debug(f"Could not remove {cache_path}: {unlink_error}")
            return None

        if datetime.now() > expires_at:
            logger.debug(f"Cache expired: {key}")
            return None

        return data

    def set(self, key: str, data: Any, ttl: int) -> None:
        """
        Store data in cache with expiration timestamp.

        Args:
            key: Cache key identifier
            data: Data to cache (must be JSON serializable)
            ttl: Time to live in seconds
        """
        if not self.enabled:
            return

        now = datetime.now()
        entry = {
            'data': data,
            'cached_at': now.isoformat(),
            'expires_at': (now + timedelta(seconds=ttl)).isoformat(),
        }

        try:
            payload = json.dumps(entry, indent=2)
            with open(self._get_cache_path(key), 'w', encoding='utf-8') as f:
                f.write(payload)
        except (OSError, TypeError, ValueError) as e:
            logger.warning(f"Failed to write cache for key '{key}': {e}")

