# utils/throttle.py
"""Per-client request throttling (sliding window).

The counter is process-wide. With REDIS_URL set it lives in Redis instead, so
every gunicorn worker shares the same window.
"""
import logging
import threading
import time
from collections import defaultdict

import redis
from flask import request

from utils.jsonp import jsonp

logger = logging.getLogger(__name__)

EXEMPT_PATHS = {'/health'}


class InMemoryBackend:
    def __init__(self, clock=time.time):
        self._requests = defaultdict(list)
        self._lock = threading.Lock()
        self._clock = clock
        self._last_sweep = clock()

    def __len__(self):
        """Number of clients currently tracked."""
        return len(self._requests)

    def _sweep(self, window_start):
        # Forget clients with no request left in the window
        stale = [
            key for key, timestamps in self._requests.items()
            if not timestamps or timestamps[-1] <= window_start
        ]
        for key in stale:
            del self._requests[key]

    def hit(self, key, limit, period):
        """Record a request. Returns (allowed, retry_after_seconds)."""
        with self._lock:
            now = self._clock()
            window_start = now - period
            if now - self._last_sweep >= period:
                self._sweep(window_start)
                self._last_sweep = now
            timestamps = [ts for ts in self._requests[key] if ts > window_start]
            if len(timestamps) >= limit:
                self._requests[key] = timestamps
                retry_after = int(min(timestamps) + period - now) + 1
                return False, retry_after
            timestamps.append(now)
            self._requests[key] = timestamps
            return True, 0


class RedisBackend:
    def __init__(self, redis_url, key_prefix='throttle:'):
        self._redis = redis.Redis.from_url(redis_url)
        self.key_prefix = key_prefix

    def hit(self, key, limit, period):
        full_key = f"{self.key_prefix}{key}"
        now = time.time()
        pipe = self._redis.pipeline(transaction=True)
        pipe.zremrangebyscore(full_key, 0, now - period)
        pipe.zcard(full_key)
        pipe.zadd(full_key, {str(now): now})
        pipe.expire(full_key, period + 1)
        current_count = pipe.execute()[1]

        if current_count >= limit:
            # The rejected request must not extend the window
            self._redis.zrem(full_key, str(now))
            oldest = self._redis.zrange(full_key, 0, 0, withscores=True)
            retry_after = int(oldest[0][1] + period - now) + 1 if oldest else period
            return False, retry_after
        return True, 0


def init_throttle(app, limit, period, redis_url=None):
    """Reject clients that exceed ``limit`` requests per ``period`` seconds with a 429."""
    backend = RedisBackend(redis_url) if redis_url else InMemoryBackend()
    app.extensions['throttle'] = backend
    logger.info(f"Throttling {limit} requests per {period}s using {type(backend).__name__}")

    @app.before_request
    def throttle_request():
        if request.path in EXEMPT_PATHS:
            return None
        allowed, retry_after = backend.hit(request.remote_addr, limit, period)
        if not allowed:
            logger.warning(f"Throttled {request.remote_addr} on {request.path}")
            return jsonp({'error': 'too many requests'}, status=429,
                         headers={'Retry-After': str(retry_after)})
        return None

    return backend
