"""
Redis read-through cache for the unlock ledger.
Only positive answers are cached: a record never changes once written, so «unlocked»
can only go stale through purge, and entries expire before their record becomes purgeable.
The public share ranking is cached separately as JSON.
"""
from __future__ import annotations

import json
import logging
from typing import Any

import redis

from app.core.config import settings

logger = logging.getLogger(__name__)


class UnlockCache:
    def __init__(self, client: redis.Redis | None = None) -> None:
        self.client = client or redis.Redis.from_url(
            settings.redis_url,
            decode_responses=True,
            socket_timeout=settings.redis_socket_timeout,
        )

    def _key(self, user_id: str, day: str) -> str:
        return f"share_unlock:{user_id}:{day}"

    def hit(self, user_id: str, day: str) -> bool:
        """True only for a cached unlock; misses and Redis failures go to storage."""
        try:
            return bool(self.client.exists(self._key(user_id, day)))
        except redis.RedisError as e:
            logger.warning("share_unlock_cache_read_failed", extra={"user_id": user_id, "error": type(e).__name__})
            return False

    def remember(self, user_id: str, day: str, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            return
        try:
            self.client.set(self._key(user_id, day), "1", ex=ttl_seconds)
        except redis.RedisError as e:
            logger.warning("share_unlock_cache_write_failed", extra={"user_id": user_id, "error": type(e).__name__})

    def get_ranking(self, days: int, limit: int) -> list[dict[str, Any]] | None:
        """Cached ranking or None; Redis failures count as a miss."""
        try:
            raw = self.client.get(f"share_ranking:{days}:{limit}")
        except redis.RedisError as e:
            logger.warning("share_ranking_cache_read_failed", extra={"error": type(e).__name__})
            return None
        return json.loads(raw) if raw else None

    def set_ranking(self, days: int, limit: int, entries: list[dict[str, Any]], ttl_seconds: int) -> None:
        try:
            self.client.set(f"share_ranking:{days}:{limit}", json.dumps(entries), ex=ttl_seconds)
        except redis.RedisError as e:
            logger.warning("share_ranking_cache_write_failed", extra={"error": type(e).__name__})

    def forget(self, pairs: list[tuple[str, str]]) -> None:
        if not pairs:
            return
        try:
            self.client.delete(*(self._key(user_id, day) for user_id, day in pairs))
        except redis.RedisError as e:
            logger.warning("share_unlock_cache_forget_failed", extra={"error": type(e).__name__})
