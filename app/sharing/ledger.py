"""
UnlockLedger: единственная точка чтения/записи фактов «пользователь U открыл день D».
Бизнес-правил (сегодня бесплатно и т.п.) здесь нет, только запись и проверка членства.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta

from app.core.errors import StorageError, ValidationError
from app.sharing.cache import UnlockCache
from app.sharing.clock import Clock, as_utc, is_valid_day
from app.sharing.config import get_cache_ttl, get_retention
from app.sharing.models import UnlockRecord
from app.sharing.storage import UnlockStorage
from app.utils.metrics import metrics

logger = logging.getLogger(__name__)


class UnlockLedger:
    def __init__(
        self,
        storage: UnlockStorage,
        *,
        clock: Clock | None = None,
        cache: UnlockCache | None = None,
        retention: timedelta | None = None,
        cache_ttl: int | None = None,
    ) -> None:
        self.storage = storage
        self.clock = clock or Clock()
        self.cache = cache
        self.retention = retention if retention is not None else get_retention()
        self.cache_ttl = cache_ttl if cache_ttl is not None else get_cache_ttl()

    def is_unlocked(self, user_id: str | None, day: str | None) -> bool:
        """Absence (unknown user, malformed day) is False; storage failure raises StorageError."""
        if not user_id or not is_valid_day(day):
            return False
        if self.cache is not None and self.cache.hit(user_id, day):
            return True
        try:
            record = self.storage.get(user_id, day)
        except StorageError:
            metrics.inc_storage_error("read")
            raise
        if record is None:
            return False
        self._remember(record)
        return True

    def record_unlock(
        self,
        user_id: str,
        day: str,
        *,
        job_id: str | None = None,
        share_type: str | None = None,
        share_channel: str | None = None,
    ) -> tuple[UnlockRecord, bool]:
        """
        Idempotent insert-if-absent. Returns (record, created); a repeated unlock
        returns the existing record unchanged with created=False.
        """
        if not user_id:
            raise ValidationError("user_id is required")
        if not is_valid_day(day):
            raise ValidationError(f"invalid unlock day: {day!r}")
        try:
            record, created = self.storage.insert_if_absent(
                user_id,
                day,
                created_at=self.clock.now(),
                job_id=job_id,
                share_type=share_type,
                share_channel=share_channel,
            )
        except StorageError:
            metrics.inc_storage_error("write")
            raise
        self._remember(record)
        metrics.inc_unlock("created" if created else "existing")
        logger.info(
            "share_unlock_recorded",
            extra={"user_id": user_id, "unlock_day": day, "job_id": job_id, "unlock_created": created},
        )
        return record, created

    def purge_expired(self, retention: timedelta | None = None) -> int:
        """Housekeeping only: gating for today's items never depends on it."""
        retention = retention if retention is not None else self.retention
        threshold = self.clock.now() - retention
        deleted = self.storage.delete_older_than(threshold)
        if self.cache is not None:
            self.cache.forget(deleted)
        metrics.inc_purged(len(deleted))
        logger.info(
            "share_unlocks_purged",
            extra={"deleted": len(deleted), "retention_days": retention.days},
        )
        return len(deleted)

    def list_unlocks(self, user_id: str, since: datetime) -> list[UnlockRecord]:
        return self.storage.list_for_user(user_id, since)

    def recent_unlocks(self, user_id: str, *, limit: int, skip: int = 0) -> list[UnlockRecord]:
        """История пользователя, новые сверху."""
        return self.storage.page_for_user(user_id, limit=limit, skip=skip)

    def top_sharers(self, since: datetime, limit: int) -> list[tuple[str, int]]:
        return self.storage.top_users(since, limit)

    def _remember(self, record: UnlockRecord) -> None:
        if self.cache is None:
            return
        # Запись в кэше не должна пережить момент, когда purge вправе удалить строку
        purgeable_at = as_utc(record.created_at) + self.retention
        remaining = int((purgeable_at - self.clock.now()).total_seconds())
        self.cache.remember(record.user_id, record.unlock_day, min(self.cache_ttl, remaining))
