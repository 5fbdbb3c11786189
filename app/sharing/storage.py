"""
Storage backends for the unlock ledger.
SqlUnlockStorage is the production backend (unique (user_id, unlock_day) constraint);
InMemoryUnlockStorage serves embedding and tests.
"""
from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from collections import Counter
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator
from uuid import uuid4

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import StorageError
from app.models.share_unlock import ShareUnlock
from app.sharing.clock import as_utc
from app.sharing.models import UnlockRecord

logger = logging.getLogger(__name__)


class UnlockStorage(ABC):
    """Insert-only store of UnlockRecord keyed by (user_id, unlock_day)."""

    @abstractmethod
    def get(self, user_id: str, day: str) -> UnlockRecord | None:
        """Record for the exact pair or None."""

    @abstractmethod
    def insert_if_absent(
        self,
        user_id: str,
        day: str,
        *,
        created_at: datetime,
        job_id: str | None = None,
        share_type: str | None = None,
        share_channel: str | None = None,
    ) -> tuple[UnlockRecord, bool]:
        """Returns (record, created). On conflict the existing record is returned unchanged."""

    @abstractmethod
    def delete_older_than(self, threshold: datetime) -> list[tuple[str, str]]:
        """Delete records with created_at < threshold; returns deleted (user_id, day) pairs."""

    @abstractmethod
    def list_for_user(self, user_id: str, since: datetime) -> list[UnlockRecord]:
        """Records of one user created at or after since, oldest first."""

    @abstractmethod
    def page_for_user(self, user_id: str, *, limit: int, skip: int = 0) -> list[UnlockRecord]:
        """One page of a user's records, newest first."""

    @abstractmethod
    def top_users(self, since: datetime, limit: int) -> list[tuple[str, int]]:
        """(user_id, count) of records created at or after since, most first; ties by user_id."""


class InMemoryUnlockStorage(UnlockStorage):
    def __init__(self) -> None:
        self._records: dict[tuple[str, str], UnlockRecord] = {}
        self._lock = threading.Lock()

    def get(self, user_id: str, day: str) -> UnlockRecord | None:
        with self._lock:
            return self._records.get((user_id, day))

    def insert_if_absent(
        self,
        user_id: str,
        day: str,
        *,
        created_at: datetime,
        job_id: str | None = None,
        share_type: str | None = None,
        share_channel: str | None = None,
    ) -> tuple[UnlockRecord, bool]:
        with self._lock:
            existing = self._records.get((user_id, day))
            if existing is not None:
                return existing, False
            record = UnlockRecord(
                id=str(uuid4()),
                user_id=user_id,
                unlock_day=day,
                created_at=created_at,
                job_id=job_id,
                share_type=share_type,
                share_channel=share_channel,
            )
            self._records[(user_id, day)] = record
            return record, True

    def delete_older_than(self, threshold: datetime) -> list[tuple[str, str]]:
        with self._lock:
            expired = [key for key, r in self._records.items() if as_utc(r.created_at) < threshold]
            for key in expired:
                del self._records[key]
        return expired

    def list_for_user(self, user_id: str, since: datetime) -> list[UnlockRecord]:
        with self._lock:
            snapshot = list(self._records.values())
        records = [
            r for r in snapshot
            if r.user_id == user_id and as_utc(r.created_at) >= since
        ]
        return sorted(records, key=lambda r: as_utc(r.created_at))

    def page_for_user(self, user_id: str, *, limit: int, skip: int = 0) -> list[UnlockRecord]:
        with self._lock:
            snapshot = [r for r in self._records.values() if r.user_id == user_id]
        snapshot.sort(key=lambda r: (as_utc(r.created_at), r.id), reverse=True)
        return snapshot[skip:skip + limit]

    def top_users(self, since: datetime, limit: int) -> list[tuple[str, int]]:
        with self._lock:
            snapshot = list(self._records.values())
        counts = Counter(r.user_id for r in snapshot if as_utc(r.created_at) >= since)
        return sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))[:limit]

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


class SqlUnlockStorage(UnlockStorage):
    """
    SQLAlchemy backend. Each write commits on its own: the unique constraint
    decides the winner of concurrent inserts, losers read the existing row.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    @contextmanager
    def _guard(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(
                "share_unlock_storage_error",
                extra={"error": f"{operation}: {type(e).__name__}"},
            )
            raise StorageError() from e

    def _query(self, user_id: str, day: str) -> ShareUnlock | None:
        return (
            self.db.query(ShareUnlock)
            .filter(ShareUnlock.user_id == user_id, ShareUnlock.unlock_day == day)
            .one_or_none()
        )

    def get(self, user_id: str, day: str) -> UnlockRecord | None:
        with self._guard("get"):
            row = self._query(user_id, day)
        return UnlockRecord.model_validate(row) if row is not None else None

    def insert_if_absent(
        self,
        user_id: str,
        day: str,
        *,
        created_at: datetime,
        job_id: str | None = None,
        share_type: str | None = None,
        share_channel: str | None = None,
    ) -> tuple[UnlockRecord, bool]:
        record = UnlockRecord(
            id=str(uuid4()),
            user_id=user_id,
            unlock_day=day,
            created_at=created_at,
            job_id=job_id,
            share_type=share_type,
            share_channel=share_channel,
        )
        # Вторая попытка нужна только если строку-победителя успел удалить purge
        for _ in range(2):
            with self._guard("insert"):
                try:
                    self.db.add(ShareUnlock(**record.model_dump()))
                    self.db.commit()
                    return record, True
                except IntegrityError:
                    self.db.rollback()
                existing = self._query(user_id, day)
            if existing is not None:
                return UnlockRecord.model_validate(existing), False
        raise StorageError()

    def delete_older_than(self, threshold: datetime) -> list[tuple[str, str]]:
        with self._guard("purge"):
            rows = (
                self.db.query(ShareUnlock.id, ShareUnlock.user_id, ShareUnlock.unlock_day)
                .filter(ShareUnlock.created_at < threshold)
                .all()
            )
            if not rows:
                return []
            (
                self.db.query(ShareUnlock)
                .filter(ShareUnlock.id.in_([r.id for r in rows]))
                .delete(synchronize_session=False)
            )
            self.db.commit()
        return [(r.user_id, r.unlock_day) for r in rows]

    def list_for_user(self, user_id: str, since: datetime) -> list[UnlockRecord]:
        with self._guard("list"):
            rows = (
                self.db.query(ShareUnlock)
                .filter(ShareUnlock.user_id == user_id, ShareUnlock.created_at >= since)
                .order_by(ShareUnlock.created_at)
                .all()
            )
        return [UnlockRecord.model_validate(r) for r in rows]

    def page_for_user(self, user_id: str, *, limit: int, skip: int = 0) -> list[UnlockRecord]:
        with self._guard("page"):
            rows = (
                self.db.query(ShareUnlock)
                .filter(ShareUnlock.user_id == user_id)
                .order_by(ShareUnlock.created_at.desc(), ShareUnlock.id.desc())
                .offset(skip)
                .limit(limit)
                .all()
            )
        return [UnlockRecord.model_validate(r) for r in rows]

    def top_users(self, since: datetime, limit: int) -> list[tuple[str, int]]:
        share_count = func.count(ShareUnlock.id).label("share_count")
        with self._guard("ranking"):
            rows = (
                self.db.query(ShareUnlock.user_id, share_count)
                .filter(ShareUnlock.created_at >= since)
                .group_by(ShareUnlock.user_id)
                .order_by(share_count.desc(), ShareUnlock.user_id)
                .limit(limit)
                .all()
            )
        return [(r.user_id, r.share_count) for r in rows]
