"""
Share-completion handler and gated job detail.
Единственное место, где вызывается VisibilityGate.unlock: сюда встраивается
серверная проверка share, если она появится.
"""
import logging
from collections import Counter
from datetime import timedelta
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.job import Job
from app.services.jobs.service import JobService
from app.sharing import GatedItem, Resolution, UnlockOutcome, VisibilityGate, record_share_unlock
from app.sharing.config import get_ranking_cache_ttl
from app.utils.metrics import metrics

logger = logging.getLogger(__name__)


class ShareService:
    def __init__(self, db: Session, gate: VisibilityGate, jobs: JobService | None = None):
        self.db = db
        self.gate = gate
        self.jobs = jobs or JobService(db, clock=gate.clock)

    def unlock(
        self,
        user_id: str,
        job_id: str,
        share_type: str,
        share_channel: str | None = None,
        *,
        client_ip: str | None = None,
        user_agent: str | None = None,
    ) -> UnlockOutcome:
        job = self.jobs.get_public(job_id)
        outcome = self.gate.unlock(
            GatedItem.model_validate(job),
            user_id,
            share_type=share_type,
            share_channel=share_channel,
        )
        if outcome.free:
            metrics.inc_unlock("free_today")
        elif outcome.created:
            # Повторный share того же дня не считается
            self._bump_share_count(job.id, user_id)
        record_share_unlock(
            job.id,
            user_id,
            outcome,
            share_type=share_type,
            share_channel=share_channel,
            client_ip=client_ip,
            user_agent=user_agent,
        )
        return outcome

    def check(self, user_id: str | None, job_id: str) -> Resolution:
        job = self.jobs.get_public(job_id)
        return self._resolve(job, user_id)

    def job_detail(self, job_id: str, user_id: str | None) -> tuple[Job, Resolution]:
        job = self.jobs.get_public(job_id)
        resolution = self._resolve(job, user_id)
        self.jobs.register_view(job.id)
        metrics.inc_job_view(gated=resolution.detail.masked)
        logger.info(
            "job_detail_viewed",
            extra={"job_id": job.id, "user_id": user_id, "outcome": _outcome(resolution)},
        )
        return job, resolution

    def statistics(self, user_id: str, days: int) -> dict[str, Any]:
        """Unlocks of one user over the last `days` days, grouped by type, channel and day."""
        clock = self.gate.clock
        since = clock.now() - timedelta(days=days)
        records = self.gate.ledger.list_unlocks(user_id, since)
        daily = Counter(clock.day_of(r.created_at) for r in records)
        return {
            "total_shares": len(records),
            "share_types": dict(Counter(r.share_type for r in records if r.share_type)),
            "share_channels": dict(Counter(r.share_channel for r in records if r.share_channel)),
            "daily_stats": [{"date": day, "shares": daily[day]} for day in sorted(daily)],
        }

    def history(self, user_id: str, limit: int, skip: int = 0) -> list[dict[str, Any]]:
        """Own share history, newest first, with a short summary of each shared job."""
        records = self.gate.ledger.recent_unlocks(user_id, limit=limit, skip=skip)
        jobs = self.jobs.get_many([r.job_id for r in records if r.job_id])
        return [
            {
                "share_id": r.id,
                "job_id": r.job_id,
                "unlock_date": r.unlock_day,
                "share_type": r.share_type,
                "share_channel": r.share_channel,
                "share_time": r.created_at,
                "job": _job_summary(jobs.get(r.job_id)),
            }
            for r in records
        ]

    def ranking(self, days: int, limit: int) -> list[dict[str, Any]]:
        """Top sharers over the last `days` days; cached for get_ranking_cache_ttl()."""
        cache = self.gate.ledger.cache
        if cache is not None:
            cached = cache.get_ranking(days, limit)
            if cached is not None:
                return cached
        since = self.gate.clock.now() - timedelta(days=days)
        entries = [
            {"rank": position, "user_id": user_id, "share_count": count}
            for position, (user_id, count) in enumerate(self.gate.ledger.top_sharers(since, limit), start=1)
        ]
        if cache is not None:
            cache.set_ranking(days, limit, entries, get_ranking_cache_ttl())
        return entries

    def _resolve(self, job: Job, user_id: str | None) -> Resolution:
        resolution = self.gate.resolve(GatedItem.model_validate(job), user_id)
        metrics.inc_check(_outcome(resolution))
        return resolution

    def _bump_share_count(self, job_id: str, user_id: str) -> None:
        # Разблокировка уже сохранена: сбой счётчика не превращается в 503
        try:
            self.jobs.increment_share_count(job_id)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.warning(
                "share_count_increment_failed",
                extra={"job_id": job_id, "user_id": user_id, "error": type(e).__name__},
            )


def _outcome(resolution: Resolution) -> str:
    if resolution.is_today:
        return "today"
    return "unlocked" if resolution.is_unlocked else "locked"


def _job_summary(job: Job | None) -> dict[str, Any] | None:
    if job is None:
        return None
    return {
        "id": job.id,
        "title": job.title,
        "company": job.company,
        "salary": job.salary,
        "city": job.city,
        "publish_time": job.publish_time,
    }
