"""
Аудит share-разблокировок: record_share_unlock вызывается только из ShareService
после успешной записи в UnlockLedger.
"""
from __future__ import annotations

import logging

from app.sharing.models import UnlockOutcome

logger = logging.getLogger(__name__)


def record_share_unlock(
    job_id: str,
    user_id: str,
    outcome: UnlockOutcome,
    *,
    share_type: str,
    share_channel: str | None = None,
    client_ip: str | None = None,
    user_agent: str | None = None,
) -> None:
    """
    Записать событие share для аналитики.
    Факт share подтверждает клиент (серверной проверки callback WeChat нет).
    """
    logger.info(
        "share_unlock",
        extra={
            "job_id": job_id,
            "user_id": user_id,
            "unlock_day": outcome.unlock_day,
            "share_type": share_type,
            "share_channel": share_channel,
            "unlock_created": outcome.created,
            "outcome": "free_today" if outcome.free else ("created" if outcome.created else "existing"),
            "client_ip": client_ip,
            "user_agent": user_agent,
        },
    )
