"""
Celery periodic task: delete share unlocks older than the retention window.
Housekeeping only; today's jobs stay open regardless.
"""
import logging

from app.core.celery_app import celery_app
from app.core.errors import StorageError
from app.db.session import SessionLocal
from app.sharing import Clock, SqlUnlockStorage, UnlockLedger
from app.sharing.cache import UnlockCache
from app.sharing.config import get_timezone

logger = logging.getLogger(__name__)


@celery_app.task(name="app.workers.tasks.purge_unlocks.purge_expired_unlocks")
def purge_expired_unlocks() -> dict:
    db = SessionLocal()
    try:
        ledger = UnlockLedger(
            SqlUnlockStorage(db),
            clock=Clock(get_timezone()),
            cache=UnlockCache(),
        )
        deleted = ledger.purge_expired()
        return {"deleted": deleted}
    except StorageError:
        logger.exception("purge_expired_unlocks_error")
        return {"deleted": 0, "error": "storage"}
    finally:
        db.close()
