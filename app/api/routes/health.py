from fastapi import APIRouter, Depends, Response
import redis
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.deps import get_unlock_cache
from app.db.session import get_db
from app.sharing.cache import UnlockCache


router = APIRouter()


@router.get("/health")
def health() -> dict:
    """Liveness probe - always returns 200 if app is running."""
    return {"status": "ok"}


@router.get("/ready")
def readiness(
    response: Response,
    db: Session = Depends(get_db),
    cache: UnlockCache = Depends(get_unlock_cache),
) -> dict:
    """
    Readiness probe - 503 if the unlock ledger (DB) or its cache (Redis) is down.
    A ledger outage must surface here instead of as «locked» job details.
    """
    checks = {"database": "ok", "redis": "ok"}
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        checks["database"] = type(e).__name__
    try:
        cache.client.ping()
    except redis.RedisError as e:
        checks["redis"] = type(e).__name__

    if any(v != "ok" for v in checks.values()):
        response.status_code = 503
        return {"status": "not_ready", "checks": checks}
    return {"status": "ready", "checks": checks}
