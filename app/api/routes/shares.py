from fastapi import APIRouter, Depends, Query, Request

from app.api.deps import get_current_user_id, get_share_service
from app.schemas.shares import (
    CheckIn,
    CheckOut,
    ShareHistoryItem,
    ShareHistoryOut,
    ShareRankingEntry,
    ShareStatisticsOut,
    UnlockIn,
    UnlockOut,
)
from app.services.shares.service import ShareService
from app.sharing.config import get_statistics_max_days


router = APIRouter(prefix="/shares", tags=["shares"])


@router.post("/unlock", response_model=UnlockOut)
def unlock_job(
    request: Request,
    body: UnlockIn,
    user_id: str = Depends(get_current_user_id),
    service: ShareService = Depends(get_share_service),
) -> UnlockOut:
    """
    Share completed on the client -> open the job's publish day for this user.
    Idempotent: a repeated share returns the same shareId.
    """
    outcome = service.unlock(
        user_id,
        body.job_id,
        body.share_type,
        body.share_channel,
        client_ip=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    return UnlockOut(
        unlocked=True,
        share_id=outcome.record.id if outcome.record else None,
        unlock_date=outcome.unlock_day,
    )


@router.post("/check", response_model=CheckOut)
def check_unlock(
    body: CheckIn,
    user_id: str = Depends(get_current_user_id),
    service: ShareService = Depends(get_share_service),
) -> CheckOut:
    resolution = service.check(user_id, body.job_id)
    return CheckOut(
        unlocked=resolution.is_unlocked,
        need_share=resolution.needs_share,
        is_today=resolution.is_today,
    )


@router.get("/statistics", response_model=ShareStatisticsOut)
def share_statistics(
    days: int = Query(7, ge=1),
    user_id: str = Depends(get_current_user_id),
    service: ShareService = Depends(get_share_service),
) -> ShareStatisticsOut:
    days = min(days, get_statistics_max_days())
    return ShareStatisticsOut(**service.statistics(user_id, days))


@router.get("/mine", response_model=ShareHistoryOut)
def my_shares(
    limit: int = Query(20, ge=1, le=100),
    skip: int = Query(0, ge=0),
    user_id: str = Depends(get_current_user_id),
    service: ShareService = Depends(get_share_service),
) -> ShareHistoryOut:
    """Own share history, newest first."""
    items = service.history(user_id, limit, skip)
    return ShareHistoryOut(items=[ShareHistoryItem(**item) for item in items], limit=limit, skip=skip)


@router.get("/ranking", response_model=list[ShareRankingEntry])
def share_ranking(
    days: int = Query(7, ge=1),
    limit: int = Query(10, ge=1, le=100),
    service: ShareService = Depends(get_share_service),
) -> list[ShareRankingEntry]:
    """Public leaderboard of sharers; no auth, cached in Redis."""
    days = min(days, get_statistics_max_days())
    return [ShareRankingEntry(**entry) for entry in service.ranking(days, limit)]
