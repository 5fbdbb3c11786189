from fastapi import APIRouter, Depends, Path

from app.api.deps import get_optional_user_id, get_share_service
from app.schemas.jobs import JobDetailOut
from app.schemas.shares import JOB_ID_PATTERN
from app.services.shares.service import ShareService


router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get("/{job_id}", response_model=JobDetailOut)
def get_job_detail(
    job_id: str = Path(..., pattern=JOB_ID_PATTERN),
    user_id: str | None = Depends(get_optional_user_id),
    service: ShareService = Depends(get_share_service),
) -> JobDetailOut:
    """Job detail; contact fields masked unless published today or unlocked by share."""
    job, resolution = service.job_detail(job_id, user_id)
    detail = resolution.detail
    return JobDetailOut(
        id=job.id,
        title=job.title,
        company=job.company,
        salary=job.salary,
        province=job.province,
        city=job.city,
        county=job.county or "",
        address=job.address or "",
        description=job.description,
        requirements=job.requirements or "",
        publish_time=job.publish_time,
        publish_day=job.publish_day,
        view_count=job.view_count or 0,
        share_count=job.share_count or 0,
        contact=detail.contact,
        contact_person=detail.contact_person,
        contact_time=detail.contact_time,
        is_today=resolution.is_today,
        is_unlocked=resolution.is_unlocked,
        need_share_to_unlock=resolution.needs_share,
    )
