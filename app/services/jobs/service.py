from datetime import datetime

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, StorageError
from app.models.job import Job, JOB_STATUS_ONLINE, REVIEW_STATUS_APPROVED
from app.sharing.clock import Clock


class JobService:
    def __init__(self, db: Session, clock: Clock | None = None):
        self.db = db
        self.clock = clock or Clock()

    def create_job(
        self,
        title: str,
        company: str,
        salary: str,
        province: str,
        city: str,
        description: str,
        contact: str,
        contact_person: str = "",
        contact_time: str = "",
        publisher_id: str | None = None,
        publish_time: datetime | None = None,
        review_status: int = 0,
        job_id: str | None = None,
    ) -> Job:
        """publish_day is stamped here once, from the same moment as publish_time."""
        publish_time = publish_time or self.clock.now()
        job_kwargs: dict = {
            "title": title,
            "company": company,
            "salary": salary,
            "province": province,
            "city": city,
            "description": description,
            "contact": contact,
            "contact_person": contact_person,
            "contact_time": contact_time,
            "publisher_id": publisher_id,
            "publish_time": publish_time,
            "publish_day": self.clock.day_of(publish_time),
            "status": JOB_STATUS_ONLINE,
            "review_status": review_status,
        }
        if job_id is not None:
            job_kwargs["id"] = job_id
        job = Job(**job_kwargs)
        self.db.add(job)
        self.db.commit()
        self.db.refresh(job)
        return job

    def get(self, job_id: str) -> Job | None:
        try:
            return self.db.query(Job).filter(Job.id == job_id).one_or_none()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError() from e

    def get_many(self, job_ids: list[str]) -> dict[str, Job]:
        if not job_ids:
            return {}
        try:
            jobs = self.db.query(Job).filter(Job.id.in_(job_ids)).all()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StorageError() from e
        return {job.id: job for job in jobs}

    def get_public(self, job_id: str) -> Job:
        """Job visible to applicants (online + approved), else NotFoundError."""
        job = self.get(job_id)
        if job is None:
            raise NotFoundError("Job not found")
        if job.status != JOB_STATUS_ONLINE or job.review_status != REVIEW_STATUS_APPROVED:
            raise NotFoundError("Job not found or offline")
        return job

    def register_view(self, job_id: str) -> None:
        self.db.execute(
            update(Job).where(Job.id == job_id).values(view_count=Job.view_count + 1)
        )
        self.db.commit()

    def increment_share_count(self, job_id: str) -> None:
        self.db.execute(
            update(Job).where(Job.id == job_id).values(share_count=Job.share_count + 1)
        )
        self.db.commit()
