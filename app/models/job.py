from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Column, DateTime, Index, Integer, String, Text

from app.db.base import Base


JOB_STATUS_ONLINE = 1
REVIEW_STATUS_APPROVED = 1


class Job(Base):
    __tablename__ = "jobs"
    __table_args__ = (
        Index("ix_jobs_visibility_publish_day", "status", "review_status", "publish_day"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid4()))
    title = Column(String(100), nullable=False)
    company = Column(String(100), nullable=False)
    salary = Column(String(50), nullable=False)
    province = Column(String(20), nullable=False)
    city = Column(String(20), nullable=False)
    county = Column(String(20), nullable=False, default="")
    address = Column(String(200), nullable=False, default="")
    description = Column(Text, nullable=False)
    requirements = Column(Text, nullable=False, default="")

    # Закрытые поля: до разблокировки отдаются только в маскированном виде
    contact = Column(String(50), nullable=False)
    contact_person = Column(String(20), nullable=False, default="")
    contact_time = Column(String(100), nullable=False, default="")

    publisher_id = Column(String, nullable=True, index=True)
    publish_time = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    # YYYY-MM-DD в APP_TIMEZONE; проставляется один раз при создании (JobService.create_job)
    publish_day = Column(String(10), nullable=True, index=True)

    status = Column(Integer, nullable=False, default=JOB_STATUS_ONLINE)  # 0 offline, 1 online
    review_status = Column(Integer, nullable=False, default=0)  # 0 pending, 1 approved, 2 rejected
    view_count = Column(Integer, nullable=False, default=0)
    share_count = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    @property
    def is_public(self) -> bool:
        return self.status == JOB_STATUS_ONLINE and self.review_status == REVIEW_STATUS_APPROVED
