from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Column, DateTime, String, UniqueConstraint

from app.db.base import Base


class ShareUnlock(Base):
    """One row per (user, publish day) unlocked by a share. Insert-only."""

    __tablename__ = "share_unlocks"
    __table_args__ = (
        UniqueConstraint("user_id", "unlock_day", name="uq_share_unlocks_user_day"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String, nullable=False, index=True)
    unlock_day = Column(String(10), nullable=False)  # YYYY-MM-DD
    # Вакансия, через которую пришёл share (только аудит/статистика)
    job_id = Column(String, nullable=True)
    share_type = Column(String, nullable=True)  # wechat, timeline, poster, link
    share_channel = Column(String, nullable=True)  # friend, group, timeline, qrcode, copy
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )
