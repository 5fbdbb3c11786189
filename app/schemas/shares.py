from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.sharing.models import ShareChannel, ShareType

JOB_ID_PATTERN = r"^[A-Za-z0-9_-]{1,64}$"


class UnlockIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    job_id: str = Field(..., alias="jobId", pattern=JOB_ID_PATTERN)
    share_type: ShareType = Field(..., alias="shareType")
    share_channel: ShareChannel = Field("friend", alias="shareChannel")


class UnlockOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    unlocked: bool = True
    share_id: str | None = Field(None, alias="shareId")  # null: вакансия сегодняшняя, share не нужен
    unlock_date: str | None = Field(None, alias="unlockDate")


class CheckIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    job_id: str = Field(..., alias="jobId", pattern=JOB_ID_PATTERN)


class CheckOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    unlocked: bool
    need_share: bool = Field(..., alias="needShare")
    is_today: bool = Field(..., alias="isToday")


class DailyShareStat(BaseModel):
    date: str
    shares: int


class ShareStatisticsOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_shares: int = Field(..., alias="totalShares")
    share_types: dict[str, int] = Field(default_factory=dict, alias="shareTypes")
    share_channels: dict[str, int] = Field(default_factory=dict, alias="shareChannels")
    daily_stats: list[DailyShareStat] = Field(default_factory=list, alias="dailyStats")


class ShareRankingEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    rank: int
    user_id: str = Field(..., alias="userId")
    share_count: int = Field(..., alias="shareCount")


class SharedJobSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str
    title: str
    company: str
    salary: str
    city: str
    publish_time: datetime = Field(..., alias="publishTime")


class ShareHistoryItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    share_id: str = Field(..., alias="shareId")
    job_id: str | None = Field(None, alias="jobId")
    unlock_date: str = Field(..., alias="unlockDate")
    share_type: str | None = Field(None, alias="shareType")
    share_channel: str | None = Field(None, alias="shareChannel")
    share_time: datetime = Field(..., alias="shareTime")
    job: SharedJobSummary | None = None  # None: вакансия удалена


class ShareHistoryOut(BaseModel):
    items: list[ShareHistoryItem] = Field(default_factory=list)
    limit: int
    skip: int
