from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class JobDetailOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    company: str
    salary: str
    province: str
    city: str
    county: str = ""
    address: str = ""
    description: str
    requirements: str = ""
    publish_time: datetime = Field(..., alias="publishTime")
    publish_day: str | None = Field(None, alias="publishDay")
    view_count: int = Field(0, alias="viewCount")
    share_count: int = Field(0, alias="shareCount")
    # Закрытые поля: маскированы, пока is_unlocked=False
    contact: str
    contact_person: str = Field("", alias="contactPerson")
    contact_time: str = Field("", alias="contactTime")
    is_today: bool = Field(..., alias="isToday")
    is_unlocked: bool = Field(..., alias="isUnlocked")
    need_share_to_unlock: bool = Field(..., alias="needShareToUnlock")
