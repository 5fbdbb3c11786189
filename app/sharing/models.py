"""
DTO share-unlock: GatedItem (вход гейта), ContactDetail, Resolution, UnlockRecord, UnlockOutcome.
"""
from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

ShareType = Literal["wechat", "timeline", "poster", "link"]
ShareChannel = Literal["friend", "group", "timeline", "qrcode", "copy"]


# ----- Минимальный контракт вакансии для гейта (не зависит от схемы jobs) -----


class GatedItem(BaseModel):
    """id + день публикации + закрытые поля. Строится из Job через model_validate."""

    id: str
    publish_day: str | None = None
    contact: str | None = ""
    contact_person: str | None = ""
    contact_time: str | None = ""

    model_config = {"frozen": True, "from_attributes": True}


# ----- Результат resolve -----


class ContactDetail(BaseModel):
    """Контактные поля в том виде, в котором их можно отдать клиенту."""

    contact: str = ""
    contact_person: str = ""
    contact_time: str = ""
    masked: bool = Field(
        ...,
        description="True = contact/contact_person заменены маскированным превью",
    )

    model_config = {"frozen": True}


class Resolution(BaseModel):
    """Решение гейта для пары (вакансия, пользователь)."""

    item_id: str
    detail: ContactDetail
    is_today: bool
    is_unlocked: bool
    needs_share: bool = Field(
        ...,
        description="True = клиенту показать кнопку «поделиться, чтобы открыть контакты»",
    )

    model_config = {"frozen": True}


# ----- Записи журнала разблокировок -----


class UnlockRecord(BaseModel):
    """Факт «пользователь открыл день публикации»; не изменяется после создания."""

    id: str
    user_id: str
    unlock_day: str
    created_at: datetime
    job_id: str | None = None
    share_type: str | None = None
    share_channel: str | None = None

    model_config = {"frozen": True, "from_attributes": True}


class UnlockOutcome(BaseModel):
    """Результат unlock: free=True для сегодняшних вакансий (запись не создаётся)."""

    unlock_day: str | None
    record: UnlockRecord | None = None
    created: bool = False
    free: bool = False

    model_config = {"frozen": True}
