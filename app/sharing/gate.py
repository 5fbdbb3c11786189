"""
VisibilityGate: единственный источник решения «можно ли этому пользователю видеть контакты вакансии сейчас».
Правила:
- день публикации == сегодня -> контакты открыты всем, без share;
- иначе -> открыты, только если в UnlockLedger есть (user_id, publish_day);
- иначе -> маскированное превью + needs_share.
StorageError не перехватывается: «не смогли проверить» != «закрыто».
"""
from __future__ import annotations

import logging

from app.core.errors import ValidationError
from app.sharing.clock import Clock, is_valid_day
from app.sharing.ledger import UnlockLedger
from app.sharing.masking import full_contact, masked_contact
from app.sharing.models import GatedItem, Resolution, UnlockOutcome

logger = logging.getLogger(__name__)


class VisibilityGate:
    def __init__(self, ledger: UnlockLedger, clock: Clock | None = None) -> None:
        self.ledger = ledger
        self.clock = clock or ledger.clock

    def is_today(self, item: GatedItem, today: str | None = None) -> bool:
        # Битый publish_day никогда не «сегодня», закрываем контакты
        if not is_valid_day(item.publish_day):
            return False
        return item.publish_day == (today or self.clock.today())

    def resolve(self, item: GatedItem, user_id: str | None) -> Resolution:
        today = self.clock.today()
        if self.is_today(item, today):
            return Resolution(
                item_id=item.id,
                detail=full_contact(item),
                is_today=True,
                is_unlocked=True,
                needs_share=False,
            )

        if self.ledger.is_unlocked(user_id, item.publish_day):
            return Resolution(
                item_id=item.id,
                detail=full_contact(item),
                is_today=False,
                is_unlocked=True,
                needs_share=False,
            )

        return Resolution(
            item_id=item.id,
            detail=masked_contact(item),
            is_today=False,
            is_unlocked=False,
            needs_share=True,
        )

    def unlock(
        self,
        item: GatedItem,
        user_id: str,
        *,
        share_type: str | None = None,
        share_channel: str | None = None,
    ) -> UnlockOutcome:
        """
        Открыть день публикации item для user_id. Проверку факта share делает вызывающая сторона.
        Для сегодняшней вакансии ничего не пишет (free=True).
        """
        if self.is_today(item):
            return UnlockOutcome(unlock_day=item.publish_day, free=True)
        if not is_valid_day(item.publish_day):
            raise ValidationError(f"job {item.id} has no valid publish day")

        record, created = self.ledger.record_unlock(
            user_id,
            item.publish_day,
            job_id=item.id,
            share_type=share_type,
            share_channel=share_channel,
        )
        return UnlockOutcome(unlock_day=record.unlock_day, record=record, created=created)
