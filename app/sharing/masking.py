"""
Маскирование контактов для превью до разблокировки.
Маска никогда не возвращает исходное значение и не обрезает его: длина сохраняется.
"""
from __future__ import annotations

import re

from app.sharing.models import ContactDetail, GatedItem

_MOBILE_RE = re.compile(r"^1[3-9]\d{9}$")
_LANDLINE_MASK_RE = re.compile(r"\d(?=\d{2})")


def mask_contact(contact: str | None) -> str:
    """
    13812345678 -> 138****5678
    010-12345678 -> 010-******78
    wechat_id_abc -> we*********bc
    """
    if not contact:
        return ""
    contact = contact.strip()

    if _MOBILE_RE.match(contact):
        return f"{contact[:3]}****{contact[-4:]}"

    parts = contact.split("-")
    if len(parts) == 2 and parts[1].isdigit() and len(parts[1]) >= 4:
        return f"{parts[0]}-{_LANDLINE_MASK_RE.sub('*', parts[1])}"

    if len(contact) > 6:
        return f"{contact[:2]}{'*' * (len(contact) - 4)}{contact[-2:]}"

    if len(contact) > 4:
        # 5-6 символов: открыт только последний
        return f"{'*' * (len(contact) - 1)}{contact[-1]}"

    # Короткие значения целиком
    return "*" * len(contact)


def mask_person(name: str | None) -> str:
    """张三丰 -> 张**"""
    if not name:
        return ""
    name = name.strip()
    if len(name) <= 1:
        return "*" * len(name)
    return name[0] + "*" * (len(name) - 1)


def full_contact(item: GatedItem) -> ContactDetail:
    return ContactDetail(
        contact=item.contact or "",
        contact_person=item.contact_person or "",
        contact_time=item.contact_time or "",
        masked=False,
    )


def masked_contact(item: GatedItem) -> ContactDetail:
    # contact_time не чувствительно, отдаём как есть
    return ContactDetail(
        contact=mask_contact(item.contact),
        contact_person=mask_person(item.contact_person),
        contact_time=item.contact_time or "",
        masked=True,
    )
