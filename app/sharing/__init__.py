"""
Share-to-unlock (внутренняя библиотека).
Decision (VisibilityGate.resolve) и запись (UnlockLedger) разделены; контракт через GatedItem.
"""
from app.sharing.audit import record_share_unlock
from app.sharing.clock import Clock, FixedClock, is_valid_day
from app.sharing.gate import VisibilityGate
from app.sharing.ledger import UnlockLedger
from app.sharing.masking import mask_contact, mask_person
from app.sharing.models import (
    ContactDetail,
    GatedItem,
    Resolution,
    UnlockOutcome,
    UnlockRecord,
)
from app.sharing.storage import InMemoryUnlockStorage, SqlUnlockStorage, UnlockStorage

__all__ = [
    "Clock",
    "ContactDetail",
    "FixedClock",
    "GatedItem",
    "InMemoryUnlockStorage",
    "Resolution",
    "SqlUnlockStorage",
    "UnlockLedger",
    "UnlockOutcome",
    "UnlockRecord",
    "UnlockStorage",
    "VisibilityGate",
    "is_valid_day",
    "mask_contact",
    "mask_person",
    "record_share_unlock",
]
