"""
Unit-тесты VisibilityGate: сегодня бесплатно, разблокировка на весь день публикации, маска до share.
"""
import unittest
from datetime import timedelta
from unittest.mock import MagicMock

from app.core.errors import StorageError, ValidationError
from app.sharing.clock import FixedClock
from app.sharing.gate import VisibilityGate
from app.sharing.ledger import UnlockLedger
from app.sharing.models import GatedItem
from app.sharing.storage import InMemoryUnlockStorage

TZ = "Asia/Shanghai"


def _item(item_id: str, publish_day: str | None) -> GatedItem:
    return GatedItem(
        id=item_id,
        publish_day=publish_day,
        contact="13812345678",
        contact_person="王师傅",
        contact_time="8:00-20:00",
    )


class TestVisibilityGate(unittest.TestCase):
    def setUp(self):
        self.clock = FixedClock("2024-01-03", tz=TZ)
        self.storage = InMemoryUnlockStorage()
        self.ledger = UnlockLedger(self.storage, clock=self.clock, retention=timedelta(days=7))
        self.gate = VisibilityGate(self.ledger)

    def test_today_item_open_for_anyone(self):
        item = _item("j1", "2024-01-03")
        for user_id in ("u1", "brand-new-user", None):
            res = self.gate.resolve(item, user_id)
            self.assertTrue(res.is_today)
            self.assertTrue(res.is_unlocked)
            self.assertFalse(res.needs_share)
            self.assertEqual(res.detail.contact, "13812345678")

    def test_today_item_never_touches_ledger(self):
        ledger = MagicMock()
        ledger.clock = self.clock
        gate = VisibilityGate(ledger)
        gate.resolve(_item("j1", "2024-01-03"), "u1")
        ledger.is_unlocked.assert_not_called()

    def test_past_item_locked_then_unlocked(self):
        item = _item("j1", "2024-01-01")

        res = self.gate.resolve(item, "u1")
        self.assertFalse(res.is_unlocked)
        self.assertTrue(res.needs_share)
        self.assertEqual(res.detail.contact, "138****5678")
        self.assertEqual(res.detail.contact_person, "王**")

        outcome = self.gate.unlock(item, "u1", share_type="wechat", share_channel="friend")
        self.assertTrue(outcome.created)
        self.assertEqual(outcome.unlock_day, "2024-01-01")
        self.assertEqual(outcome.record.job_id, "j1")

        res = self.gate.resolve(item, "u1")
        self.assertTrue(res.is_unlocked)
        self.assertFalse(res.needs_share)
        self.assertEqual(res.detail.contact, "13812345678")
        self.assertEqual(res.detail.contact_person, "王师傅")

    def test_unlock_is_day_scoped(self):
        a = _item("a", "2024-01-01")
        b = _item("b", "2024-01-01")
        other_day = _item("c", "2024-01-02")

        self.gate.unlock(a, "u1", share_type="timeline")

        self.assertTrue(self.gate.resolve(b, "u1").is_unlocked)
        self.assertFalse(self.gate.resolve(other_day, "u1").is_unlocked)
        self.assertFalse(self.gate.resolve(b, "u2").is_unlocked)

    def test_repeat_unlock_idempotent(self):
        item = _item("j1", "2024-01-01")
        first = self.gate.unlock(item, "u1", share_type="wechat")
        second = self.gate.unlock(item, "u1", share_type="link")
        self.assertTrue(first.created)
        self.assertFalse(second.created)
        self.assertEqual(first.record.id, second.record.id)
        self.assertEqual(len(self.storage), 1)

    def test_unlock_today_item_is_free(self):
        outcome = self.gate.unlock(_item("j1", "2024-01-03"), "u1", share_type="wechat")
        self.assertTrue(outcome.free)
        self.assertIsNone(outcome.record)
        self.assertEqual(len(self.storage), 0)

    def test_missing_publish_day_always_locked(self):
        item = _item("j1", None)
        res = self.gate.resolve(item, "u1")
        self.assertFalse(res.is_today)
        self.assertTrue(res.needs_share)
        self.assertEqual(res.detail.contact, "138****5678")
        with self.assertRaises(ValidationError):
            self.gate.unlock(item, "u1", share_type="wechat")

    def test_anonymous_past_item_locked(self):
        res = self.gate.resolve(_item("j1", "2024-01-01"), None)
        self.assertTrue(res.needs_share)

    def test_storage_error_not_swallowed(self):
        ledger = MagicMock()
        ledger.clock = self.clock
        ledger.is_unlocked.side_effect = StorageError()
        gate = VisibilityGate(ledger)
        with self.assertRaises(StorageError):
            gate.resolve(_item("j1", "2024-01-01"), "u1")

    def test_purge_keeps_today_free_and_relocks_history(self):
        past = _item("j1", "2024-01-01")
        self.gate.unlock(past, "u1", share_type="wechat")

        later = FixedClock("2024-01-12", tz=TZ)
        ledger = UnlockLedger(self.storage, clock=later, retention=timedelta(days=7))
        gate = VisibilityGate(ledger)
        self.assertEqual(ledger.purge_expired(), 1)

        self.assertTrue(gate.resolve(_item("j2", "2024-01-12"), "u1").is_unlocked)
        self.assertTrue(gate.resolve(past, "u1").needs_share)
