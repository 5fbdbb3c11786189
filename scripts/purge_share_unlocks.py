#!/usr/bin/env python3
"""
Удалить записи share-разблокировок старше окна хранения (то же, что periodic task).
Запуск из корня проекта: python -m scripts.purge_share_unlocks [--days N]
"""
import argparse
import os
import sys
from datetime import timedelta

# корень проекта в PYTHONPATH
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.logging import configure_logging
from app.db.session import SessionLocal
from app.sharing import Clock, SqlUnlockStorage, UnlockLedger
from app.sharing.cache import UnlockCache
from app.sharing.config import get_retention, get_timezone


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--days", type=int, default=None, help="retention window in days (default: settings)")
    args = parser.parse_args(argv)
    # Отрицательное окно сдвинуло бы порог в будущее и удалило всё
    if args.days is not None and args.days < 1:
        parser.error("--days must be >= 1")
    return args


def main(argv=None):
    args = parse_args(argv)

    configure_logging()
    retention = timedelta(days=args.days) if args.days is not None else get_retention()
    db = SessionLocal()
    try:
        ledger = UnlockLedger(
            SqlUnlockStorage(db),
            clock=Clock(get_timezone()),
            cache=UnlockCache(),
            retention=retention,
        )
        deleted = ledger.purge_expired()
    finally:
        db.close()
    print(f"Удалено записей: {deleted} (старше {retention.days} дн.)")


if __name__ == "__main__":
    main()
