#!/usr/bin/env python3
"""
Создать таблицы jobs и share_unlocks (локальная разработка; в проде миграции).
Запуск из корня проекта: python -m scripts.create_tables
"""
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.db.base import Base
from app.db.session import engine
from app.models import job, share_unlock  # noqa: F401  регистрируют таблицы в Base.metadata


def main():
    Base.metadata.create_all(engine)
    print("Таблицы: " + ", ".join(sorted(Base.metadata.tables)))


if __name__ == "__main__":
    main()
