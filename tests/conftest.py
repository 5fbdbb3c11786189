"""
Shared fixtures. Env defaults go first: app.core.config builds Settings at import.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./.pytest-app.db")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/15")
os.environ.setdefault("CELERY_BROKER_URL", "memory://")
os.environ.setdefault("CELERY_RESULT_BACKEND", "cache+memory://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-0123456789")
os.environ.setdefault("APP_TIMEZONE", "Asia/Shanghai")

from unittest.mock import MagicMock  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.db.base import Base  # noqa: E402
from app.models import job as _job_model  # noqa: E402,F401
from app.models import share_unlock as _share_unlock_model  # noqa: E402,F401
from app.sharing.cache import UnlockCache  # noqa: E402
from app.sharing.clock import FixedClock  # noqa: E402

TODAY = "2024-01-03"
TZ = "Asia/Shanghai"


@pytest.fixture
def clock():
    return FixedClock(TODAY, tz=TZ)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def fake_cache():
    """UnlockCache over a dict-backed mock Redis client."""
    store: dict[str, str] = {}
    client = MagicMock()
    client.exists.side_effect = lambda key: 1 if key in store else 0
    client.get.side_effect = lambda key: store.get(key)
    client.set.side_effect = lambda key, value, ex=None: store.__setitem__(key, value)
    client.delete.side_effect = lambda *keys: sum(1 for k in keys if store.pop(k, None) is not None)
    cache = UnlockCache(client=client)
    cache.store = store
    return cache


