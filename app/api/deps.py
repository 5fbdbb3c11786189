"""
FastAPI dependencies: bearer identity, clock, unlock ledger wiring.
Identity comes from the JWT issued by the WeChat login service; `sub` is the user id.
"""
from functools import lru_cache

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import AuthenticationError
from app.db.session import get_db
from app.services.shares.service import ShareService
from app.sharing import Clock, SqlUnlockStorage, UnlockLedger, VisibilityGate
from app.sharing.cache import UnlockCache
from app.sharing.config import get_timezone

_security = HTTPBearer(auto_error=False)


def verify_token(token: str) -> str:
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except jwt.PyJWTError as e:
        raise AuthenticationError("Invalid or expired access token") from e
    user_id = payload.get("sub")
    if not user_id:
        raise AuthenticationError("Access token has no subject")
    return str(user_id)


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(_security),
) -> str:
    if credentials is None:
        raise AuthenticationError("Authentication required")
    return verify_token(credentials.credentials)


def get_optional_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(_security),
) -> str | None:
    """Anonymous callers may read job detail; they are never unlocked."""
    if credentials is None:
        return None
    return verify_token(credentials.credentials)


@lru_cache
def get_clock() -> Clock:
    return Clock(get_timezone())


@lru_cache
def get_unlock_cache() -> UnlockCache:
    return UnlockCache()


def get_gate(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    cache: UnlockCache = Depends(get_unlock_cache),
) -> VisibilityGate:
    ledger = UnlockLedger(SqlUnlockStorage(db), clock=clock, cache=cache)
    return VisibilityGate(ledger, clock)


def get_share_service(
    db: Session = Depends(get_db),
    gate: VisibilityGate = Depends(get_gate),
) -> ShareService:
    return ShareService(db, gate)
