"""
Share-unlock config: типизированная обёртка над app.core.config.
"""
from __future__ import annotations

from datetime import timedelta

from app.core.config import settings


def get_timezone() -> str:
    return settings.app_timezone


def get_retention() -> timedelta:
    return timedelta(days=settings.share_unlock_retention_days)


def get_cache_ttl() -> int:
    return settings.share_unlock_cache_ttl


def get_statistics_max_days() -> int:
    return settings.share_statistics_max_days


def get_ranking_cache_ttl() -> int:
    return settings.share_ranking_cache_ttl
