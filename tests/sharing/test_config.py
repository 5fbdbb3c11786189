"""Tests for share-unlock config wrappers."""
from datetime import timedelta
from unittest.mock import patch


def test_retention_from_settings():
    with patch("app.sharing.config.settings") as mock_settings:
        mock_settings.share_unlock_retention_days = 7
        from app.sharing.config import get_retention

        assert get_retention() == timedelta(days=7)


def test_cache_ttl_and_timezone():
    with patch("app.sharing.config.settings") as mock_settings:
        mock_settings.share_unlock_cache_ttl = 120
        mock_settings.app_timezone = "Asia/Shanghai"
        from app.sharing.config import get_cache_ttl, get_timezone

        assert get_cache_ttl() == 120
        assert get_timezone() == "Asia/Shanghai"


def test_ranking_cache_ttl():
    with patch("app.sharing.config.settings") as mock_settings:
        mock_settings.share_ranking_cache_ttl = 900
        from app.sharing.config import get_ranking_cache_ttl

        assert get_ranking_cache_ttl() == 900


def test_settings_carry_only_used_fields():
    from app.core.config import Settings

    assert "admin_api_key" not in Settings.model_fields
    assert "request_id_header" not in Settings.model_fields
    assert Settings.model_fields["share_ranking_cache_ttl"].default == 3600
