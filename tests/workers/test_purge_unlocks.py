"""Tests for the periodic purge task (session and cache mocked)."""
from unittest.mock import MagicMock, patch

from app.core.errors import StorageError


@patch("app.workers.tasks.purge_unlocks.UnlockCache")
@patch("app.workers.tasks.purge_unlocks.SessionLocal")
def test_purge_task_reports_deleted(mock_session_local, mock_cache):
    from app.workers.tasks.purge_unlocks import purge_expired_unlocks

    session = MagicMock()
    mock_session_local.return_value = session
    with patch("app.workers.tasks.purge_unlocks.UnlockLedger") as mock_ledger:
        mock_ledger.return_value.purge_expired.return_value = 3
        result = purge_expired_unlocks()

    assert result == {"deleted": 3}
    session.close.assert_called_once()


@patch("app.workers.tasks.purge_unlocks.UnlockCache")
@patch("app.workers.tasks.purge_unlocks.SessionLocal")
def test_purge_task_storage_error(mock_session_local, mock_cache):
    from app.workers.tasks.purge_unlocks import purge_expired_unlocks

    session = MagicMock()
    mock_session_local.return_value = session
    with patch("app.workers.tasks.purge_unlocks.UnlockLedger") as mock_ledger:
        mock_ledger.return_value.purge_expired.side_effect = StorageError()
        result = purge_expired_unlocks()

    assert result == {"deleted": 0, "error": "storage"}
    session.close.assert_called_once()
