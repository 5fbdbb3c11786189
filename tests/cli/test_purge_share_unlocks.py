"""Tests for the manual purge script: argument checks before any DB access."""
from datetime import timedelta
from unittest.mock import MagicMock, patch

import pytest

from scripts import purge_share_unlocks


@pytest.mark.parametrize("days", ["0", "-3"])
def test_non_positive_days_rejected(days):
    with patch.object(purge_share_unlocks, "SessionLocal") as session_local:
        with pytest.raises(SystemExit) as exc:
            purge_share_unlocks.main(["--days", days])
    assert exc.value.code == 2
    session_local.assert_not_called()


def test_days_override_passed_to_ledger(capsys):
    ledger = MagicMock()
    ledger.purge_expired.return_value = 4
    with patch.object(purge_share_unlocks, "SessionLocal") as session_local, \
            patch.object(purge_share_unlocks, "UnlockCache"), \
            patch.object(purge_share_unlocks, "configure_logging"), \
            patch.object(purge_share_unlocks, "UnlockLedger", return_value=ledger) as ledger_cls:
        purge_share_unlocks.main(["--days", "3"])

    assert ledger_cls.call_args.kwargs["retention"] == timedelta(days=3)
    session_local.return_value.close.assert_called_once()
    assert "4" in capsys.readouterr().out


def test_default_uses_settings_retention():
    assert purge_share_unlocks.parse_args([]).days is None
