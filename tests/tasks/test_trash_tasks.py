# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

from datetime import datetime

import pytest

from taskboard.services.trash.retention import ReapReport
from taskboard.tasks.trash_tasks import cleanup_trash


@pytest.fixture
def mock_session(mocker):
    session = mocker.MagicMock()
    mocker.patch("taskboard.db.session.SessionLocal", return_value=session)
    return session


@pytest.mark.unit
class TestCleanupTrashTask:
    def test_runs_reaper_and_returns_report(self, mocker, mock_session):
        report = ReapReport(
            started_at=datetime(2025, 6, 1), owners=2, projects=1, lists=3, tasks=8
        )
        reap = mocker.patch(
            "taskboard.services.trash.retention_reaper.reap", return_value=report
        )

        result = cleanup_trash.apply().get()

        reap.assert_called_once_with(mock_session, days=None, dry_run=False)
        assert result["success"] is True
        assert result["total"] == 12
        mock_session.close.assert_called_once()

    def test_passes_override_and_dry_run(self, mocker, mock_session):
        report = ReapReport(started_at=datetime(2025, 6, 1), dry_run=True, days_override=0)
        reap = mocker.patch(
            "taskboard.services.trash.retention_reaper.reap", return_value=report
        )

        result = cleanup_trash.apply(kwargs={"days": 0, "dry_run": True}).get()

        reap.assert_called_once_with(mock_session, days=0, dry_run=True)
        assert result["dry_run"] is True

    def test_closes_session_on_error(self, mocker, mock_session):
        mocker.patch(
            "taskboard.services.trash.retention_reaper.reap",
            side_effect=RuntimeError("boom"),
        )

        with pytest.raises(RuntimeError):
            cleanup_trash.apply(throw=True).get()

        mock_session.close.assert_called_once()
