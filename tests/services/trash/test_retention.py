# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

from datetime import datetime, timedelta

import pytest

from taskboard.models.project import Project
from taskboard.models.task import Task
from taskboard.models.task_list import TaskList
from taskboard.models.user import UserPlan
from taskboard.services.trash.lifecycle import TrashLifecycleService
from taskboard.services.trash.retention import RetentionReaper, get_retention_days

NOW = datetime(2025, 6, 1, 3, 0, 0)


def days_ago(days: int) -> datetime:
    return NOW - timedelta(days=days)


@pytest.fixture
def reaper() -> RetentionReaper:
    return RetentionReaper(lifecycle=TrashLifecycleService(tolerance_seconds=1.0))


@pytest.mark.unit
class TestRetentionDays:
    def test_plan_tiers(self):
        assert get_retention_days(UserPlan.FREE) == 7
        assert get_retention_days(UserPlan.PRO) == 30

    def test_unknown_plan_falls_back_to_free(self):
        assert get_retention_days(None) == 7

    def test_days_come_from_settings(self, mocker):
        mocker.patch(
            "taskboard.services.trash.retention.settings.TRASH_RETENTION_DAYS_PRO", 90
        )
        assert get_retention_days(UserPlan.PRO) == 90


@pytest.mark.unit
class TestRetentionReaper:
    def test_free_plan_eligibility_boundary(self, test_db, test_user, board, reaper):
        project = board.project(test_user)
        todo = board.task_list(project)
        expired = board.task(todo, "Expired", deleted_at=days_ago(8))
        recent = board.task(todo, "Recent", position=1, deleted_at=days_ago(6))

        report = reaper.reap(test_db, now=NOW)

        assert report.tasks == 1
        assert report.owners == 1
        test_db.expire_all()
        assert test_db.get(Task, expired.id) is None
        assert test_db.get(Task, recent.id) is not None

    def test_pro_plan_keeps_items_longer(self, test_db, test_pro_user, board, reaper):
        kept = board.project(test_pro_user, "Kept", deleted_at=days_ago(29))
        gone = board.project(test_pro_user, "Gone", deleted_at=days_ago(31))
        board.task(board.task_list(gone, deleted_at=days_ago(31)), deleted_at=days_ago(31))

        report = reaper.reap(test_db, now=NOW)

        assert (report.projects, report.lists, report.tasks) == (1, 1, 1)
        test_db.expire_all()
        assert test_db.get(Project, kept.id) is not None
        assert test_db.get(Project, gone.id) is None

    def test_each_owner_gets_their_own_window(
        self, test_db, test_user, test_pro_user, board, reaper
    ):
        free_project = board.project(test_user, "Free", deleted_at=days_ago(10))
        pro_project = board.project(test_pro_user, "Pro", deleted_at=days_ago(10))

        reaper.reap(test_db, now=NOW)

        test_db.expire_all()
        assert test_db.get(Project, free_project.id) is None
        assert test_db.get(Project, pro_project.id) is not None

    def test_expired_list_takes_its_active_tasks_along(
        self, test_db, test_user, board, reaper
    ):
        project = board.project(test_user)
        old_list = board.task_list(project, "Old", deleted_at=days_ago(8))
        # A row still marked active under an expired list cannot outlive it
        orphan = board.task(old_list, "Never trashed")

        report = reaper.reap(test_db, now=NOW)

        assert (report.lists, report.tasks) == (1, 1)
        test_db.expire_all()
        assert test_db.get(TaskList, old_list.id) is None
        assert test_db.get(Task, orphan.id) is None
        assert test_db.get(Project, project.id) is not None

    def test_days_override_applies_to_every_plan(
        self, test_db, test_user, test_pro_user, board, reaper
    ):
        free_project = board.project(test_user, "Free", deleted_at=days_ago(2))
        pro_project = board.project(test_pro_user, "Pro", deleted_at=days_ago(2))
        fresh = board.project(test_pro_user, "Fresh", deleted_at=NOW)

        report = reaper.reap(test_db, now=NOW, days=1)

        assert report.projects == 2
        assert report.days_override == 1
        test_db.expire_all()
        assert test_db.get(Project, free_project.id) is None
        assert test_db.get(Project, pro_project.id) is None
        assert test_db.get(Project, fresh.id) is not None

    def test_dry_run_counts_without_deleting(self, test_db, test_user, board, reaper):
        project = board.project(test_user, deleted_at=days_ago(8))
        todo = board.task_list(project, deleted_at=days_ago(8))
        board.task(todo, deleted_at=days_ago(8))
        board.task(todo, "Second", position=1, deleted_at=days_ago(8))

        report = reaper.reap(test_db, now=NOW, dry_run=True)

        assert report.dry_run is True
        assert (report.projects, report.lists, report.tasks) == (1, 1, 2)
        assert reaper.count_purgeable(test_db, now=NOW) == 4
        test_db.expire_all()
        assert test_db.get(Project, project.id) is not None

    def test_nothing_to_purge(self, test_db, test_user, board, reaper):
        board.project(test_user)

        report = reaper.reap(test_db, now=NOW)

        assert report.total == 0
        assert report.owners == 0
        assert report.to_dict()["success"] is True

    def test_failed_owner_does_not_stop_the_run(
        self, test_db, test_user, test_other_user, board, mocker
    ):
        lifecycle = TrashLifecycleService(tolerance_seconds=1.0)
        reaper = RetentionReaper(lifecycle=lifecycle)
        broken = board.project(test_user, "Broken", deleted_at=days_ago(8))
        fine_id = board.project(test_other_user, "Fine", deleted_at=days_ago(8)).id
        original_purge = lifecycle.purge_many

        def purge_many(db, project_ids=(), list_ids=(), task_ids=(), **kwargs):
            if broken.id in list(project_ids):
                raise RuntimeError("lock wait timeout")
            return original_purge(db, project_ids, list_ids, task_ids, **kwargs)

        mocker.patch.object(lifecycle, "purge_many", side_effect=purge_many)

        report = reaper.reap(test_db, now=NOW)

        assert report.failed_owners == [test_user.id]
        assert report.projects == 1
        assert report.to_dict()["success"] is False
        test_db.expire_all()
        assert test_db.get(Project, broken.id) is not None
        assert test_db.get(Project, fine_id) is None

    def test_list_restored_during_run_is_not_purged(
        self, test_db, test_user, board, reaper, mocker
    ):
        project = board.project(test_user)
        todo = board.task_list(project, deleted_at=days_ago(10))
        task = board.task(todo, deleted_at=days_ago(10))
        collect = reaper._collect_expired

        def collect_then_restore(db, user_id, cutoff):
            expired = collect(db, user_id, cutoff)
            reaper.lifecycle.restore_list(db, db.get(TaskList, todo.id))
            return expired

        mocker.patch.object(reaper, "_collect_expired", side_effect=collect_then_restore)

        report = reaper.reap(test_db, now=NOW)

        assert report.total == 0
        assert report.failed_owners == []
        test_db.expire_all()
        restored = test_db.get(TaskList, todo.id)
        assert restored is not None
        assert restored.deleted_at is None
        assert test_db.get(Task, task.id).deleted_at is None

    def test_only_rows_still_past_cutoff_are_purged(
        self, test_db, test_user, board, reaper
    ):
        project = board.project(test_user)
        todo = board.task_list(project)
        old = board.task(todo, "Old", deleted_at=days_ago(10))
        active = board.task(todo, "Active", position=1)

        counts = reaper.lifecycle.purge_many(
            test_db, task_ids=[old.id, active.id], deleted_before=days_ago(7)
        )

        assert counts.tasks == 1
        test_db.expire_all()
        assert test_db.get(Task, old.id) is None
        assert test_db.get(Task, active.id) is not None

    def test_count_purgeable_does_not_log_a_cleanup_run(
        self, test_db, test_user, board, reaper, caplog
    ):
        board.project(test_user, deleted_at=days_ago(8))

        with caplog.at_level("INFO", logger="taskboard.services.trash.retention"):
            assert reaper.count_purgeable(test_db, now=NOW) == 1

        assert "Starting cleanup" not in caplog.text
        assert "Cleanup complete" not in caplog.text
        test_db.expire_all()
        assert test_db.query(Project).count() == 1
