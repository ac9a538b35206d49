# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

from datetime import datetime

import pytest

from taskboard.core.exceptions import NotFoundException
from taskboard.models.task_list import TaskList
from taskboard.schemas.project import ProjectCreate, ProjectUpdate
from taskboard.services import project_service

TRASHED_AT = datetime(2025, 1, 1, 0, 0, 0)


@pytest.mark.unit
class TestProjectService:
    def test_create_project_adds_default_lists(self, test_db, test_user):
        project = project_service.create_project(
            test_db, ProjectCreate(name="Launch", color="#00AA00"), test_user.id
        )

        lists = (
            test_db.query(TaskList)
            .filter(TaskList.project_id == project.id)
            .order_by(TaskList.position)
            .all()
        )
        assert [task_list.name for task_list in lists] == [
            "To Do",
            "In Progress",
            "Review",
            "Done",
        ]
        assert [task_list.is_done_list for task_list in lists] == [
            False,
            False,
            False,
            True,
        ]

    def test_get_project_hides_trashed_content(self, test_db, test_user, board):
        project = board.project(test_user)
        todo = board.task_list(project)
        board.task_list(project, "Trashed", position=1, deleted_at=TRASHED_AT)
        board.task(todo, "Visible")
        board.task(todo, "Hidden", position=1, deleted_at=TRASHED_AT)

        detail = project_service.get_project(test_db, project.id, test_user.id)

        assert [task_list.name for task_list in detail.lists] == ["To Do"]
        assert [task.title for task in detail.lists[0].tasks] == ["Visible"]

    def test_other_user_cannot_see_project(
        self, test_db, test_user, test_other_user, board
    ):
        project = board.project(test_user)

        with pytest.raises(NotFoundException):
            project_service.get_project(test_db, project.id, test_other_user.id)

    def test_update_project(self, test_db, test_user, board):
        project = board.project(test_user)

        updated = project_service.update_project(
            test_db, project.id, ProjectUpdate(name="Renamed"), test_user.id
        )

        assert updated.name == "Renamed"
        assert updated.color == "#3366FF"

    def test_list_projects_skips_trashed(self, test_db, test_user, board):
        board.project(test_user, "Active")
        board.project(test_user, "Trashed", deleted_at=TRASHED_AT)

        result = project_service.list_projects(test_db, test_user.id)

        assert result.total == 1
        assert result.items[0].name == "Active"

    def test_delete_project_moves_it_to_trash(self, test_db, test_user, board):
        project = board.project(test_user)
        board.task(board.task_list(project))

        result = project_service.delete_project(test_db, project.id, test_user.id)

        assert result.changed is True
        assert result.tasks == 1
        with pytest.raises(NotFoundException):
            project_service.get_project(test_db, project.id, test_user.id)
