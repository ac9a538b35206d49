# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

from datetime import datetime

import pytest

from taskboard.core.exceptions import NotFoundException
from taskboard.models.task import TaskPriority
from taskboard.schemas.project import TaskCreate, TaskMoveRequest, TaskUpdate
from taskboard.services import task_service


@pytest.mark.unit
class TestTaskService:
    def test_create_task_goes_to_end_of_list(self, test_db, test_user, board):
        project = board.project(test_user)
        todo = board.task_list(project)
        board.task(todo, "Existing", position=2)

        created = task_service.create_task(
            test_db,
            project,
            TaskCreate(list_id=todo.id, title="New", priority=TaskPriority.HIGH),
        )

        assert created.position == 3
        assert created.project_id == project.id
        assert created.priority == TaskPriority.HIGH

    def test_create_task_in_trashed_list_fails(self, test_db, test_user, board):
        project = board.project(test_user)
        trashed = board.task_list(project, deleted_at=datetime(2025, 1, 1))

        with pytest.raises(NotFoundException):
            task_service.create_task(
                test_db, project, TaskCreate(list_id=trashed.id, title="Nope")
            )

    def test_update_task(self, test_db, test_user, board):
        project = board.project(test_user)
        task = board.task(board.task_list(project))

        updated = task_service.update_task(
            test_db, project, task.id, TaskUpdate(title="Renamed")
        )

        assert updated.title == "Renamed"

    def test_move_into_done_list_completes_task(self, test_db, test_user, board):
        project = board.project(test_user)
        todo = board.task_list(project)
        done = board.task_list(project, "Done", position=1, is_done_list=True)
        task = board.task(todo)

        moved = task_service.move_task(
            test_db, project, task.id, TaskMoveRequest(list_id=done.id)
        )

        assert moved.list_id == done.id
        assert moved.project_id == project.id
        assert moved.completed_at is not None
        assert moved.original_list_id == todo.id

    def test_move_out_of_done_list_reopens_task(self, test_db, test_user, board):
        project = board.project(test_user)
        todo = board.task_list(project)
        done = board.task_list(project, "Done", position=1, is_done_list=True)
        task = board.task(todo)
        task_service.move_task(
            test_db, project, task.id, TaskMoveRequest(list_id=done.id)
        )

        moved = task_service.move_task(
            test_db, project, task.id, TaskMoveRequest(list_id=todo.id)
        )

        assert moved.completed_at is None
        assert moved.original_list_id is None

    def test_move_to_position_shifts_others(self, test_db, test_user, board):
        project = board.project(test_user)
        source = board.task_list(project, "Source")
        target = board.task_list(project, "Target", position=1)
        first = board.task(target, "First", position=0)
        second = board.task(target, "Second", position=1)
        moving = board.task(source, "Moving")

        moved = task_service.move_task(
            test_db, project, moving.id, TaskMoveRequest(list_id=target.id, position=1)
        )

        assert moved.position == 1
        test_db.refresh(first)
        test_db.refresh(second)
        assert first.position == 0
        assert second.position == 2

    def test_move_to_list_of_another_project_is_rejected(
        self, test_db, test_user, board
    ):
        project = board.project(test_user, "Home")
        todo = board.task_list(project)
        task = board.task(todo)
        foreign = board.task_list(board.project(test_user, "Work"))

        with pytest.raises(NotFoundException):
            task_service.move_task(
                test_db, project, task.id, TaskMoveRequest(list_id=foreign.id)
            )

        test_db.refresh(task)
        assert task.list_id == todo.id
        assert task.project_id == project.id

    def test_move_to_trashed_list_is_rejected(self, test_db, test_user, board):
        project = board.project(test_user)
        todo = board.task_list(project)
        trashed = board.task_list(
            project, "Old", position=1, deleted_at=datetime(2025, 1, 1)
        )
        task = board.task(todo)

        with pytest.raises(NotFoundException):
            task_service.move_task(
                test_db, project, task.id, TaskMoveRequest(list_id=trashed.id)
            )

    def test_delete_task(self, test_db, test_user, board):
        project = board.project(test_user)
        task = board.task(board.task_list(project))

        result = task_service.delete_task(test_db, project, task.id)

        assert result.changed is True
        with pytest.raises(NotFoundException):
            task_service.get_active_task(test_db, project, task.id)
