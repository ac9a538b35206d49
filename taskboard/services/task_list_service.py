# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
List (board column) service.
"""
import logging
from typing import List

from sqlalchemy import func
from sqlalchemy.orm import Session

from taskboard.core.exceptions import NotFoundException, ValidationException
from taskboard.models.project import Project
from taskboard.models.task_list import TaskList
from taskboard.schemas.project import (
    TaskListCreate,
    TaskListReorderRequest,
    TaskListResponse,
    TaskListUpdate,
)
from taskboard.services.trash.lifecycle import LifecycleResult, trash_lifecycle_service

logger = logging.getLogger(__name__)


def get_active_list(db: Session, project: Project, list_id: int) -> TaskList:
    """
    Get an active list of the project.

    Raises:
        NotFoundException: If the list does not exist in this project or is trashed
    """
    task_list = (
        db.query(TaskList)
        .filter(
            TaskList.id == list_id,
            TaskList.project_id == project.id,
            TaskList.deleted_at.is_(None),
        )
        .first()
    )
    if not task_list:
        raise NotFoundException("List not found")
    return task_list


def create_list(
    db: Session, project: Project, list_data: TaskListCreate
) -> TaskListResponse:
    """Append a new list after the last one."""
    max_position = (
        db.query(func.max(TaskList.position))
        .filter(TaskList.project_id == project.id)
        .scalar()
    )
    task_list = TaskList(
        project_id=project.id,
        name=list_data.name,
        position=(max_position if max_position is not None else -1) + 1,
        is_done_list=False,
    )
    db.add(task_list)
    db.commit()
    db.refresh(task_list)
    return TaskListResponse.model_validate(task_list)


def update_list(
    db: Session, project: Project, list_id: int, update_data: TaskListUpdate
) -> TaskListResponse:
    task_list = get_active_list(db, project, list_id)
    for field, value in update_data.model_dump(exclude_unset=True).items():
        setattr(task_list, field, value)
    db.commit()
    db.refresh(task_list)
    return TaskListResponse.model_validate(task_list)


def reorder_lists(
    db: Session, project: Project, reorder_data: TaskListReorderRequest
) -> List[TaskListResponse]:
    for item in reorder_data.lists:
        db.query(TaskList).filter(
            TaskList.id == item.id, TaskList.project_id == project.id
        ).update({TaskList.position: item.position}, synchronize_session="fetch")
    db.commit()

    lists = (
        db.query(TaskList)
        .filter(TaskList.project_id == project.id, TaskList.deleted_at.is_(None))
        .order_by(TaskList.position.asc(), TaskList.id.asc())
        .all()
    )
    return [TaskListResponse.model_validate(task_list) for task_list in lists]


def set_done_list(db: Session, project: Project, list_id: int) -> TaskListResponse:
    """
    Toggle the done flag of a list.

    Setting it clears the flag on any other list of the project first, so a
    project ends up with at most one done list.
    """
    task_list = get_active_list(db, project, list_id)

    if task_list.is_done_list:
        task_list.is_done_list = False
    else:
        db.query(TaskList).filter(
            TaskList.project_id == project.id,
            TaskList.id != task_list.id,
            TaskList.is_done_list.is_(True),
        ).update({TaskList.is_done_list: False}, synchronize_session="fetch")
        task_list.is_done_list = True

    db.commit()
    db.refresh(task_list)
    return TaskListResponse.model_validate(task_list)


def delete_list(db: Session, project: Project, list_id: int) -> LifecycleResult:
    """
    Move a list and its tasks to the trash.

    Raises:
        ValidationException: If the list is the project's done list
    """
    task_list = get_active_list(db, project, list_id)
    if task_list.is_done_list:
        raise ValidationException(
            "Cannot delete the Done list. Unset it as Done list first."
        )
    return trash_lifecycle_service.delete_list(db, task_list)
