# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Task (board card) service.

A task stores both its list and its project. Both references are written
together whenever a task is created or moved.
"""
import logging
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from taskboard.core.exceptions import NotFoundException
from taskboard.models.project import Project
from taskboard.models.task import Task
from taskboard.models.task_list import TaskList
from taskboard.schemas.project import TaskCreate, TaskMoveRequest, TaskResponse, TaskUpdate
from taskboard.services.task_list_service import get_active_list
from taskboard.services.trash.lifecycle import LifecycleResult, trash_lifecycle_service

logger = logging.getLogger(__name__)


def get_active_task(db: Session, project: Project, task_id: int) -> Task:
    task = (
        db.query(Task)
        .filter(
            Task.id == task_id,
            Task.project_id == project.id,
            Task.deleted_at.is_(None),
        )
        .first()
    )
    if not task:
        raise NotFoundException("Task not found")
    return task


def _next_position(db: Session, list_id: int, exclude_task_id: int = None) -> int:
    query = db.query(func.max(Task.position)).filter(Task.list_id == list_id)
    if exclude_task_id is not None:
        query = query.filter(Task.id != exclude_task_id)
    max_position = query.scalar()
    return (max_position if max_position is not None else -1) + 1


def create_task(db: Session, project: Project, task_data: TaskCreate) -> TaskResponse:
    task_list = get_active_list(db, project, task_data.list_id)

    task = Task(
        project_id=task_list.project_id,
        list_id=task_list.id,
        title=task_data.title,
        description=task_data.description,
        priority=task_data.priority,
        due_date=task_data.due_date,
        due_time=task_data.due_time,
        position=_next_position(db, task_list.id),
    )
    db.add(task)
    db.commit()
    db.refresh(task)
    return TaskResponse.model_validate(task)


def update_task(
    db: Session, project: Project, task_id: int, update_data: TaskUpdate
) -> TaskResponse:
    task = get_active_task(db, project, task_id)
    for field, value in update_data.model_dump(exclude_unset=True).items():
        setattr(task, field, value)
    db.commit()
    db.refresh(task)
    return TaskResponse.model_validate(task)


def move_task(
    db: Session, project: Project, task_id: int, move_data: TaskMoveRequest
) -> TaskResponse:
    """
    Move a task to another list of the same project.

    Moving into the done list completes the task and remembers where it came
    from; moving it back out reopens it.
    """
    task = get_active_task(db, project, task_id)
    target = get_active_list(db, project, move_data.list_id)
    source = db.get(TaskList, task.list_id)

    moving_to_done = target.is_done_list
    moving_from_done = bool(source and source.is_done_list)

    if move_data.position is not None:
        position = move_data.position
        db.query(Task).filter(
            Task.list_id == target.id,
            Task.position >= position,
            Task.id != task.id,
        ).update({Task.position: Task.position + 1}, synchronize_session="fetch")
    else:
        position = _next_position(db, target.id, exclude_task_id=task.id)

    if moving_to_done and task.completed_at is None:
        task.completed_at = datetime.utcnow()
        task.original_list_id = task.list_id
    if moving_from_done and not moving_to_done and task.completed_at is not None:
        task.completed_at = None
        task.original_list_id = None

    task.list_id = target.id
    task.project_id = target.project_id
    task.position = position

    db.commit()
    db.refresh(task)
    logger.info(f"Task {task.id} moved to list {target.id} at position {position}")
    return TaskResponse.model_validate(task)


def delete_task(db: Session, project: Project, task_id: int) -> LifecycleResult:
    task = get_active_task(db, project, task_id)
    return trash_lifecycle_service.delete_task(db, task)
