# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from taskboard.api.dependencies import get_db
from taskboard.core import security
from taskboard.models.user import User
from taskboard.schemas.project import (
    TaskCreate,
    TaskMoveRequest,
    TaskResponse,
    TaskUpdate,
)
from taskboard.schemas.trash import LifecycleResponse
from taskboard.services import task_service
from taskboard.services.project_service import get_owned_project

router = APIRouter()


@router.post(
    "/{project_id}/tasks",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_task(
    project_id: int,
    task_create: TaskCreate,
    current_user: User = Depends(security.get_current_user),
    db: Session = Depends(get_db),
):
    project = get_owned_project(db, project_id, current_user.id)
    return task_service.create_task(db, project, task_create)


@router.put("/{project_id}/tasks/{task_id}", response_model=TaskResponse)
def update_task(
    project_id: int,
    task_id: int,
    task_update: TaskUpdate,
    current_user: User = Depends(security.get_current_user),
    db: Session = Depends(get_db),
):
    project = get_owned_project(db, project_id, current_user.id)
    return task_service.update_task(db, project, task_id, task_update)


@router.post("/{project_id}/tasks/{task_id}/move", response_model=TaskResponse)
def move_task(
    project_id: int,
    task_id: int,
    move_request: TaskMoveRequest,
    current_user: User = Depends(security.get_current_user),
    db: Session = Depends(get_db),
):
    """
    Move a task to another list, optionally at a given position.

    Moving into the done list marks the task completed; moving it out of the
    done list reopens it.
    """
    project = get_owned_project(db, project_id, current_user.id)
    return task_service.move_task(db, project, task_id, move_request)


@router.delete("/{project_id}/tasks/{task_id}", response_model=LifecycleResponse)
def delete_task(
    project_id: int,
    task_id: int,
    current_user: User = Depends(security.get_current_user),
    db: Session = Depends(get_db),
):
    project = get_owned_project(db, project_id, current_user.id)
    result = task_service.delete_task(db, project, task_id)
    return LifecycleResponse.from_result(result)
