# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from taskboard.api.dependencies import get_db
from taskboard.core import security
from taskboard.models.user import User
from taskboard.schemas.project import (
    TaskListCreate,
    TaskListReorderRequest,
    TaskListResponse,
    TaskListUpdate,
)
from taskboard.schemas.trash import LifecycleResponse
from taskboard.services import task_list_service
from taskboard.services.project_service import get_owned_project

router = APIRouter()


@router.post(
    "/{project_id}/lists",
    response_model=TaskListResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_list(
    project_id: int,
    list_create: TaskListCreate,
    current_user: User = Depends(security.get_current_user),
    db: Session = Depends(get_db),
):
    project = get_owned_project(db, project_id, current_user.id)
    return task_list_service.create_list(db, project, list_create)


# Declared before /{list_id} so "reorder" is not parsed as a list id
@router.put("/{project_id}/lists/reorder", response_model=List[TaskListResponse])
def reorder_lists(
    project_id: int,
    reorder_request: TaskListReorderRequest,
    current_user: User = Depends(security.get_current_user),
    db: Session = Depends(get_db),
):
    project = get_owned_project(db, project_id, current_user.id)
    return task_list_service.reorder_lists(db, project, reorder_request)


@router.put("/{project_id}/lists/{list_id}", response_model=TaskListResponse)
def update_list(
    project_id: int,
    list_id: int,
    list_update: TaskListUpdate,
    current_user: User = Depends(security.get_current_user),
    db: Session = Depends(get_db),
):
    project = get_owned_project(db, project_id, current_user.id)
    return task_list_service.update_list(db, project, list_id, list_update)


@router.post("/{project_id}/lists/{list_id}/done", response_model=TaskListResponse)
def toggle_done_list(
    project_id: int,
    list_id: int,
    current_user: User = Depends(security.get_current_user),
    db: Session = Depends(get_db),
):
    """Mark a list as the project's done list, or unmark it if it already is"""
    project = get_owned_project(db, project_id, current_user.id)
    return task_list_service.set_done_list(db, project, list_id)


@router.delete("/{project_id}/lists/{list_id}", response_model=LifecycleResponse)
def delete_list(
    project_id: int,
    list_id: int,
    current_user: User = Depends(security.get_current_user),
    db: Session = Depends(get_db),
):
    """Move a list and its active tasks to the trash"""
    project = get_owned_project(db, project_id, current_user.id)
    result = task_list_service.delete_list(db, project, list_id)
    return LifecycleResponse.from_result(result)
