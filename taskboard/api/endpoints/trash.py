# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Trash API endpoints.

Two views of the same trash: the global one spans every project of the
current user, the project one is scoped to a single active project and only
contains its lists and tasks. Restore and purge only act on items that are
currently in the trash; anything else is reported as not found.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from taskboard.api.dependencies import get_db
from taskboard.core import security
from taskboard.models.user import User
from taskboard.schemas.trash import (
    EmptyTrashResponse,
    LifecycleResponse,
    ProjectTrashResponse,
    TrashResponse,
)
from taskboard.services.project_service import get_owned_project
from taskboard.services.trash import trash_lifecycle_service, trash_query_service

router = APIRouter()
project_trash_router = APIRouter()


# ========== Global trash ==========


@router.get("", response_model=TrashResponse)
def get_trash(
    current_user: User = Depends(security.get_current_user),
    db: Session = Depends(get_db),
):
    """Get all trashed projects, lists and tasks of the current user"""
    return trash_query_service.get_user_trash(db, current_user)


@router.delete("", response_model=EmptyTrashResponse)
def empty_trash(
    current_user: User = Depends(security.get_current_user),
    db: Session = Depends(get_db),
):
    """Permanently delete everything in the current user's trash"""
    counts = trash_lifecycle_service.empty_trash(db, current_user)
    return EmptyTrashResponse(
        success=True,
        message="Trash emptied successfully",
        projects=counts.projects,
        lists=counts.lists,
        tasks=counts.tasks,
    )


@router.patch("/projects/{project_id}/restore", response_model=LifecycleResponse)
def restore_project(
    project_id: int,
    current_user: User = Depends(security.get_current_user),
    db: Session = Depends(get_db),
):
    """Restore a project with the lists and tasks that were trashed with it"""
    project = trash_query_service.get_trashed_project(db, current_user, project_id)
    result = trash_lifecycle_service.restore_project(db, project)
    return LifecycleResponse.from_result(result)


@router.patch("/lists/{list_id}/restore", response_model=LifecycleResponse)
def restore_list(
    list_id: int,
    current_user: User = Depends(security.get_current_user),
    db: Session = Depends(get_db),
):
    """
    Restore a list with the tasks that were trashed with it.

    Fails with 409 while the list's project is still in the trash.
    """
    task_list = trash_query_service.get_trashed_list(db, current_user, list_id)
    result = trash_lifecycle_service.restore_list(db, task_list)
    return LifecycleResponse.from_result(result)


@router.patch("/tasks/{task_id}/restore", response_model=LifecycleResponse)
def restore_task(
    task_id: int,
    current_user: User = Depends(security.get_current_user),
    db: Session = Depends(get_db),
):
    """
    Restore a single task.

    Fails with 409 while the task's list or project is still in the trash.
    """
    task = trash_query_service.get_trashed_task(db, current_user, task_id)
    result = trash_lifecycle_service.restore_task(db, task)
    return LifecycleResponse.from_result(result)


@router.delete("/projects/{project_id}", response_model=LifecycleResponse)
def purge_project(
    project_id: int,
    current_user: User = Depends(security.get_current_user),
    db: Session = Depends(get_db),
):
    """Permanently delete a trashed project and everything in it"""
    project = trash_query_service.get_trashed_project(db, current_user, project_id)
    result = trash_lifecycle_service.purge_project(db, project.id)
    return LifecycleResponse.from_result(result)


@router.delete("/lists/{list_id}", response_model=LifecycleResponse)
def purge_list(
    list_id: int,
    current_user: User = Depends(security.get_current_user),
    db: Session = Depends(get_db),
):
    task_list = trash_query_service.get_trashed_list(db, current_user, list_id)
    result = trash_lifecycle_service.purge_list(db, task_list.id)
    return LifecycleResponse.from_result(result)


@router.delete("/tasks/{task_id}", response_model=LifecycleResponse)
def purge_task(
    task_id: int,
    current_user: User = Depends(security.get_current_user),
    db: Session = Depends(get_db),
):
    task = trash_query_service.get_trashed_task(db, current_user, task_id)
    result = trash_lifecycle_service.purge_task(db, task.id)
    return LifecycleResponse.from_result(result)


# ========== Project trash ==========


@project_trash_router.get("/{project_id}/trash", response_model=ProjectTrashResponse)
def get_project_trash(
    project_id: int,
    current_user: User = Depends(security.get_current_user),
    db: Session = Depends(get_db),
):
    """Get the trashed lists and tasks of one project"""
    project = get_owned_project(db, project_id, current_user.id)
    return trash_query_service.get_project_trash(db, project)


@project_trash_router.delete("/{project_id}/trash", response_model=EmptyTrashResponse)
def empty_project_trash(
    project_id: int,
    current_user: User = Depends(security.get_current_user),
    db: Session = Depends(get_db),
):
    project = get_owned_project(db, project_id, current_user.id)
    counts = trash_lifecycle_service.empty_project_trash(db, project)
    return EmptyTrashResponse(
        success=True,
        message="Project trash emptied successfully",
        lists=counts.lists,
        tasks=counts.tasks,
    )


@project_trash_router.patch(
    "/{project_id}/trash/lists/{list_id}/restore", response_model=LifecycleResponse
)
def restore_project_list(
    project_id: int,
    list_id: int,
    current_user: User = Depends(security.get_current_user),
    db: Session = Depends(get_db),
):
    project = get_owned_project(db, project_id, current_user.id)
    task_list = trash_query_service.get_trashed_list(
        db, current_user, list_id, project_id=project.id
    )
    result = trash_lifecycle_service.restore_list(db, task_list)
    return LifecycleResponse.from_result(result)


@project_trash_router.patch(
    "/{project_id}/trash/tasks/{task_id}/restore", response_model=LifecycleResponse
)
def restore_project_task(
    project_id: int,
    task_id: int,
    current_user: User = Depends(security.get_current_user),
    db: Session = Depends(get_db),
):
    project = get_owned_project(db, project_id, current_user.id)
    task = trash_query_service.get_trashed_task(
        db, current_user, task_id, project_id=project.id
    )
    result = trash_lifecycle_service.restore_task(db, task)
    return LifecycleResponse.from_result(result)


@project_trash_router.delete(
    "/{project_id}/trash/lists/{list_id}", response_model=LifecycleResponse
)
def purge_project_list(
    project_id: int,
    list_id: int,
    current_user: User = Depends(security.get_current_user),
    db: Session = Depends(get_db),
):
    project = get_owned_project(db, project_id, current_user.id)
    task_list = trash_query_service.get_trashed_list(
        db, current_user, list_id, project_id=project.id
    )
    result = trash_lifecycle_service.purge_list(db, task_list.id)
    return LifecycleResponse.from_result(result)


@project_trash_router.delete(
    "/{project_id}/trash/tasks/{task_id}", response_model=LifecycleResponse
)
def purge_project_task(
    project_id: int,
    task_id: int,
    current_user: User = Depends(security.get_current_user),
    db: Session = Depends(get_db),
):
    project = get_owned_project(db, project_id, current_user.id)
    task = trash_query_service.get_trashed_task(
        db, current_user, task_id, project_id=project.id
    )
    result = trash_lifecycle_service.purge_task(db, task.id)
    return LifecycleResponse.from_result(result)
