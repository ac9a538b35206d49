# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from taskboard.api.dependencies import get_db
from taskboard.core import security
from taskboard.models.user import User
from taskboard.schemas.project import (
    ProjectCreate,
    ProjectListResponse,
    ProjectResponse,
    ProjectUpdate,
    ProjectWithListsResponse,
)
from taskboard.schemas.trash import LifecycleResponse
from taskboard.services import project_service

router = APIRouter()


@router.get("", response_model=ProjectListResponse)
def list_projects(
    current_user: User = Depends(security.get_current_user),
    db: Session = Depends(get_db),
):
    """Get the current user's active projects"""
    return project_service.list_projects(db=db, user_id=current_user.id)


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
def create_project(
    project_create: ProjectCreate,
    current_user: User = Depends(security.get_current_user),
    db: Session = Depends(get_db),
):
    """Create a new project with the default lists"""
    return project_service.create_project(
        db=db, project_data=project_create, user_id=current_user.id
    )


@router.get("/{project_id}", response_model=ProjectWithListsResponse)
def get_project(
    project_id: int,
    current_user: User = Depends(security.get_current_user),
    db: Session = Depends(get_db),
):
    """Get a project with its lists and tasks"""
    return project_service.get_project(
        db=db, project_id=project_id, user_id=current_user.id
    )


@router.put("/{project_id}", response_model=ProjectResponse)
def update_project(
    project_id: int,
    project_update: ProjectUpdate,
    current_user: User = Depends(security.get_current_user),
    db: Session = Depends(get_db),
):
    return project_service.update_project(
        db=db,
        project_id=project_id,
        update_data=project_update,
        user_id=current_user.id,
    )


@router.delete("/{project_id}", response_model=LifecycleResponse)
def delete_project(
    project_id: int,
    current_user: User = Depends(security.get_current_user),
    db: Session = Depends(get_db),
):
    """
    Move a project to the trash.

    Its active lists and tasks go to the trash with it and come back together
    when the project is restored.
    """
    result = project_service.delete_project(
        db=db, project_id=project_id, user_id=current_user.id
    )
    return LifecycleResponse.from_result(result)
