# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Project service for managing boards.

A new project starts with the default columns; deleting a project moves it
and its contents to the trash.
"""
import logging
from typing import List

from sqlalchemy.orm import Session

from taskboard.core.exceptions import NotFoundException
from taskboard.models.project import Project
from taskboard.models.task import Task
from taskboard.models.task_list import TaskList
from taskboard.schemas.project import (
    ProjectCreate,
    ProjectListResponse,
    ProjectResponse,
    ProjectUpdate,
    ProjectWithListsResponse,
    TaskListWithTasksResponse,
    TaskResponse,
)
from taskboard.services.trash.lifecycle import LifecycleResult, trash_lifecycle_service

logger = logging.getLogger(__name__)

DEFAULT_LISTS = ["To Do", "In Progress", "Review", "Done"]
DONE_LIST_NAME = "Done"


def get_owned_project(db: Session, project_id: int, user_id: int) -> Project:
    """
    Get an active project owned by the user.

    Raises:
        NotFoundException: If the project does not exist, is trashed or
            belongs to someone else
    """
    project = (
        db.query(Project)
        .filter(
            Project.id == project_id,
            Project.user_id == user_id,
            Project.deleted_at.is_(None),
        )
        .first()
    )
    if not project:
        raise NotFoundException("Project not found")
    return project


def create_project(
    db: Session, project_data: ProjectCreate, user_id: int
) -> ProjectResponse:
    """
    Create a new project together with its default lists.

    Args:
        db: Database session
        project_data: Project creation data
        user_id: User ID of the project owner

    Returns:
        Created project response
    """
    new_project = Project(
        user_id=user_id,
        name=project_data.name,
        description=project_data.description,
        color=project_data.color,
        icon=project_data.icon,
        is_archived=False,
    )
    db.add(new_project)
    db.flush()

    for position, name in enumerate(DEFAULT_LISTS):
        db.add(
            TaskList(
                project_id=new_project.id,
                name=name,
                position=position,
                is_done_list=name == DONE_LIST_NAME,
            )
        )

    db.commit()
    db.refresh(new_project)

    logger.info(f"Project {new_project.id} created by user {user_id}")
    return ProjectResponse.model_validate(new_project)


def get_project(db: Session, project_id: int, user_id: int) -> ProjectWithListsResponse:
    """
    Get a project with its active lists and their active tasks.
    """
    project = get_owned_project(db, project_id, user_id)

    lists = (
        db.query(TaskList)
        .filter(TaskList.project_id == project.id, TaskList.deleted_at.is_(None))
        .order_by(TaskList.position.asc(), TaskList.id.asc())
        .all()
    )
    tasks = (
        db.query(Task)
        .filter(Task.project_id == project.id, Task.deleted_at.is_(None))
        .order_by(Task.position.asc(), Task.id.asc())
        .all()
    )
    tasks_by_list = {}
    for task in tasks:
        tasks_by_list.setdefault(task.list_id, []).append(
            TaskResponse.model_validate(task)
        )

    # Build from the plain project fields; project.lists also holds trashed lists
    base = ProjectResponse.model_validate(project).model_dump()
    return ProjectWithListsResponse(
        **base,
        lists=[
            TaskListWithTasksResponse(
                id=task_list.id,
                project_id=task_list.project_id,
                name=task_list.name,
                position=task_list.position,
                is_done_list=task_list.is_done_list,
                created_at=task_list.created_at,
                tasks=tasks_by_list.get(task_list.id, []),
            )
            for task_list in lists
        ],
    )


def list_projects(db: Session, user_id: int) -> ProjectListResponse:
    projects: List[Project] = (
        db.query(Project)
        .filter(Project.user_id == user_id, Project.deleted_at.is_(None))
        .order_by(Project.created_at.asc(), Project.id.asc())
        .all()
    )
    items = [ProjectResponse.model_validate(project) for project in projects]
    return ProjectListResponse(total=len(items), items=items)


def update_project(
    db: Session, project_id: int, update_data: ProjectUpdate, user_id: int
) -> ProjectResponse:
    project = get_owned_project(db, project_id, user_id)

    update_dict = update_data.model_dump(exclude_unset=True)
    for field, value in update_dict.items():
        if hasattr(project, field):
            setattr(project, field, value)

    db.commit()
    db.refresh(project)
    return ProjectResponse.model_validate(project)


def delete_project(db: Session, project_id: int, user_id: int) -> LifecycleResult:
    """
    Move a project, its lists and its tasks to the trash.
    """
    project = get_owned_project(db, project_id, user_id)
    return trash_lifecycle_service.delete_project(db, project)
