# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Read side of the trash: what a user (or a project) currently has in it.

Items trashed as part of a bigger cascade are shown only through their
container, so a trashed project hides its lists and tasks and a trashed list
hides its tasks.
"""

from datetime import datetime, timedelta
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, aliased

from taskboard.core.exceptions import NotFoundException
from taskboard.models.project import Project
from taskboard.models.task import Task
from taskboard.models.task_list import TaskList
from taskboard.models.user import User
from taskboard.schemas.trash import (
    ProjectTrashResponse,
    TrashedListItem,
    TrashedProjectItem,
    TrashedTaskItem,
    TrashListRef,
    TrashProjectRef,
    TrashResponse,
)
from taskboard.services.trash.retention import get_retention_days


class TrashQueryService:
    """Builds trash listings with per-item expiry times."""

    def get_user_trash(self, db: Session, user: User) -> TrashResponse:
        retention_days = get_retention_days(user.plan)

        trashed_projects = (
            db.query(Project)
            .filter(Project.user_id == user.id, Project.deleted_at.isnot(None))
            .order_by(Project.deleted_at.desc(), Project.id.desc())
            .all()
        )
        project_ids = [project.id for project in trashed_projects]
        list_counts = self._count_by(db, TaskList.project_id, project_ids)
        task_counts = self._count_by(db, Task.project_id, project_ids)

        project_items = [
            TrashedProjectItem(
                id=project.id,
                name=project.name,
                description=project.description,
                color=project.color,
                icon=project.icon,
                deleted_at=project.deleted_at,
                expires_at=self._expires_at(project.deleted_at, retention_days),
                lists_count=list_counts.get(project.id, 0),
                tasks_count=task_counts.get(project.id, 0),
            )
            for project in trashed_projects
        ]

        active_project = (Project.user_id == user.id, Project.deleted_at.is_(None))
        return TrashResponse(
            trashed_projects=project_items,
            trashed_lists=self._trashed_lists(db, active_project, retention_days),
            trashed_tasks=self._trashed_tasks(db, active_project, retention_days),
            retention_days=retention_days,
        )

    def get_project_trash(self, db: Session, project: Project) -> ProjectTrashResponse:
        retention_days = get_retention_days(project.user.plan if project.user else None)
        this_project = (Project.id == project.id,)
        return ProjectTrashResponse(
            trashed_lists=self._trashed_lists(db, this_project, retention_days),
            trashed_tasks=self._trashed_tasks(db, this_project, retention_days),
            retention_days=retention_days,
        )

    # ========== Lookup of single trashed items ==========

    def get_trashed_project(self, db: Session, user: User, project_id: int) -> Project:
        project = (
            db.query(Project)
            .filter(
                Project.id == project_id,
                Project.user_id == user.id,
                Project.deleted_at.isnot(None),
            )
            .first()
        )
        if not project:
            raise NotFoundException("Project not found in trash")
        return project

    def get_trashed_list(
        self, db: Session, user: User, list_id: int, project_id: Optional[int] = None
    ) -> TaskList:
        """
        Get a trashed list owned by the user, optionally limited to one project.
        """
        query = (
            db.query(TaskList)
            .join(Project, TaskList.project_id == Project.id)
            .filter(
                TaskList.id == list_id,
                Project.user_id == user.id,
                TaskList.deleted_at.isnot(None),
            )
        )
        if project_id is not None:
            query = query.filter(TaskList.project_id == project_id)
        task_list = query.first()
        if not task_list:
            raise NotFoundException("List not found in trash")
        return task_list

    def get_trashed_task(
        self, db: Session, user: User, task_id: int, project_id: Optional[int] = None
    ) -> Task:
        query = (
            db.query(Task)
            .join(Project, Task.project_id == Project.id)
            .filter(
                Task.id == task_id,
                Project.user_id == user.id,
                Task.deleted_at.isnot(None),
            )
        )
        if project_id is not None:
            query = query.filter(Task.project_id == project_id)
        task = query.first()
        if not task:
            raise NotFoundException("Task not found in trash")
        return task

    def _trashed_lists(
        self, db: Session, project_filter: tuple, retention_days: int
    ) -> List[TrashedListItem]:
        rows = (
            db.query(TaskList, Project)
            .join(Project, TaskList.project_id == Project.id)
            .filter(*project_filter, TaskList.deleted_at.isnot(None))
            .order_by(TaskList.deleted_at.desc(), TaskList.id.desc())
            .all()
        )
        task_counts = self._count_by(db, Task.list_id, [row[0].id for row in rows])
        return [
            TrashedListItem(
                id=task_list.id,
                name=task_list.name,
                project=TrashProjectRef(
                    id=project.id, name=project.name, color=project.color
                ),
                deleted_at=task_list.deleted_at,
                expires_at=self._expires_at(task_list.deleted_at, retention_days),
                tasks_count=task_counts.get(task_list.id, 0),
            )
            for task_list, project in rows
        ]

    def _trashed_tasks(
        self, db: Session, project_filter: tuple, retention_days: int
    ) -> List[TrashedTaskItem]:
        parent_list = aliased(TaskList)
        rows = (
            db.query(Task, parent_list, Project)
            .join(parent_list, Task.list_id == parent_list.id)
            .join(Project, Task.project_id == Project.id)
            .filter(
                *project_filter,
                parent_list.deleted_at.is_(None),
                Task.deleted_at.isnot(None),
            )
            .order_by(Task.deleted_at.desc(), Task.id.desc())
            .all()
        )
        return [
            TrashedTaskItem(
                id=task.id,
                title=task.title,
                description=task.description,
                priority=task.priority,
                due_date=task.due_date,
                project=TrashProjectRef(
                    id=project.id, name=project.name, color=project.color
                ),
                list=TrashListRef(id=task_list.id, name=task_list.name),
                deleted_at=task.deleted_at,
                expires_at=self._expires_at(task.deleted_at, retention_days),
            )
            for task, task_list, project in rows
        ]

    @staticmethod
    def _count_by(db: Session, column, ids: List[int]) -> Dict[int, int]:
        """Row counts grouped by a parent id column, trashed rows included."""
        if not ids:
            return {}
        rows = (
            db.query(column, func.count())
            .filter(column.in_(ids))
            .group_by(column)
            .all()
        )
        return {parent_id: count for parent_id, count in rows}

    @staticmethod
    def _expires_at(deleted_at: datetime, retention_days: int) -> datetime:
        return deleted_at + timedelta(days=retention_days)


trash_query_service = TrashQueryService()
