# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Trash schemas: lifecycle operation results and trash listings.
"""
from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel

from taskboard.models.task import TaskPriority


class TrashEntityType(str, Enum):
    """Kinds of entities that can live in the trash."""

    PROJECT = "project"
    LIST = "list"
    TASK = "task"


class LifecycleResponse(BaseModel):
    """Response for delete, restore and purge operations."""

    success: bool
    entity_type: TrashEntityType
    entity_id: int
    changed: bool
    message: str
    projects: int = 0
    lists: int = 0
    tasks: int = 0

    @classmethod
    def from_result(cls, result) -> "LifecycleResponse":
        return cls(
            success=True,
            entity_type=result.entity_type,
            entity_id=result.entity_id,
            changed=result.changed,
            message=result.message,
            projects=result.projects,
            lists=result.lists,
            tasks=result.tasks,
        )


class EmptyTrashResponse(BaseModel):
    success: bool
    message: str
    projects: int = 0
    lists: int = 0
    tasks: int = 0


class TrashProjectRef(BaseModel):
    id: int
    name: str
    color: Optional[str] = None


class TrashListRef(BaseModel):
    id: int
    name: str


class TrashedProjectItem(BaseModel):
    id: int
    type: TrashEntityType = TrashEntityType.PROJECT
    name: str
    description: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    deleted_at: datetime
    expires_at: datetime
    lists_count: int = 0
    tasks_count: int = 0


class TrashedListItem(BaseModel):
    id: int
    type: TrashEntityType = TrashEntityType.LIST
    name: str
    project: Optional[TrashProjectRef] = None
    deleted_at: datetime
    expires_at: datetime
    tasks_count: int = 0


class TrashedTaskItem(BaseModel):
    id: int
    type: TrashEntityType = TrashEntityType.TASK
    title: str
    description: Optional[str] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[date] = None
    project: Optional[TrashProjectRef] = None
    list: Optional[TrashListRef] = None
    deleted_at: datetime
    expires_at: datetime


class TrashResponse(BaseModel):
    """Everything a user has in the trash."""

    trashed_projects: List[TrashedProjectItem] = []
    trashed_lists: List[TrashedListItem] = []
    trashed_tasks: List[TrashedTaskItem] = []
    retention_days: int


class ProjectTrashResponse(BaseModel):
    """Trashed lists and tasks of one active project."""

    trashed_lists: List[TrashedListItem] = []
    trashed_tasks: List[TrashedTaskItem] = []
    retention_days: int
