# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Project, list and task schemas for the board API.
"""
from datetime import date, datetime, time
from typing import List, Optional

from pydantic import BaseModel, Field

from taskboard.models.task import TaskPriority


class ProjectCreate(BaseModel):
    """Request schema for creating a project."""

    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    color: Optional[str] = Field(None, max_length=20)
    icon: Optional[str] = Field(None, max_length=50)


class ProjectUpdate(BaseModel):
    """Request schema for updating a project."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    color: Optional[str] = Field(None, max_length=20)
    icon: Optional[str] = Field(None, max_length=50)
    is_archived: Optional[bool] = None


class TaskListCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class TaskListUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)


class TaskListPosition(BaseModel):
    id: int
    position: int = Field(..., ge=0)


class TaskListReorderRequest(BaseModel):
    lists: List[TaskListPosition]


class TaskCreate(BaseModel):
    list_id: int
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    priority: TaskPriority = TaskPriority.NONE
    due_date: Optional[date] = None
    due_time: Optional[time] = None


class TaskUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[date] = None
    due_time: Optional[time] = None


class TaskMoveRequest(BaseModel):
    """Move a task to another list, optionally at a given position."""

    list_id: int
    position: Optional[int] = Field(None, ge=0)


class TaskResponse(BaseModel):
    id: int
    project_id: int
    list_id: int
    title: str
    description: Optional[str] = None
    position: int
    priority: TaskPriority
    due_date: Optional[date] = None
    due_time: Optional[time] = None
    completed_at: Optional[datetime] = None
    original_list_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TaskListResponse(BaseModel):
    id: int
    project_id: int
    name: str
    position: int
    is_done_list: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TaskListWithTasksResponse(TaskListResponse):
    tasks: List[TaskResponse] = []


class ProjectResponse(BaseModel):
    """Response schema for a project."""

    id: int
    user_id: int
    name: str
    description: Optional[str] = None
    color: Optional[str] = None
    icon: Optional[str] = None
    is_archived: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProjectWithListsResponse(ProjectResponse):
    """Project with its active lists and tasks."""

    lists: List[TaskListWithTasksResponse] = []


class ProjectListResponse(BaseModel):
    total: int
    items: List[ProjectResponse]
