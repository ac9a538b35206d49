# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Models package
"""
from taskboard.models.project import Project
from taskboard.models.task import Task, TaskPriority
from taskboard.models.task_list import TaskList

# Do NOT import Base here to avoid conflicts with taskboard.db.base.Base
# All models should import Base directly from taskboard.db.base
from taskboard.models.user import User, UserPlan

__all__ = [
    "User",
    "UserPlan",
    "Project",
    "TaskList",
    "Task",
    "TaskPriority",
]
