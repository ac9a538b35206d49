# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

from enum import Enum as PyEnum

from sqlalchemy import Column, Date, DateTime
from sqlalchemy import Enum as SQLEnum
from sqlalchemy import ForeignKey, Integer, String, Text, Time
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from taskboard.db.base import Base


class TaskPriority(str, PyEnum):
    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    # project_id duplicates task_list.project_id for direct filtering and
    # must be updated together with list_id
    project_id = Column(
        Integer,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    list_id = Column(
        Integer,
        ForeignKey("task_lists.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = Column(String(255), nullable=False)
    description = Column(Text)
    position = Column(Integer, nullable=False, default=0)
    priority = Column(SQLEnum(TaskPriority), nullable=False, default=TaskPriority.NONE)
    due_date = Column(Date)
    due_time = Column(Time)
    started_at = Column(DateTime)
    completed_at = Column(DateTime)
    # List the task lived in before it was auto-moved into the done list
    original_list_id = Column(
        Integer, ForeignKey("task_lists.id", ondelete="SET NULL"), nullable=True
    )
    deleted_at = Column(DateTime, nullable=True, default=None, index=True)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    # Relationships
    project = relationship("Project", back_populates="tasks")
    task_list = relationship("TaskList", back_populates="tasks", foreign_keys=[list_id])

    __table_args__ = (
        {
            "sqlite_autoincrement": True,
            "mysql_engine": "InnoDB",
            "mysql_charset": "utf8mb4",
            "mysql_collate": "utf8mb4_unicode_ci",
        },
    )

    @property
    def is_trashed(self) -> bool:
        return self.deleted_at is not None

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None
