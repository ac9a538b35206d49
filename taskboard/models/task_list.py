# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
TaskList model, one column of a project board.
"""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from taskboard.db.base import Base


class TaskList(Base):
    """
    Ordered list of tasks inside a project.

    ``is_done_list`` marks the column completed tasks are moved to. At most
    one list per project should carry it; the services keep that true, the
    table does not enforce it.
    """

    __tablename__ = "task_lists"

    id = Column(Integer, primary_key=True, index=True, comment="Primary key")
    project_id = Column(
        Integer,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Owning project ID",
    )
    name = Column(String(100), nullable=False, comment="List name")
    position = Column(
        Integer,
        nullable=False,
        default=0,
        comment="Display order within the project",
    )
    is_done_list = Column(
        Boolean,
        nullable=False,
        default=False,
        comment="Whether tasks in this list count as completed",
    )
    deleted_at = Column(
        DateTime,
        nullable=True,
        default=None,
        index=True,
        comment="Soft delete timestamp, NULL while the list is active",
    )
    created_at = Column(DateTime, nullable=False, default=func.now())
    updated_at = Column(
        DateTime, nullable=False, default=func.now(), onupdate=func.now()
    )

    # Relationships
    project = relationship("Project", back_populates="lists")
    tasks = relationship(
        "Task",
        back_populates="task_list",
        foreign_keys="Task.list_id",
        order_by="Task.position",
        passive_deletes=True,
    )

    __table_args__ = (
        {
            "sqlite_autoincrement": True,
            "mysql_engine": "InnoDB",
            "mysql_charset": "utf8mb4",
            "mysql_collate": "utf8mb4_unicode_ci",
            "comment": "Board lists table",
        },
    )

    @property
    def is_trashed(self) -> bool:
        return self.deleted_at is not None
