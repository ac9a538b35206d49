# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Project model, the top-level container of a Kanban board.

A project owns its lists and, through them, its tasks. Deletion is soft:
``deleted_at`` marks the project as trashed until it is restored or purged.
"""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from taskboard.db.base import Base


class Project(Base):
    """
    Project model for board organization.

    Each project belongs to a single owner and contains ordered lists.
    """

    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True, comment="Primary key")
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Project owner user ID",
    )
    name = Column(
        String(100),
        nullable=False,
        comment="Project name",
    )
    description = Column(
        Text,
        nullable=True,
        default=None,
        comment="Project description",
    )
    color = Column(
        String(20),
        nullable=True,
        comment="Project color identifier (e.g., #FF5733)",
    )
    icon = Column(
        String(50),
        nullable=True,
        comment="Project icon name",
    )
    is_archived = Column(
        Boolean,
        nullable=False,
        default=False,
        comment="Whether the project is archived",
    )
    deleted_at = Column(
        DateTime,
        nullable=True,
        default=None,
        index=True,
        comment="Soft delete timestamp, NULL while the project is active",
    )
    created_at = Column(
        DateTime,
        nullable=False,
        default=func.now(),
        comment="Creation timestamp",
    )
    updated_at = Column(
        DateTime,
        nullable=False,
        default=func.now(),
        onupdate=func.now(),
        comment="Last update timestamp",
    )

    # Relationships
    user = relationship("User", back_populates="projects")
    lists = relationship(
        "TaskList",
        back_populates="project",
        order_by="TaskList.position",
        passive_deletes=True,
    )
    tasks = relationship(
        "Task",
        back_populates="project",
        passive_deletes=True,
    )

    __table_args__ = (
        {
            "sqlite_autoincrement": True,
            "mysql_engine": "InnoDB",
            "mysql_charset": "utf8mb4",
            "mysql_collate": "utf8mb4_unicode_ci",
            "comment": "Projects table",
        },
    )

    @property
    def is_trashed(self) -> bool:
        return self.deleted_at is not None
