# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Retention cleanup for the trash.

Soft-deleted projects, lists and tasks stay recoverable for a number of days
that depends on the owner's plan. Once that window has passed they are
purged for good, together with everything they contain.

Usage in a scheduler:
    from taskboard.services.trash.retention import retention_reaper
    retention_reaper.reap(db)
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, Iterator, List, Optional, Tuple

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from taskboard.core.config import settings
from taskboard.models.project import Project
from taskboard.models.task import Task
from taskboard.models.task_list import TaskList
from taskboard.models.user import User, UserPlan
from taskboard.services.trash.lifecycle import (
    PurgeCounts,
    TrashLifecycleService,
    trash_lifecycle_service,
    utc_now,
)

logger = logging.getLogger(__name__)


def get_retention_days(plan: Optional[UserPlan]) -> int:
    """Days a trashed item of an owner on this plan stays recoverable."""
    if plan == UserPlan.PRO:
        return settings.TRASH_RETENTION_DAYS_PRO
    # Free tier and unknown plans get the shorter window
    return settings.TRASH_RETENTION_DAYS_FREE


@dataclass
class OwnerExpiredItems:
    """Ids of one owner's trashed rows whose retention window has passed."""

    user_id: int
    cutoff: datetime
    project_ids: List[int] = field(default_factory=list)
    list_ids: List[int] = field(default_factory=list)
    task_ids: List[int] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.project_ids or self.list_ids or self.task_ids)


@dataclass
class ReapReport:
    """Summary of one retention cleanup run."""

    started_at: datetime
    dry_run: bool = False
    days_override: Optional[int] = None
    owners: int = 0
    projects: int = 0
    lists: int = 0
    tasks: int = 0
    failed_owners: List[int] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.projects + self.lists + self.tasks

    def add(self, counts: PurgeCounts) -> None:
        self.projects += counts.projects
        self.lists += counts.lists
        self.tasks += counts.tasks

    def to_dict(self) -> Dict:
        return {
            "success": not self.failed_owners,
            "started_at": self.started_at.isoformat(),
            "dry_run": self.dry_run,
            "days_override": self.days_override,
            "owners": self.owners,
            "projects": self.projects,
            "lists": self.lists,
            "tasks": self.tasks,
            "total": self.total,
            "failed_owners": list(self.failed_owners),
        }


class RetentionReaper:
    """Purges trashed items once their owner's retention window has elapsed."""

    def __init__(self, lifecycle: TrashLifecycleService = trash_lifecycle_service):
        self.lifecycle = lifecycle

    def reap(
        self,
        db: Session,
        now: Optional[datetime] = None,
        days: Optional[int] = None,
        dry_run: bool = False,
    ) -> ReapReport:
        """
        Run one cleanup pass over every owner that has something in the trash.

        Args:
            db: Database session
            now: Reference time, defaults to the current UTC time
            days: Override the plan-based retention window for every owner
            dry_run: Count what would be purged without deleting anything

        Returns:
            ReapReport with the purged (or purgeable) counts
        """
        now = now or utc_now()
        report = ReapReport(started_at=now, dry_run=dry_run, days_override=days)
        logger.info(
            f"[trash_reaper] Starting cleanup at {now.isoformat()}"
            f"{' (dry run)' if dry_run else ''}"
            f"{f', retention override {days} day(s)' if days is not None else ''}"
        )

        for owner, cutoff, expired in self._expired_by_owner(db, now, days):
            report.owners += 1
            if dry_run:
                report.add(self._count_expired(db, expired))
                continue

            try:
                counts = self.lifecycle.purge_many(
                    db,
                    project_ids=expired.project_ids,
                    list_ids=expired.list_ids,
                    task_ids=expired.task_ids,
                    deleted_before=cutoff,
                )
            except Exception as e:
                # purge_many already rolled back; move on to the next owner
                logger.error(f"[trash_reaper] Cleanup failed for user {owner.id}: {e}")
                report.failed_owners.append(owner.id)
                continue

            report.add(counts)
            logger.info(
                f"[trash_reaper] User {owner.id}: purged items deleted before "
                f"{cutoff.isoformat()} (projects={counts.projects}, "
                f"lists={counts.lists}, tasks={counts.tasks})"
            )

        if report.total == 0 and not report.failed_owners:
            logger.info("[trash_reaper] No items to purge")
        else:
            logger.info(
                f"[trash_reaper] Cleanup complete: {report.total} item(s) "
                f"{'would be ' if dry_run else ''}permanently deleted, "
                f"{len(report.failed_owners)} owner(s) failed"
            )
        return report

    def count_purgeable(
        self, db: Session, now: Optional[datetime] = None, days: Optional[int] = None
    ) -> int:
        """Number of rows the next cleanup would remove. Useful for monitoring."""
        counts = PurgeCounts()
        for _, _, expired in self._expired_by_owner(db, now or utc_now(), days):
            owner_counts = self._count_expired(db, expired)
            counts.projects += owner_counts.projects
            counts.lists += owner_counts.lists
            counts.tasks += owner_counts.tasks
        logger.debug(f"[trash_reaper] {counts.total} item(s) eligible for cleanup")
        return counts.total

    def _expired_by_owner(
        self, db: Session, now: datetime, days: Optional[int]
    ) -> Iterator[Tuple[User, datetime, OwnerExpiredItems]]:
        for owner in self._owners_with_trash(db):
            cutoff = now - timedelta(
                days=days if days is not None else get_retention_days(owner.plan)
            )
            expired = self._collect_expired(db, owner.id, cutoff)
            if not expired.is_empty:
                yield owner, cutoff, expired

    def _owners_with_trash(self, db: Session) -> List[User]:
        trashed_project_owners = select(Project.user_id).where(
            Project.deleted_at.isnot(None)
        )
        trashed_list_owners = (
            select(Project.user_id)
            .join(TaskList, TaskList.project_id == Project.id)
            .where(TaskList.deleted_at.isnot(None))
        )
        trashed_task_owners = (
            select(Project.user_id)
            .join(Task, Task.project_id == Project.id)
            .where(Task.deleted_at.isnot(None))
        )
        return (
            db.query(User)
            .filter(
                or_(
                    User.id.in_(trashed_project_owners),
                    User.id.in_(trashed_list_owners),
                    User.id.in_(trashed_task_owners),
                )
            )
            .order_by(User.id)
            .all()
        )

    def _collect_expired(
        self, db: Session, user_id: int, cutoff: datetime
    ) -> OwnerExpiredItems:
        expired = OwnerExpiredItems(user_id=user_id, cutoff=cutoff)
        owned_project_ids = select(Project.id).where(Project.user_id == user_id)

        expired.project_ids = [
            row.id
            for row in db.query(Project.id).filter(
                Project.user_id == user_id,
                Project.deleted_at.isnot(None),
                Project.deleted_at < cutoff,
            )
        ]
        # Rows inside an expired project go with it, no need to list them
        expired.list_ids = [
            row.id
            for row in db.query(TaskList.id).filter(
                TaskList.project_id.in_(owned_project_ids),
                TaskList.project_id.notin_(expired.project_ids),
                TaskList.deleted_at.isnot(None),
                TaskList.deleted_at < cutoff,
            )
        ]
        expired.task_ids = [
            row.id
            for row in db.query(Task.id).filter(
                Task.project_id.in_(owned_project_ids),
                Task.project_id.notin_(expired.project_ids),
                Task.list_id.notin_(expired.list_ids),
                Task.deleted_at.isnot(None),
                Task.deleted_at < cutoff,
            )
        ]
        return expired

    def _count_expired(self, db: Session, expired: OwnerExpiredItems) -> PurgeCounts:
        counts = PurgeCounts(projects=len(expired.project_ids))
        counts.lists = (
            db.query(TaskList)
            .filter(
                or_(
                    TaskList.id.in_(expired.list_ids),
                    TaskList.project_id.in_(expired.project_ids),
                )
            )
            .count()
        )
        counts.tasks = (
            db.query(Task)
            .filter(
                or_(
                    Task.id.in_(expired.task_ids),
                    Task.list_id.in_(expired.list_ids),
                    Task.project_id.in_(expired.project_ids),
                )
            )
            .count()
        )
        return counts


retention_reaper = RetentionReaper()
