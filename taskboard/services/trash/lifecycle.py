# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Trash lifecycle for projects, lists and tasks.

Every operation is explicit and runs in a single transaction:

- delete: soft delete the entity and stamp all of its active descendants
  with the same ``deleted_at`` instant
- restore: clear ``deleted_at`` on the entity and on the descendants whose
  ``deleted_at`` lies within the restore tolerance of the entity's own
  ``deleted_at``; descendants trashed on their own at another time stay in
  the trash
- purge: permanently remove the entity and all of its descendants, tasks
  first, then lists, then the project
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Iterator, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session

from taskboard.core.config import settings
from taskboard.core.exceptions import ParentDeletedException
from taskboard.models.project import Project
from taskboard.models.task import Task
from taskboard.models.task_list import TaskList
from taskboard.models.user import User
from taskboard.schemas.trash import TrashEntityType

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    """Deletion instant, truncated to whole seconds so every store keeps it exactly."""
    return datetime.utcnow().replace(microsecond=0)


@dataclass
class LifecycleResult:
    """Outcome of a single delete, restore or purge call."""

    entity_type: TrashEntityType
    entity_id: int
    changed: bool
    message: str
    projects: int = 0
    lists: int = 0
    tasks: int = 0


@dataclass
class PurgeCounts:
    projects: int = 0
    lists: int = 0
    tasks: int = 0

    @property
    def total(self) -> int:
        return self.projects + self.lists + self.tasks


class TrashLifecycleService:
    """Soft delete, restore and purge with cascading to contained entities."""

    def __init__(self, tolerance_seconds: Optional[float] = None):
        self._tolerance_seconds = tolerance_seconds

    @property
    def tolerance(self) -> timedelta:
        seconds = self._tolerance_seconds
        if seconds is None:
            seconds = settings.TRASH_RESTORE_TOLERANCE_SECONDS
        return timedelta(seconds=seconds)

    @contextmanager
    def _atomic(self, db: Session, action: str) -> Iterator[None]:
        """Commit on success, roll back everything on failure."""
        try:
            yield
            db.commit()
        except Exception:
            db.rollback()
            logger.error(f"[trash] {action} failed, transaction rolled back", exc_info=True)
            raise

    def _window(self, deleted_at: datetime) -> Tuple[datetime, datetime]:
        return deleted_at - self.tolerance, deleted_at + self.tolerance

    # ========== Soft delete ==========

    def delete_task(
        self, db: Session, task: Task, now: Optional[datetime] = None
    ) -> LifecycleResult:
        if task.deleted_at is not None:
            return LifecycleResult(
                TrashEntityType.TASK, task.id, False, "Task is already in the trash"
            )

        deleted_at = now or utc_now()
        with self._atomic(db, f"delete task {task.id}"):
            task.deleted_at = deleted_at

        logger.info(f"[trash] Task {task.id} moved to trash at {deleted_at.isoformat()}")
        return LifecycleResult(
            TrashEntityType.TASK, task.id, True, "Task moved to trash", tasks=1
        )

    def delete_list(
        self, db: Session, task_list: TaskList, now: Optional[datetime] = None
    ) -> LifecycleResult:
        """
        Soft delete a list and every active task in it.

        Tasks that are already in the trash keep their own deleted_at so a
        later restore of the list leaves them where they are.
        """
        if task_list.deleted_at is not None:
            return LifecycleResult(
                TrashEntityType.LIST, task_list.id, False, "List is already in the trash"
            )

        deleted_at = now or utc_now()
        with self._atomic(db, f"delete list {task_list.id}"):
            tasks = (
                db.query(Task)
                .filter(Task.list_id == task_list.id, Task.deleted_at.is_(None))
                .update({Task.deleted_at: deleted_at}, synchronize_session="fetch")
            )
            task_list.deleted_at = deleted_at

        logger.info(
            f"[trash] List {task_list.id} moved to trash with {tasks} task(s) "
            f"at {deleted_at.isoformat()}"
        )
        return LifecycleResult(
            TrashEntityType.LIST,
            task_list.id,
            True,
            "List moved to trash",
            lists=1,
            tasks=tasks,
        )

    def delete_project(
        self, db: Session, project: Project, now: Optional[datetime] = None
    ) -> LifecycleResult:
        """Soft delete a project, its active lists and its active tasks in one pass."""
        if project.deleted_at is not None:
            return LifecycleResult(
                TrashEntityType.PROJECT,
                project.id,
                False,
                "Project is already in the trash",
            )

        deleted_at = now or utc_now()
        with self._atomic(db, f"delete project {project.id}"):
            tasks = (
                db.query(Task)
                .filter(Task.project_id == project.id, Task.deleted_at.is_(None))
                .update({Task.deleted_at: deleted_at}, synchronize_session="fetch")
            )
            lists = (
                db.query(TaskList)
                .filter(TaskList.project_id == project.id, TaskList.deleted_at.is_(None))
                .update({TaskList.deleted_at: deleted_at}, synchronize_session="fetch")
            )
            project.deleted_at = deleted_at

        logger.info(
            f"[trash] Project {project.id} moved to trash with {lists} list(s) "
            f"and {tasks} task(s) at {deleted_at.isoformat()}"
        )
        return LifecycleResult(
            TrashEntityType.PROJECT,
            project.id,
            True,
            "Project moved to trash",
            projects=1,
            lists=lists,
            tasks=tasks,
        )

    # ========== Restore ==========

    def restore_task(self, db: Session, task: Task) -> LifecycleResult:
        if task.deleted_at is None:
            return LifecycleResult(
                TrashEntityType.TASK, task.id, False, "Nothing to restore"
            )

        task_list = db.get(TaskList, task.list_id)
        if task_list is None or task_list.deleted_at is not None:
            raise ParentDeletedException("task", "list")
        project = db.get(Project, task.project_id)
        if project is None or project.deleted_at is not None:
            raise ParentDeletedException("task", "project")

        with self._atomic(db, f"restore task {task.id}"):
            task.deleted_at = None

        logger.info(f"[trash] Task {task.id} restored")
        return LifecycleResult(
            TrashEntityType.TASK, task.id, True, "Task restored successfully", tasks=1
        )

    def restore_list(self, db: Session, task_list: TaskList) -> LifecycleResult:
        """Restore a list and the tasks that were trashed together with it."""
        deleted_at = task_list.deleted_at
        if deleted_at is None:
            return LifecycleResult(
                TrashEntityType.LIST, task_list.id, False, "Nothing to restore"
            )

        project = db.get(Project, task_list.project_id)
        if project is None or project.deleted_at is not None:
            raise ParentDeletedException("list", "project")

        start, end = self._window(deleted_at)
        with self._atomic(db, f"restore list {task_list.id}"):
            tasks = (
                db.query(Task)
                .filter(
                    Task.list_id == task_list.id,
                    Task.deleted_at.isnot(None),
                    Task.deleted_at.between(start, end),
                )
                .update({Task.deleted_at: None}, synchronize_session="fetch")
            )
            task_list.deleted_at = None

        logger.info(f"[trash] List {task_list.id} restored with {tasks} task(s)")
        return LifecycleResult(
            TrashEntityType.LIST,
            task_list.id,
            True,
            "List restored successfully",
            lists=1,
            tasks=tasks,
        )

    def restore_project(self, db: Session, project: Project) -> LifecycleResult:
        """
        Restore a project with the lists and tasks trashed together with it.

        Tasks are only restored into lists that are active afterwards, so a
        list trashed separately keeps its tasks in the trash as well.
        """
        deleted_at = project.deleted_at
        if deleted_at is None:
            return LifecycleResult(
                TrashEntityType.PROJECT, project.id, False, "Nothing to restore"
            )

        start, end = self._window(deleted_at)
        with self._atomic(db, f"restore project {project.id}"):
            lists = (
                db.query(TaskList)
                .filter(
                    TaskList.project_id == project.id,
                    TaskList.deleted_at.isnot(None),
                    TaskList.deleted_at.between(start, end),
                )
                .update({TaskList.deleted_at: None}, synchronize_session="fetch")
            )
            active_list_ids = [
                row.id
                for row in db.query(TaskList.id).filter(
                    TaskList.project_id == project.id, TaskList.deleted_at.is_(None)
                )
            ]
            tasks = (
                db.query(Task)
                .filter(
                    Task.project_id == project.id,
                    Task.list_id.in_(active_list_ids),
                    Task.deleted_at.isnot(None),
                    Task.deleted_at.between(start, end),
                )
                .update({Task.deleted_at: None}, synchronize_session="fetch")
            )
            project.deleted_at = None

        logger.info(
            f"[trash] Project {project.id} restored with {lists} list(s) and {tasks} task(s)"
        )
        return LifecycleResult(
            TrashEntityType.PROJECT,
            project.id,
            True,
            "Project restored successfully",
            projects=1,
            lists=lists,
            tasks=tasks,
        )

    # ========== Purge ==========

    def purge_many(
        self,
        db: Session,
        project_ids: Iterable[int] = (),
        list_ids: Iterable[int] = (),
        task_ids: Iterable[int] = (),
        deleted_before: Optional[datetime] = None,
    ) -> PurgeCounts:
        """
        Permanently delete the given rows and everything they contain.

        Children go first so no task outlives its list and no list outlives
        its project, whatever their own deleted_at says.

        With ``deleted_before`` the ids are re-checked inside the transaction:
        only rows still trashed before that instant are purged, so a row
        restored after the ids were collected survives together with its
        contents.
        """
        project_ids = list(project_ids)
        list_ids = list(list_ids)
        task_ids = list(task_ids)
        counts = PurgeCounts()
        if not (project_ids or list_ids or task_ids):
            return counts

        with self._atomic(db, "purge"):
            if deleted_before is not None:
                project_ids = self._still_trashed(db, Project, project_ids, deleted_before)
                list_ids = self._still_trashed(db, TaskList, list_ids, deleted_before)
                task_ids = self._still_trashed(db, Task, task_ids, deleted_before)

            counts.tasks = (
                db.query(Task)
                .filter(
                    or_(
                        Task.id.in_(task_ids),
                        Task.list_id.in_(list_ids),
                        Task.project_id.in_(project_ids),
                    )
                )
                .delete(synchronize_session="fetch")
            )
            counts.lists = (
                db.query(TaskList)
                .filter(
                    or_(
                        TaskList.id.in_(list_ids),
                        TaskList.project_id.in_(project_ids),
                    )
                )
                .delete(synchronize_session="fetch")
            )
            counts.projects = (
                db.query(Project)
                .filter(Project.id.in_(project_ids))
                .delete(synchronize_session="fetch")
            )

        return counts

    def _still_trashed(self, db: Session, model, ids, deleted_before: datetime):
        if not ids:
            return []
        rows = (
            db.query(model.id)
            .filter(
                model.id.in_(ids),
                model.deleted_at.isnot(None),
                model.deleted_at < deleted_before,
            )
            .with_for_update()
            .all()
        )
        return [row.id for row in rows]

    def purge_task(self, db: Session, task_id: int) -> LifecycleResult:
        counts = self.purge_many(db, task_ids=[task_id])
        return self._purge_result(TrashEntityType.TASK, task_id, counts.tasks, counts)

    def purge_list(self, db: Session, list_id: int) -> LifecycleResult:
        counts = self.purge_many(db, list_ids=[list_id])
        return self._purge_result(TrashEntityType.LIST, list_id, counts.lists, counts)

    def purge_project(self, db: Session, project_id: int) -> LifecycleResult:
        counts = self.purge_many(db, project_ids=[project_id])
        return self._purge_result(
            TrashEntityType.PROJECT, project_id, counts.projects, counts
        )

    def _purge_result(
        self,
        entity_type: TrashEntityType,
        entity_id: int,
        removed: int,
        counts: PurgeCounts,
    ) -> LifecycleResult:
        name = entity_type.value.capitalize()
        if not removed:
            # Already gone: purging is idempotent by id
            return LifecycleResult(entity_type, entity_id, False, "Nothing to purge")

        logger.info(
            f"[trash] {name} {entity_id} permanently deleted "
            f"(projects={counts.projects}, lists={counts.lists}, tasks={counts.tasks})"
        )
        return LifecycleResult(
            entity_type,
            entity_id,
            True,
            f"{name} permanently deleted",
            projects=counts.projects,
            lists=counts.lists,
            tasks=counts.tasks,
        )

    # ========== Empty trash ==========

    def empty_trash(self, db: Session, user: User) -> PurgeCounts:
        """Purge every trashed project, list and task owned by the user."""
        owned_project_ids = [
            row.id for row in db.query(Project.id).filter(Project.user_id == user.id)
        ]
        trashed_project_ids = [
            row.id
            for row in db.query(Project.id).filter(
                Project.user_id == user.id, Project.deleted_at.isnot(None)
            )
        ]
        counts = self._empty(db, owned_project_ids, trashed_project_ids)
        logger.info(
            f"[trash] User {user.id} emptied trash "
            f"(projects={counts.projects}, lists={counts.lists}, tasks={counts.tasks})"
        )
        return counts

    def empty_project_trash(self, db: Session, project: Project) -> PurgeCounts:
        """Purge the trashed lists and tasks of one project."""
        counts = self._empty(db, [project.id], [])
        logger.info(
            f"[trash] Project {project.id} trash emptied "
            f"(lists={counts.lists}, tasks={counts.tasks})"
        )
        return counts

    def _empty(self, db, project_ids, trashed_project_ids) -> PurgeCounts:
        trashed_list_ids = [
            row.id
            for row in db.query(TaskList.id).filter(
                TaskList.project_id.in_(project_ids), TaskList.deleted_at.isnot(None)
            )
        ]
        trashed_task_ids = [
            row.id
            for row in db.query(Task.id).filter(
                Task.project_id.in_(project_ids), Task.deleted_at.isnot(None)
            )
        ]
        return self.purge_many(
            db,
            project_ids=trashed_project_ids,
            list_ids=trashed_list_ids,
            task_ids=trashed_task_ids,
        )


trash_lifecycle_service = TrashLifecycleService()
