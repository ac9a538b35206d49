# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Celery tasks for the trash retention cleanup.
"""

import logging
import time
from typing import Optional

from celery import shared_task
from celery.exceptions import SoftTimeLimitExceeded
from prometheus_client import Counter, Histogram

logger = logging.getLogger(__name__)

# Prometheus metrics
TRASH_ITEMS_PURGED_TOTAL = Counter(
    "trash_items_purged_total",
    "Total trashed items permanently deleted by the retention cleanup",
    ["entity_type"],
)
TRASH_CLEANUP_FAILURES_TOTAL = Counter(
    "trash_cleanup_owner_failures_total",
    "Owners whose retention cleanup failed and was rolled back",
)
TRASH_CLEANUP_DURATION = Histogram(
    "trash_cleanup_duration_seconds",
    "Retention cleanup duration in seconds",
    buckets=[1, 5, 15, 60, 300, 900],
)


@shared_task(bind=True, name="taskboard.tasks.trash_tasks.cleanup_trash")
def cleanup_trash(self, days: Optional[int] = None, dry_run: bool = False):
    """
    Periodic task that purges trashed items past their retention window.

    Each owner is processed in its own transaction; one owner failing does
    not stop the others.

    Runs every TRASH_CLEANUP_INTERVAL_SECONDS (default: once a day).
    """
    from taskboard.db.session import SessionLocal
    from taskboard.services.trash import retention_reaper

    logger.info("[trash_tasks] Starting cleanup_trash cycle")
    start = time.time()

    db = SessionLocal()
    try:
        report = retention_reaper.reap(db, days=days, dry_run=dry_run)

        if not dry_run:
            TRASH_ITEMS_PURGED_TOTAL.labels(entity_type="project").inc(report.projects)
            TRASH_ITEMS_PURGED_TOTAL.labels(entity_type="list").inc(report.lists)
            TRASH_ITEMS_PURGED_TOTAL.labels(entity_type="task").inc(report.tasks)
        TRASH_CLEANUP_FAILURES_TOTAL.inc(len(report.failed_owners))

        logger.info(
            f"[trash_tasks] cleanup_trash completed: {report.total} item(s) "
            f"across {report.owners} owner(s)"
        )
        return report.to_dict()

    except SoftTimeLimitExceeded:
        logger.error("[trash_tasks] cleanup_trash hit the soft time limit")
        raise
    except Exception as e:
        logger.error(f"[trash_tasks] Error in cleanup_trash: {str(e)}", exc_info=True)
        raise
    finally:
        TRASH_CLEANUP_DURATION.observe(time.time() - start)
        db.close()
