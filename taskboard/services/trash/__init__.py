# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Trash lifecycle: cascading soft delete, restore, purge and retention cleanup.
"""

from taskboard.services.trash.lifecycle import (
    LifecycleResult,
    PurgeCounts,
    TrashLifecycleService,
    trash_lifecycle_service,
)
from taskboard.services.trash.listing import TrashQueryService, trash_query_service
from taskboard.services.trash.retention import (
    ReapReport,
    RetentionReaper,
    get_retention_days,
    retention_reaper,
)

__all__ = [
    "LifecycleResult",
    "PurgeCounts",
    "TrashLifecycleService",
    "trash_lifecycle_service",
    "TrashQueryService",
    "trash_query_service",
    "ReapReport",
    "RetentionReaper",
    "get_retention_days",
    "retention_reaper",
]
