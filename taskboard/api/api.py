# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

from taskboard.api.endpoints import auth, health, projects, task_lists, tasks, trash
from taskboard.api.router import api_router

# Health check endpoints (no prefix, directly under /api)
api_router.include_router(health.router, tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
api_router.include_router(task_lists.router, prefix="/projects", tags=["lists"])
api_router.include_router(tasks.router, prefix="/projects", tags=["tasks"])
api_router.include_router(
    trash.project_trash_router, prefix="/projects", tags=["trash"]
)
api_router.include_router(trash.router, prefix="/trash", tags=["trash"])
