# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Celery application configuration for the trash retention cleanup.

Beat triggers the cleanup periodically; a worker runs it. The schedule is
kept in Redis through RedBeat so several beat instances can coexist.
"""

from celery import Celery

from taskboard.core.config import settings

# Use configured broker/backend or fallback to REDIS_URL
# Settings validator already converts empty strings to None
broker_url = settings.CELERY_BROKER_URL or settings.REDIS_URL
result_backend = settings.CELERY_RESULT_BACKEND or settings.REDIS_URL

celery_app = Celery(
    "taskboard",
    broker=broker_url,
    backend=result_backend,
    include=["taskboard.tasks.trash_tasks"],
)

# Celery configuration
celery_app.conf.update(
    # Serialization
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    # Timezone
    timezone="UTC",
    enable_utc=True,
    # Task execution
    task_time_limit=settings.TRASH_CLEANUP_TIME_LIMIT_SECONDS + 60,  # Hard limit
    task_soft_time_limit=settings.TRASH_CLEANUP_TIME_LIMIT_SECONDS,
    worker_prefetch_multiplier=1,
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    # Result backend
    result_expires=24 * 3600,
    # Beat schedule for periodic tasks
    beat_schedule={
        "cleanup-trash": {
            "task": "taskboard.tasks.trash_tasks.cleanup_trash",
            "schedule": float(settings.TRASH_CLEANUP_INTERVAL_SECONDS),
        },
    },
    # Beat scheduler class - Use RedBeat for Redis-based distributed scheduling
    beat_scheduler="redbeat.schedulers:RedBeatScheduler",
    redbeat_redis_url=broker_url,
    redbeat_key_prefix="celery:beat:",
    redbeat_lock_timeout=300,
    beat_max_loop_interval=60,
)
