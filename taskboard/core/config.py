# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Project configuration
    PROJECT_NAME: str = "Taskboard Backend"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"
    # API docs toggle (from env ENABLE_API_DOCS, default True)
    ENABLE_API_DOCS: bool = True

    # Environment configuration
    ENVIRONMENT: str = "development"  # development or production

    # Database configuration
    DATABASE_URL: str = "sqlite:///./taskboard.db"

    # Create missing tables on startup (only in development)
    DB_AUTO_CREATE: bool = True

    # JWT configuration
    SECRET_KEY: str = "secret-key"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 7 * 24 * 60  # 7 days in minutes

    # Redis configuration
    REDIS_URL: str = "redis://127.0.0.1:6379/0"

    # Celery configuration (falls back to REDIS_URL when empty)
    CELERY_BROKER_URL: Optional[str] = None
    CELERY_RESULT_BACKEND: Optional[str] = None

    # Trash retention per plan tier (days a soft-deleted item stays recoverable)
    TRASH_RETENTION_DAYS_FREE: int = 7
    TRASH_RETENTION_DAYS_PRO: int = 30
    # Children whose deleted_at is within this many seconds of the container's
    # deleted_at are treated as part of the same cascade on restore
    TRASH_RESTORE_TOLERANCE_SECONDS: float = 1.0
    # Retention cleanup scanning interval (daily)
    TRASH_CLEANUP_INTERVAL_SECONDS: int = 24 * 60 * 60
    TRASH_CLEANUP_TIME_LIMIT_SECONDS: int = 15 * 60

    @field_validator("CELERY_BROKER_URL", "CELERY_RESULT_BACKEND", mode="before")
    @classmethod
    def empty_str_to_none(cls, v):
        if v == "":
            return None
        return v

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Global configuration instance
settings = Settings()
