# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

from fastapi import APIRouter, Depends, Response
from sqlalchemy import text
from sqlalchemy.orm import Session

from taskboard.api.dependencies import get_db
from taskboard.core.config import settings

router = APIRouter()


@router.get("/health")
def health_check(response: Response, db: Session = Depends(get_db)):
    """
    Liveness check: the app is up and the database answers.

    Returns:
        dict: Health status with details
    """
    try:
        db.execute(text("SELECT 1"))
        return {
            "status": "healthy",
            "database": "connected",
            "version": settings.VERSION,
        }
    except Exception as e:
        response.status_code = 503
        return {"status": "unhealthy", "database": "error", "error": str(e)}
