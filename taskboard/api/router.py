# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

from fastapi import APIRouter

# Every endpoint module is mounted on this router in taskboard.api.api
api_router = APIRouter()
