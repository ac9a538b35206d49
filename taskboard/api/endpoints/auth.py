# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from taskboard.api.dependencies import get_db
from taskboard.core.security import authenticate_user, create_access_token
from taskboard.schemas.user import LoginRequest, LoginResponse, Token

router = APIRouter()


def _issue_token(db: Session, username: str, password: str) -> LoginResponse:
    user = authenticate_user(db, username, password)
    if not user:
        raise HTTPException(status_code=400, detail="Invalid username or password")
    return LoginResponse(
        access_token=create_access_token(data={"sub": user.user_name}),
        token_type="bearer",
    )


@router.post("/oauth2", response_model=Token, include_in_schema=False)
def login_form(
    db: Session = Depends(get_db), form_data: OAuth2PasswordRequestForm = Depends()
):
    """Form login used by the interactive docs"""
    return _issue_token(db, form_data.username, form_data.password)


@router.post("/login", response_model=Token)
def login(db: Session = Depends(get_db), login_data: LoginRequest = Body(...)):
    """JSON login, returns a bearer token"""
    return _issue_token(db, login_data.user_name, login_data.password)
