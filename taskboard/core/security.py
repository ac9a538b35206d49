# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

"""
Bearer-token authentication for the board API.

Tokens are HS256 JWTs whose ``sub`` claim is the user name. Every board and
trash endpoint depends on ``get_current_user``.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from taskboard.api.dependencies import get_db
from taskboard.core.config import settings
from taskboard.models.user import User
from taskboard.schemas.user import TokenData
from taskboard.services.user import pwd_context, user_service

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_PREFIX}/auth/oauth2")


def _unauthorized(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def create_access_token(
    data: Dict[str, Any], expires_delta: Optional[int] = None
) -> str:
    """
    Sign a JWT carrying ``data``.

    Args:
        data: Claims, ``sub`` must hold the user name
        expires_delta: Lifetime in minutes, ACCESS_TOKEN_EXPIRE_MINUTES if omitted
    """
    minutes = expires_delta or settings.ACCESS_TOKEN_EXPIRE_MINUTES
    claims = dict(data)
    claims["exp"] = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def verify_token(token: str) -> TokenData:
    """
    Decode a bearer token.

    Raises:
        HTTPException: 401 when the signature, expiry or subject is invalid
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise _unauthorized()

    username = payload.get("sub")
    if username is None:
        raise _unauthorized()
    return TokenData(username=username)


def authenticate_user(
    db: Session, username: str, password: Optional[str] = None
) -> Optional[User]:
    """
    Check a user name and password pair.

    Returns the user, or None when the name is unknown or the password is
    wrong. Inactive accounts are rejected with a 400.
    """
    if not username or not password:
        return None

    user = user_service.get_user_by_name(db, username)
    if not user:
        return None
    if not user.is_active:
        raise HTTPException(status_code=400, detail="User not activated")
    if not verify_password(password, user.password_hash):
        return None
    return user


def get_current_user(
    token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)
) -> User:
    token_data = verify_token(token)
    user = user_service.get_user_by_name(db=db, user_name=token_data.username)
    if user is None:
        raise _unauthorized()
    if not user.is_active:
        raise _unauthorized("User not activated")
    return user


def get_username_from_request(request: Request) -> str:
    """User name for request logs: 'anonymous' without a token, 'invalid_token' for a bad one."""
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        return "anonymous"

    try:
        return verify_token(auth_header.split(" ", 1)[1]).username
    except HTTPException:
        return "invalid_token"
