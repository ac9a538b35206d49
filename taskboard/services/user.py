# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

import logging
from typing import Optional

from passlib.context import CryptContext
from sqlalchemy.orm import Session

from taskboard.core.exceptions import ConflictException
from taskboard.models.user import User, UserPlan

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class UserService:
    """
    User lookup and registration
    """

    def get_user_by_name(self, db: Session, user_name: str) -> Optional[User]:
        """
        Get user object by username

        Args:
            db: Database session
            user_name: Username

        Returns:
            User object, or None if no such user exists
        """
        return db.query(User).filter(User.user_name == user_name).first()

    def create_user(
        self,
        db: Session,
        user_name: str,
        password: str,
        email: Optional[str] = None,
        plan: UserPlan = UserPlan.FREE,
    ) -> User:
        """
        Create an active user with a hashed password

        Raises:
            ConflictException: If the username is taken
        """
        if self.get_user_by_name(db, user_name):
            raise ConflictException(f"User '{user_name}' already exists")

        user = User(
            user_name=user_name,
            password_hash=pwd_context.hash(password),
            email=email,
            plan=plan,
            is_active=True,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info(f"User {user.id} ({user_name}) created on plan {plan.value}")
        return user


user_service = UserService()
