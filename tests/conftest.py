# SPDX-FileCopyrightText: 2025 Weibo, Inc.
#
# SPDX-License-Identifier: Apache-2.0

from datetime import datetime
from typing import Generator, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from taskboard.core.security import create_access_token, get_password_hash
from taskboard.db.base import Base

# Import all models to ensure they are registered with Base
from taskboard.models import *  # noqa: F401,F403
from taskboard.models.project import Project
from taskboard.models.task import Task
from taskboard.models.task_list import TaskList
from taskboard.models.user import User, UserPlan

# Single process: in-memory database with shared cache
TEST_DATABASE_URL = "sqlite:///file:testdb?mode=memory&cache=shared&uri=true"


# Session-scoped engine and tables - created once per test session
@pytest.fixture(scope="session")
def test_engine():
    """
    Create a test database engine once per test session.

    pysqlite's own transaction handling is switched off so that BEGIN and
    SAVEPOINT are emitted exactly when SQLAlchemy asks for them, and foreign
    keys are enforced so ON DELETE rules behave as in production.
    """
    engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})

    @event.listens_for(engine, "connect")
    def do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN")

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="session")
def test_session_factory(test_engine):
    """
    Create a session factory once per test session.
    """
    return sessionmaker(
        autocommit=False, autoflush=False, bind=test_engine, expire_on_commit=False
    )


@pytest.fixture(scope="function")
def test_db(test_engine, test_session_factory) -> Generator[Session, None, None]:
    """
    Create a test database session with transaction rollback.
    Each test function gets a clean database state via transaction rollback.
    """
    # Start a connection and begin a transaction
    connection = test_engine.connect()
    transaction = connection.begin()

    # Session commits and rollbacks become savepoint releases and rollbacks
    db = test_session_factory(bind=connection, join_transaction_mode="create_savepoint")

    try:
        yield db
    finally:
        db.close()
        # Rollback the transaction to restore database state
        transaction.rollback()
        connection.close()


def _create_user(db: Session, user_name: str, plan: UserPlan = UserPlan.FREE) -> User:
    user = User(
        user_name=user_name,
        password_hash=get_password_hash("testpassword123"),
        email=f"{user_name}@example.com",
        plan=plan,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture(scope="function")
def test_user(test_db: Session) -> User:
    """
    Create a test user on the free plan.
    """
    return _create_user(test_db, "testuser")


@pytest.fixture(scope="function")
def test_pro_user(test_db: Session) -> User:
    """
    Create a test user on the pro plan.
    """
    return _create_user(test_db, "prouser", plan=UserPlan.PRO)


@pytest.fixture(scope="function")
def test_other_user(test_db: Session) -> User:
    """
    Create a second free user that owns nothing of test_user's.
    """
    return _create_user(test_db, "otheruser")


@pytest.fixture(scope="function")
def test_inactive_user(test_db: Session) -> User:
    user = User(
        user_name="inactiveuser",
        password_hash=get_password_hash("inactive123"),
        email="inactive@example.com",
        is_active=False,
    )
    test_db.add(user)
    test_db.commit()
    test_db.refresh(user)
    return user


@pytest.fixture(scope="function")
def test_token(test_user: User) -> str:
    """
    Create a valid JWT token for the test user.
    """
    return create_access_token(data={"sub": test_user.user_name})


@pytest.fixture(scope="function")
def test_other_token(test_other_user: User) -> str:
    return create_access_token(data={"sub": test_other_user.user_name})


@pytest.fixture(scope="function")
def test_client(test_db: Session) -> TestClient:
    """
    Create a test client with database dependency override.
    """
    from taskboard.api.dependencies import get_db
    from taskboard.main import create_app

    app = create_app()

    # Override database dependency to always return the same test_db session
    def override_get_db():
        try:
            yield test_db
        except Exception:
            test_db.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db

    return TestClient(app)


class BoardFactory:
    """Builds projects, lists and tasks straight in the database."""

    def __init__(self, db: Session):
        self.db = db

    def project(
        self,
        user: User,
        name: str = "Board",
        deleted_at: Optional[datetime] = None,
    ) -> Project:
        project = Project(
            user_id=user.id, name=name, color="#3366FF", deleted_at=deleted_at
        )
        self.db.add(project)
        self.db.commit()
        self.db.refresh(project)
        return project

    def task_list(
        self,
        project: Project,
        name: str = "To Do",
        position: int = 0,
        is_done_list: bool = False,
        deleted_at: Optional[datetime] = None,
    ) -> TaskList:
        task_list = TaskList(
            project_id=project.id,
            name=name,
            position=position,
            is_done_list=is_done_list,
            deleted_at=deleted_at,
        )
        self.db.add(task_list)
        self.db.commit()
        self.db.refresh(task_list)
        return task_list

    def task(
        self,
        task_list: TaskList,
        title: str = "Task",
        position: int = 0,
        deleted_at: Optional[datetime] = None,
    ) -> Task:
        task = Task(
            project_id=task_list.project_id,
            list_id=task_list.id,
            title=title,
            position=position,
            deleted_at=deleted_at,
        )
        self.db.add(task)
        self.db.commit()
        self.db.refresh(task)
        return task


@pytest.fixture(scope="function")
def board(test_db: Session) -> BoardFactory:
    return BoardFactory(test_db)
