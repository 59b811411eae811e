# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import UTC, datetime, timedelta
from itertools import count
from typing import Any

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from chat_app.core.security import create_access_token
from chat_app.core.settings import Settings, get_settings, settings
from chat_app.db.session import Base
from chat_app.db.session import get_db as app_get_session
from chat_app.main import app as fastapi_app
from chat_app.models import Message, PresenceStatus, User
from chat_app.utils.ids import new_object_id

TEST_DB_URL = "sqlite://"

_USERNAME_COUNTER = count(1)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def override_settings(app: FastAPI) -> Iterator[Callable[..., Settings]]:
    """Return a function that swaps in a settings copy with the given updates."""

    def _override(**updates: Any) -> Settings:
        patched = settings.model_copy(update=updates)
        app.dependency_overrides[get_settings] = lambda: patched
        return patched

    try:
        yield _override
    finally:
        app.dependency_overrides.pop(get_settings, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Return a factory that persists users with unique usernames."""

    def _make_user(
        username: str | None = None,
        presence: str = PresenceStatus.OFFLINE.value,
        **fields: Any,
    ) -> User:
        user = User(
            id=new_object_id(),
            username=username or f"user{next(_USERNAME_COUNTER)}",
            status=presence,
            **fields,
        )
        db_session.add(user)
        db_session.commit()
        return user

    return _make_user


@pytest.fixture()
def make_message(db_session: Session) -> Callable[..., Message]:
    """Return a factory that persists messages directly, bypassing the API."""
    base = datetime(2024, 1, 1, tzinfo=UTC)
    offsets = count()

    def _make_message(sender_id: str, content: str = "hello", created_at: datetime | None = None) -> Message:
        message = Message(
            id=new_object_id(),
            sender_id=sender_id,
            content=content,
            created_at=created_at or base + timedelta(seconds=next(offsets)),
        )
        db_session.add(message)
        db_session.commit()
        return message

    return _make_message


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    """Create and return the primary test user, currently online."""
    return make_user(
        "alice",
        PresenceStatus.ONLINE.value,
        email="alice@example.com",
        password_hash="$2b$12$not-a-real-hash",
        custom_status="Working",
        profile_picture="/avatars/alice.png",
    )


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    """Create and return a second persisted user, currently offline."""
    return make_user("bob", PresenceStatus.OFFLINE.value, email="bob@example.com")


def _auth_headers(user_id: str) -> dict[str, str]:
    token = create_access_token(user_id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def headers_for() -> Callable[[str], dict[str, str]]:
    """Return a function building bearer headers for an arbitrary subject."""
    return _auth_headers


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return _auth_headers(test_user.id)


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return _auth_headers(other_user.id)
