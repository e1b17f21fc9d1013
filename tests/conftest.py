# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import datetime
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from peoples_forum.core.security import create_access_token  # noqa: E402
from peoples_forum.db.session import Base, build_engine  # noqa: E402
from peoples_forum.db.session import get_db as app_get_session  # noqa: E402
from peoples_forum.main import app as fastapi_app  # noqa: E402
from peoples_forum.models import (  # noqa: E402
    ROLE_ADMIN,
    ROLE_MEMBER,
    Comment,
    Post,
    PostTag,
    Report,
    User,
)
from peoples_forum.repositories.store import StoreAdapter  # noqa: E402

TEST_DB_URL = "sqlite://"


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = build_engine(TEST_DB_URL, poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    """Yield a session whose commits are real; tables are emptied afterwards."""
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
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


@pytest.fixture()
def store(db_session: Session) -> StoreAdapter:
    return StoreAdapter(db_session)


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
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def _make_user(db_session: Session, email: str, name: str, role: str) -> User:
    user = User(email=email, name=name, image=f"https://img.example/{name.lower()}.png", role=role)
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def bearer(email: str, **kwargs: Any) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(email, **kwargs)}"}


@pytest.fixture()
def member(db_session: Session) -> User:
    """Create and return a persisted regular member."""
    return _make_user(db_session, "alice@example.com", "Alice", ROLE_MEMBER)


@pytest.fixture()
def other_member(db_session: Session) -> User:
    """Create and return a second persisted member."""
    return _make_user(db_session, "bob@example.com", "Bob", ROLE_MEMBER)


@pytest.fixture()
def admin(db_session: Session) -> User:
    """Create and return a persisted administrator."""
    return _make_user(db_session, "root@example.com", "Root", ROLE_ADMIN)


@pytest.fixture()
def member_headers(member: User) -> dict[str, str]:
    return bearer(member.email)


@pytest.fixture()
def other_headers(other_member: User) -> dict[str, str]:
    return bearer(other_member.email)


@pytest.fixture()
def admin_headers(admin: User) -> dict[str, str]:
    return bearer(admin.email)


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    """Return a factory that persists posts with explicit counters and timestamps."""

    def _make_post(
        title: str = "Hello forum",
        *,
        author_email: str = "alice@example.com",
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        up: int = 0,
        down: int = 0,
        tags: list[str] | None = None,
        description: str = "Body text",
    ) -> Post:
        post = Post(
            title=title,
            description=description,
            author_email=author_email,
            author_name="Alice",
            up_vote_count=up,
            down_vote_count=down,
            updated_at=updated_at,
        )
        if created_at is not None:
            post.created_at = created_at
        post.tag_links = [PostTag(tag=tag) for tag in tags or []]
        db_session.add(post)
        db_session.commit()
        db_session.refresh(post)
        return post

    return _make_post


@pytest.fixture()
def test_post(make_post: Callable[..., Post]) -> Post:
    """Create a baseline post for tests."""
    return make_post()


@pytest.fixture()
def test_comment(db_session: Session, test_post: Post, other_member: User) -> Comment:
    """Create a comment on the baseline post."""
    comment = Comment(post_id=test_post.id, author_email=other_member.email, body="Rude remark")
    db_session.add(comment)
    db_session.commit()
    db_session.refresh(comment)
    return comment


@pytest.fixture()
def test_report(db_session: Session, test_comment: Comment, member: User) -> Report:
    """Create a report against the baseline comment."""
    report = Report(comment_id=test_comment.id, reporter_email=member.email, reason="abusive")
    db_session.add(report)
    db_session.commit()
    db_session.refresh(report)
    return report
