"""
Shared pytest fixtures.

Every test gets a fresh in-memory SQLite database with foreign keys enforced.
Environment variables are set before ``blogcms`` is imported because the
settings object is built at import time.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("INIT_SETTINGS_ON_STARTUP", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from blogcms.api import deps
from blogcms.core.security import create_access_token
from blogcms.crud import crud_author, crud_category, crud_post, crud_tag, crud_user
from blogcms.database import Base, build_engine
from blogcms.main import app
import blogcms.models  # noqa: F401
from blogcms.models.post import PostStatus
from blogcms.schemas import (
    AuthorCreate,
    CategoryCreate,
    PostCreate,
    TagCreate,
    UserCreate,
)


@pytest.fixture
def engine():
    db_engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def loose_db():
    """Database without foreign-key enforcement, for dangling references."""
    db_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=db_engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)()
    try:
        yield session
    finally:
        session.close()
        db_engine.dispose()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[deps.get_db] = override_get_db
    # No context manager: the startup hook would touch the real database
    yield TestClient(app)
    app.dependency_overrides.clear()


# ----- Data builders -----

@pytest.fixture
def make_author(db):
    def _make(name="Jane Writer", **kwargs):
        return crud_author.create(db, obj_in=AuthorCreate(name=name, **kwargs))
    return _make


@pytest.fixture
def make_category(db):
    def _make(name="News", slug=None):
        return crud_category.create_category(db, category_in=CategoryCreate(name=name, slug=slug))
    return _make


@pytest.fixture
def make_tag(db):
    def _make(name, slug=None):
        return crud_tag.create_tag(db, tag_in=TagCreate(name=name, slug=slug))
    return _make


@pytest.fixture
def make_post(db, make_author, make_category):
    """Create a post; author and category are created on demand."""
    state = {}

    def _make(title="Hello World", *, author_id=None, category_id=None, tag_ids=(),
              status=PostStatus.PUBLISHED, **kwargs):
        if author_id is None:
            if "author" not in state:
                state["author"] = make_author()
            author_id = state["author"].id
        if category_id is None:
            if "category" not in state:
                state["category"] = make_category()
            category_id = state["category"].id
        post_in = PostCreate(
            title=title,
            content=kwargs.pop("content", f"Body of {title}"),
            author_id=author_id,
            category_id=category_id,
            tag_ids=list(tag_ids),
            status=status,
            **kwargs,
        )
        return crud_post.create_post(db, post_in=post_in)
    return _make


@pytest.fixture
def admin_user(db):
    return crud_user.create_user(db, user_in=UserCreate(
        name="Admin", email="admin@example.com", password="Admin@12345", role="admin",
    ))


@pytest.fixture
def admin_headers(admin_user):
    token = create_access_token(data={"sub": admin_user.email})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers(db):
    user = crud_user.create_user(db, user_in=UserCreate(
        name="Reader", email="reader@example.com", password="Reader@12345", role="user",
    ))
    token = create_access_token(data={"sub": user.email})
    return {"Authorization": f"Bearer {token}"}
