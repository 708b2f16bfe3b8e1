"""Pytest configuration and fixtures for the Course Map backend tests."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import coursemap.models  # noqa: F401
from coursemap.core.database import get_db
from coursemap.main import app
from coursemap.models.base import Base
from coursemap.services.records import (
    Course,
    CourseModules,
    Degree,
    InMemoryRecordStore,
    Module,
    ModuleRef,
)
from coursemap.services.sample_data import load_sample_data, sample_record_store


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """A fresh in-memory SQLite database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def seeded_session(db_session: Session) -> Session:
    """Database loaded with the sample Mathematics and Computer Science catalogue."""
    load_sample_data(db_session)
    return db_session


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_store() -> InMemoryRecordStore:
    return sample_record_store()


@pytest.fixture
def make_module() -> Callable[..., Module]:
    def _make(code: str, prerequisites=(), **kwargs) -> Module:
        kwargs.setdefault("title", f"Module {code}")
        kwargs.setdefault("credit_value", 15)
        return Module(module_code=code, prerequisites=list(prerequisites), **kwargs)

    return _make


@pytest.fixture
def make_course() -> Callable[..., Course]:
    def _make(code: str, core=(), optional=(), **kwargs) -> Course:
        kwargs.setdefault("name", f"Course {code}")
        kwargs.setdefault("degree", Degree.BSC)
        kwargs.setdefault("department", "Mathematics and Statistics")
        kwargs.setdefault("duration", 3)
        return Course(
            course_code=code,
            modules=CourseModules(
                core=[ModuleRef(c) for c in core],
                optional=[ModuleRef(c) for c in optional],
            ),
            **kwargs,
        )

    return _make
