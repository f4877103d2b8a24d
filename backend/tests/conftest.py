"""Pytest configuration: every test gets its own in-memory SQLite database."""

from __future__ import annotations

import os

# Must be set before nerdfootball.config is imported anywhere.
os.environ.setdefault("NERDFOOTBALL_DB_URL", "sqlite://")
os.environ.setdefault("NERDFOOTBALL_MAX_WORKERS", "4")

import pytest
from sqlalchemy.orm import sessionmaker

from nerdfootball.db.session import get_db, init_db, make_engine


@pytest.fixture()
def session_factory():
    engine = make_engine("sqlite://")
    init_db(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory):
    from fastapi.testclient import TestClient
    from nerdfootball.main import app

    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
