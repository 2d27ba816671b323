# tests/services/conftest.py
from __future__ import annotations

import pytest
from sqlalchemy.orm import Session
from starlette.testclient import TestClient

from luna.services.api.app import create_app
from luna.services.api.deps import get_clock, transactional_session


@pytest.fixture()
def db(db_engine) -> Session:
    connection = db_engine.connect()
    trans = connection.begin()
    session = Session(bind=connection, future=True, autoflush=False)
    try:
        yield session
    finally:
        session.close()
        trans.rollback()
        connection.close()


@pytest.fixture()
def api_client(db, clock):
    """
    A TestClient whose `transactional_session` dependency yields the test's
    Session. All calls in one test share it (so POST -> GET works) and the
    whole thing is rolled back afterwards.
    """
    app = create_app()

    def _override():
        yield db

    app.dependency_overrides[transactional_session] = _override
    app.dependency_overrides[get_clock] = lambda: clock

    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
