"""Root conftest — in-memory database wired into the app for every test."""

import os

# Ensure tests never touch the development database
os.environ.setdefault("BIZTIME_ENV", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from biztime.core.db import Base, get_db
from biztime.main import app


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    # No context manager: startup would sync the on-disk database
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def acme(client):
    response = client.post(
        "/companies",
        json={"code": "acme", "name": "Acme", "description": "d"},
    )
    assert response.status_code == 201
    return response.json()["company"]


@pytest.fixture
def acme_invoice(client, acme):
    response = client.post("/invoices", json={"comp_code": "acme", "amt": 500})
    assert response.status_code == 201
    return response.json()["invoice"]
