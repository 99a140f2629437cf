import os

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_FORMAT", "console")

import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.db import Base, get_db, init_db
from app.main import create_app

@pytest.fixture()
def engine():
    database_url = os.environ["DATABASE_URL"]

    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

        # sqlite leaves foreign keys off unless asked
        @event.listens_for(engine, "connect")
        def _fk_on(dbapi_conn, _record) -> None:  # type: ignore[no-untyped-def]
            dbapi_conn.execute("PRAGMA foreign_keys=ON")
    else:
        engine = create_engine(database_url, pool_pre_ping=True)

    init_db(engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(engine)
        engine.dispose()

@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)

@pytest.fixture()
def db_session(session_factory) -> Session:
    session: Session = session_factory()
    try:
        yield session
    finally:
        session.close()

@pytest.fixture()
def client(session_factory) -> TestClient:
    app = create_app()

    # one session per request, like the real dependency
    def _override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _override_get_db
    return TestClient(app)

def _register(client, email: str, first_name: str = "Test", password: str = "password123", **extra) -> dict:
    body = {"firstName": first_name, "lastName": "User", "email": email, "password": password, **extra}
    r = client.post("/auth/register", json=body)
    assert r.status_code == 201, r.text
    return r.json()["data"]

@pytest.fixture()
def account(client) -> dict:
    # unique per test to avoid collisions on shared databases
    return _register(client, f"owner+{uuid.uuid4().hex[:8]}@example.com", first_name="Owner")
