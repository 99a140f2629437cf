from collections.abc import Generator

import structlog
from sqlalchemy import Engine, create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.config import settings

log = structlog.get_logger()

class Base(DeclarativeBase):
    pass

def make_engine(database_url: str) -> Engine:
    # sqlite connections are handed between fastapi's worker threads
    if database_url.startswith("sqlite"):
        return create_engine(database_url, connect_args={"check_same_thread": False})
    return create_engine(database_url, pool_pre_ping=True)

engine = make_engine(settings.database_url)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db(bind: Engine | None = None) -> None:
    """Create the users, organisations and memberships tables if missing.

    Errors propagate: without storage the service must not start.
    """
    import app.models  # noqa: F401

    bind = bind or engine
    Base.metadata.create_all(bind=bind)
    log.info("db.ready", tables=sorted(Base.metadata.tables))

def db_ping(bind: Engine | None = None) -> bool:
    try:
        with (bind or engine).connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as exc:
        log.warning("db.unreachable", error=exc.__class__.__name__)
        return False
