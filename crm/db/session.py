# crm/db/session.py
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from crm.core.config import get_settings
from crm.db.models import Base

# Get database URL from settings
DATABASE_URL = get_settings().DATABASE_URL


def _engine_options(database_url: str) -> dict:
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return {"pool_pre_ping": True, "pool_size": 10, "max_overflow": 20}

    options = {"connect_args": {"check_same_thread": False}}
    if url.database in (None, "", ":memory:"):
        # Every pooled connection would otherwise get its own empty in-memory database
        options["poolclass"] = StaticPool
    return options


# Create the SQLAlchemy engine.
engine = create_engine(DATABASE_URL, echo=get_settings().SQL_ECHO, **_engine_options(DATABASE_URL))


if engine.dialect.name == "sqlite":
    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# Create a configured "Session" class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db() -> None:
    """Creates the customers and addresses tables if they do not exist yet."""
    Base.metadata.create_all(bind=engine)


# Dependency to get a DB session
def get_db():
    """
    FastAPI dependency that provides a SQLAlchemy database session.
    It ensures the session is always closed after the request is finished.
    Writes are committed by the CRUD layer through `transaction`.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """
    Runs a composite operation (existence check + write, cascading delete)
    as a single unit: commit when the block finishes, roll back on any error.
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
