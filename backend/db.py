"""Database engine and session for the scenario library (SQLite by default)."""
from collections.abc import Generator
import os

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from utils.config import DATABASE_URL

# Under TESTING=true only an in-memory or test-named database is accepted.
if os.environ.get("TESTING") == "true":
    url = DATABASE_URL
    if "scenario_builder.db" in url or (":memory:" not in url and "test" not in url.lower().split("?")[0]):
        raise RuntimeError(
            "Tests must not run against the scenario library database. Set TESTING_DATABASE_URL to "
            "sqlite:///:memory: (or another URL containing :memory: or 'test')."
        )

_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
_engine_kw = {"connect_args": _connect_args, "echo": False}
# In-memory SQLite: one shared connection so every session sees the same tables.
if DATABASE_URL.startswith("sqlite") and ":memory:" in DATABASE_URL:
    _engine_kw["poolclass"] = StaticPool

engine = create_engine(DATABASE_URL, **_engine_kw)

# pysqlite never emits BEGIN before a SAVEPOINT; SQLAlchemy issues it so savepoints nest in a real transaction.
if DATABASE_URL.startswith("sqlite"):

    @event.listens_for(engine, "connect")
    def _sqlite_connect(dbapi_conn, connection_record):
        dbapi_conn.isolation_level = None

    @event.listens_for(engine, "begin")
    def _sqlite_begin(conn):
        conn.exec_driver_sql("BEGIN")

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency: yield a DB session and close after request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
