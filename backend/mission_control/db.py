# backend/mission_control/db.py
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool


# --- SQLAlchemy Base ---------------------------------------------------------
class Base(DeclarativeBase):
    pass


def _enable_sqlite_fks(dbapi_conn, _record):
    cur = dbapi_conn.cursor()
    cur.execute("PRAGMA foreign_keys=ON")
    cur.close()


# --- Engine / Session --------------------------------------------------------
class Database:
    """Owns the engine and session factory for one application instance."""

    def __init__(self, url: str):
        self.url = url
        kwargs = {"pool_pre_ping": True, "future": True}
        if url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            # in-memory databases must share one connection across threads
            if url in ("sqlite://", "sqlite:///:memory:"):
                kwargs["poolclass"] = StaticPool
        self.engine = create_engine(url, **kwargs)
        if url.startswith("sqlite"):
            event.listen(self.engine, "connect", _enable_sqlite_fks)

        self.SessionLocal = sessionmaker(
            bind=self.engine,
            autoflush=False,
            autocommit=False,
            expire_on_commit=False,
            future=True,
        )

    def create_all(self) -> None:
        # make sure every model is registered on Base.metadata
        import mission_control.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def healthcheck(self) -> dict:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"status": "ok"}

    def dispose(self) -> None:
        self.engine.dispose()


# FastAPI dependency
def get_db(request: Request) -> Generator:
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
