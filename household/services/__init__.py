"""Database engine and per-request session management."""

from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from household.services.config import settings


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """Create the engine for ``database_url``.

    SQLite (file or ``:memory:``) shares one connection across threads so
    FastAPI's threadpool and the test client see the same data.
    """
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(database_url, echo=echo, pool_pre_ping=True)


engine = create_db_engine(settings.database_url, echo=settings.database_echo)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a ledger session for one request; uncommitted work is rolled back."""
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


__all__ = [
    "create_db_engine",
    "engine",
    "SessionLocal",
    "get_db",
]
