"""Database engine, session factory and declarative base."""

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from src.config import get_settings

settings = get_settings()


def engine_options(database_url: str) -> dict[str, Any]:
    """Build create_engine keyword arguments for the given URL."""
    if database_url.startswith("sqlite"):
        # Sessions cross the FastAPI threadpool boundary
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True, "pool_size": 5, "max_overflow": 10}


engine = create_engine(settings.database_url, **engine_options(settings.database_url))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base: Any = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Dependency that provides a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create all tables for the user/role/permission models."""
    from src import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
