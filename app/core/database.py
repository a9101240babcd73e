from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import get_settings

settings = get_settings()

_connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

# Main SQLAlchemy engine
engine = create_engine(
    str(settings.database_url),
    future=True,
    pool_pre_ping=True,
    connect_args=_connect_args,
)

# Session factory
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    future=True,
)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a DB session.

    Tenant isolation is not a property of the session: every tenant-scoped
    query goes through app.core.tenant_db.tenant_query.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
