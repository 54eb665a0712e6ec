from contextlib import contextmanager
from typing import Iterator
import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker, configure_mappers

from config import settings

logger = logging.getLogger(__name__)

SQLALCHEMY_DATABASE_URL = settings.DATABASE_URL

# SQLite connections are shared with FastAPI's threadpool
connect_args = {"check_same_thread": False} if SQLALCHEMY_DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args=connect_args,
    echo=settings.SQLALCHEMY_ECHO,
    pool_pre_ping=True
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def init_models():
    """Import all models and configure mappers."""
    # The import registers every table on Base.metadata
    import models  # noqa: F401

    configure_mappers()


@contextmanager
def atomic(db: Session) -> Iterator[Session]:
    """
    Run a unit of work in a single database transaction.

    Commits when the block exits normally. On any exception the session is
    rolled back and the exception is re-raised unchanged, so an entity write
    and its counter updates are never committed separately.
    """
    try:
        yield db
        db.commit()
    except Exception:
        logger.debug("Rolling back unit of work")
        db.rollback()
        raise


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
