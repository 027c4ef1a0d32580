from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import QueuePool

from src.core.configs import settings


def create_db_engine(database_url: str):
    """Build the shared engine; callers block for up to pool_timeout when all connections are out."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        # pooled connections are handed to FastAPI worker threads
        connect_args["check_same_thread"] = False

    return create_engine(
        database_url,
        connect_args=connect_args,
        pool_pre_ping=True,
        poolclass=QueuePool,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_timeout=settings.database_pool_timeout,
        pool_recycle=3600,
        echo=False,
    )


engine = create_db_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def create_tables() -> None:
    # registers the models on Base.metadata
    import src.models.schema  # noqa: F401

    Base.metadata.create_all(bind=engine)
