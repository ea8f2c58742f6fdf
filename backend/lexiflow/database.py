import os
from functools import lru_cache
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker


Base = declarative_base()


@lru_cache
def _database_url() -> str:
    return os.getenv("LEXIFLOW_DATABASE_URL", "sqlite:///./lexiflow.db")


@lru_cache
def default_model() -> str:
    return os.getenv("LEXIFLOW_DEFAULT_MODEL", "doubao")


def _create_engine() -> Engine:
    url = _database_url()
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(
        url,
        echo=False,
        future=True,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


engine = _create_engine()

SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    future=True,
)


def get_session() -> Iterator[Session]:
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(bind: Optional[Engine] = None) -> None:
    # Import models for side-effects so SQLAlchemy registers them with the metadata
    from lexiflow import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
