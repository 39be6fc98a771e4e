"""
SQLAlchemy engine and request-scoped sessions for the subscriptions store
"""
from functools import lru_cache
from typing import Iterator

import psycopg
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.config import get_settings


class Base(DeclarativeBase):
    pass


@lru_cache
def get_engine() -> Engine:
    """Engine is created on first use, so importing the app needs no database."""
    return create_engine(get_settings().get_sqlalchemy_url(), pool_pre_ping=True)


@lru_cache
def get_session_factory() -> sessionmaker:
    return sessionmaker(bind=get_engine(), autoflush=False, autocommit=False)


def get_db() -> Iterator[Session]:
    """FastAPI dependency: one session per request, always closed."""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def check_db_connection() -> None:
    """
    /ready check on a raw psycopg connection, bypassing the pool

    Raises:
        psycopg.OperationalError: PostgreSQL недоступна
    """
    dsn = get_settings().DATABASE_URL
    with psycopg.connect(dsn, connect_timeout=3) as conn:
        conn.execute("SELECT 1;").fetchone()
