"""Database configuration.

- SQLAlchemy 2.0 engine and session factory for the state store and Alembic.
- Built on demand from Settings; nothing connects at import time.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import Settings, get_settings


def create_db_engine(settings: Optional[Settings] = None) -> Engine:
    settings = settings or get_settings()
    return create_engine(
        settings.require_database_url(),
        pool_pre_ping=True,
        future=True,
    )


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, class_=Session, autoflush=False, autocommit=False)
