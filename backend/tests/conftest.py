from __future__ import annotations

import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Generator

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session


ROOT = Path(__file__).resolve().parents[2]

# Ensure `backend/` packages are importable when the project is not installed.
BACKEND_DIR = ROOT / "backend"
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from app.core.db import make_session_factory  # noqa: E402
from rotating.core.resource import TimeRotatingResource  # noqa: E402


UTC = timezone.utc

# 2020-02-12T06:36:13.250Z, a sub-second instant to exercise truncation.
FIXED_NOW = datetime(2020, 2, 12, 6, 36, 13, 250000, tzinfo=UTC)


def _alembic_config(db_url: str) -> Config:
    cfg = Config()
    cfg.set_main_option("script_location", str(BACKEND_DIR / "alembic"))
    cfg.set_main_option("sqlalchemy.url", db_url)
    return cfg


@pytest.fixture()
def fixed_clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


@pytest.fixture()
def resource(fixed_clock: Callable[[], datetime]) -> TimeRotatingResource:
    return TimeRotatingResource(clock=fixed_clock)


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    url = os.environ.get("TEST_DATABASE_URL")
    if url:
        return url
    return f"sqlite:///{tmp_path_factory.mktemp('db') / 'rotating.sqlite3'}"


@pytest.fixture(scope="session")
def engine(db_url: str) -> Engine:
    """Engine migrated to head once per session."""
    command.upgrade(_alembic_config(db_url), "head")
    return create_engine(db_url, future=True)


@pytest.fixture()
def db_session(engine: Engine) -> Generator[Session, None, None]:
    """DB session per test with rollback."""
    SessionLocal = make_session_factory(engine)
    session = SessionLocal()
    trans = session.begin()
    try:
        yield session
    finally:
        if trans.is_active:
            trans.rollback()
        session.close()
