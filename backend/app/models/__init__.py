"""SQLAlchemy models package.

Importing this package registers every mapped class on Base.metadata, which
Alembic and the test fixtures rely on.
"""

from app.models import time_rotating_state  # noqa: F401
