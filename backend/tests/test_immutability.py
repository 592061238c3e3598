from __future__ import annotations

import pytest
from sqlalchemy.orm import Session

from app.models.time_rotating_state import TimeRotatingState, TimeRotatingStateImmutabilityError
from rotating.core.model import RotatingConfig
from rotating.core.resource import TimeRotatingResource


ADDRESS = "time_rotating.immutable"


def seed_state(db: Session, resource: TimeRotatingResource) -> TimeRotatingState:
    state = resource.create(RotatingConfig(rotation_days=1, triggers={"key": "v1"}))
    row = TimeRotatingState.from_model(ADDRESS, state)
    db.add(row)
    db.flush()
    return row


def test_calendar_field_update_forbidden(db_session: Session, resource: TimeRotatingResource):
    row = seed_state(db_session, resource)

    row.year = 2099
    with pytest.raises(TimeRotatingStateImmutabilityError):
        db_session.flush()


def test_trigger_update_forbidden(db_session: Session, resource: TimeRotatingResource):
    row = seed_state(db_session, resource)

    row.triggers = {"key": "v2"}
    with pytest.raises(TimeRotatingStateImmutabilityError) as excinfo:
        db_session.flush()
    assert "triggers" in str(excinfo.value)


def test_delete_allowed(db_session: Session, resource: TimeRotatingResource):
    row = seed_state(db_session, resource)

    db_session.delete(row)
    db_session.flush()
    assert db_session.get(TimeRotatingState, ADDRESS) is None


def test_round_trip_through_row(db_session: Session, resource: TimeRotatingResource):
    row = seed_state(db_session, resource)
    db_session.expire_all()

    persisted = db_session.get(TimeRotatingState, ADDRESS)
    assert persisted is not None
    assert persisted.to_model() == row.to_model()
    assert persisted.created_at is not None


@pytest.mark.parametrize(
    "field,value",
    [
        ("rfc3339", "2020-02-12T08:36:13+02:00"),
        ("rotation_rfc3339", "2020-02-12T06:36:13.5Z"),
        ("id", "not-a-date"),
    ],
)
def test_only_canonical_timestamps_stored(field: str, value: str):
    with pytest.raises(ValueError):
        TimeRotatingState(address=ADDRESS, **{field: value})
