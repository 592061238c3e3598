from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from rotating.core.model import RotatingConfig, TimestampModel, build_timestamp_model
from rotating.core.offsets import RotationOffsets
from rotating.core.time_common import ZERO_TIME, parse_rfc3339


UTC = timezone.utc

BASE = datetime(2020, 2, 12, 6, 36, 13, tzinfo=UTC)
ROTATION = datetime(2020, 3, 13, 6, 36, 13, tzinfo=UTC)


def test_build_decomposes_rotation_timestamp():
    state = build_timestamp_model(BASE, ROTATION, RotationOffsets(rotation_days=30), {"key": "value"})

    assert state.id == "2020-02-12T06:36:13Z"
    assert state.rfc3339 == "2020-02-12T06:36:13Z"
    assert state.rotation_rfc3339 == "2020-03-13T06:36:13Z"
    assert (state.year, state.month, state.day) == (2020, 3, 13)
    assert (state.hour, state.minute, state.second) == (6, 36, 13)
    assert state.unix == 1584081373
    assert state.rotation_days == 30
    assert state.rotation_hours is None
    assert state.triggers == {"key": "value"}


def test_id_is_base_not_rotation():
    state = build_timestamp_model(BASE, ROTATION, RotationOffsets(rotation_days=30))
    assert state.id == state.rfc3339
    assert state.id != state.rotation_rfc3339


def test_build_normalizes_offsets_and_fractions():
    base = parse_rfc3339("2020-02-12T08:36:13.75+02:00")
    rotation = parse_rfc3339("2030-01-01T01:00:00.9+01:00")
    state = build_timestamp_model(base, rotation, RotationOffsets(rotation_rfc3339="2030-01-01T01:00:00.9+01:00"))

    assert state.rfc3339 == "2020-02-12T06:36:13Z"
    assert state.rotation_rfc3339 == "2030-01-01T00:00:00Z"
    assert (state.year, state.month, state.day, state.hour, state.second) == (2030, 1, 1, 0, 0)
    assert state.unix == 1893456000


def test_build_with_zero_rotation():
    state = build_timestamp_model(BASE, ZERO_TIME, RotationOffsets())
    assert state.rotation_rfc3339 == "0001-01-01T00:00:00Z"
    assert state.year == 1
    assert state.unix == -62135596800


def test_build_copies_triggers():
    triggers = {"a": "1"}
    state = build_timestamp_model(BASE, ROTATION, RotationOffsets(rotation_days=30), triggers)
    triggers["a"] = "2"
    assert state.triggers == {"a": "1"}


def test_model_is_frozen():
    state = build_timestamp_model(BASE, ROTATION, RotationOffsets(rotation_days=30))
    with pytest.raises(ValidationError):
        state.year = 2021  # type: ignore[misc]


def test_state_mapping_is_flat():
    state = build_timestamp_model(BASE, ROTATION, RotationOffsets(rotation_days=30), {"k": "v"})
    flat = state.to_state()

    assert set(flat) == {
        "id",
        "rfc3339",
        "rotation_rfc3339",
        "year",
        "month",
        "day",
        "hour",
        "minute",
        "second",
        "unix",
        "rotation_days",
        "rotation_hours",
        "rotation_minutes",
        "rotation_months",
        "rotation_years",
        "triggers",
    }
    assert all(isinstance(flat[k], str) for k in ("id", "rfc3339", "rotation_rfc3339"))
    assert all(isinstance(flat[k], int) for k in ("year", "month", "day", "hour", "minute", "second", "unix"))
    assert TimestampModel.from_state(flat) == state


def test_config_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        RotatingConfig(rotation_days=1, rotation_weeks=1)  # type: ignore[call-arg]


def test_config_offsets_only_drops_base_and_triggers():
    config = RotatingConfig(rfc3339="2020-02-12T06:36:13Z", rotation_days=1, triggers={"k": "v"})
    offsets = config.offsets_only()
    assert type(offsets) is RotationOffsets
    assert offsets == RotationOffsets(rotation_days=1)
