"""
Timestamp model for the time rotating resource.

TimestampModel is the whole persisted record. It is built once, at creation,
and replaced wholesale afterwards; nothing in this package edits one.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from pydantic import ConfigDict

from rotating.core.offsets import RotationOffsets
from rotating.core.time_common import UTC, format_rfc3339, unix_seconds


class RotatingConfig(RotationOffsets):
    """Caller configuration: optional base timestamp, offsets, triggers."""

    rfc3339: Optional[str] = None
    triggers: Optional[Dict[str, str]] = None

    model_config = ConfigDict(frozen=True, extra="forbid")


class TimestampModel(RotationOffsets):
    """
    Persisted state of a time rotating resource.

    `id` and `rfc3339` render the base timestamp; `rotation_rfc3339` and the
    calendar fields describe the rotation timestamp, in UTC.
    """

    id: str
    rfc3339: str
    rotation_rfc3339: str

    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int
    unix: int

    triggers: Optional[Dict[str, str]] = None

    model_config = ConfigDict(frozen=True)

    def to_state(self) -> Dict[str, Any]:
        """Flat field-name -> value mapping handed back for storage."""
        state = self.model_dump()
        if state["triggers"] is not None:
            state["triggers"] = dict(state["triggers"])
        return state

    @classmethod
    def from_state(cls, state: Mapping[str, Any]) -> "TimestampModel":
        return cls.model_validate(dict(state))


def build_timestamp_model(
    base: datetime,
    rotation: datetime,
    offsets: RotationOffsets,
    triggers: Optional[Mapping[str, str]] = None,
) -> TimestampModel:
    """Assemble the persisted record. No validation happens here."""
    formatted_base = format_rfc3339(base)
    formatted_rotation = format_rfc3339(rotation)
    rotation_utc = rotation.astimezone(UTC)

    return TimestampModel(
        id=formatted_base,
        rfc3339=formatted_base,
        rotation_rfc3339=formatted_rotation,
        year=rotation_utc.year,
        month=rotation_utc.month,
        day=rotation_utc.day,
        hour=rotation_utc.hour,
        minute=rotation_utc.minute,
        second=rotation_utc.second,
        unix=unix_seconds(rotation),
        rotation_days=offsets.rotation_days,
        rotation_hours=offsets.rotation_hours,
        rotation_minutes=offsets.rotation_minutes,
        rotation_months=offsets.rotation_months,
        rotation_years=offsets.rotation_years,
        triggers=dict(triggers) if triggers is not None else None,
    )
