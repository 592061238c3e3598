"""TimeRotatingState model.

Persisted state of one time rotating resource, keyed by its address in the
caller's configuration. Rows are write-once: a changed base timestamp,
offset or trigger map replaces the row (delete, then insert). Updating a row
in place is refused at flush time.
"""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import JSON, BigInteger, CheckConstraint, Index, Integer, Text, event, inspect
from sqlalchemy.orm import Mapped, mapped_column, validates

from app.core.base import Base, CreatedAtMixin
from rotating.core.errors import ParseError
from rotating.core.model import TimestampModel
from rotating.core.time_common import format_rfc3339, parse_rfc3339


class TimeRotatingStateImmutabilityError(RuntimeError):
    """Raised when an attempt is made to update a TimeRotatingState row in place."""


STATE_FIELDS = tuple(TimestampModel.model_fields)


class TimeRotatingState(CreatedAtMixin, Base):
    """Write-once row holding a TimestampModel."""

    __tablename__ = "time_rotating_states"

    address: Mapped[str] = mapped_column(Text, primary_key=True)

    id: Mapped[str] = mapped_column(Text, nullable=False)
    rfc3339: Mapped[str] = mapped_column(Text, nullable=False)
    rotation_rfc3339: Mapped[str] = mapped_column(Text, nullable=False)

    year: Mapped[int] = mapped_column(Integer, nullable=False)
    month: Mapped[int] = mapped_column(Integer, nullable=False)
    day: Mapped[int] = mapped_column(Integer, nullable=False)
    hour: Mapped[int] = mapped_column(Integer, nullable=False)
    minute: Mapped[int] = mapped_column(Integer, nullable=False)
    second: Mapped[int] = mapped_column(Integer, nullable=False)
    unix: Mapped[int] = mapped_column(BigInteger, nullable=False)

    rotation_days: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    rotation_hours: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    rotation_minutes: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    rotation_months: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    rotation_years: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    triggers: Mapped[Optional[dict[str, str]]] = mapped_column(JSON, nullable=True)

    __table_args__ = (
        CheckConstraint("month BETWEEN 1 AND 12", name="ck_time_rotating_states_month_range"),
        CheckConstraint("day BETWEEN 1 AND 31", name="ck_time_rotating_states_day_range"),
        Index("ix_time_rotating_states_unix", "unix"),
    )

    @validates("id", "rfc3339", "rotation_rfc3339")
    def _validate_canonical(self, key: str, value: str) -> str:
        """Only canonical UTC renderings (YYYY-MM-DDTHH:MM:SSZ) are stored."""
        try:
            canonical = format_rfc3339(parse_rfc3339(value))
        except ParseError as e:
            raise ValueError(f"{key}: {e}") from e
        if canonical != value:
            raise ValueError(f"{key} must be canonical UTC RFC3339 ({canonical!r}), got {value!r}.")
        return value

    @classmethod
    def from_model(cls, address: str, state: TimestampModel) -> "TimeRotatingState":
        return cls(address=address, **state.to_state())

    def to_model(self) -> TimestampModel:
        values: dict[str, Any] = {name: getattr(self, name) for name in STATE_FIELDS}
        return TimestampModel.from_state(values)


@event.listens_for(TimeRotatingState, "before_update", propagate=True)
def _time_rotating_state_prevent_updates(mapper, connection, target) -> None:
    state = inspect(target)
    if not state.persistent:
        return

    changed = [a.key for a in state.attrs if a.history.has_changes()]
    if changed:
        raise TimeRotatingStateImmutabilityError(
            "TimeRotatingState is write-once; updates are forbidden (changed: "
            + ", ".join(sorted(changed))
            + "). Replace the resource instead."
        )
