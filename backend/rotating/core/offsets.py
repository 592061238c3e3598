"""
Rotation offsets.

Two shapes describe the same thing:
- OffsetSpec: a tagged union with exactly one variant, the preferred input.
- RotationOffsets: the six optional `rotation_*` fields as they are configured
  and persisted. More than one of them may be populated in stored state, so
  the resolver keeps a fixed precedence for this shape.
"""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, PositiveInt

from rotating.core.time_common import add_calendar, add_duration, parse_rfc3339


class OffsetKind(str, Enum):
    DAYS = "days"
    HOURS = "hours"
    MINUTES = "minutes"
    MONTHS = "months"
    RFC3339 = "rfc3339"
    YEARS = "years"


# Evaluation order of the resolver. Later entries overwrite earlier ones.
PRECEDENCE: Tuple[OffsetKind, ...] = (
    OffsetKind.DAYS,
    OffsetKind.HOURS,
    OffsetKind.MINUTES,
    OffsetKind.MONTHS,
    OffsetKind.RFC3339,
    OffsetKind.YEARS,
)

OffsetValue = Union[int, str]


def apply_offset(kind: OffsetKind, value: OffsetValue, base: datetime) -> datetime:
    """Apply a single offset to `base`.

    Days, months and years use calendar addition, hours and minutes exact
    duration. An absolute RFC3339 value ignores `base` entirely.
    """
    if kind is OffsetKind.DAYS:
        return add_calendar(base, days=int(value))
    if kind is OffsetKind.HOURS:
        return add_duration(base, hours=int(value))
    if kind is OffsetKind.MINUTES:
        return add_duration(base, minutes=int(value))
    if kind is OffsetKind.MONTHS:
        return add_calendar(base, months=int(value))
    if kind is OffsetKind.RFC3339:
        return parse_rfc3339(str(value))
    if kind is OffsetKind.YEARS:
        return add_calendar(base, years=int(value))
    raise ValueError(f"Unknown offset kind: {kind}")


class _CountOffset(BaseModel):
    count: PositiveInt

    model_config = ConfigDict(frozen=True)

    @property
    def value(self) -> int:
        return self.count

    def apply(self, base: datetime) -> datetime:
        return apply_offset(OffsetKind(self.kind), self.count, base)  # type: ignore[attr-defined]


class Days(_CountOffset):
    kind: Literal["days"] = "days"


class Hours(_CountOffset):
    kind: Literal["hours"] = "hours"


class Minutes(_CountOffset):
    kind: Literal["minutes"] = "minutes"


class Months(_CountOffset):
    kind: Literal["months"] = "months"


class Years(_CountOffset):
    kind: Literal["years"] = "years"


class AbsoluteRFC3339(BaseModel):
    """Rotation at a fixed instant rather than relative to the base."""

    kind: Literal["rfc3339"] = "rfc3339"
    timestamp: str = Field(min_length=1)

    model_config = ConfigDict(frozen=True)

    @property
    def value(self) -> str:
        return self.timestamp

    def apply(self, base: datetime) -> datetime:
        return apply_offset(OffsetKind.RFC3339, self.timestamp, base)


OffsetSpec = Annotated[
    Union[Days, Hours, Minutes, Months, AbsoluteRFC3339, Years],
    Field(discriminator="kind"),
]


class RotationOffsets(BaseModel):
    """The six `rotation_*` fields of a configuration or persisted record.

    Zero and empty values count as unset. Integers are not range-checked here;
    that is the validation layer's job.
    """

    rotation_days: Optional[int] = None
    rotation_hours: Optional[int] = None
    rotation_minutes: Optional[int] = None
    rotation_months: Optional[int] = None
    rotation_rfc3339: Optional[str] = None
    rotation_years: Optional[int] = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_spec(cls, spec: OffsetSpec) -> "RotationOffsets":
        return cls(**{field_name(OffsetKind(spec.kind)): spec.value})

    def populated(self) -> List[Tuple[OffsetKind, OffsetValue]]:
        """Populated offsets in resolver precedence order."""
        found: List[Tuple[OffsetKind, OffsetValue]] = []
        for kind in PRECEDENCE:
            value = getattr(self, field_name(kind))
            if value:
                found.append((kind, value))
        return found

    def offsets_only(self) -> "RotationOffsets":
        """Copy holding just the offset fields, dropping subclass fields."""
        return RotationOffsets(**{field_name(kind): getattr(self, field_name(kind)) for kind in PRECEDENCE})


def field_name(kind: OffsetKind) -> str:
    return f"rotation_{kind.value}"
