"""
Schema descriptor for the time rotating resource.

Attribute metadata lives here, not in control flow: which attributes the
caller may set, which are computed, and which force destroy-and-recreate
when they change. The plan step and the validation layer both read it.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import FrozenSet, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from rotating.core.errors import ContractViolation, ParseError
from rotating.core.model import RotatingConfig
from rotating.core.offsets import PRECEDENCE, OffsetKind, RotationOffsets, field_name
from rotating.core.resolver import RotationResolver
from rotating.core.time_common import parse_rfc3339


class AttributeType(str, Enum):
    STRING = "string"
    INT64 = "int64"
    STRING_MAP = "map(string)"


class Attribute(BaseModel):
    name: str
    type: AttributeType
    description: str
    optional: bool = False
    computed: bool = False
    requires_replace: bool = False
    min_value: Optional[int] = None

    model_config = ConfigDict(frozen=True)


_ROTATION_NOTE = (
    "When the current time has passed the rotation timestamp, the resource will trigger recreation. "
    "Exactly one of the 'rotation_' arguments must be configured."
)


def _rotation_count(unit: str) -> Attribute:
    return Attribute(
        name=f"rotation_{unit}",
        type=AttributeType.INT64,
        description=f"Number of {unit} to add to the base timestamp to configure the rotation timestamp. "
        + _ROTATION_NOTE,
        optional=True,
        requires_replace=True,
        min_value=1,
    )


def _computed_int(name: str, description: str) -> Attribute:
    return Attribute(name=name, type=AttributeType.INT64, description=description, computed=True)


class ResourceSchema(BaseModel):
    type_name: str
    attributes: Tuple[Attribute, ...]

    model_config = ConfigDict(frozen=True)

    def attribute(self, name: str) -> Attribute:
        for attr in self.attributes:
            if attr.name == name:
                return attr
        raise KeyError(name)

    @property
    def replacement_fields(self) -> FrozenSet[str]:
        return frozenset(a.name for a in self.attributes if a.requires_replace)

    @property
    def computed_fields(self) -> FrozenSet[str]:
        return frozenset(a.name for a in self.attributes if a.computed)

    @property
    def offset_fields(self) -> Tuple[str, ...]:
        return tuple(field_name(kind) for kind in PRECEDENCE)

    def validate_config(self, config: RotatingConfig, base: Optional[datetime] = None) -> None:
        """Enforce the input contract; raise ContractViolation listing every problem.

        When a base instant is known (configured rfc3339, or `base`) the
        rotation is also resolved against it to catch results outside the
        representable calendar.
        """
        problems: List[str] = []

        populated = [name for name in self.offset_fields if getattr(config, name) not in (None, "")]
        if not populated:
            problems.append("exactly one of " + ", ".join(self.offset_fields) + " must be configured")
        elif len(populated) > 1:
            problems.append("only one of " + ", ".join(populated) + " may be configured")

        for name in populated:
            attr = self.attribute(name)
            value = getattr(config, name)
            if attr.min_value is not None and value < attr.min_value:
                problems.append(f"{name} must be at least {attr.min_value}, got {value}")

        for name in ("rfc3339", field_name(OffsetKind.RFC3339)):
            value = getattr(config, name)
            if value in (None, ""):
                continue
            try:
                parse_rfc3339(value)
            except ParseError as e:
                problems.append(f"{name}: {e}")

        if not problems:
            if config.rfc3339:
                base = parse_rfc3339(config.rfc3339)
            if base is not None:
                try:
                    RotationResolver().resolve(base, config.offsets_only())
                except OverflowError:
                    problems.append(out_of_range_problem(config))

        if problems:
            raise ContractViolation(problems)


def out_of_range_problem(offsets: RotationOffsets) -> str:
    populated = offsets.populated()
    name = field_name(populated[-1][0]) if populated else "rotation"
    return f"{name}: result outside years 1-9999"


TIME_ROTATING_SCHEMA = ResourceSchema(
    type_name="time_rotating",
    attributes=(
        Attribute(
            name="id",
            type=AttributeType.STRING,
            description="RFC3339 format of the base timestamp, e.g. `2020-02-12T06:36:13Z`.",
            computed=True,
        ),
        Attribute(
            name="rfc3339",
            type=AttributeType.STRING,
            description="Base timestamp in RFC3339 format (`YYYY-MM-DDTHH:MM:SSZ`). Defaults to the current time.",
            optional=True,
            computed=True,
            requires_replace=True,
        ),
        _rotation_count("days"),
        _rotation_count("hours"),
        _rotation_count("minutes"),
        _rotation_count("months"),
        Attribute(
            name="rotation_rfc3339",
            type=AttributeType.STRING,
            description="Configure the rotation timestamp with an RFC3339 format of the offset timestamp. "
            + _ROTATION_NOTE,
            optional=True,
            computed=True,
            requires_replace=True,
        ),
        _rotation_count("years"),
        Attribute(
            name="triggers",
            type=AttributeType.STRING_MAP,
            description="Arbitrary map of values that, when changed, will trigger a new base timestamp value "
            "to be saved. These conditions recreate the resource in addition to other rotation arguments.",
            optional=True,
            requires_replace=True,
        ),
        _computed_int("year", "Number year of timestamp."),
        _computed_int("month", "Number month of timestamp."),
        _computed_int("day", "Number day of timestamp."),
        _computed_int("hour", "Number hour of timestamp."),
        _computed_int("minute", "Number minute of timestamp."),
        _computed_int("second", "Number second of timestamp."),
        _computed_int("unix", "Number of seconds since epoch time, e.g. `1581489373`."),
    ),
)
